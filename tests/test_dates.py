from datetime import date, datetime, timedelta, timezone

import pytest

from smartledger.errors import ValidationError
from smartledger.reporting.dates import month_span, parse_date, parse_date_range, parse_month


def test_parse_date_accepts_iso_date_and_datetime():
    assert parse_date("2024-06-03") == date(2024, 6, 3)
    assert parse_date("2024-06-03T10:15:00Z") == date(2024, 6, 3)
    assert parse_date(datetime(2024, 6, 3, 23, 59)) == date(2024, 6, 3)
    assert parse_date(date(2024, 6, 3)) == date(2024, 6, 3)


@pytest.mark.parametrize("value", [None, "", "yesterday", "2024-02-30", 20240603])
def test_parse_date_rejects_garbage(value):
    with pytest.raises(ValidationError):
        parse_date(value)


def test_date_range_is_inclusive():
    span = parse_date_range("2024-06-01", "2024-06-30")
    assert span.end_inclusive
    assert span.contains(date(2024, 6, 30))
    assert not span.contains(date(2024, 7, 1))


def test_single_day_range_is_valid():
    span = parse_date_range("2024-06-01", "2024-06-01")
    assert span.start == span.end


def test_inverted_range_is_rejected():
    with pytest.raises(ValidationError, match="start must be <= end"):
        parse_date_range("2024-06-30", "2024-06-01")


def test_missing_bound_is_rejected():
    with pytest.raises(ValidationError):
        parse_date_range("2024-06-01", None)


@pytest.mark.parametrize("token", ["2024-6", "24-06", "2024/06", "2024-06-01", "", None, "2024-13", "2024-00"])
def test_bad_month_tokens(token):
    with pytest.raises(ValidationError):
        parse_month(token)


def test_month_span_is_half_open():
    span = month_span("2024-06")
    assert (span.start, span.end) == (date(2024, 6, 1), date(2024, 7, 1))
    assert not span.end_inclusive
    assert span.contains(date(2024, 6, 30))
    assert not span.contains(date(2024, 7, 1))


def test_month_span_rolls_over_year():
    span = month_span("2024-12")
    assert span.start == date(2024, 12, 1)
    assert span.end == date(2025, 1, 1)


def test_month_span_out_of_calendar_range():
    with pytest.raises(ValidationError):
        month_span("0000-01")


def test_offset_datetimes_use_their_utc_date():
    assert parse_date("2024-06-30T23:00:00-05:00") == date(2024, 7, 1)
    assert parse_date("2024-07-01T01:00:00+02:00") == date(2024, 6, 30)
    assert parse_date(datetime(2024, 6, 30, 23, tzinfo=timezone(timedelta(hours=-5)))) == date(2024, 7, 1)
    assert parse_date("2024-06-30T23:00:00") == date(2024, 6, 30)
