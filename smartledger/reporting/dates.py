"""Date, date-range and month-token parsing shared by the reports.

Report ranges come in two shapes. The category breakdown takes an inclusive
``[start, end]`` pair supplied by the caller; the budget comparison derives a
half-open ``[first of month, first of next month)`` span from a ``YYYY-MM``
token. Both are represented as a :class:`DateRange`.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone

from ..errors import ValidationError

MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date
    end_inclusive: bool = True

    def contains(self, day: date) -> bool:
        if day < self.start:
            return False
        return day <= self.end if self.end_inclusive else day < self.end


def _utc_date(moment: datetime) -> date:
    """Date part of ``moment``; offset-aware values are taken in UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


def parse_date(value, field: str = "date") -> date:
    """Parse ``YYYY-MM-DD``, or an ISO datetime reduced to its (UTC, if offset-aware) date."""
    if isinstance(value, datetime):
        return _utc_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a valid date")
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field} must be a valid date") from None
    return _utc_date(parsed)


def parse_date_range(start, end) -> DateRange:
    if start in (None, "") or end in (None, ""):
        raise ValidationError("start and end are required (valid dates)")
    start_d = parse_date(start, "start")
    end_d = parse_date(end, "end")
    if start_d > end_d:
        raise ValidationError("start must be <= end")
    return DateRange(start_d, end_d)


def parse_month(month) -> tuple[int, int]:
    if not isinstance(month, str) or not MONTH_RE.match(month):
        raise ValidationError("month is required (YYYY-MM)")
    year, mon = int(month[:4]), int(month[5:])
    if not 1 <= mon <= 12:
        raise ValidationError("month is required (YYYY-MM)")
    return year, mon


def month_span(month) -> DateRange:
    """First day of ``month`` through the first day of the following month (exclusive)."""
    year, mon = parse_month(month)
    try:
        start = date(year, mon, 1)
        if mon == 12:
            end = date(year + 1, 1, 1)
        else:
            end = date(year, mon + 1, 1)
    except ValueError:
        raise ValidationError("month is out of range") from None
    return DateRange(start, end, end_inclusive=False)
