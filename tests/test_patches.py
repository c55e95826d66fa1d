from datetime import date
from decimal import Decimal

import pytest

from smartledger.errors import ValidationError
from smartledger.patches import UNSET, CategoryPatch, TransactionPatch
from smartledger.validation import parse_amount


def test_absent_fields_are_unset():
    patch = TransactionPatch.from_payload({"amount": 12.5})

    assert patch.changes() == {"amount": Decimal("12.5")}
    assert patch.kind is UNSET
    assert not patch.is_empty()


def test_all_fields():
    patch = TransactionPatch.from_payload(
        {"categoryId": 3, "type": "income", "amount": 1, "date": "2024-06-01", "note": "x"}
    )

    assert patch.changes() == {
        "category_id": 3,
        "kind": "income",
        "amount": Decimal("1"),
        "date": date(2024, 6, 1),
        "note": "x",
    }


@pytest.mark.parametrize("field", ["categoryId", "type", "amount", "date"])
def test_null_is_rejected_for_required_fields(field):
    with pytest.raises(ValidationError, match="must not be null"):
        TransactionPatch.from_payload({field: None})


def test_null_note_clears_it():
    assert TransactionPatch.from_payload({"note": None}).changes() == {"note": ""}


@pytest.mark.parametrize("payload", [{"amount": "12"}, {"amount": True}, {"type": "gift"}, {"date": "soon"}])
def test_bad_values(payload):
    with pytest.raises(ValidationError):
        TransactionPatch.from_payload(payload)


def test_category_patch():
    assert CategoryPatch.from_payload({}).is_empty()
    assert CategoryPatch.from_payload({"name": "  Food "}).changes() == {"name": "Food"}
    with pytest.raises(ValidationError):
        CategoryPatch.from_payload({"name": "   "})


@pytest.mark.parametrize("amount", [0.004, Decimal("12.345"), Decimal("10000000000"), 1e-7])
def test_amounts_that_would_be_rounded_are_rejected(amount):
    with pytest.raises(ValidationError):
        parse_amount(amount)


def test_trailing_zeros_are_fine():
    assert parse_amount(Decimal("12.500")) == Decimal("12.5")
    assert parse_amount(9999999999.99) == Decimal("9999999999.99")


@pytest.mark.parametrize("amount", [0, -50])
def test_transaction_amount_must_be_positive(amount):
    with pytest.raises(ValidationError, match="must be positive"):
        TransactionPatch.from_payload({"amount": amount})


def test_limit_sign():
    assert parse_amount(0, "limit", sign="non_negative") == Decimal("0")
    with pytest.raises(ValidationError):
        parse_amount(-1, "limit", sign="non_negative")
    assert parse_amount(-5, "delta") == Decimal("-5")
