from datetime import date
from decimal import Decimal

import pytest

from smartledger.errors import NotFoundError, ValidationError
from smartledger.patches import TransactionPatch
from smartledger.reporting.dates import month_span, parse_date_range
from smartledger.stores import ledger


@pytest.fixture
def food(owner, make_category):
    return make_category(owner, "Food")


def test_create_requires_owned_category(owner, make_user, make_category):
    other = make_user(email="bo@example.com", name="Bo")
    theirs = make_category(other, "Food")

    with pytest.raises(ValidationError):
        ledger.create(owner, theirs, "expense", Decimal("10"), date(2024, 6, 1))


def test_sum_by_category_respects_range_kind(owner, food, make_category, add_tx):
    rent = make_category(owner, "Rent")
    add_tx(owner, food, "10", "2024-06-01")
    add_tx(owner, food, "5", "2024-06-30")
    add_tx(owner, rent, "700", "2024-06-02")
    add_tx(owner, rent, "1", "2024-06-03", kind="income")

    sums = {s.category_id: s for s in ledger.sum_by_category(owner, "expense", parse_date_range("2024-06-01", "2024-06-30"))}
    assert sums[food].total == Decimal("15") and sums[food].count == 2
    assert sums[rent].total == Decimal("700")

    both = {s.category_id: s for s in ledger.sum_by_category(owner, None, month_span("2024-06"))}
    assert both[rent].total == Decimal("701") and both[rent].count == 2


def test_find_filters_and_orders_newest_first(owner, food, add_tx):
    old = add_tx(owner, food, "1", "2024-01-01")
    new = add_tx(owner, food, "2", "2024-06-01")
    add_tx(owner, food, "3", "2024-03-01", kind="income")

    assert [t.id for t in ledger.find(owner, kind="expense")] == [new, old]
    assert len(ledger.find(owner, limit=1)) == 1
    ranged = ledger.find(owner, date_range=parse_date_range("2024-02-01", "2024-12-31"))
    assert {t.amount for t in ranged} == {Decimal("2"), Decimal("3")}


def test_increment_adds_delta(owner, food, add_tx):
    tx_id = add_tx(owner, food, "10.00", "2024-06-01")

    tx = ledger.increment(owner, tx_id, Decimal("2.50"))

    assert tx.amount == Decimal("12.50")


def test_increment_is_owner_scoped(owner, food, add_tx, make_user):
    tx_id = add_tx(owner, food, "10", "2024-06-01")
    other = make_user(email="bo@example.com", name="Bo")

    with pytest.raises(NotFoundError):
        ledger.increment(other, tx_id, Decimal("1"))


def test_patch_leaves_absent_fields(owner, food, add_tx):
    tx_id = add_tx(owner, food, "10", "2024-06-01", note="lunch")

    tx = ledger.update(owner, tx_id, TransactionPatch(amount=Decimal("11")))

    assert tx.amount == Decimal("11")
    assert tx.note == "lunch"
    assert tx.date == date(2024, 6, 1)


def test_patch_to_foreign_category_is_rejected(owner, food, add_tx, make_user, make_category):
    tx_id = add_tx(owner, food, "10", "2024-06-01")
    other = make_user(email="bo@example.com", name="Bo")
    theirs = make_category(other, "Food")

    with pytest.raises(ValidationError):
        ledger.update(owner, tx_id, TransactionPatch(category_id=theirs))
    assert ledger.find_by_id(owner, tx_id).category_id == food


def test_replace(owner, food, add_tx, make_category):
    salary = make_category(owner, "Salary")
    tx_id = add_tx(owner, food, "10", "2024-06-01", note="lunch")

    tx = ledger.replace(owner, tx_id, salary, "income", Decimal("3000"), date(2024, 6, 28))

    assert (tx.category_id, tx.kind, tx.amount, tx.note) == (salary, "income", Decimal("3000"), "")


def test_delete(owner, food, add_tx):
    tx_id = add_tx(owner, food, "10", "2024-06-01")
    ledger.delete(owner, tx_id)

    assert ledger.find_by_id(owner, tx_id) is None
    with pytest.raises(NotFoundError):
        ledger.delete(owner, tx_id)


def test_delete_older_than(owner, food, add_tx, make_user, make_category):
    add_tx(owner, food, "1", "2023-12-31")
    add_tx(owner, food, "1", "2023-06-01")
    keep = add_tx(owner, food, "1", "2024-01-01")
    other = make_user(email="bo@example.com", name="Bo")
    theirs = make_category(other, "Food")
    add_tx(other, theirs, "1", "2020-01-01")

    assert ledger.delete_older_than(owner, date(2024, 1, 1)) == 2
    assert [t.id for t in ledger.find(owner)] == [keep]
    assert len(ledger.find(other)) == 1


@pytest.mark.parametrize("amount", ["-50", "0", "0.004"])
def test_create_rejects_amounts_that_cannot_be_stored_as_is(owner, food, amount):
    with pytest.raises(ValidationError):
        ledger.create(owner, food, "expense", Decimal(amount), date(2024, 6, 1))
    assert ledger.find(owner) == []


def test_increment_cannot_drive_amount_to_zero_or_below(owner, food, add_tx):
    tx_id = add_tx(owner, food, "10", "2024-06-01")

    with pytest.raises(ValidationError):
        ledger.increment(owner, tx_id, Decimal("-10"))
    with pytest.raises(ValidationError):
        ledger.increment(owner, tx_id, Decimal("0.001"))
    assert ledger.find_by_id(owner, tx_id).amount == Decimal("10")
    assert ledger.increment(owner, tx_id, Decimal("-9.99")).amount == Decimal("0.01")
