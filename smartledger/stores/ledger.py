import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import func

from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import Category, Transaction
from ..patches import TransactionPatch
from ..validation import AMOUNT_MAX, parse_amount
from ..reporting.dates import DateRange
from . import store_operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategorySum:
    category_id: int
    total: Decimal
    count: int


def _in_range(query, date_range: DateRange):
    query = query.filter(Transaction.date >= date_range.start)
    if date_range.end_inclusive:
        return query.filter(Transaction.date <= date_range.end)
    return query.filter(Transaction.date < date_range.end)


def _ensure_category(owner_id: int, category_id: int):
    owned = Category.query.filter_by(id=category_id, user_id=owner_id).first()
    if owned is None:
        raise ValidationError("unknown categoryId")


@store_operation
def sum_by_category(owner_id: int, kind: str | None, date_range: DateRange) -> list[CategorySum]:
    """Group the owner's transactions in ``date_range`` by category.

    ``kind=None`` sums both incomes and expenses.
    """
    q = db.session.query(
        Transaction.category_id,
        func.sum(Transaction.amount),
        func.count(Transaction.id),
    ).filter(Transaction.user_id == owner_id)
    if kind is not None:
        q = q.filter(Transaction.kind == kind)
    q = _in_range(q, date_range).group_by(Transaction.category_id)
    return [
        CategorySum(category_id=cid, total=Decimal(str(total)), count=count)
        for cid, total, count in q.all()
    ]


@store_operation
def find(owner_id: int, kind=None, category_id=None, date_range: DateRange | None = None, limit: int = 200):
    q = Transaction.query.filter(Transaction.user_id == owner_id)
    if kind is not None:
        q = q.filter(Transaction.kind == kind)
    if category_id is not None:
        q = q.filter(Transaction.category_id == category_id)
    if date_range is not None:
        q = _in_range(q, date_range)
    return q.order_by(Transaction.date.desc(), Transaction.id.desc()).limit(limit).all()


@store_operation
def find_by_id(owner_id: int, transaction_id: int) -> Transaction | None:
    return Transaction.query.filter_by(id=transaction_id, user_id=owner_id).first()


def _get_or_404(owner_id: int, transaction_id: int) -> Transaction:
    tx = find_by_id(owner_id, transaction_id)
    if tx is None:
        raise NotFoundError("not found")
    return tx


@store_operation
def create(owner_id: int, category_id: int, kind: str, amount: Decimal, on_date: date, note: str = "") -> Transaction:
    amount = parse_amount(amount, sign="positive")
    _ensure_category(owner_id, category_id)
    tx = Transaction(
        user_id=owner_id,
        category_id=category_id,
        kind=kind,
        amount=amount,
        date=on_date,
        note=note or "",
    )
    db.session.add(tx)
    db.session.commit()
    return tx


@store_operation
def replace(owner_id: int, transaction_id: int, category_id: int, kind: str, amount: Decimal, on_date: date, note: str = "") -> Transaction:
    amount = parse_amount(amount, sign="positive")
    tx = _get_or_404(owner_id, transaction_id)
    _ensure_category(owner_id, category_id)
    tx.category_id = category_id
    tx.kind = kind
    tx.amount = amount
    tx.date = on_date
    tx.note = note or ""
    db.session.commit()
    return tx


@store_operation
def update(owner_id: int, transaction_id: int, patch: TransactionPatch) -> Transaction:
    tx = _get_or_404(owner_id, transaction_id)
    changes = patch.changes()
    if "amount" in changes:
        changes["amount"] = parse_amount(changes["amount"], sign="positive")
    if "category_id" in changes:
        _ensure_category(owner_id, changes["category_id"])
    for field, value in changes.items():
        setattr(tx, field, value)
    db.session.commit()
    return tx


@store_operation
def increment(owner_id: int, transaction_id: int, delta: Decimal) -> Transaction:
    delta = parse_amount(delta, "delta")
    new_amount = Transaction.amount + delta
    updated = (
        Transaction.query.filter(
            Transaction.id == transaction_id,
            Transaction.user_id == owner_id,
            new_amount > 0,
            new_amount <= AMOUNT_MAX,
        )
        .update({Transaction.amount: new_amount}, synchronize_session=False)
    )
    if not updated:
        if find_by_id(owner_id, transaction_id) is None:
            raise NotFoundError("not found")
        raise ValidationError("amount must stay positive and within range")
    db.session.commit()
    return find_by_id(owner_id, transaction_id)


@store_operation
def delete(owner_id: int, transaction_id: int) -> None:
    deleted = Transaction.query.filter_by(id=transaction_id, user_id=owner_id).delete()
    if not deleted:
        raise NotFoundError("not found")
    db.session.commit()


@store_operation
def delete_older_than(owner_id: int, cutoff: date) -> int:
    deleted = (
        Transaction.query.filter(Transaction.user_id == owner_id, Transaction.date < cutoff)
        .delete(synchronize_session=False)
    )
    db.session.commit()
    logger.info("Purged %s transactions before %s for user %s", deleted, cutoff, owner_id)
    return deleted
