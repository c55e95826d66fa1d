"""Monthly budgets and their per-category limits.

Limit mutations are single INSERT/UPDATE/DELETE statements keyed by the
budget id. A duplicate limit is rejected by the ``uq_budget_category``
constraint, so two concurrent adds for the same category cannot both land,
while adds for different categories never overwrite each other.
"""
import logging
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from ..errors import ConflictError, NotFoundError, ValidationError
from ..extensions import db
from ..models import Budget, BudgetLimit, Category
from ..reporting.dates import parse_month
from ..validation import parse_amount
from . import store_operation

logger = logging.getLogger(__name__)


@store_operation
def find_by_owner_month(owner_id: int, month: str) -> Budget | None:
    parse_month(month)
    return Budget.query.filter_by(user_id=owner_id, month=month).first()


def _budget_or_404(owner_id: int, month: str) -> Budget:
    budget = find_by_owner_month(owner_id, month)
    if budget is None:
        raise NotFoundError("budget not found")
    return budget


@store_operation
def get_or_create(owner_id: int, month: str) -> Budget:
    budget = find_by_owner_month(owner_id, month)
    if budget is not None:
        return budget
    db.session.add(Budget(user_id=owner_id, month=month))
    try:
        db.session.commit()
    except IntegrityError:
        # created by a concurrent request
        db.session.rollback()
    return Budget.query.filter_by(user_id=owner_id, month=month).one()


@store_operation
def add_limit(owner_id: int, month: str, category_id: int, cap: Decimal) -> Budget:
    cap = parse_amount(cap, "limit", sign="non_negative")
    if Category.query.filter_by(id=category_id, user_id=owner_id).first() is None:
        raise ValidationError("unknown categoryId")
    budget = get_or_create(owner_id, month)
    budget_id = budget.id
    db.session.add(BudgetLimit(budget_id=budget_id, category_id=category_id, cap=cap))
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning("Limit for category %s already exists in budget %s", category_id, budget_id)
        raise ConflictError("limit for this category already exists (use PATCH)") from None
    logger.info("Limit %s added to budget %s for category %s", cap, budget_id, category_id)
    return db.session.get(Budget, budget_id)


@store_operation
def set_limit_cap(owner_id: int, month: str, category_id: int, cap: Decimal) -> Budget:
    cap = parse_amount(cap, "limit", sign="non_negative")
    budget = _budget_or_404(owner_id, month)
    updated = (
        BudgetLimit.query.filter_by(budget_id=budget.id, category_id=category_id)
        .update({BudgetLimit.cap: cap}, synchronize_session=False)
    )
    if not updated:
        db.session.rollback()
        raise NotFoundError("limit not found")
    db.session.commit()
    return budget


@store_operation
def remove_limit(owner_id: int, month: str, category_id: int) -> Budget:
    budget = _budget_or_404(owner_id, month)
    removed = (
        BudgetLimit.query.filter_by(budget_id=budget.id, category_id=category_id)
        .delete(synchronize_session=False)
    )
    db.session.commit()
    if removed:
        logger.info("Limit for category %s removed from budget %s", category_id, budget.id)
    return budget
