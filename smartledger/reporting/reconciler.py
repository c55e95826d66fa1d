"""Budget-vs-spent reconciliation for a single month.

Limits and the month's expense totals are merged on category id. A limit with
no spending reports ``spent = 0``; spending with no limit is reported against
a synthesized ``limit = 0``.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal

from ..stores import budgets, ledger
from .aggregator import resolve_names
from .dates import DateRange, month_span

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class ReconciledRow:
    category_id: int
    category_name: str
    limit: Decimal
    spent: Decimal
    remaining: Decimal

    def to_dict(self):
        return {
            "categoryId": self.category_id,
            "categoryName": self.category_name,
            "limit": float(self.limit),
            "spent": float(self.spent),
            "remaining": float(self.remaining),
        }


def budget_reconciliation(owner_id: int, month: str) -> list[ReconciledRow]:
    return reconcile(owner_id, month, month_span(month))


def reconcile(owner_id: int, month: str, span: DateRange) -> list[ReconciledRow]:
    """Reconcile ``month`` against expenses dated within ``span``, already derived from it."""
    budget = budgets.find_by_owner_month(owner_id, month)
    caps = budget.caps if budget is not None else {}

    spent = {s.category_id: s.total for s in ledger.sum_by_category(owner_id, "expense", span)}
    name_of = resolve_names(owner_id)

    rows = []
    for category_id, cap in caps.items():
        used = spent.get(category_id, ZERO)
        rows.append(ReconciledRow(category_id, name_of(category_id), cap, used, cap - used))
    for category_id, used in spent.items():
        if category_id not in caps:
            rows.append(ReconciledRow(category_id, name_of(category_id), ZERO, used, -used))

    rows.sort(key=lambda r: (-r.spent, r.category_id))
    logger.debug("budget_reconciliation user=%s month=%s rows=%d", owner_id, month, len(rows))
    return rows
