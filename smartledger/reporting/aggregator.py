import logging
from dataclasses import dataclass
from decimal import Decimal

from ..stores import categories, ledger
from ..validation import parse_kind
from .dates import DateRange, parse_date_range

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "Unknown"


@dataclass(frozen=True)
class CategoryTotal:
    category_id: int
    category_name: str
    total: Decimal
    count: int

    def to_dict(self):
        return {
            "categoryId": self.category_id,
            "categoryName": self.category_name,
            "total": float(self.total),
            "count": self.count,
        }


def resolve_names(owner_id: int):
    """Return a ``category_id -> name`` lookup that falls back to "Unknown"."""
    names = categories.names_by_id(owner_id)
    return lambda category_id: names.get(category_id, UNKNOWN_CATEGORY)


def spend_by_category(owner_id: int, kind: str, date_range: DateRange) -> list[CategoryTotal]:
    name_of = resolve_names(owner_id)
    return [
        CategoryTotal(s.category_id, name_of(s.category_id), s.total, s.count)
        for s in ledger.sum_by_category(owner_id, kind, date_range)
    ]


def category_report(owner_id: int, kind: str, start, end) -> list[CategoryTotal]:
    """Per-category totals for ``kind`` transactions dated within ``[start, end]``.

    Rows are ordered by total, largest first; equal totals keep category id order.
    """
    return report_for_range(owner_id, kind, parse_date_range(start, end))


def report_for_range(owner_id: int, kind: str, date_range: DateRange) -> list[CategoryTotal]:
    kind = parse_kind(kind)
    rows = spend_by_category(owner_id, kind, date_range)
    rows.sort(key=lambda r: (-r.total, r.category_id))
    logger.debug("category_report user=%s kind=%s rows=%d", owner_id, kind, len(rows))
    return rows
