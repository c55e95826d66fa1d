"""Partial-update value types.

A patch field left at ``UNSET`` leaves the stored value alone. A field that is
present but ``None`` is rejected unless the column accepts a blank value.
"""
from dataclasses import dataclass, fields
import datetime
from decimal import Decimal

from .errors import ValidationError
from .reporting.dates import parse_date
from .validation import parse_amount, parse_id, parse_kind, parse_name


class _Unset:
    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET = _Unset()


class Patch:
    def changes(self) -> dict:
        """Fields that were supplied, keyed by attribute name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()


def _require(payload: dict, key: str):
    value = payload[key]
    if value is None:
        raise ValidationError(f"{key} must not be null")
    return value


@dataclass
class TransactionPatch(Patch):
    category_id: int = UNSET
    kind: str = UNSET
    amount: Decimal = UNSET
    date: datetime.date = UNSET
    note: str = UNSET

    @classmethod
    def from_payload(cls, payload: dict) -> "TransactionPatch":
        patch = cls()
        if "categoryId" in payload:
            patch.category_id = parse_id(_require(payload, "categoryId"), "categoryId")
        if "type" in payload:
            patch.kind = parse_kind(_require(payload, "type"))
        if "amount" in payload:
            patch.amount = parse_amount(_require(payload, "amount"), sign="positive")
        if "date" in payload:
            patch.date = parse_date(_require(payload, "date"))
        if "note" in payload:
            note = payload["note"]
            patch.note = "" if note is None else str(note)
        return patch


@dataclass
class CategoryPatch(Patch):
    name: str = UNSET

    @classmethod
    def from_payload(cls, payload: dict) -> "CategoryPatch":
        patch = cls()
        if "name" in payload:
            patch.name = parse_name(_require(payload, "name"))
        return patch
