from decimal import Decimal, InvalidOperation

from .errors import ValidationError
from .models import KINDS

# matches the Numeric(12, 2) amount and cap columns
AMOUNT_PLACES = 2
AMOUNT_MAX = Decimal("9999999999.99")
CENT = Decimal(1).scaleb(-AMOUNT_PLACES)


def parse_amount(value, field: str = "amount", sign: str | None = None) -> Decimal:
    """Accept JSON numbers only; booleans and numeric strings are rejected.

    The value must be storable without rounding: at most two decimal places
    and within the column's range. ``sign`` is ``"positive"`` (> 0),
    ``"non_negative"`` (>= 0) or ``None`` (any sign).
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValidationError(f"{field} must be number")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field} must be number") from None
    if not amount.is_finite():
        raise ValidationError(f"{field} must be number")
    if abs(amount) > AMOUNT_MAX:
        raise ValidationError(f"{field} is too large")
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{field} must have at most {AMOUNT_PLACES} decimal places")
    if sign == "positive" and amount <= 0:
        raise ValidationError(f"{field} must be positive")
    if sign == "non_negative" and amount < 0:
        raise ValidationError(f"{field} must not be negative")
    return amount


def parse_kind(value) -> str:
    if value not in KINDS:
        raise ValidationError("type must be income|expense")
    return value


def parse_id(value, field: str = "id") -> int:
    if isinstance(value, bool):
        raise ValidationError(f"invalid {field}")
    try:
        ident = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"invalid {field}") from None
    if ident <= 0:
        raise ValidationError(f"invalid {field}")
    return ident


def parse_name(value) -> str:
    name = str(value).strip() if value is not None else ""
    if not name:
        raise ValidationError("name is required")
    return name
