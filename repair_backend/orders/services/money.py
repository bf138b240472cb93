# orders/services/money.py

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from orders.services.exceptions import InvalidAmountError

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(v) -> Decimal:
    """Decimal with two places; None / blank count as 0."""
    if v is None or v == "":
        return ZERO
    try:
        value = Decimal(str(v))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmountError(f"Invalid amount: {v!r}") from exc
    if not value.is_finite():
        raise InvalidAmountError(f"Invalid amount: {v!r}")
    return value.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
