"""
Numeric coercion for weights, percentages and money.

Form input arrives as strings, floats, None or blanks. The valuation engine
treats anything unparseable as zero instead of raising; validation of
required/positive fields happens at the service boundary, not here.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

ZERO = Decimal("0")
WEIGHT_PLACES = Decimal("0.001")
MONEY_PLACES = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """
    Coerce to Decimal; None, blanks, non-numeric and non-finite values -> 0.

    - "10.5" -> Decimal("10.5")
    - 2 -> Decimal("2")
    - "abc" / "" / None / float("nan") -> Decimal("0")
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return ZERO
    try:
        d = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    return d if d.is_finite() else ZERO


def parse_decimal(value: Any):
    """Like to_decimal but returns None when the value is missing or unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return None
    return d if d.is_finite() else None


def round_weight(value: Decimal) -> Decimal:
    """Round grams to 3 places (half-up)."""
    return value.quantize(WEIGHT_PLACES, rounding=ROUND_HALF_UP)


def round_money(value: Decimal) -> Decimal:
    """Round currency to 2 places (half-up)."""
    return value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
