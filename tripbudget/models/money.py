"""
Money helpers shared by the expense and goal models.

All amounts are Decimal. Floats are converted through their string form
so 0.1 stays 0.1 instead of 0.1000000000000000055511151231257827.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """
    Convert a number-like value to Decimal.

    Raises:
        InvalidOperation: If the value cannot be read as a number
        TypeError: For unsupported types (lists, dicts, ...)
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not amounts")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        return Decimal(value.strip().replace(",", "."))
    raise TypeError(f"Unsupported amount type: {type(value).__name__}")


def coerce_amount(value: Any) -> Decimal:
    """
    Lenient conversion used by the goal setters.

    None, unparsable input, NaN, infinities and negatives all become 0.
    The result is rounded to cents; amounts too large to round at the
    current decimal precision also become 0.
    """
    if value is None:
        return ZERO
    try:
        amount = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return ZERO
    if not amount.is_finite() or amount < 0:
        return ZERO
    try:
        return quantize_cents(amount)
    except InvalidOperation:
        return ZERO


def quantize_cents(amount: Decimal) -> Decimal:
    """Round to two decimal places, half up."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
