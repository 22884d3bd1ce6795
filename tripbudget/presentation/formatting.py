"""
Display helpers for the budget dashboard.

Pure functions only: the stores hand out Decimals and categories, and
this module turns them into text. Amounts are shown in Brazilian real
style (R$ 1.234,56) and form input accepts a decimal comma.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from tripbudget.models.budget import Goal, GoalProgress, MessageCategory
from tripbudget.models.money import ZERO, quantize_cents, to_decimal

HUNDRED = Decimal("100")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_TO_BRL = str.maketrans(",.", ".,")

_MESSAGES = {
    MessageCategory.NO_GOAL: "Set a target amount to start tracking.",
    MessageCategory.NOT_STARTED: "We haven't started saving yet :(",
    MessageCategory.IN_PROGRESS: "We've started! No turning back now.",
    MessageCategory.HALFWAY_OR_MORE: "Halfway there, keep going!",
    MessageCategory.REACHED: "Goal reached! Let's go!",
}
_EXCEEDED_MESSAGE = "We beat the goal!"


def format_currency(amount: Any, symbol: str = "R$") -> str:
    """
    Format an amount as currency, e.g. Decimal("1234.5") -> "R$ 1.234,50".

    Negative amounts get a leading minus: "-R$ 10,00".
    """
    value = quantize_cents(to_decimal(amount))
    sign = "-" if value < 0 else ""
    body = f"{abs(value):,.2f}".translate(_TO_BRL)
    return f"{sign}{symbol} {body}"


def parse_amount(raw: Optional[str]) -> Decimal:
    """
    Read an amount typed into a form.

    Accepts "12.50", "12,50" and "1.234,50". Blank or unreadable input
    gives 0. Negative values are returned as-is.
    """
    if raw is None:
        return ZERO
    text = str(raw).strip().replace(" ", "")
    if not text:
        return ZERO
    if "," in text and "." in text:
        text = text.replace(".", "")
    try:
        value = to_decimal(text)
    except (InvalidOperation, TypeError, ValueError):
        return ZERO
    return value if value.is_finite() else ZERO


def parse_quantity(raw: Optional[str]) -> int:
    """Leading integer of the input ("3 units" -> 3), or 0."""
    if raw is None:
        return 0
    match = _LEADING_INT.match(str(raw))
    return int(match.group(1)) if match else 0


def subtotal_preview(quantity: Any, unit_price: Any, symbol: str = "R$") -> str:
    """Live subtotal shown under the expense form; empty unless positive."""
    try:
        subtotal = Decimal(int(quantity)) * to_decimal(unit_price)
    except (InvalidOperation, TypeError, ValueError):
        return ""
    return format_currency(subtotal, symbol) if subtotal > 0 else ""


def progress_bar_value(percentage: Decimal) -> Decimal:
    """Width for a progress bar: the percentage, capped at 100."""
    return min(max(percentage, ZERO), HUNDRED)


def format_percentage(percentage: Decimal) -> str:
    return f"{percentage:.1f}%"


def goal_message(category: MessageCategory, goal: Goal) -> str:
    """Motivational text for the goal card."""
    if category == MessageCategory.REACHED and goal.saved > goal.target:
        return _EXCEEDED_MESSAGE
    return _MESSAGES[category]


def remaining_message(goal: Goal, progress: GoalProgress, symbol: str = "R$") -> str:
    if goal.target > 0 and progress.remaining <= 0:
        return "Goal reached!"
    return f"{format_currency(progress.remaining, symbol)} still to go."
