"""Presentation helpers package."""

from tripbudget.presentation.formatting import (
    format_currency,
    format_percentage,
    goal_message,
    parse_amount,
    parse_quantity,
    progress_bar_value,
    remaining_message,
    subtotal_preview,
)

__all__ = [
    "format_currency",
    "format_percentage",
    "goal_message",
    "parse_amount",
    "parse_quantity",
    "progress_bar_value",
    "remaining_message",
    "subtotal_preview",
]
