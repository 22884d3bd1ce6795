"""Input validation package."""

from tripbudget.validation.validator import (
    ValidationError,
    validate_expense,
    validate_expense_payload,
)

__all__ = ["ValidationError", "validate_expense", "validate_expense_payload"]
