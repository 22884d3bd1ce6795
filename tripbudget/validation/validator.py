"""
Expense Input Validation

DESIGN DECISION: Validation happens before anything is written:

1. FIELD CHECKS - presence, type and range of each input
   (non-empty description, quantity >= 1, unit price >= 0)
2. SCHEMA CHECK - the values are loaded into ExpenseFields, which
   enforces the subtotal invariant

Every problem found is reported, not just the first one, so a form can
highlight all bad fields at once.

IMPORTANT: Validation NEVER silently fixes expense input.
It reports issues and blocks the mutation.
"""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from tripbudget.models.budget import ExpenseFields, ValidationIssue
from tripbudget.models.money import to_decimal


REQUIRED_PAYLOAD_FIELDS = ("description", "quantity", "unit_price", "subtotal")


class ValidationError(ValueError):
    """Malformed or missing expense input. Carries every issue found."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        summary = "; ".join(f"{i.field}: {i.message}" for i in issues)
        super().__init__(f"Invalid expense: {summary}")

    def to_dicts(self) -> list[dict]:
        return [issue.model_dump() for issue in self.issues]


def _check_description(description: Any) -> Optional[ValidationIssue]:
    if not isinstance(description, str):
        return ValidationIssue(
            field="description",
            issue_type="invalid_type",
            message="Description must be text",
        )
    if not description.strip():
        return ValidationIssue(
            field="description",
            issue_type="missing",
            message="Description is required",
        )
    return None


def _read_quantity(quantity: Any) -> tuple[Optional[int], Optional[ValidationIssue]]:
    invalid = ValidationIssue(
        field="quantity",
        issue_type="invalid_type",
        message="Quantity must be a whole number",
    )
    if isinstance(quantity, bool):
        return None, invalid
    if isinstance(quantity, int):
        value = quantity
    elif isinstance(quantity, float) and quantity.is_integer():
        value = int(quantity)
    elif isinstance(quantity, str) and quantity.strip().lstrip("-").isdigit():
        value = int(quantity.strip())
    else:
        return None, invalid

    if value < 1:
        return None, ValidationIssue(
            field="quantity",
            issue_type="out_of_range",
            message="Quantity must be at least 1",
        )
    return value, None


def _read_unit_price(unit_price: Any) -> tuple[Optional[Decimal], Optional[ValidationIssue]]:
    try:
        value = to_decimal(unit_price)
    except (InvalidOperation, TypeError, ValueError):
        return None, ValidationIssue(
            field="unit_price",
            issue_type="invalid_type",
            message="Unit price must be a number",
        )

    if not value.is_finite():
        return None, ValidationIssue(
            field="unit_price",
            issue_type="invalid_type",
            message="Unit price must be a finite number",
        )
    if value < 0:
        return None, ValidationIssue(
            field="unit_price",
            issue_type="out_of_range",
            message="Unit price cannot be negative",
        )
    return value, None


def _issues_from_pydantic(exc: PydanticValidationError) -> list[ValidationIssue]:
    issues = []
    for error in exc.errors():
        loc = error.get("loc") or ("expense",)
        issues.append(ValidationIssue(
            field=str(loc[0]),
            issue_type=error.get("type", "invalid"),
            message=error.get("msg", "Invalid value"),
        ))
    return issues


def validate_expense(
    description: Any,
    quantity: Any,
    unit_price: Any,
    subtotal: Any = None,
) -> ExpenseFields:
    """
    Check one expense line and return it as ExpenseFields.

    Args:
        description: Free text, surrounding whitespace is stripped
        quantity: Whole number >= 1
        unit_price: Number >= 0, kept at full precision
        subtotal: Optional; computed when omitted, checked when given

    Raises:
        ValidationError: With every issue found
    """
    issues = []

    description_issue = _check_description(description)
    if description_issue:
        issues.append(description_issue)

    quantity_value, quantity_issue = _read_quantity(quantity)
    if quantity_issue:
        issues.append(quantity_issue)

    price_value, price_issue = _read_unit_price(unit_price)
    if price_issue:
        issues.append(price_issue)

    subtotal_value = None
    if subtotal is not None:
        try:
            subtotal_value = to_decimal(subtotal)
        except (InvalidOperation, TypeError, ValueError):
            issues.append(ValidationIssue(
                field="subtotal",
                issue_type="invalid_type",
                message="Subtotal must be a number",
            ))

    if issues:
        raise ValidationError(issues)

    try:
        return ExpenseFields(
            description=description,
            quantity=quantity_value,
            unit_price=price_value,
            subtotal=subtotal_value,
        )
    except PydanticValidationError as e:
        raise ValidationError(_issues_from_pydantic(e)) from e


def validate_expense_payload(payload: Mapping) -> ExpenseFields:
    """
    Validate a raw create/update payload from an outer caller.

    All of description, quantity, unit_price and subtotal must be present
    and non-null. Missing fields are reported before anything else.
    """
    missing = [
        ValidationIssue(
            field=name,
            issue_type="missing",
            message=f"{name} is required",
        )
        for name in REQUIRED_PAYLOAD_FIELDS
        if payload.get(name) is None
    ]
    if missing:
        raise ValidationError(missing)

    return validate_expense(
        description=payload["description"],
        quantity=payload["quantity"],
        unit_price=payload["unit_price"],
        subtotal=payload["subtotal"],
    )
