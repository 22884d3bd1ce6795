"""
Core Data Models for Trip Budget

These models define the strict schemas for the ledger and the savings goal.
They are designed to:
1. Enforce type safety at runtime
2. Keep money exact (Decimal, stored at full precision)
3. Be serializable for the key-value and relational backends

DESIGN DECISION: The subtotal is stored redundantly next to quantity and
unit price. The models refuse any subtotal that disagrees with the product,
so a persisted expense can never drift.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)

from tripbudget.models.money import ZERO


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class MessageCategory(str, Enum):
    """
    Motivational message buckets for the savings goal.

    Presentation metadata only. Recomputed on every read, never stored.
    """
    NO_GOAL = "no_goal"                  # target <= 0
    NOT_STARTED = "not_started"          # saved <= 0
    IN_PROGRESS = "in_progress"          # 0 < percentage < 50
    HALFWAY_OR_MORE = "halfway_or_more"  # 50 <= percentage < 100
    REACHED = "reached"                  # percentage >= 100


# =============================================================================
# EXPENSE MODELS
# =============================================================================

class _ExpenseLine(BaseModel):
    """Fields shared by every representation of an expense line."""
    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = Field(
        ...,
        min_length=1,
        description="What was (or will be) bought"
    )
    quantity: int = Field(
        ...,
        ge=1,
        description="Number of units"
    )
    unit_price: Decimal = Field(
        ...,
        ge=0,
        description="Price of a single unit"
    )

    @property
    def expected_subtotal(self) -> Decimal:
        return self.quantity * self.unit_price


class ExpenseFields(_ExpenseLine):
    """
    An expense without an identity, as handed to a storage backend.

    If subtotal is omitted it is computed. If it is given it must match.
    """

    subtotal: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="quantity x unit_price"
    )

    @model_validator(mode='after')
    def fill_subtotal(self) -> 'ExpenseFields':
        expected = self.expected_subtotal
        if self.subtotal is None:
            self.subtotal = expected
        elif self.subtotal != expected:
            raise ValueError(
                f"Subtotal {self.subtotal} does not match "
                f"quantity x unit price ({expected})"
            )
        return self


class Expense(_ExpenseLine):
    """
    A persisted expense line.

    Owned by the ledger for its lifetime. Identity comes from the backend
    (monotonic counter or autoincrement key).
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: int = Field(
        ...,
        ge=1,
        description="Unique expense ID"
    )
    subtotal: Decimal = Field(
        ...,
        ge=0,
        description="quantity x unit_price"
    )

    @model_validator(mode='after')
    def check_subtotal(self) -> 'Expense':
        if self.subtotal != self.expected_subtotal:
            raise ValueError(
                f"Subtotal {self.subtotal} does not match "
                f"quantity x unit price ({self.expected_subtotal})"
            )
        return self

    @classmethod
    def from_fields(cls, expense_id: int, fields: ExpenseFields) -> 'Expense':
        return cls(
            id=expense_id,
            description=fields.description,
            quantity=fields.quantity,
            unit_price=fields.unit_price,
            subtotal=fields.subtotal,
        )

    def to_record(self) -> dict:
        """JSON-safe dict (amounts as strings)."""
        return self.model_dump(mode="json")


# =============================================================================
# GOAL MODELS
# =============================================================================

class Goal(BaseModel):
    """
    The savings goal. Exactly one exists per store.

    Percentage and remaining are derived by the goal tracker, not stored.
    """

    target: Decimal = Field(
        default=ZERO,
        ge=0,
        decimal_places=2,
        description="Amount to save for the trip"
    )
    saved: Decimal = Field(
        default=ZERO,
        ge=0,
        decimal_places=2,
        description="Amount set aside so far"
    )


class GoalProgress(BaseModel):
    """Derived view of a goal."""

    percentage: Decimal = Field(
        ...,
        ge=0,
        le=999,
        description="saved / target x 100, clamped to [0, 999]"
    )
    remaining: Decimal = Field(
        ...,
        ge=0,
        description="max(target - saved, 0)"
    )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'out_of_range', 'invalid_type')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


# =============================================================================
# DASHBOARD MODEL
# =============================================================================

class BudgetDashboard(BaseModel):
    """
    Everything the dashboard shows, read in one go after each change.
    """

    expenses: list[Expense] = Field(default_factory=list)
    total: Decimal = Field(
        default=ZERO,
        description="Sum of all subtotals"
    )
    goal: Goal = Field(default_factory=Goal)
    progress: GoalProgress
    message: MessageCategory
