"""
Tests for Trip Budget

Test strategy:
1. Unit tests for individual components (models, validation, formatting)
2. Behavior tests for the ledger and goal tracker against every backend
3. No files outside pytest's tmp_path, no network
"""

import pytest
from decimal import Decimal

from pydantic import ValidationError as PydanticValidationError

from tripbudget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from tripbudget.models.budget import (
    Expense,
    ExpenseFields,
    Goal,
    GoalProgress,
    MessageCategory,
)
from tripbudget.models.money import coerce_amount, to_decimal


class TestExpenseModels:
    """Tests for expense-related Pydantic models."""

    def test_expense_fields_computes_subtotal(self):
        """Test that an omitted subtotal is filled in."""
        fields = ExpenseFields(
            description="Hotel Santiago",
            quantity=3,
            unit_price=Decimal("450.00"),
        )
        assert fields.subtotal == Decimal("1350.00")

    def test_expense_fields_accepts_matching_subtotal(self):
        fields = ExpenseFields(
            description="Metro card",
            quantity=2,
            unit_price=Decimal("0.10"),
            subtotal=Decimal("0.20"),
        )
        assert fields.subtotal == Decimal("0.20")

    def test_expense_fields_rejects_mismatched_subtotal(self):
        """Test that a subtotal disagreeing with quantity x price is refused."""
        with pytest.raises(ValueError, match="does not match"):
            ExpenseFields(
                description="Metro card",
                quantity=2,
                unit_price=Decimal("0.10"),
                subtotal=Decimal("0.30"),
            )

    def test_expense_strips_whitespace(self):
        """Test that whitespace is stripped from the description."""
        fields = ExpenseFields(
            description="  Wine tour  ",
            quantity=1,
            unit_price=Decimal("90"),
        )
        assert fields.description == "Wine tour"

    def test_expense_keeps_sub_cent_prices(self):
        fields = ExpenseFields(
            description="Gum",
            quantity=3,
            unit_price=Decimal("0.005"),
        )
        assert fields.subtotal == Decimal("0.015")

    def test_expense_from_fields(self):
        fields = ExpenseFields(description="Taxi", quantity=4, unit_price=Decimal("25.50"))
        expense = Expense.from_fields(7, fields)
        assert expense.id == 7
        assert expense.subtotal == Decimal("102.00")

    def test_expense_is_immutable(self):
        expense = Expense(
            id=1,
            description="Taxi",
            quantity=1,
            unit_price=Decimal("10"),
            subtotal=Decimal("10"),
        )
        with pytest.raises(PydanticValidationError):
            expense.quantity = 2

    def test_expense_rejects_inconsistent_subtotal(self):
        with pytest.raises(ValueError, match="does not match"):
            Expense(
                id=1,
                description="Taxi",
                quantity=2,
                unit_price=Decimal("10"),
                subtotal=Decimal("10"),
            )

    def test_expense_to_record_is_json_safe(self):
        """Test that amounts are serialized as strings."""
        expense = Expense(
            id=3,
            description="Ski pass",
            quantity=2,
            unit_price=Decimal("80.25"),
            subtotal=Decimal("160.50"),
        )
        record = expense.to_record()
        assert record == {
            "id": 3,
            "description": "Ski pass",
            "quantity": 2,
            "unit_price": "80.25",
            "subtotal": "160.50",
        }
        assert Expense.model_validate(record) == expense


class TestGoalModels:
    """Tests for the goal models."""

    def test_goal_defaults_to_zero(self):
        goal = Goal()
        assert goal.target == 0
        assert goal.saved == 0

    def test_goal_rejects_negative_values(self):
        with pytest.raises(PydanticValidationError):
            Goal(target=Decimal("-1"))

    def test_goal_progress_bounds(self):
        with pytest.raises(PydanticValidationError):
            GoalProgress(percentage=Decimal("1000"), remaining=Decimal("0"))

    def test_message_category_values(self):
        assert MessageCategory.NO_GOAL.value == "no_goal"
        assert MessageCategory.REACHED.value == "reached"


class TestMoneyHelpers:
    """Tests for Decimal conversion helpers."""

    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_comma_decimal_separator(self):
        assert to_decimal("12,50") == Decimal("12.50")

    def test_booleans_are_not_amounts(self):
        with pytest.raises(TypeError):
            to_decimal(True)

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, Decimal("0")),
            (-5, Decimal("0")),
            ("abc", Decimal("0")),
            (float("nan"), Decimal("0")),
            ("Infinity", Decimal("0")),
            (12.345, Decimal("12.35")),
            ("1000", Decimal("1000.00")),
            (Decimal("1e30"), Decimal("0")),
            ("1e27", Decimal("0")),
        ],
    )
    def test_coerce_amount(self, value, expected):
        assert coerce_amount(value) == expected


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Expense added: Hotel",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.expense_added(
            expense_id=4,
            description="Hotel",
            subtotal="1350.00",
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["entity_id"] == 4
        assert log_dict["details"]["subtotal"] == "1350.00"

    def test_goal_changed_picks_event_type(self):
        target_event = AuditEventBuilder.goal_changed("target", -10, "0.00")
        saved_event = AuditEventBuilder.goal_changed("saved", "500", "500.00")
        assert target_event.event_type == AuditEventType.GOAL_TARGET_SET
        assert target_event.details == {"requested": "-10", "stored": "0.00"}
        assert saved_event.event_type == AuditEventType.GOAL_SAVED_SET

    def test_failure_events_have_raised_severity(self):
        validation = AuditEventBuilder.validation_failed("add", [{"field": "quantity"}])
        storage = AuditEventBuilder.storage_error("add", "disk full")
        assert validation.severity == AuditSeverity.WARNING
        assert storage.severity == AuditSeverity.ERROR
        assert storage.error_message == "disk full"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
