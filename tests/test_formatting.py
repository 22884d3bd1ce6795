"""Tests for the dashboard display helpers."""

import pytest
from decimal import Decimal

from tripbudget.goals import compute_progress
from tripbudget.models.budget import Goal, MessageCategory
from tripbudget.presentation import (
    format_currency,
    format_percentage,
    goal_message,
    parse_amount,
    parse_quantity,
    progress_bar_value,
    remaining_message,
    subtotal_preview,
)


class TestCurrency:
    """Tests for currency formatting."""

    @pytest.mark.parametrize(
        "amount, expected",
        [
            (Decimal("0"), "R$ 0,00"),
            (Decimal("1234.5"), "R$ 1.234,50"),
            (Decimal("1000000"), "R$ 1.000.000,00"),
            (Decimal("0.005"), "R$ 0,01"),
            (Decimal("-10"), "-R$ 10,00"),
            (12, "R$ 12,00"),
        ],
    )
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_custom_symbol(self):
        assert format_currency(Decimal("99.9"), "CLP$") == "CLP$ 99,90"


class TestParsing:
    """Tests for reading form input."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("12.50", Decimal("12.50")),
            ("12,50", Decimal("12.50")),
            ("1.234,50", Decimal("1234.50")),
            ("  7 ", Decimal("7")),
            ("", Decimal("0")),
            (None, Decimal("0")),
            ("abc", Decimal("0")),
            ("-3", Decimal("-3")),
        ],
    )
    def test_parse_amount(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [("3", 3), ("3 units", 3), ("", 0), (None, 0), ("x", 0), ("-2", -2)],
    )
    def test_parse_quantity(self, raw, expected):
        assert parse_quantity(raw) == expected

    def test_subtotal_preview(self):
        assert subtotal_preview(7, Decimal("19.99")) == "R$ 139,93"
        assert subtotal_preview(0, Decimal("19.99")) == ""
        assert subtotal_preview(2, "abc") == ""


class TestGoalDisplay:
    """Tests for the goal card."""

    @pytest.mark.parametrize(
        "percentage, expected",
        [(Decimal("-5"), 0), (Decimal("42.5"), Decimal("42.5")), (Decimal("150"), 100)],
    )
    def test_progress_bar_value(self, percentage, expected):
        assert progress_bar_value(percentage) == expected

    def test_format_percentage(self):
        assert format_percentage(Decimal("33.3333")) == "33.3%"

    def test_reached_and_exceeded_messages_differ(self):
        reached = Goal(target=Decimal("100"), saved=Decimal("100"))
        exceeded = Goal(target=Decimal("100"), saved=Decimal("150"))
        assert goal_message(MessageCategory.REACHED, reached) == "Goal reached! Let's go!"
        assert goal_message(MessageCategory.REACHED, exceeded) == "We beat the goal!"

    @pytest.mark.parametrize("category", list(MessageCategory))
    def test_every_category_has_text(self, category):
        assert goal_message(category, Goal())

    def test_remaining_message(self):
        halfway = Goal(target=Decimal("1000"), saved=Decimal("500"))
        done = Goal(target=Decimal("1000"), saved=Decimal("1000"))
        assert remaining_message(halfway, compute_progress(halfway)) == "R$ 500,00 still to go."
        assert remaining_message(done, compute_progress(done)) == "Goal reached!"
