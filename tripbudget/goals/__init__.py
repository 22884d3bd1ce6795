"""Savings goal package."""

from tripbudget.goals.tracker import (
    PERCENTAGE_CAP,
    GoalTracker,
    classify,
    compute_progress,
)

__all__ = ["PERCENTAGE_CAP", "GoalTracker", "classify", "compute_progress"]
