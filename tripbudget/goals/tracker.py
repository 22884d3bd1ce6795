"""
Savings Goal Tracker

Two numbers (target and saved) and what follows from them:
- percentage: saved / target x 100, 0 without a target, clamped to [0, 999]
- remaining: what is still missing, never negative
- a message category for the dashboard

The setters never fail on bad numbers: negatives, blanks and garbage are
stored as 0, the way blank form fields read. Storage failures
still propagate.
"""

from decimal import Decimal
from typing import Any, Optional

from tripbudget.audit import AuditLogger
from tripbudget.models.budget import Goal, GoalProgress, MessageCategory
from tripbudget.models.money import ZERO, coerce_amount
from tripbudget.services.storage import ExpenseStorageInterface, StorageError

HUNDRED = Decimal("100")
HALFWAY = Decimal("50")
PERCENTAGE_CAP = Decimal("999")


def compute_progress(goal: Goal) -> GoalProgress:
    """Derive percentage and remaining amount from a goal."""
    if goal.target <= 0:
        percentage = ZERO
    else:
        raw = goal.saved / goal.target * HUNDRED
        percentage = min(max(raw, ZERO), PERCENTAGE_CAP)

    return GoalProgress(
        percentage=percentage,
        remaining=max(goal.target - goal.saved, ZERO),
    )


def classify(goal: Goal, percentage: Optional[Decimal] = None) -> MessageCategory:
    """
    Map a goal to its message category.

    Checked in order: no target, nothing saved, then percentage bands
    (< 50, < 100, >= 100).
    """
    if goal.target <= 0:
        return MessageCategory.NO_GOAL
    if goal.saved <= 0:
        return MessageCategory.NOT_STARTED

    if percentage is None:
        percentage = compute_progress(goal).percentage

    if percentage < HALFWAY:
        return MessageCategory.IN_PROGRESS
    if percentage < HUNDRED:
        return MessageCategory.HALFWAY_OR_MORE
    return MessageCategory.REACHED


class GoalTracker:
    """
    Owns the single savings goal of a budget store.

    Every setter persists immediately.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._goal = Goal()

    @classmethod
    def open(
        cls,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ) -> "GoalTracker":
        """Create a tracker and load the persisted goal."""
        return cls(storage, audit_logger).load()

    def load(self) -> "GoalTracker":
        self._goal = self._persist("load_goal", self._storage.get_goal)
        return self

    @property
    def goal(self) -> Goal:
        return self._goal

    def _persist(self, operation: str, call, *args):
        try:
            return call(*args)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(
                    operation=operation,
                    error_message=str(e),
                )
            raise

    def _store(self, field: str, requested: Any, goal: Goal) -> Goal:
        stored = self._persist("set_goal", self._storage.set_goal, goal)
        self._goal = stored
        if self._audit_logger:
            self._audit_logger.log_goal_changed(field, requested, stored)
        return stored

    def set_target(self, amount: Any) -> Goal:
        """Set the savings target. Invalid or negative amounts become 0."""
        goal = Goal(target=coerce_amount(amount), saved=self._goal.saved)
        return self._store("target", amount, goal)

    def set_saved(self, amount: Any) -> Goal:
        """Set the amount saved so far. Invalid or negative amounts become 0."""
        goal = Goal(target=self._goal.target, saved=coerce_amount(amount))
        return self._store("saved", amount, goal)

    def progress(self) -> GoalProgress:
        return compute_progress(self._goal)

    def message(self) -> MessageCategory:
        """Message category for the current goal, recomputed on every call."""
        return classify(self._goal, self.progress().percentage)
