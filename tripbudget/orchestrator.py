"""
Main Orchestrator for Trip Budget

This module ties together the components:
storage backend -> ledger store + goal tracker -> dashboard snapshot

DESIGN DECISION: The stores never render anything. The presentation
layer performs a change, then asks for a fresh snapshot and redraws
from it. Both stores share one backend and one audit logger.
"""

from typing import Optional

from tripbudget.audit import AuditLogger
from tripbudget.config import StorageSettings, get_settings
from tripbudget.goals import GoalTracker
from tripbudget.ledger import LedgerStore
from tripbudget.models.budget import BudgetDashboard
from tripbudget.services.storage import (
    ExpenseStorageInterface,
    LocalKeyValueStorage,
    SQLiteStorage,
)


class TripBudget:
    """
    One user's budget: the expense ledger and the savings goal.

    Owns the storage backend; close() releases it.
    """

    def __init__(
        self,
        ledger: LedgerStore,
        goals: GoalTracker,
        storage: ExpenseStorageInterface,
    ):
        self.ledger = ledger
        self.goals = goals
        self._storage = storage

    @property
    def backend_name(self) -> str:
        return self._storage.backend_name

    def snapshot(self) -> BudgetDashboard:
        """Re-read everything the dashboard needs."""
        progress = self.goals.progress()
        return BudgetDashboard(
            expenses=list(self.ledger.list()),
            total=self.ledger.total(),
            goal=self.goals.goal,
            progress=progress,
            message=self.goals.message(),
        )

    def close(self) -> None:
        self.ledger.close()

    def __enter__(self) -> "TripBudget":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_storage(
    settings: Optional[StorageSettings] = None,
) -> ExpenseStorageInterface:
    """
    Build the configured storage backend.

    "local" -> LocalKeyValueStorage (JSON file, or memory if no path)
    "sqlite" -> SQLiteStorage
    """
    settings = settings or get_settings().storage
    if settings.backend == "sqlite":
        return SQLiteStorage(settings.database_url)
    return LocalKeyValueStorage(settings=settings)


def create_app_components(
    storage: Optional[ExpenseStorageInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> TripBudget:
    """
    Factory function to create all application components.

    Args:
        storage: Backend to use. Defaults to the configured one.
        audit_logger: Defaults to a structlog-backed AuditLogger.

    Returns:
        A loaded TripBudget
    """
    storage = storage or create_storage()
    audit_logger = audit_logger or AuditLogger()

    ledger = LedgerStore.open(storage, audit_logger)
    goals = GoalTracker.open(storage, audit_logger)

    return TripBudget(ledger=ledger, goals=goals, storage=storage)
