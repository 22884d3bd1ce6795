"""Tests for wiring the stores together."""

from decimal import Decimal

from tripbudget.config import StorageSettings
from tripbudget.models.budget import MessageCategory
from tripbudget.orchestrator import create_app_components, create_storage
from tripbudget.services.storage import LocalKeyValueStorage, SQLiteStorage


class TestCreateStorage:
    """Tests for backend selection."""

    def test_local_backend(self):
        storage = create_storage(StorageSettings(backend="local", local_path=""))
        assert isinstance(storage, LocalKeyValueStorage)

    def test_sqlite_backend(self):
        storage = create_storage(
            StorageSettings(backend="sqlite", database_url="sqlite://")
        )
        assert isinstance(storage, SQLiteStorage)
        storage.close()


class TestTripBudget:
    """Tests for the dashboard snapshot."""

    def test_empty_snapshot(self, storage, audit_logger):
        with create_app_components(storage, audit_logger) as budget:
            snapshot = budget.snapshot()

        assert snapshot.expenses == []
        assert snapshot.total == 0
        assert snapshot.progress.percentage == 0
        assert snapshot.message == MessageCategory.NO_GOAL

    def test_snapshot_reflects_changes(self, storage, audit_logger):
        budget = create_app_components(storage, audit_logger)
        budget.ledger.add("Flight", 2, Decimal("1999.90"))
        budget.ledger.add("Hotel", 5, Decimal("320.00"))
        budget.goals.set_target(Decimal("8000"))
        budget.goals.set_saved(Decimal("6000"))

        snapshot = budget.snapshot()

        assert [e.description for e in snapshot.expenses] == ["Flight", "Hotel"]
        assert snapshot.total == Decimal("5599.80")
        assert snapshot.progress.percentage == 75
        assert snapshot.progress.remaining == Decimal("2000")
        assert snapshot.message == MessageCategory.HALFWAY_OR_MORE
        assert budget.backend_name == storage.backend_name
        budget.close()

    def test_ledger_and_goal_share_storage(self, reopenable_storage, audit_logger):
        budget = create_app_components(reopenable_storage(), audit_logger)
        budget.ledger.add("Flight", 1, Decimal("2500"))
        budget.goals.set_target(Decimal("2500"))

        reopened = create_app_components(reopenable_storage(), audit_logger)

        assert reopened.snapshot() == budget.snapshot()
