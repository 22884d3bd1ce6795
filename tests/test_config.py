"""Tests for environment-driven settings."""

import pytest

from tripbudget.config import (
    AppSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestStorageSettings:
    """Tests for StorageSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TRIP_BUDGET_STORAGE_BACKEND", raising=False)
        settings = StorageSettings(_env_file=None)
        assert settings.backend == "local"
        assert settings.expenses_key == "trip_budget_expenses"
        assert settings.database_url.startswith("sqlite:")

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("TRIP_BUDGET_STORAGE_BACKEND", "sqlite")
        monkeypatch.setenv("TRIP_BUDGET_STORAGE_DATABASE_URL", "sqlite:///trip.db")
        settings = get_settings().storage
        assert settings.backend == "sqlite"
        assert settings.database_url == "sqlite:///trip.db"

    def test_rejects_unknown_backend(self):
        with pytest.raises(ValueError):
            StorageSettings(backend="sheets")

    def test_rejects_non_sqlite_url(self):
        with pytest.raises(ValueError, match="Unsupported database URL"):
            StorageSettings(database_url="postgresql://localhost/trip")


class TestAppSettings:
    """Tests for AppSettings."""

    def test_trip_name_from_environment(self, monkeypatch):
        monkeypatch.setenv("TRIP_NAME", "Patagonia")
        assert AppSettings().trip_name == "Patagonia"


class TestValidateAllSettings:
    """Tests for validate_all_settings."""

    def test_all_valid(self, monkeypatch):
        monkeypatch.setenv("TRIP_BUDGET_STORAGE_BACKEND", "local")
        assert validate_all_settings() == {"storage": True, "app": True}

    def test_reports_storage_error(self, monkeypatch):
        monkeypatch.setenv("TRIP_BUDGET_STORAGE_DATABASE_URL", "mysql://nope")
        results = validate_all_settings()
        assert results["storage"] is False
        assert "Unsupported database URL" in results["storage_error"]
        assert results["app"] is True
