"""
Configuration Management for Trip Budget

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see which backend is in use and where its data
lives, and ensures the configuration is validated at startup.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Backing store selection and layout."""

    model_config = SettingsConfigDict(
        env_prefix="TRIP_BUDGET_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["local", "sqlite"] = Field(
        default="local",
        description="Which backing store to use"
    )

    # Key-value backend
    local_path: str = Field(
        default="trip_budget.json",
        description="JSON file for the key-value store (empty = in memory)"
    )
    expenses_key: str = Field(
        default="trip_budget_expenses",
        description="Key holding the full expense list"
    )
    target_key: str = Field(
        default="trip_budget_goal_target",
        description="Key holding the goal target"
    )
    saved_key: str = Field(
        default="trip_budget_goal_saved",
        description="Key holding the amount saved"
    )
    next_id_key: str = Field(
        default="trip_budget_next_id",
        description="Key holding the monotonic expense id counter"
    )

    # Relational backend
    database_url: str = Field(
        default="sqlite:///trip_budget.db",
        description="SQLAlchemy database URL"
    )

    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Only SQLite URLs are supported."""
        if not v.startswith("sqlite:"):
            raise ValueError(f"Unsupported database URL: {v}. Expected sqlite:///...")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Display
    trip_name: str = Field(
        default="Chile 2026",
        description="Title shown on the dashboard"
    )
    currency_symbol: str = Field(
        default="R$",
        description="Currency symbol used when formatting amounts"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an extra
    "<name>_error" entry for each failure.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except ValueError as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except ValueError as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
