"""Services package."""

from tripbudget.services.storage import (
    ConnectionError,
    ExpenseStorageInterface,
    KeyValueStore,
    LocalKeyValueStorage,
    NotFoundError,
    SQLiteStorage,
    StorageError,
)

__all__ = [
    "ConnectionError",
    "ExpenseStorageInterface",
    "KeyValueStore",
    "LocalKeyValueStorage",
    "NotFoundError",
    "SQLiteStorage",
    "StorageError",
]
