"""
Storage Services Package

Provides the abstract storage interface and its two implementations:
a local key-value store (in memory or a JSON file) and SQLite.
"""

from tripbudget.services.storage.interface import (
    ConnectionError,
    ExpenseStorageInterface,
    NotFoundError,
    StorageError,
)
from tripbudget.services.storage.local import (
    KeyValueStore,
    LocalKeyValueStorage,
)
from tripbudget.services.storage.sqlite import SQLiteStorage

__all__ = [
    # Interfaces
    "ExpenseStorageInterface",
    # Exceptions
    "ConnectionError",
    "NotFoundError",
    "StorageError",
    # Key-value implementation
    "KeyValueStore",
    "LocalKeyValueStorage",
    # Relational implementation
    "SQLiteStorage",
]
