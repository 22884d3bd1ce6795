"""
Local Key-Value Storage Implementation

DESIGN DECISION: The simplest backend behaves like a browser's local
storage: string values under string keys, nothing more.

- The whole expense list is one JSON array under one key and is
  rewritten in full on every change (overwrite, never incremental)
- Target and saved live under two separate keys
- Expense ids come from a monotonic counter under a fourth key, so two
  expenses added in quick succession can never collide

TRADEOFFS:
- Every change rewrites the whole list (fine for a trip's worth of lines)
- No concurrent writers (single user, single process)

The data can live in memory (tests, throwaway sessions) or in a JSON file.
File writes go to a temporary file first and are renamed into place.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from tripbudget.config import StorageSettings, get_settings
from tripbudget.models.budget import Expense, ExpenseFields, Goal
from tripbudget.models.money import coerce_amount
from tripbudget.services.storage.interface import (
    ExpenseStorageInterface,
    NotFoundError,
    StorageError,
)


class KeyValueStore:
    """
    String-to-string mapping, optionally mirrored to a JSON file.

    Mirrors the getItem / setItem / removeItem / clear surface of
    browser local storage.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._path = Path(path) if path else None
        self._data: dict[str, str] = self._read() if self._path else {}

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.set_items({key: value})

    def set_items(self, items: dict[str, str]) -> None:
        """Write several keys in one flush."""
        updated = dict(self._data)
        updated.update(items)
        self._flush(updated)
        self._data = updated

    def remove_item(self, key: str) -> None:
        if key not in self._data:
            return
        updated = {k: v for k, v in self._data.items() if k != key}
        self._flush(updated)
        self._data = updated

    def clear(self) -> None:
        self._flush({})
        self._data = {}

    def keys(self) -> list[str]:
        return list(self._data)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise StorageError(f"{self._path} is not a key-value store")
        return data

    def _flush(self, data: dict[str, str]) -> None:
        if self._path is None:
            return
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e


class LocalKeyValueStorage(ExpenseStorageInterface):
    """
    Key-value implementation of the budget store.

    Expenses are JSON-serialized with amounts as strings so Decimal
    values survive the round trip unchanged.
    """

    backend_name = "local"

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        settings: Optional[StorageSettings] = None,
    ):
        self._settings = settings or get_settings().storage
        if store is None:
            store = KeyValueStore(self._settings.local_path or None)
        self._store = store

    def _load_records(self) -> list[Expense]:
        raw = self._store.get_item(self._settings.expenses_key)
        if not raw:
            return []
        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise StorageError("Stored expenses are not a list")
            return [Expense.model_validate(record) for record in records]
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise StorageError(f"Stored expenses are corrupt: {e}") from e

    def _dump_records(self, expenses: list[Expense]) -> str:
        return json.dumps([expense.to_record() for expense in expenses])

    def _next_id(self, expenses: list[Expense]) -> int:
        raw = self._store.get_item(self._settings.next_id_key)
        try:
            last_issued = int(raw) if raw else 0
        except ValueError:
            last_issued = 0
        highest = max((e.id for e in expenses), default=0)
        return max(last_issued, highest) + 1

    def list_expenses(self) -> list[Expense]:
        """Read the full expense list."""
        return self._load_records()

    def create_expense(self, fields: ExpenseFields) -> Expense:
        """Append an expense and overwrite the stored list."""
        expenses = self._load_records()
        expense = Expense.from_fields(self._next_id(expenses), fields)
        expenses.append(expense)
        self._store.set_items({
            self._settings.expenses_key: self._dump_records(expenses),
            self._settings.next_id_key: str(expense.id),
        })
        return expense

    def update_expense(self, expense_id: int, fields: ExpenseFields) -> Expense:
        """Replace an expense in place and overwrite the stored list."""
        expenses = self._load_records()
        for idx, existing in enumerate(expenses):
            if existing.id == expense_id:
                updated = Expense.from_fields(expense_id, fields)
                expenses[idx] = updated
                self._store.set_item(
                    self._settings.expenses_key,
                    self._dump_records(expenses),
                )
                return updated

        raise NotFoundError(f"Expense not found: {expense_id}")

    def delete_expense(self, expense_id: int) -> None:
        """Drop an expense and overwrite the stored list."""
        expenses = self._load_records()
        remaining = [e for e in expenses if e.id != expense_id]
        if len(remaining) == len(expenses):
            raise NotFoundError(f"Expense not found: {expense_id}")
        self._store.set_item(
            self._settings.expenses_key,
            self._dump_records(remaining),
        )

    def get_goal(self) -> Goal:
        """Read target and saved, treating missing or unreadable values as 0."""
        return Goal(
            target=coerce_amount(self._store.get_item(self._settings.target_key)),
            saved=coerce_amount(self._store.get_item(self._settings.saved_key)),
        )

    def set_goal(self, goal: Goal) -> Goal:
        """Overwrite both goal keys."""
        self._store.set_items({
            self._settings.target_key: str(goal.target),
            self._settings.saved_key: str(goal.saved),
        })
        return goal
