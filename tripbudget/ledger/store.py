"""
Ledger Store

Holds the ordered list of trip expenses and keeps it in sync with a
storage backend.

Every mutation follows the same order:
1. Validate the input (ValidationError, nothing touched)
2. Write to the backend (StorageError / NotFoundError, nothing touched)
3. Apply the change to the in-memory list

so a failure at any step leaves the ledger exactly as it was.

The store knows nothing about rendering. Callers re-read list() and
total() after each change.
"""

from decimal import Decimal
from typing import Any, Callable, Iterator, Optional, TypeVar

from tripbudget.audit import AuditLogger
from tripbudget.models.budget import Expense, ExpenseFields
from tripbudget.models.money import ZERO
from tripbudget.services.storage import (
    ExpenseStorageInterface,
    NotFoundError,
    StorageError,
)
from tripbudget.validation import ValidationError, validate_expense

T = TypeVar("T")


class LedgerStore:
    """
    Ordered collection of expenses backed by a storage implementation.

    Usage:
        with LedgerStore.open(storage) as ledger:
            ledger.add("Hotel Santiago", 3, Decimal("450.00"))
            ledger.total()
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._expenses: list[Expense] = []

    @classmethod
    def open(
        cls,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ) -> "LedgerStore":
        """Create a ledger and load the persisted expenses."""
        return cls(storage, audit_logger).load()

    def load(self) -> "LedgerStore":
        """(Re)load the expense list from storage, ordered by id."""
        expenses = self._persist("load", self._storage.list_expenses)
        self._expenses = sorted(expenses, key=lambda e: e.id)
        if self._audit_logger:
            self._audit_logger.log_ledger_loaded(
                count=len(self._expenses),
                backend=self._storage.backend_name,
            )
        return self

    def close(self) -> None:
        """Drop in-memory state and release the backend."""
        self._expenses = []
        self._storage.close()

    def __enter__(self) -> "LedgerStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _validate(
        self,
        operation: str,
        description: Any,
        quantity: Any,
        unit_price: Any,
        expense_id: Optional[int] = None,
    ) -> ExpenseFields:
        try:
            return validate_expense(description, quantity, unit_price)
        except ValidationError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    operation=operation,
                    issues=e.to_dicts(),
                    expense_id=expense_id,
                )
            raise

    def _persist(
        self,
        operation: str,
        call: Callable[..., T],
        *args: Any,
        expense_id: Optional[int] = None,
    ) -> T:
        try:
            return call(*args)
        except NotFoundError:
            raise
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(
                    operation=operation,
                    error_message=str(e),
                    expense_id=expense_id,
                )
            raise

    def _index_of(self, expense_id: int) -> int:
        for idx, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return idx
        raise NotFoundError(f"Expense not found: {expense_id}")

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def add(self, description: Any, quantity: Any, unit_price: Any) -> Expense:
        """
        Add an expense at the end of the ledger.

        Raises:
            ValidationError: Empty description, quantity < 1 or unit price < 0
            StorageError: If the backend write fails
        """
        fields = self._validate("add", description, quantity, unit_price)
        expense = self._persist("add", self._storage.create_expense, fields)
        self._expenses.append(expense)

        if self._audit_logger:
            self._audit_logger.log_expense_added(expense)
        return expense

    def update(
        self,
        expense_id: int,
        description: Any,
        quantity: Any,
        unit_price: Any,
    ) -> Expense:
        """
        Replace an expense's fields, keeping its position.

        Raises:
            NotFoundError: If the id is unknown
            ValidationError: Same rules as add()
            StorageError: If the backend write fails
        """
        idx = self._index_of(expense_id)
        fields = self._validate(
            "update", description, quantity, unit_price, expense_id=expense_id
        )
        expense = self._persist(
            "update",
            self._storage.update_expense,
            expense_id,
            fields,
            expense_id=expense_id,
        )
        self._expenses[idx] = expense

        if self._audit_logger:
            self._audit_logger.log_expense_updated(expense)
        return expense

    def remove(self, expense_id: int) -> None:
        """
        Remove an expense.

        Raises:
            NotFoundError: If the id is unknown
            StorageError: If the backend write fails
        """
        idx = self._index_of(expense_id)
        self._persist(
            "remove",
            self._storage.delete_expense,
            expense_id,
            expense_id=expense_id,
        )
        del self._expenses[idx]

        if self._audit_logger:
            self._audit_logger.log_expense_removed(expense_id)

    def get(self, expense_id: int) -> Expense:
        """Look up one expense (e.g. to pre-fill an edit form)."""
        return self._expenses[self._index_of(expense_id)]

    def total(self) -> Decimal:
        """Sum of all subtotals; 0 for an empty ledger."""
        return sum((expense.subtotal for expense in self._expenses), ZERO)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(tuple(self._expenses))

    def list(self) -> tuple[Expense, ...]:
        """Read-only snapshot in insertion order."""
        return tuple(self._expenses)
