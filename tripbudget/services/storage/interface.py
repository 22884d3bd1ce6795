"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the budget in a local key-value file on a single machine
2. Move it to a relational database without touching the stores
3. Use in-memory storage for testing

The interface is intentionally simple - we're not building a full ORM.
Just the operations the ledger and the goal tracker need.
"""

from abc import ABC, abstractmethod

from tripbudget.models.budget import Expense, ExpenseFields, Goal


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for the budget backing store.

    Any storage implementation (key-value file, SQLite, etc.)
    must implement these methods.
    """

    #: Short name used in logs
    backend_name: str = "abstract"

    @abstractmethod
    def list_expenses(self) -> list[Expense]:
        """
        List every stored expense.

        Returns:
            Expenses ordered by id (insertion order)

        Raises:
            StorageError: If the backend cannot be read
        """

    @abstractmethod
    def create_expense(self, fields: ExpenseFields) -> Expense:
        """
        Store a new expense and assign it an id.

        Args:
            fields: Validated expense fields (subtotal filled in)

        Returns:
            The stored expense with its id

        Raises:
            StorageError: If the write fails
        """

    @abstractmethod
    def update_expense(self, expense_id: int, fields: ExpenseFields) -> Expense:
        """
        Replace the fields of an existing expense.

        Returns:
            The updated expense

        Raises:
            NotFoundError: If the id is unknown
            StorageError: If the write fails
        """

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """
        Delete an expense.

        Raises:
            NotFoundError: If the id is unknown
            StorageError: If the write fails
        """

    @abstractmethod
    def get_goal(self) -> Goal:
        """
        Read the savings goal.

        Returns:
            The stored goal, or Goal() (0 / 0) if never set
        """

    @abstractmethod
    def set_goal(self, goal: Goal) -> Goal:
        """
        Overwrite the savings goal.

        Returns:
            The stored values
        """

    def close(self) -> None:
        """Release backend resources. Safe to call more than once."""


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
