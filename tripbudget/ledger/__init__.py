"""Expense ledger package."""

from tripbudget.ledger.store import LedgerStore

__all__ = ["LedgerStore"]
