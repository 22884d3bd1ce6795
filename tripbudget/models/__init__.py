"""
Data Models Package

This package contains all Pydantic models used by Trip Budget.
All data flowing through the system must conform to these schemas.
"""

from tripbudget.models.budget import (
    BudgetDashboard,
    Expense,
    ExpenseFields,
    Goal,
    GoalProgress,
    MessageCategory,
    ValidationIssue,
)
from tripbudget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Budget models
    "BudgetDashboard",
    "Expense",
    "ExpenseFields",
    "Goal",
    "GoalProgress",
    "MessageCategory",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
