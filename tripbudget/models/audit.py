"""
Audit Models for Trip Budget

Every change to the ledger or the goal is logged as an audit event.
This provides:
1. Traceability of edits and removals
2. Debugging information when a backend fails
3. A record of rejected input

DESIGN DECISION: Audit events are emitted to the structured log only.
They are never written back into the budget store.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger
    LEDGER_LOADED = "ledger_loaded"
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_REMOVED = "expense_removed"

    # Goal
    GOAL_TARGET_SET = "goal_target_set"
    GOAL_SAVED_SET = "goal_saved_set"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity ('expense', 'goal', 'ledger')"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="ID of the expense this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, "Hotel", "450.00")
        event = AuditEventBuilder.storage_error("update_expense", str(exc))
    """

    @staticmethod
    def ledger_loaded(count: int, backend: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            description=f"Ledger loaded with {count} expenses",
            details={
                "count": count,
                "backend": backend,
            },
        )

    @staticmethod
    def expense_added(
        expense_id: int,
        description: str,
        subtotal: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {description}",
            details={
                "subtotal": subtotal,
            },
        )

    @staticmethod
    def expense_updated(
        expense_id: int,
        description: str,
        subtotal: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense updated: {description}",
            details={
                "subtotal": subtotal,
            },
        )

    @staticmethod
    def expense_removed(expense_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REMOVED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense {expense_id} removed",
        )

    @staticmethod
    def goal_changed(field: str, requested: Any, stored: str) -> AuditEvent:
        event_type = (
            AuditEventType.GOAL_TARGET_SET
            if field == "target"
            else AuditEventType.GOAL_SAVED_SET
        )
        return AuditEvent(
            event_type=event_type,
            entity_type="goal",
            description=f"Goal {field} set to {stored}",
            details={
                "requested": str(requested),
                "stored": stored,
            },
        )

    @staticmethod
    def validation_failed(
        operation: str,
        issues: list[dict],
        expense_id: Optional[int] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=expense_id,
            description=f"{operation} rejected with {len(issues)} issues",
            details={
                "operation": operation,
                "issues": issues,
            },
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        expense_id: Optional[int] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_id=expense_id,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={
                "operation": operation,
            },
        )
