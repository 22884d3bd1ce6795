"""
Audit Logger

DESIGN DECISION: Every change to the budget is logged.
This provides:
1. Traceability of edits and removals
2. Debugging capability when a backend fails
3. A record of rejected input

The audit logger writes structured JSON lines through structlog.
"""

from typing import Any, Optional

import structlog

from tripbudget.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from tripbudget.models.budget import Expense, Goal


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Severity picks the log method; the event itself is the payload.
    """

    def __init__(self, logger: Optional[Any] = None):
        """
        Initialize audit logger.

        Args:
            logger: structlog-compatible logger. Defaults to the
                    module's configured structlog logger.
        """
        self._logger = logger or structlog.get_logger("tripbudget.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_ledger_loaded(self, count: int, backend: str) -> None:
        self.log(AuditEventBuilder.ledger_loaded(count=count, backend=backend))

    def log_expense_added(self, expense: Expense) -> None:
        self.log(AuditEventBuilder.expense_added(
            expense_id=expense.id,
            description=expense.description,
            subtotal=str(expense.subtotal),
        ))

    def log_expense_updated(self, expense: Expense) -> None:
        self.log(AuditEventBuilder.expense_updated(
            expense_id=expense.id,
            description=expense.description,
            subtotal=str(expense.subtotal),
        ))

    def log_expense_removed(self, expense_id: int) -> None:
        self.log(AuditEventBuilder.expense_removed(expense_id))

    def log_goal_changed(self, field: str, requested: Any, goal: Goal) -> None:
        """Log a target/saved change, including what was asked for vs stored."""
        self.log(AuditEventBuilder.goal_changed(
            field=field,
            requested=requested,
            stored=str(getattr(goal, field)),
        ))

    def log_validation_failed(
        self,
        operation: str,
        issues: list[dict],
        expense_id: Optional[int] = None,
    ) -> None:
        self.log(AuditEventBuilder.validation_failed(
            operation=operation,
            issues=issues,
            expense_id=expense_id,
        ))

    def log_storage_error(
        self,
        operation: str,
        error_message: str,
        expense_id: Optional[int] = None,
    ) -> None:
        self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            expense_id=expense_id,
        ))
