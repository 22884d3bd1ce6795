"""Audit logging package."""

from tripbudget.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
