"""Audit logging package."""

from record_keeper.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
