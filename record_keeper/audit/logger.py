"""
Audit Logger

DESIGN DECISION: Every user action is logged.
This provides:
1. Complete traceability of changes to the record file
2. Debugging capability
3. User can see history of their interactions

The audit logger:
- Writes one line per event to the `_log` file next to the record file
- Mirrors each event to a structured local log (stderr) for debugging
- Gracefully handles failures (doesn't crash the menu if logging fails)
"""

import logging
import sys
from typing import Optional

import structlog

from record_keeper.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditOutcome,
)
from record_keeper.services.storage import AuditStorageInterface


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


def configure_logging(level: str = "WARNING") -> None:
    """
    Route local diagnostics to stderr at the given level.

    stdout belongs to the menu; nothing from here may end up there.
    """
    logging.basicConfig(
        stream=sys.stderr,
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.WARNING),
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The audit log file (for persistence and user visibility)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("record_keeper.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.outcome == AuditOutcome.FAILURE:
            self._logger.info("audit_event_failed", **log_dict)
        else:
            self._logger.debug("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_type=event.event_type.value,
                )
                return False

        return True

    def log_failure(
        self,
        event_type: AuditEventType,
        error_message: str,
    ) -> bool:
        """Log a failed operation."""
        return self.log(AuditEventBuilder.failure(event_type, error_message))

    def log_file_created(self, kind: str, path: str) -> bool:
        """Log creation of the record or log file at startup."""
        return self.log(AuditEventBuilder.file_created(kind, path))

    def log_invalid_option(self, choice: str) -> bool:
        """Log an unrecognised menu choice."""
        return self.log(AuditEventBuilder.invalid_option(choice))

    def log_exit(self) -> bool:
        """Log the end of the session."""
        return self.log(AuditEventBuilder.exited())
