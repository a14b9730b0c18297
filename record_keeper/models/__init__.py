"""
Data Models Package

This package contains all Pydantic models used in Record Keeper.
Everything read from or written to the record and log files passes
through these schemas.
"""

from record_keeper.models.record import (
    FIELD_DELIMITER,
    NAME_PATTERN,
    QUANTITY_PATTERN,
    AddOutcome,
    AddResult,
    DuplicateResolution,
    Record,
    RecordLine,
    SearchResult,
    TotalResult,
)
from record_keeper.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditOutcome,
)

__all__ = [
    # Record models
    "FIELD_DELIMITER",
    "NAME_PATTERN",
    "QUANTITY_PATTERN",
    "AddOutcome",
    "AddResult",
    "DuplicateResolution",
    "Record",
    "RecordLine",
    "SearchResult",
    "TotalResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditOutcome",
]
