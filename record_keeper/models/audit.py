"""
Audit Models for Record Keeper

Every action the user takes is logged for audit purposes.
This provides:
1. Complete traceability of all changes to the record file
2. Debugging information when things go wrong
3. A history the user can read with any text editor

DESIGN DECISION: Audit logs are append-only. We never delete or modify them,
and the program never reads them back.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


DEFAULT_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Values are single tokens so a log line splits cleanly on whitespace.
    """
    # Startup
    INITIALIZATION = "Initialization"

    # Record operations
    ADD_RECORD = "AddRecord"
    DELETE_RECORD = "DeleteRecord"
    SEARCH_RECORD = "SearchRecord"
    UPDATE_RECORD_NAME = "UpdateRecordName"
    UPDATE_RECORD_QUANTITY = "UpdateRecordQuantity"
    TOTAL_QUANTITY = "TotalQuantity"
    LIST_SORTED = "ListSorted"

    # Menu
    INVALID_OPTION = "InvalidOption"
    EXIT = "Exit"


class AuditOutcome(str, Enum):
    """Outcome written after the event name."""
    SUCCESS = "Success"
    FAILURE = "Failure"
    ABORTED = "Aborted"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every menu action creates exactly one of these.
    """

    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    outcome: AuditOutcome = Field(
        default=AuditOutcome.SUCCESS,
        description="How the action ended"
    )
    details: Optional[str] = Field(
        default=None,
        description="Human-readable description of what happened"
    )

    def to_log_line(self, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
        """
        Render as one log file line (without newline):

            <timestamp> <EventName> <Outcome> [<details>]
        """
        parts = [
            self.timestamp.strftime(timestamp_format),
            self.event_type.value,
            self.outcome.value,
        ]
        if self.details:
            # One entry per line, always
            parts.append(" ".join(self.details.split()))
        return " ".join(parts)

    def to_log_dict(self) -> dict[str, Any]:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "outcome": self.outcome.value,
            "details": self.details,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_added("apple", 3)
        event = AuditEventBuilder.failure(AuditEventType.DELETE_RECORD, "Record pear not found")
    """

    @staticmethod
    def file_created(kind: str, path: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INITIALIZATION,
            details=f"Created {kind} file: {path}",
        )

    @staticmethod
    def record_added(name: str, quantity: int, duplicate: bool = False) -> AuditEvent:
        suffix = " alongside a similar record" if duplicate else ""
        return AuditEvent(
            event_type=AuditEventType.ADD_RECORD,
            details=f"Record {name} added with quantity {quantity}{suffix}",
        )

    @staticmethod
    def record_merged(name: str, added: int, new_quantity: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADD_RECORD,
            details=f"Added {added} to {name}, new quantity {new_quantity}",
        )

    @staticmethod
    def add_aborted(name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADD_RECORD,
            outcome=AuditOutcome.ABORTED,
            details=f"Adding {name} cancelled by user",
        )

    @staticmethod
    def record_deleted(name: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_RECORD,
            details=f"Record {name} deleted ({count} line(s))",
        )

    @staticmethod
    def search_completed(keyword: str, match_count: int) -> AuditEvent:
        if match_count == 0:
            return AuditEvent(
                event_type=AuditEventType.SEARCH_RECORD,
                outcome=AuditOutcome.FAILURE,
                details=f"No matches for {keyword}",
            )
        return AuditEvent(
            event_type=AuditEventType.SEARCH_RECORD,
            details=f"Search for {keyword} found {match_count} match(es)",
        )

    @staticmethod
    def record_renamed(old_name: str, new_name: str, count: int = 1) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UPDATE_RECORD_NAME,
            details=f"Record name changed from {old_name} to {new_name} ({count} line(s))",
        )

    @staticmethod
    def quantity_updated(name: str, new_quantity: int, count: int = 1) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UPDATE_RECORD_QUANTITY,
            details=f"Quantity for {name} set to {new_quantity} ({count} line(s))",
        )

    @staticmethod
    def quantity_added(name: str, delta: int, count: int = 1) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UPDATE_RECORD_QUANTITY,
            details=f"Added {delta} to {name} ({count} line(s))",
        )

    @staticmethod
    def total_computed(total: int, record_count: int) -> AuditEvent:
        if record_count == 0:
            details = "No records to total"
        else:
            details = f"Total quantity {total} over {record_count} record(s)"
        return AuditEvent(
            event_type=AuditEventType.TOTAL_QUANTITY,
            details=details,
        )

    @staticmethod
    def records_listed(record_count: int) -> AuditEvent:
        if record_count == 0:
            details = "No records to display"
        else:
            details = f"{record_count} record(s) listed in sorted order"
        return AuditEvent(
            event_type=AuditEventType.LIST_SORTED,
            details=details,
        )

    @staticmethod
    def invalid_option(choice: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_OPTION,
            outcome=AuditOutcome.FAILURE,
            details=f"Invalid menu option '{choice}'",
        )

    @staticmethod
    def exited() -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXIT,
            details="Session ended",
        )

    @staticmethod
    def failure(event_type: AuditEventType, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=event_type,
            outcome=AuditOutcome.FAILURE,
            details=error_message,
        )
