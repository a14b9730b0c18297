"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the controller free of file handling details
2. Swap the flat file for something else without touching business logic
3. Keep the line-oriented semantics (line numbers, insertion order) explicit

The interface is intentionally simple - whole-file reads and rewrites plus
appends. There is no index and no cache.
"""

from abc import ABC, abstractmethod
from typing import Optional

from record_keeper.models.audit import AuditEvent


class RecordStorageInterface(ABC):
    """
    Abstract interface for the record file.

    Lines are exchanged without trailing newlines. Blank lines are kept so
    line numbers match what the user sees in an editor.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Return True if the backing file exists."""
        pass

    @abstractmethod
    def create(self) -> bool:
        """
        Create an empty record file if none exists.

        Returns:
            True if a file was created, False if it already existed
        """
        pass

    @abstractmethod
    def read_lines(self) -> list[str]:
        """
        Read every line of the record file, in file order.

        Raises:
            StorageError: If the file cannot be read
        """
        pass

    @abstractmethod
    def write_lines(self, lines: list[str]) -> None:
        """
        Replace the whole file with the given lines.

        Raises:
            StorageError: If the file cannot be written
        """
        pass

    @abstractmethod
    def append_line(self, line: str) -> int:
        """
        Append one line at the end of the file.

        Returns:
            The 1-based line number of the appended line

        Raises:
            StorageError: If the file cannot be written
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def create(self) -> bool:
        """Create an empty log if none exists. True if created."""
        pass

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to log

        Returns:
            True if logged successfully
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """No record matched the requested name or keyword."""

    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        super().__init__(message)


class MalformedRecordError(StorageError):
    """A record line does not have the `name,quantity` shape."""

    def __init__(self, line_number: int, text: str, reason: str = ""):
        self.line_number = line_number
        self.text = text
        self.reason = reason
        message = f"Malformed record on line {line_number}: '{text}'"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
