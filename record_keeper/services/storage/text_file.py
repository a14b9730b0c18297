"""
Flat Text File Storage Implementation

DESIGN DECISION: A plain text file is the storage backend because:
1. The user can read and fix their data with any editor
2. No database setup required
3. One `name,quantity` line per record keeps diffs and backups trivial

TRADEOFFS:
- Every operation re-reads the whole file (fine for personal lists)
- No transactions; each mutation is a single whole-file write or append
- No locking; there is exactly one writer

The implementation follows the abstract interface, so the controller
never opens files itself.
"""

from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from record_keeper.models.audit import DEFAULT_TIMESTAMP_FORMAT, AuditEvent
from record_keeper.models.record import Record, RecordLine
from record_keeper.services.storage.interface import (
    AuditStorageInterface,
    MalformedRecordError,
    RecordStorageInterface,
    StorageError,
)


def _split_lines(content: str) -> list[str]:
    """Split file content into lines, ignoring one trailing newline."""
    if not content:
        return []
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    return lines


def parse_record_line(line: RecordLine) -> Record:
    """
    Parse a numbered line into a Record.

    Raises:
        MalformedRecordError: If the line breaks the `name,quantity` shape
    """
    try:
        return Record.from_line(line.text)
    except PydanticValidationError as e:
        raise MalformedRecordError(
            line.line_number, line.text, e.errors()[0]["msg"]
        ) from e
    except ValueError as e:
        raise MalformedRecordError(line.line_number, line.text, str(e)) from e


def numbered(lines: list[str]) -> list[RecordLine]:
    """Tag non-blank lines with their 1-based line numbers."""
    return [
        RecordLine(line_number=index, text=text)
        for index, text in enumerate(lines, start=1)
        if text.strip()
    ]


class TextFileRecordStorage(RecordStorageInterface):
    """
    Record storage backed by a UTF-8 text file, one record per line.
    """

    def __init__(self, path: Path, encoding: str = "utf-8"):
        self.path = Path(path)
        self._encoding = encoding

    def exists(self) -> bool:
        return self.path.is_file()

    def create(self) -> bool:
        if self.exists():
            return False
        try:
            self.path.touch()
        except OSError as e:
            raise StorageError(f"Could not create record file {self.path}: {e}") from e
        return True

    def _read_text(self) -> str:
        if not self.exists():
            return ""
        try:
            return self.path.read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Could not read record file {self.path}: {e}") from e

    def read_lines(self) -> list[str]:
        return _split_lines(self._read_text())

    def write_lines(self, lines: list[str]) -> None:
        content = "".join(f"{line}\n" for line in lines)
        try:
            with open(self.path, "w", encoding=self._encoding) as f:
                f.write(content)
        except OSError as e:
            raise StorageError(f"Could not write record file {self.path}: {e}") from e

    def append_line(self, line: str) -> int:
        content = self._read_text()
        # Never glue a new record onto an unterminated last line
        prefix = "\n" if content and not content.endswith("\n") else ""
        try:
            with open(self.path, "a", encoding=self._encoding) as f:
                f.write(f"{prefix}{line}\n")
        except OSError as e:
            raise StorageError(f"Could not append to record file {self.path}: {e}") from e
        return len(_split_lines(content)) + 1


class TextFileAuditStorage(AuditStorageInterface):
    """
    Audit storage backed by an append-only text file.

    One event per line:

        <timestamp> <EventName> <Outcome> [<details>]
    """

    def __init__(
        self,
        path: Path,
        encoding: str = "utf-8",
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ):
        self.path = Path(path)
        self._encoding = encoding
        self._timestamp_format = timestamp_format

    def create(self) -> bool:
        if self.path.is_file():
            return False
        try:
            self.path.touch()
        except OSError as e:
            raise StorageError(f"Could not create log file {self.path}: {e}") from e
        return True

    def append_event(self, event: AuditEvent) -> bool:
        try:
            with open(self.path, "a", encoding=self._encoding) as f:
                f.write(event.to_log_line(self._timestamp_format) + "\n")
        except OSError as e:
            raise StorageError(f"Could not write log file {self.path}: {e}") from e
        return True
