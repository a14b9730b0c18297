"""
Main Orchestrator for Record Keeper

This module ties together all the components and defines every operation
the menu can run against the record file:
1. Add (validate → look for similar names → ask the user → write)
2. Delete, rename, set or add quantity (find by exact name → rewrite)
3. Search, sorted listing, total (read only, via QueryExecutor)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is written before validation passes
- Nothing is merged without the user choosing to merge
- Every operation, successful or not, leaves exactly one audit entry

This is the "glue" that keeps the file and the log consistent even when
a single step fails.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

from record_keeper.audit import AuditLogger
from record_keeper.config import MatchPolicy, RecordKeeperSettings, get_settings
from record_keeper.models.audit import AuditEventBuilder, AuditEventType
from record_keeper.models.record import (
    FIELD_DELIMITER,
    AddOutcome,
    AddResult,
    DuplicateResolution,
    Record,
    RecordLine,
    SearchResult,
    TotalResult,
)
from record_keeper.queries import QueryExecutor
from record_keeper.services.storage import (
    NotFoundError,
    RecordStorageInterface,
    StorageError,
    TextFileAuditStorage,
    TextFileRecordStorage,
    parse_record_line,
)
from record_keeper.validation import RecordValidator, ValidationError


# Called with the similar lines; returns what the user wants to do.
DuplicateResolver = Callable[[list[RecordLine]], DuplicateResolution]


class RecordStoreController:
    """
    Runs record operations against storage and audits their outcome.

    No state is kept between calls; every operation starts by reading
    the file.
    """

    def __init__(
        self,
        record_storage: RecordStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[RecordValidator] = None,
        query_executor: Optional[QueryExecutor] = None,
        match_policy: MatchPolicy = MatchPolicy.FIRST,
        search_case_sensitive: bool = True,
    ):
        self._storage = record_storage
        self._audit_logger = audit_logger or AuditLogger()
        self._validator = validator or RecordValidator()
        self._query_executor = query_executor or QueryExecutor(record_storage)
        self._match_policy = match_policy
        self._search_case_sensitive = search_case_sensitive

    @contextmanager
    def _audited(self, event_type: AuditEventType) -> Iterator[None]:
        """Log a failure entry for any recoverable error, then re-raise."""
        try:
            yield
        except (ValidationError, StorageError) as e:
            self._audit_logger.log_failure(event_type, str(e))
            raise

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _targets(self, name: str) -> list[RecordLine]:
        """Lines with exact prefix `name,`, narrowed by the match policy."""
        matches = self._query_executor.find_by_name(name)
        if not matches:
            raise NotFoundError(f"Record {name} does not exist", name=name)
        if self._match_policy == MatchPolicy.FIRST:
            return matches[:1]
        return matches

    def _rewrite(self, replacements: dict[int, str]) -> None:
        """Replace lines by 1-based number and write the file back."""
        lines = self._storage.read_lines()
        for line_number, text in replacements.items():
            lines[line_number - 1] = text
        self._storage.write_lines(lines)

    def _update_quantity(
        self,
        name: str,
        compute: Callable[[int], int],
    ) -> list[RecordLine]:
        """Read each target line, compute the new quantity, rewrite it."""
        updated = []
        for line in self._targets(name):
            record = parse_record_line(line)
            new_record = Record(name=record.name, quantity=compute(record.quantity))
            updated.append(
                RecordLine(line_number=line.line_number, text=new_record.to_line())
            )
        self._rewrite({line.line_number: line.text for line in updated})
        return updated

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def add_record(
        self,
        raw_name: str,
        raw_quantity: str,
        resolve: DuplicateResolver,
    ) -> AddResult:
        """
        Add a record, asking `resolve` what to do if similar lines exist.

        Similar means the name appears anywhere in a line, ignoring case.
        A merge adds the quantity to the first similar line and keeps that
        line's name.
        """
        with self._audited(AuditEventType.ADD_RECORD):
            name, quantity = self._validator.validate_record(raw_name, raw_quantity)
            record = Record(name=name, quantity=quantity)

            matches = self._query_executor.find_similar(name)
            if not matches:
                line_number = self._storage.append_line(record.to_line())
                self._audit_logger.log(AuditEventBuilder.record_added(name, quantity))
                return AddResult(
                    outcome=AddOutcome.CREATED,
                    record=record,
                    line_number=line_number,
                )

            resolution = resolve(matches)

            if resolution == DuplicateResolution.CREATE_NEW:
                line_number = self._storage.append_line(record.to_line())
                self._audit_logger.log(
                    AuditEventBuilder.record_added(name, quantity, duplicate=True)
                )
                return AddResult(
                    outcome=AddOutcome.DUPLICATED,
                    record=record,
                    line_number=line_number,
                    matches=matches,
                )

            if resolution == DuplicateResolution.MERGE:
                first = matches[0]
                existing = parse_record_line(first)
                merged = Record(name=existing.name, quantity=existing.quantity + quantity)
                self._rewrite({first.line_number: merged.to_line()})
                self._audit_logger.log(
                    AuditEventBuilder.record_merged(existing.name, quantity, merged.quantity)
                )
                return AddResult(
                    outcome=AddOutcome.MERGED,
                    record=merged,
                    line_number=first.line_number,
                    matches=matches,
                )

            self._audit_logger.log(AuditEventBuilder.add_aborted(name))
            return AddResult(outcome=AddOutcome.ABORTED, matches=matches)

    def delete_record(self, raw_name: str) -> list[RecordLine]:
        """
        Delete the line(s) starting with `name,`.

        Returns the removed lines. The file is not written when nothing
        matches.
        """
        with self._audited(AuditEventType.DELETE_RECORD):
            name = self._validator.validate_lookup_name(raw_name)
            removed = self._targets(name)
            doomed = {line.line_number for line in removed}
            lines = self._storage.read_lines()
            self._storage.write_lines(
                [text for index, text in enumerate(lines, start=1) if index not in doomed]
            )
            self._audit_logger.log(AuditEventBuilder.record_deleted(name, len(removed)))
            return removed

    def search_records(self, keyword: str) -> SearchResult:
        """Find lines containing `keyword`; no match is logged as a failure."""
        with self._audited(AuditEventType.SEARCH_RECORD):
            result = self._query_executor.search(
                keyword, case_sensitive=self._search_case_sensitive
            )
            self._audit_logger.log(
                AuditEventBuilder.search_completed(keyword, len(result.matches))
            )
            return result

    def update_record_name(self, raw_old_name: str, raw_new_name: str) -> list[RecordLine]:
        """Replace the `old,` prefix with `new,` on the matching line(s)."""
        with self._audited(AuditEventType.UPDATE_RECORD_NAME):
            old_name = self._validator.validate_lookup_name(raw_old_name)
            new_name = self._validator.validate_name(raw_new_name)
            prefix_length = len(old_name) + len(FIELD_DELIMITER)
            updated = [
                RecordLine(
                    line_number=line.line_number,
                    text=f"{new_name}{FIELD_DELIMITER}{line.text[prefix_length:]}",
                )
                for line in self._targets(old_name)
            ]
            self._rewrite({line.line_number: line.text for line in updated})
            self._audit_logger.log(
                AuditEventBuilder.record_renamed(old_name, new_name, len(updated))
            )
            return updated

    def set_quantity(self, raw_name: str, raw_quantity: str) -> list[RecordLine]:
        """Overwrite the quantity of the matching line(s)."""
        with self._audited(AuditEventType.UPDATE_RECORD_QUANTITY):
            name = self._validator.validate_lookup_name(raw_name)
            quantity = self._validator.validate_quantity(raw_quantity)
            updated = self._update_quantity(name, lambda _current: quantity)
            self._audit_logger.log(
                AuditEventBuilder.quantity_updated(name, quantity, len(updated))
            )
            return updated

    def add_quantity(self, raw_name: str, raw_delta: str) -> list[RecordLine]:
        """Add a non-negative delta to the quantity of the matching line(s)."""
        with self._audited(AuditEventType.UPDATE_RECORD_QUANTITY):
            name = self._validator.validate_lookup_name(raw_name)
            delta = self._validator.validate_quantity(raw_delta)
            updated = self._update_quantity(name, lambda current: current + delta)
            self._audit_logger.log(
                AuditEventBuilder.quantity_added(name, delta, len(updated))
            )
            return updated

    def list_sorted(self) -> list[str]:
        """All record lines in lexicographic order."""
        with self._audited(AuditEventType.LIST_SORTED):
            lines = self._query_executor.list_sorted()
            self._audit_logger.log(AuditEventBuilder.records_listed(len(lines)))
            return lines

    def total_quantity(self) -> TotalResult:
        """Sum of all quantities; a malformed line fails the whole total."""
        with self._audited(AuditEventType.TOTAL_QUANTITY):
            result = self._query_executor.total_quantity()
            self._audit_logger.log(
                AuditEventBuilder.total_computed(result.total, result.record_count)
            )
            return result


def create_app_components(
    record_path: Path,
    settings: Optional[RecordKeeperSettings] = None,
) -> tuple[RecordStoreController, AuditLogger]:
    """
    Factory function to create all application components.

    Creates the record file and the log file when they are missing and
    logs an Initialization entry for each one created.

    Args:
        record_path: Path of the record file given on the command line
        settings: Settings to use; defaults to get_settings()

    Returns:
        (controller, audit_logger)

    Raises:
        StorageError: If either file cannot be created
    """
    settings = settings or get_settings()
    record_path = Path(record_path)
    log_path = settings.log_path_for(record_path)

    record_storage = TextFileRecordStorage(record_path, encoding=settings.file_encoding)
    audit_storage = TextFileAuditStorage(
        log_path,
        encoding=settings.file_encoding,
        timestamp_format=settings.timestamp_format,
    )
    audit_logger = AuditLogger(audit_storage)

    log_created = audit_storage.create()
    if record_storage.create():
        audit_logger.log_file_created("record", str(record_path))
    if log_created:
        audit_logger.log_file_created("log", str(log_path))

    controller = RecordStoreController(
        record_storage=record_storage,
        audit_logger=audit_logger,
        match_policy=settings.match_policy,
        search_case_sensitive=settings.search_case_sensitive,
    )

    return controller, audit_logger
