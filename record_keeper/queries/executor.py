"""
Query Execution Engine

DESIGN DECISION: Queries never change the record file.
Search, sorted listing and totals live here; everything that writes
goes through the controller in record_keeper.orchestrator.

Every query re-reads the file, so results always reflect what is on disk.
"""

from record_keeper.models.record import (
    FIELD_DELIMITER,
    RecordLine,
    SearchResult,
    TotalResult,
)
from record_keeper.services.storage import (
    RecordStorageInterface,
    numbered,
    parse_record_line,
)


class QueryExecutor:
    """
    Executes read-only queries against record storage.

    GUARANTEES:
    - Only returns real lines from the file
    - Never fixes or skips malformed data silently
    - Clear "no data found" if nothing matches
    """

    def __init__(self, storage: RecordStorageInterface):
        self._storage = storage

    def lines(self) -> list[RecordLine]:
        """All non-blank lines with their line numbers."""
        return numbered(self._storage.read_lines())

    def search(self, keyword: str, case_sensitive: bool = True) -> SearchResult:
        """
        Substring search over whole lines.

        An empty keyword matches every record, like `grep ''`.
        """
        if case_sensitive:
            matches = [line for line in self.lines() if keyword in line.text]
        else:
            needle = keyword.casefold()
            matches = [line for line in self.lines() if needle in line.text.casefold()]

        return SearchResult(
            keyword=keyword,
            case_sensitive=case_sensitive,
            matches=matches,
        )

    def find_similar(self, name: str) -> list[RecordLine]:
        """Lines containing `name` anywhere, ignoring case."""
        return self.search(name, case_sensitive=False).matches

    def find_by_name(self, name: str) -> list[RecordLine]:
        """Lines starting with exactly `name,`."""
        prefix = f"{name}{FIELD_DELIMITER}"
        return [line for line in self.lines() if line.text.startswith(prefix)]

    def list_sorted(self) -> list[str]:
        """
        Every record line, sorted by full line text.

        This is a plain string sort on `name,quantity`, so `apple,10`
        comes before `apple,9`.
        """
        return sorted(line.text for line in self.lines())

    def total_quantity(self) -> TotalResult:
        """
        Sum the quantity field across all records.

        Raises:
            MalformedRecordError: On the first line that is not `name,quantity`
        """
        records = [parse_record_line(line) for line in self.lines()]
        return TotalResult(
            total=sum(record.quantity for record in records),
            record_count=len(records),
        )
