"""
Integration tests for the record store controller.

Every test runs against a real record file and log in tmp_path.
"""

import pytest

from conftest import LOG_LINE_RE, read_log, write_records
from record_keeper.audit import AuditLogger
from record_keeper.config import MatchPolicy, RecordKeeperSettings
from record_keeper.models.record import AddOutcome, DuplicateResolution
from record_keeper.orchestrator import RecordStoreController, create_app_components
from record_keeper.services.storage import (
    MalformedRecordError,
    NotFoundError,
    TextFileAuditStorage,
    TextFileRecordStorage,
)
from record_keeper.validation import ValidationError


def always(resolution):
    """Resolver that records what it was shown and answers `resolution`."""
    seen = []

    def resolve(matches):
        seen.append(matches)
        return resolution

    resolve.seen = seen
    return resolve


def never(matches):
    raise AssertionError("resolver should not be called")


class TestStartup:
    """Tests for create_app_components."""

    def test_creates_both_files(self, record_path, log_path, settings):
        create_app_components(record_path, settings)
        assert record_path.read_text() == ""
        entries = read_log(log_path)
        assert len(entries) == 2
        assert all(" Initialization Success Created " in entry for entry in entries)

    def test_existing_files_are_left_alone(self, record_path, log_path, settings):
        write_records(record_path, "apple,1")
        log_path.write_text("old entry\n")
        create_app_components(record_path, settings)
        assert record_path.read_text() == "apple,1\n"
        assert read_log(log_path) == ["old entry"]

    def test_log_suffix_is_configurable(self, record_path, tmp_path):
        settings = RecordKeeperSettings(_env_file=None, log_suffix=".audit")
        create_app_components(record_path, settings)
        assert (tmp_path / "records.txt.audit").is_file()


class TestAddRecord:
    """Tests for adding and merging records."""

    def test_add_then_search_finds_exactly_one_line(self, controller, record_path):
        result = controller.add_record("apple", "3", never)
        assert result.outcome == AddOutcome.CREATED
        assert result.line_number == 1

        search = controller.search_records("apple")
        assert [line.text for line in search.matches] == ["apple,3"]

    def test_similar_name_merge(self, controller, record_path):
        write_records(record_path, "apple,3", "pear,1")
        resolve = always(DuplicateResolution.MERGE)

        result = controller.add_record("apple", "4", resolve)

        assert result.outcome == AddOutcome.MERGED
        assert record_path.read_text() == "apple,7\npear,1\n"
        assert [line.text for line in resolve.seen[0]] == ["apple,3"]

    def test_similar_name_create_new(self, controller, record_path):
        write_records(record_path, "apple,3")

        result = controller.add_record("apple", "4", always(DuplicateResolution.CREATE_NEW))

        assert result.outcome == AddOutcome.DUPLICATED
        assert result.line_number == 2
        assert record_path.read_text() == "apple,3\napple,4\n"

    def test_similar_name_abort(self, controller, record_path):
        write_records(record_path, "apple,3")
        before = record_path.read_bytes()

        result = controller.add_record("apple", "4", always(DuplicateResolution.ABORT))

        assert result.outcome == AddOutcome.ABORTED
        assert record_path.read_bytes() == before

    def test_similarity_ignores_case_and_position(self, controller, record_path):
        write_records(record_path, "pear,1", "GreenApple,2", "apple,5")
        resolve = always(DuplicateResolution.MERGE)

        controller.add_record("apple", "1", resolve)

        assert [line.line_number for line in resolve.seen[0]] == [2, 3]
        # Merge goes into the first match and keeps its name
        assert record_path.read_text() == "pear,1\nGreenApple,3\napple,5\n"

    def test_merge_into_malformed_line(self, controller, record_path, log_path):
        write_records(record_path, "apple,lots")
        before = record_path.read_bytes()

        with pytest.raises(MalformedRecordError):
            controller.add_record("apple", "1", always(DuplicateResolution.MERGE))

        assert record_path.read_bytes() == before
        assert read_log(log_path)[-1].split()[2:4] == ["AddRecord", "Failure"]

    @pytest.mark.parametrize("name,quantity", [("3abc", "1"), ("apple", "-5"), ("apple", "abc")])
    def test_invalid_input_is_rejected(self, controller, record_path, log_path, name, quantity):
        log_before = read_log(log_path)

        with pytest.raises(ValidationError):
            controller.add_record(name, quantity, never)

        assert record_path.read_text() == ""
        new_entries = read_log(log_path)[len(log_before):]
        assert len(new_entries) == 1
        assert " AddRecord Failure " in new_entries[0]
        assert " Success" not in new_entries[0]


class TestDeleteRecord:
    """Tests for deleting by exact name."""

    def test_delete_removes_exact_prefix_only(self, controller, record_path):
        write_records(record_path, "apple,3", "applepie,2", "pear,1")

        removed = controller.delete_record("apple")

        assert [line.text for line in removed] == ["apple,3"]
        assert record_path.read_text() == "applepie,2\npear,1\n"
        assert not any(
            line.text.startswith("apple,")
            for line in controller.search_records("apple").matches
        )

    def test_delete_absent_leaves_file_unchanged(self, controller, record_path):
        write_records(record_path, "apple,3")
        before = record_path.read_bytes()

        with pytest.raises(NotFoundError):
            controller.delete_record("pear")

        assert record_path.read_bytes() == before

    def test_delete_first_match_only_by_default(self, controller, record_path):
        write_records(record_path, "apple,3", "apple,4")
        controller.delete_record("apple")
        assert record_path.read_text() == "apple,4\n"

    def test_delete_all_matches_with_policy(self, record_path, log_path):
        write_records(record_path, "apple,3", "pear,1", "apple,4")
        controller = RecordStoreController(
            TextFileRecordStorage(record_path),
            AuditLogger(TextFileAuditStorage(log_path)),
            match_policy=MatchPolicy.ALL,
        )

        removed = controller.delete_record("apple")

        assert len(removed) == 2
        assert record_path.read_text() == "pear,1\n"


class TestSearchRecords:
    """Tests for keyword search."""

    def test_search_returns_line_numbers(self, controller, record_path):
        write_records(record_path, "apple,3", "pear,1", "pineapple,2")
        result = controller.search_records("apple")
        assert [str(line) for line in result.matches] == ["1:apple,3", "3:pineapple,2"]

    def test_search_is_case_sensitive_by_default(self, controller, record_path):
        write_records(record_path, "Apple,3")
        assert controller.search_records("apple").data_found is False

    def test_search_case_insensitive_option(self, record_path, log_path):
        write_records(record_path, "Apple,3")
        controller = RecordStoreController(
            TextFileRecordStorage(record_path),
            AuditLogger(TextFileAuditStorage(log_path)),
            search_case_sensitive=False,
        )
        assert controller.search_records("apple").data_found is True

    def test_search_not_found_is_logged(self, controller, log_path):
        result = controller.search_records("kiwi")
        assert result.data_found is False
        assert " SearchRecord Failure No matches for kiwi" in read_log(log_path)[-1]


class TestUpdateRecordName:
    """Tests for renaming."""

    def test_rename(self, controller, record_path):
        write_records(record_path, "apple,3", "pear,1")
        controller.update_record_name("apple", "cherry")
        assert record_path.read_text() == "cherry,3\npear,1\n"

    def test_rename_validates_new_name(self, controller, record_path):
        write_records(record_path, "apple,3")
        with pytest.raises(ValidationError):
            controller.update_record_name("apple", "3abc")
        assert record_path.read_text() == "apple,3\n"

    def test_rename_missing_record(self, controller, record_path):
        with pytest.raises(NotFoundError):
            controller.update_record_name("apple", "cherry")

    def test_rename_keeps_quantity_text(self, controller, record_path):
        write_records(record_path, "old name,12")
        controller.update_record_name("old name", "newname")
        assert record_path.read_text() == "newname,12\n"


class TestUpdateQuantity:
    """Tests for SetQuantity and AddQuantity."""

    def test_set_quantity_twice_keeps_last_value(self, controller, record_path):
        write_records(record_path, "apple,3")
        controller.set_quantity("apple", "10")
        controller.set_quantity("apple", "4")
        assert record_path.read_text() == "apple,4\n"

    def test_add_quantity(self, controller, record_path):
        write_records(record_path, "pear,1", "apple,3")
        updated = controller.add_quantity("apple", "5")
        assert [str(line) for line in updated] == ["2:apple,8"]
        assert record_path.read_text() == "pear,1\napple,8\n"

    def test_set_quantity_validates(self, controller, record_path):
        write_records(record_path, "apple,3")
        with pytest.raises(ValidationError):
            controller.set_quantity("apple", "-1")
        assert record_path.read_text() == "apple,3\n"

    def test_set_quantity_missing_record(self, controller):
        with pytest.raises(NotFoundError):
            controller.set_quantity("apple", "1")

    def test_set_quantity_on_malformed_line(self, controller, record_path):
        write_records(record_path, "apple,lots")
        with pytest.raises(MalformedRecordError):
            controller.set_quantity("apple", "1")

    def test_set_quantity_all_matches_with_policy(self, record_path, log_path):
        write_records(record_path, "apple,3", "apple,4")
        controller = RecordStoreController(
            TextFileRecordStorage(record_path),
            AuditLogger(TextFileAuditStorage(log_path)),
            match_policy=MatchPolicy.ALL,
        )
        controller.set_quantity("apple", "9")
        assert record_path.read_text() == "apple,9\napple,9\n"


class TestListAndTotal:
    """Tests for sorted listing and totals."""

    def test_list_sorted(self, controller, record_path):
        write_records(record_path, "banana,1", "apple,2")
        assert controller.list_sorted() == ["apple,2", "banana,1"]

    def test_list_sorted_is_textual(self, controller, record_path):
        write_records(record_path, "apple,9", "apple,10")
        assert controller.list_sorted() == ["apple,10", "apple,9"]

    def test_list_sorted_empty(self, controller, log_path):
        assert controller.list_sorted() == []
        assert " ListSorted Success No records to display" in read_log(log_path)[-1]

    def test_total(self, controller, record_path):
        write_records(record_path, "a,3", "b,5", "c,2")
        result = controller.total_quantity()
        assert result.total == 10
        assert result.record_count == 3

    def test_total_empty(self, controller):
        result = controller.total_quantity()
        assert result.total == 0
        assert result.data_found is False

    def test_total_rejects_malformed_line(self, controller, record_path, log_path):
        write_records(record_path, "a,3", "b,five", "c,2")
        with pytest.raises(MalformedRecordError) as exc_info:
            controller.total_quantity()
        assert exc_info.value.line_number == 2
        assert " TotalQuantity Failure " in read_log(log_path)[-1]


class TestAuditTrail:
    """Every operation leaves exactly one well-formed log entry."""

    def test_one_entry_per_operation(self, controller, record_path, log_path):
        operations = [
            lambda: controller.add_record("apple", "3", never),
            lambda: controller.add_record("apple", "2", always(DuplicateResolution.MERGE)),
            lambda: controller.add_record("apple", "2", always(DuplicateResolution.ABORT)),
            lambda: controller.search_records("apple"),
            lambda: controller.search_records("kiwi"),
            lambda: controller.set_quantity("apple", "1"),
            lambda: controller.add_quantity("apple", "1"),
            lambda: controller.update_record_name("apple", "cherry"),
            lambda: controller.list_sorted(),
            lambda: controller.total_quantity(),
            lambda: controller.delete_record("cherry"),
        ]
        for operation in operations:
            before = len(read_log(log_path))
            operation()
            assert len(read_log(log_path)) == before + 1

        for entry in read_log(log_path):
            assert LOG_LINE_RE.match(entry), entry

    def test_failures_leave_one_entry_each(self, controller, log_path):
        failing = [
            lambda: controller.delete_record("ghost"),
            lambda: controller.update_record_name("ghost", "spirit"),
            lambda: controller.set_quantity("ghost", "1"),
            lambda: controller.add_record("3abc", "1", never),
        ]
        for operation in failing:
            before = len(read_log(log_path))
            with pytest.raises((ValidationError, NotFoundError)):
                operation()
            entries = read_log(log_path)
            assert len(entries) == before + 1
            assert LOG_LINE_RE.match(entries[-1])
            assert " Failure " in entries[-1]

    def test_log_is_never_truncated(self, controller, record_path, log_path):
        first_entries = read_log(log_path)
        controller.add_record("apple", "3", never)
        controller.delete_record("apple")
        assert read_log(log_path)[: len(first_entries)] == first_entries
