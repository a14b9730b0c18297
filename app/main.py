"""
Terminal Frontend for Record Keeper

This is the interface the user works with: a numbered menu on stdout,
answers typed line by line on stdin.

DESIGN PRINCIPLES:
1. Simple, numbered choices
2. Explicit confirmation before touching a similar record
3. Clear error messages, then straight back to the menu
4. No hidden actions

Usage:
    record-keeper <record-file>
"""

import argparse
import sys
from typing import Callable, Optional

from record_keeper.audit import AuditLogger, configure_logging
from record_keeper.config import get_settings
from record_keeper.models.record import AddOutcome, DuplicateResolution, RecordLine
from record_keeper.orchestrator import RecordStoreController, create_app_components
from record_keeper.services.storage import StorageError
from record_keeper.validation import ValidationError


Reader = Callable[[str], str]
Writer = Callable[[str], None]

EXIT_CHOICE = "8"

MENU_TITLE = "Record Management System"
MENU_OPTIONS = {
    "1": "Add a Record",
    "2": "Delete a Record",
    "3": "Search for a Record",
    "4": "Update a Record's Name",
    "5": "Update a Record's Quantity",
    "6": "Print Total Quantity of Records",
    "7": "Print All Records Sorted",
    EXIT_CHOICE: "Exit",
}

DUPLICATE_CHOICES = {
    "1": DuplicateResolution.CREATE_NEW,
    "2": DuplicateResolution.MERGE,
    "3": DuplicateResolution.ABORT,
}


def _prompt(read: Reader, write: Writer, message: str) -> str:
    write(message)
    return read("")


def render_menu(write: Writer) -> None:
    """Print the numbered main menu."""
    write("")
    write(MENU_TITLE)
    for key, label in MENU_OPTIONS.items():
        write(f"{key}. {label}")
    write("Enter your choice:")


def make_duplicate_resolver(read: Reader, write: Writer) -> Callable[[list[RecordLine]], DuplicateResolution]:
    """Build the callback that asks the user what to do with similar records."""

    def resolve(matches: list[RecordLine]) -> DuplicateResolution:
        write("A record with a similar name was found:")
        for line in matches:
            write(f"  {line}")
        write("1. Create a new record")
        write("2. Add quantity to the first existing record")
        write("3. Cancel")
        choice = _prompt(read, write, "Select an option:").strip()
        resolution = DUPLICATE_CHOICES.get(choice)
        if resolution is None:
            write("Invalid option. Nothing was added.")
            return DuplicateResolution.ABORT
        return resolution

    return resolve


# =============================================================================
# PAGES - one per menu option
# =============================================================================

def render_add_page(controller: RecordStoreController, read: Reader, write: Writer) -> None:
    name = _prompt(read, write, "Enter record name:")
    quantity = _prompt(read, write, "Enter record quantity:")

    result = controller.add_record(name, quantity, make_duplicate_resolver(read, write))

    if result.outcome == AddOutcome.MERGED:
        write(f"Quantity added to the existing record: {result.record.to_line()}")
    elif result.outcome == AddOutcome.ABORTED:
        write("No record was added.")
    else:
        write("Record added successfully.")


def render_delete_page(controller: RecordStoreController, read: Reader, write: Writer) -> None:
    name = _prompt(read, write, "Enter record name to delete:")
    controller.delete_record(name)
    write("Record deleted successfully.")


def render_search_page(controller: RecordStoreController, read: Reader, write: Writer) -> None:
    keyword = _prompt(read, write, "Enter keyword to search:")
    result = controller.search_records(keyword)
    if not result.data_found:
        write(f"No records found matching {keyword}.")
        return
    for line in result.matches:
        write(str(line))


def render_rename_page(controller: RecordStoreController, read: Reader, write: Writer) -> None:
    current_name = _prompt(read, write, "Enter current record name:")
    new_name = _prompt(read, write, "Enter new record name:")
    controller.update_record_name(current_name, new_name)
    write("Record name updated successfully.")


def render_quantity_page(controller: RecordStoreController, read: Reader, write: Writer) -> None:
    name = _prompt(read, write, "Enter record name:")
    value = _prompt(read, write, "Enter new record quantity (prefix with + to add to it):").strip()

    if value.startswith("+"):
        updated = controller.add_quantity(name, value[1:])
    else:
        updated = controller.set_quantity(name, value)

    for line in updated:
        write(f"Record quantity updated: {line.text}")


def render_total_page(controller: RecordStoreController, read: Reader, write: Writer) -> None:
    result = controller.total_quantity()
    if not result.data_found:
        write("No records to calculate total quantity.")
        return
    write(f"Total quantity of all records: {result.total}")


def render_sorted_page(controller: RecordStoreController, read: Reader, write: Writer) -> None:
    lines = controller.list_sorted()
    if not lines:
        write("No records to display.")
        return
    for text in lines:
        write(text)


PAGES = {
    "1": render_add_page,
    "2": render_delete_page,
    "3": render_search_page,
    "4": render_rename_page,
    "5": render_quantity_page,
    "6": render_total_page,
    "7": render_sorted_page,
}


def run_menu(
    controller: RecordStoreController,
    audit_logger: AuditLogger,
    read: Optional[Reader] = None,
    write: Optional[Writer] = None,
) -> int:
    """
    Main menu loop.

    Recoverable errors are shown and the menu comes back; they were
    already audited by the controller. Returns the exit status.
    """
    read = read or input
    write = write or print
    while True:
        render_menu(write)
        try:
            choice = read("").strip()
        except EOFError:
            choice = EXIT_CHOICE

        if choice in (EXIT_CHOICE, "exit"):
            audit_logger.log_exit()
            write("Exiting the program. Goodbye!")
            return 0

        page = PAGES.get(choice)
        if page is None:
            audit_logger.log_invalid_option(choice)
            write("Invalid option, please try again.")
            continue

        try:
            page(controller, read, write)
        except (ValidationError, StorageError) as e:
            write(f"Error: {e}")
        except EOFError:
            audit_logger.log_exit()
            write("")
            return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="record-keeper",
        description="Keep named quantities in a plain text file.",
    )
    parser.add_argument(
        "record_file",
        nargs="?",
        help="Path of the record file (created if missing); the log goes to <record_file>_log",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point."""
    args = build_parser().parse_args(argv)

    if not args.record_file:
        print("Error: No record file name provided.", file=sys.stderr)
        return 1

    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        controller, audit_logger = create_app_components(args.record_file, settings)
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return run_menu(controller, audit_logger)


if __name__ == "__main__":
    sys.exit(main())
