"""
Core Data Models for Record Keeper

These models define the shapes of everything that moves between the
storage layer, the controller and the menu:
1. Record - one (name, quantity) line of the record file
2. RecordLine - a raw line tagged with its 1-based line number
3. Result models returned by the operations

DESIGN DECISION: The record file stays the single source of truth.
These models are built fresh from the file on every operation and are
never cached between operations.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


FIELD_DELIMITER = ","

# Accepted for new input. Only letters and digits, so a name can never
# contain the delimiter.
NAME_PATTERN = r"^[A-Za-z][A-Za-z0-9]*$"
QUANTITY_PATTERN = r"^[0-9]+$"

# Accepted when reading an existing file.
STORED_NAME_PATTERN = r"^[^,\r\n]+$"


# =============================================================================
# ENUMS
# =============================================================================

class DuplicateResolution(str, Enum):
    """
    What to do when a new record's name resembles existing lines.

    The user always makes this choice; nothing is merged automatically.
    """
    CREATE_NEW = "create_new"   # Append a separate line with the same data
    MERGE = "merge"             # Add the quantity to the first match
    ABORT = "abort"             # Leave the file untouched


class AddOutcome(str, Enum):
    """How an add request ended."""
    CREATED = "created"        # No similar record, appended
    DUPLICATED = "duplicated"  # Similar record existed, appended anyway
    MERGED = "merged"          # Quantity added to the first similar record
    ABORTED = "aborted"        # User chose not to change anything


# =============================================================================
# RECORD MODELS
# =============================================================================

class Record(BaseModel):
    """
    A single named quantity.

    Serialized as one `name,quantity` line. The name constraint here is
    the loose one used for reading files; new names go through
    record_keeper.validation first.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = Field(
        ...,
        pattern=STORED_NAME_PATTERN,
        description="Record name (no delimiter, no line breaks)"
    )
    quantity: int = Field(
        ...,
        ge=0,
        description="Non-negative integer quantity"
    )

    def to_line(self) -> str:
        """Serialize to the on-disk line format (without newline)."""
        return f"{self.name}{FIELD_DELIMITER}{self.quantity}"

    @classmethod
    def from_line(cls, text: str) -> "Record":
        """
        Parse a `name,quantity` line.

        Raises ValueError if the line does not have exactly two fields or
        the quantity is not a plain non-negative integer literal.
        """
        fields = text.strip().split(FIELD_DELIMITER)
        if len(fields) != 2:
            raise ValueError(
                f"Expected 'name{FIELD_DELIMITER}quantity', got {len(fields)} field(s)"
            )
        name, quantity = fields
        if not quantity.isascii() or not quantity.isdigit():
            raise ValueError(f"Quantity '{quantity}' is not a non-negative integer")
        return cls(name=name, quantity=int(quantity))


class RecordLine(BaseModel):
    """A raw record-file line with its 1-based position."""
    model_config = ConfigDict(frozen=True)

    line_number: int = Field(..., ge=1)
    text: str

    def __str__(self) -> str:
        # Same shape as `grep -n`
        return f"{self.line_number}:{self.text}"


# =============================================================================
# RESULT MODELS
# =============================================================================

class AddResult(BaseModel):
    """Result of adding a record."""

    outcome: AddOutcome
    record: Optional[Record] = Field(
        default=None,
        description="The line as written (None when aborted)"
    )
    line_number: Optional[int] = Field(
        default=None,
        description="Where the record was written or merged"
    )
    matches: list[RecordLine] = Field(
        default_factory=list,
        description="Similar lines found before writing"
    )


class SearchResult(BaseModel):
    """Result of a keyword search."""

    keyword: str
    case_sensitive: bool = True
    matches: list[RecordLine] = Field(default_factory=list)

    @property
    def data_found(self) -> bool:
        return len(self.matches) > 0


class TotalResult(BaseModel):
    """Sum of all quantities in the record file."""

    total: int = Field(default=0, ge=0)
    record_count: int = Field(default=0, ge=0)

    @property
    def data_found(self) -> bool:
        return self.record_count > 0
