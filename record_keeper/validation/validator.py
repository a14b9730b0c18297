"""
Input Validation

DESIGN DECISION: Everything the user types is validated before the record
file is touched. A rejected value never reaches storage, and the rejection
is reported, not repaired.

RULES:
- Name: starts with a letter, then letters and digits only.
  This is the stricter of the two historical rules; it is the only one
  that keeps a comma (the field delimiter) out of the file.
- Quantity: digits only. No sign, no decimal point.

Surrounding whitespace from the terminal is stripped first.
"""

import re
from typing import Optional

from record_keeper.models.record import FIELD_DELIMITER, NAME_PATTERN, QUANTITY_PATTERN


_NAME_RE = re.compile(NAME_PATTERN)
_QUANTITY_RE = re.compile(QUANTITY_PATTERN)


class ValidationError(ValueError):
    """
    Raised when user input breaks a name or quantity rule.

    Recoverable: the operation is abandoned and the menu is shown again.
    """

    def __init__(self, field: str, value: Optional[str], message: str):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(message)


def validate_name(raw: Optional[str]) -> str:
    """
    Validate a record name and return it stripped.

    Raises:
        ValidationError: If the name is empty, starts with a digit or
            contains anything but ASCII letters and digits.
    """
    name = (raw or "").strip()
    if not _NAME_RE.fullmatch(name):
        raise ValidationError(
            field="name",
            value=raw,
            message=(
                f"Invalid record name '{name}'. Use a non-empty name of letters "
                "and digits that starts with a letter."
            ),
        )
    return name


def validate_lookup_name(raw: Optional[str]) -> str:
    """
    Validate a name used to look up existing records.

    Looser than validate_name so records written before the strict rule
    can still be found. Only empty names and the delimiter are refused.
    """
    name = (raw or "").strip()
    if not name or FIELD_DELIMITER in name:
        raise ValidationError(
            field="name",
            value=raw,
            message=f"Invalid record name '{name}'. Enter the name of an existing record.",
        )
    return name


def validate_quantity(raw: Optional[str]) -> int:
    """
    Validate a quantity and return it as an int.

    Raises:
        ValidationError: If the value is not a non-negative integer literal.
    """
    text = (raw or "").strip()
    if not _QUANTITY_RE.fullmatch(text):
        raise ValidationError(
            field="quantity",
            value=raw,
            message=f"Invalid quantity '{text}'. Please enter a non-negative integer.",
        )
    return int(text)


class RecordValidator:
    """
    Validates raw user input for record operations.

    Thin object wrapper around the module functions so the controller can
    take a validator as a dependency, the same way it takes storage.
    """

    def validate_name(self, raw: Optional[str]) -> str:
        return validate_name(raw)

    def validate_lookup_name(self, raw: Optional[str]) -> str:
        return validate_lookup_name(raw)

    def validate_quantity(self, raw: Optional[str]) -> int:
        return validate_quantity(raw)

    def validate_record(self, raw_name: Optional[str], raw_quantity: Optional[str]) -> tuple[str, int]:
        """
        Validate a (name, quantity) pair.

        The name is checked first, so a bad name is reported even when the
        quantity is also bad.
        """
        return self.validate_name(raw_name), self.validate_quantity(raw_quantity)
