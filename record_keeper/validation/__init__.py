"""Input validation package."""

from record_keeper.validation.validator import (
    RecordValidator,
    ValidationError,
    validate_lookup_name,
    validate_name,
    validate_quantity,
)

__all__ = [
    "RecordValidator",
    "ValidationError",
    "validate_lookup_name",
    "validate_name",
    "validate_quantity",
]
