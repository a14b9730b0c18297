"""Services package."""

from record_keeper.services.storage import (
    AuditStorageInterface,
    MalformedRecordError,
    NotFoundError,
    RecordStorageInterface,
    StorageError,
    TextFileAuditStorage,
    TextFileRecordStorage,
)

__all__ = [
    # Storage services
    "AuditStorageInterface",
    "MalformedRecordError",
    "NotFoundError",
    "RecordStorageInterface",
    "StorageError",
    "TextFileAuditStorage",
    "TextFileRecordStorage",
]
