"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements flat text files as the backend.
"""

from record_keeper.services.storage.interface import (
    AuditStorageInterface,
    MalformedRecordError,
    NotFoundError,
    RecordStorageInterface,
    StorageError,
)
from record_keeper.services.storage.text_file import (
    TextFileAuditStorage,
    TextFileRecordStorage,
    numbered,
    parse_record_line,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "RecordStorageInterface",
    # Exceptions
    "MalformedRecordError",
    "NotFoundError",
    "StorageError",
    # Text file implementation
    "TextFileAuditStorage",
    "TextFileRecordStorage",
    "numbered",
    "parse_record_line",
]
