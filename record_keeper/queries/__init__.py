"""Query execution package."""

from record_keeper.queries.executor import QueryExecutor

__all__ = ["QueryExecutor"]
