"""Application layer for the document store.

The application layer orchestrates domain logic to fulfill use cases.

Exports:
    - TableStore: Main entry point for table and record operations
"""

from jsondb.application.table_store import TableStore

__all__ = [
    "TableStore",
]
