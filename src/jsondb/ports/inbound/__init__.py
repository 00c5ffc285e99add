"""Inbound ports - API contracts for the document store.

Inbound ports define the interface that the HTTP API, the CLI and any
other caller use to manage tables and records.
"""

from jsondb.ports.inbound.table_store import (
    CorruptTableError,
    FilterSyntaxError,
    InvalidSchemaError,
    InvalidTableNameError,
    RecordNotFoundError,
    TableAlreadyExistsError,
    TableNotFoundError,
    TableStoreError,
    TableStorePort,
)

__all__ = [
    "TableStorePort",
    "TableStoreError",
    "InvalidSchemaError",
    "InvalidTableNameError",
    "TableAlreadyExistsError",
    "TableNotFoundError",
    "RecordNotFoundError",
    "FilterSyntaxError",
    "CorruptTableError",
]
