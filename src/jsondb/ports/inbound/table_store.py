"""Table Store port for table and record lifecycle operations.

This inbound port defines the contract offered to callers (HTTP API,
CLI): create and drop tables, insert, update, delete and list records.

Every mutating operation either fully succeeds, with the new table state
durably persisted, or fails with one of the errors below and leaves the
prior persisted state untouched.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, Sequence

from jsondb.domain.entities import Column, Record, Table
from jsondb.domain.value_objects import Predicate


class TableStorePort(Protocol):
    """Protocol for table store operations.

    Thread Safety:
        Implementations must serialize read-modify-write cycles on the
        same table. Operations on different tables may run concurrently.
    """

    @abstractmethod
    def create_table(self, name: str, column_spec: str) -> list[Column]:
        """Create an empty table from a ``name:type,...`` column spec.

        Raises:
            InvalidTableNameError: If the name cannot be persisted.
            InvalidSchemaError: If the column spec is malformed.
            TableAlreadyExistsError: If the table exists (it is left untouched).
        """
        ...

    @abstractmethod
    def delete_table(self, name: str) -> None:
        """Remove a table and its records irreversibly.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        ...

    @abstractmethod
    def insert_record(self, name: str, fields: dict[str, Any]) -> Record:
        """Append a record with a freshly assigned id and return it.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        ...

    @abstractmethod
    def delete_record(self, name: str, record_id: str) -> None:
        """Remove the record with ``record_id``.

        Raises:
            TableNotFoundError: If the table does not exist.
            RecordNotFoundError: If no record has that id.
        """
        ...

    @abstractmethod
    def update_record(self, name: str, record_id: str, patch: dict[str, Any]) -> Record:
        """Merge ``patch`` over a record in place and return the result.

        The record's id is never changed, whatever ``patch`` contains.

        Raises:
            TableNotFoundError: If the table does not exist.
            RecordNotFoundError: If no record has that id.
        """
        ...

    @abstractmethod
    def get_columns(self, name: str) -> list[Column] | None:
        """Return the table's columns, or None if the table does not exist."""
        ...

    @abstractmethod
    def list_all(self, name: str) -> list[Record]:
        """Return every record in insertion order.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        ...

    @abstractmethod
    def list_tables(self) -> list[str]:
        """Return the names of all tables, sorted."""
        ...

    @abstractmethod
    def get_table(self, name: str) -> Table:
        """Return the table's columns and records.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        ...

    @abstractmethod
    def get_record(self, name: str, record_id: str) -> Record:
        """Return a single record.

        Raises:
            TableNotFoundError: If the table does not exist.
            RecordNotFoundError: If no record has that id.
        """
        ...

    @abstractmethod
    def list_records(
        self, name: str, predicates: Sequence[Predicate] | None = None
    ) -> list[Record]:
        """Return the records matching every predicate, in insertion order.

        Raises:
            TableNotFoundError: If the table does not exist.
            FilterSyntaxError: In strict mode, for an unknown operator.
        """
        ...


class TableStoreError(Exception):
    """Base class for all document store errors."""


class InvalidSchemaError(TableStoreError):
    """Raised when a column specification is malformed."""

    def __init__(self, message: str, entry: str | None = None):
        super().__init__(message)
        self.entry = entry


class InvalidTableNameError(TableStoreError):
    """Raised when a table name cannot be mapped to a persisted unit."""

    def __init__(self, table: str):
        super().__init__(f"Invalid table name: {table!r}")
        self.table = table


class TableAlreadyExistsError(TableStoreError):
    """Raised when creating a table whose name is already taken."""

    def __init__(self, table: str):
        super().__init__(f"Table already exists: {table}")
        self.table = table


class TableNotFoundError(TableStoreError):
    """Raised when an operation targets a table that does not exist."""

    def __init__(self, table: str):
        super().__init__(f"Table not found: {table}")
        self.table = table


class RecordNotFoundError(TableStoreError):
    """Raised when no record in an existing table has the requested id."""

    def __init__(self, table: str, record_id: str):
        super().__init__(f"Record not found: {record_id} in table {table}")
        self.table = table
        self.record_id = record_id


class FilterSyntaxError(TableStoreError):
    """Raised in strict mode for malformed filter tokens or unknown operators."""

    def __init__(self, message: str, token: str | None = None):
        super().__init__(message)
        self.token = token


class CorruptTableError(TableStoreError):
    """Raised when a persisted table cannot be decoded.

    This may occur due to:
    - A file that is not valid JSON
    - A document lacking the ``columns``/``data`` arrays
    """

    def __init__(self, table: str, reason: str):
        super().__init__(f"Table {table} is corrupt: {reason}")
        self.table = table
        self.reason = reason
