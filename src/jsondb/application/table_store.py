"""Table Store - unified entry point for the document store.

This module provides the TableStore class that owns table definitions
and their records. Every operation runs under the table's lock, re-reads
the persisted table, and for mutations writes the full new state back
before returning.

Usage:
    from jsondb.application import TableStore

    store = TableStore.open("/path/to/data")
    store.create_table("users", "name:string,age:number")
    record = store.insert_record("users", {"name": "Yunus", "age": 30})
    store.update_record("users", record["id"], {"age": 31})
    adults = store.list_records("users", [Predicate("age", ">=", "18")])
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Mapping, Sequence

from jsondb.adapters.outbound.json_file_storage import JsonFileTableStorage
from jsondb.domain.entities import Column, Record, Table
from jsondb.domain.services import (
    RecordIdGenerator,
    TableLockManager,
    filter_records,
    parse_column_spec,
    parse_filter,
)
from jsondb.domain.value_objects import ID_FIELD, Predicate, is_valid_table_name
from jsondb.infrastructure.logging import get_logger
from jsondb.infrastructure.metrics import MetricsRegistry, get_metrics
from jsondb.infrastructure.tracing import trace_span
from jsondb.ports.inbound.table_store import (
    InvalidTableNameError,
    RecordNotFoundError,
    TableAlreadyExistsError,
    TableNotFoundError,
    TableStoreError,
)
from jsondb.ports.outbound.table_storage import TableStorage


class TableStore:
    """Implementation of TableStorePort over a TableStorage adapter.

    Features:
        - Explicit storage handle, no process-wide data directory
        - Per-table locking around every read-modify-write cycle
        - Collision-free record ids
        - Merge-on-update that never touches ``id``
        - Filtered listing through the query engine

    Thread Safety:
        Multiple threads can share a TableStore. Operations on the same
        table are serialized; operations on different tables are not.
        Separate processes writing the same data directory are not
        coordinated.
    """

    def __init__(
        self,
        storage: TableStorage,
        permissive: bool = True,
        id_generator: RecordIdGenerator | None = None,
        lock_manager: TableLockManager | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the table store.

        Args:
            storage: Persistence adapter for whole tables.
            permissive: Drop malformed filter tokens and let unknown filter
                operators match; if False, both raise FilterSyntaxError.
            id_generator: Record id source (default: wall clock + counter).
            lock_manager: Per-table locks (default: a private manager).
            metrics: Metrics registry (default: the global registry).
        """
        self._storage = storage
        self._permissive = permissive
        self._ids = id_generator or RecordIdGenerator()
        self._locks = lock_manager or TableLockManager()
        self._metrics = metrics or get_metrics()
        self._logger = get_logger(__name__)

        self._metrics.tables.set(len(self._storage.list_names()))

    @classmethod
    def open(
        cls,
        data_dir: str | Path,
        sync: bool = True,
        permissive: bool = True,
        metrics: MetricsRegistry | None = None,
    ) -> TableStore:
        """Create a store backed by JSON files in ``data_dir``."""
        metrics = metrics or get_metrics()
        storage = JsonFileTableStorage(data_dir, sync=sync, metrics=metrics)
        return cls(storage, permissive=permissive, metrics=metrics)

    @property
    def storage(self) -> TableStorage:
        return self._storage

    @property
    def permissive(self) -> bool:
        """Whether filter parsing and evaluation are permissive."""
        return self._permissive

    # ----- Table lifecycle -----

    def create_table(self, name: str, column_spec: str) -> list[Column]:
        """Create an empty table from a ``name:type,...`` column spec.

        Raises:
            InvalidTableNameError: If the name cannot be persisted.
            TableAlreadyExistsError: If the table exists (it is left untouched).
            InvalidSchemaError: If the column spec is malformed.
        """
        with self._observe("create_table", name):
            self._check_name(name)
            with self._locks.hold(name):
                if self._storage.exists(name):
                    raise TableAlreadyExistsError(name)
                columns = parse_column_spec(column_spec)
                self._storage.save(name, Table(columns=columns))

            self._metrics.tables.inc()
            self._logger.info(
                "table_created", table=name, columns=[c.name for c in columns]
            )
            return list(columns)

    def delete_table(self, name: str) -> None:
        """Remove a table and its records irreversibly.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        with self._observe("delete_table", name):
            self._check_name(name)
            with self._locks.hold(name):
                if not self._storage.delete(name):
                    raise TableNotFoundError(name)

            self._metrics.tables.dec()
            self._logger.info("table_deleted", table=name)

    def list_tables(self) -> list[str]:
        """Return the names of all tables, sorted."""
        with self._observe("list_tables"):
            return self._storage.list_names()

    def get_table(self, name: str) -> Table:
        """Return the table's columns and records.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        with self._observe("get_table", name):
            self._check_name(name)
            with self._locks.hold(name):
                return self._load(name)

    def get_columns(self, name: str) -> list[Column] | None:
        """Return the table's columns, or None if the table does not exist."""
        with self._observe("get_columns", name):
            if not is_valid_table_name(name):
                return None
            with self._locks.hold(name):
                table = self._storage.load(name)
            return None if table is None else table.columns

    # ----- Record lifecycle -----

    def insert_record(self, name: str, fields: Mapping[str, Any]) -> Record:
        """Append a record with a freshly assigned id and return it.

        Any ``id`` in ``fields`` is replaced by the assigned id.

        Raises:
            TableNotFoundError: If the table does not exist.
            TypeError: If ``fields`` is not a mapping.
        """
        if not isinstance(fields, Mapping):
            raise TypeError(f"Record fields must be a mapping, got {type(fields).__name__}")

        with self._observe("insert_record", name):
            self._check_name(name)
            with self._locks.hold(name):
                table = self._load(name)
                record: Record = dict(fields)
                record[ID_FIELD] = self._ids.next_id(table.record_ids())
                table.records.append(record)
                self._storage.save(name, table)

            self._logger.info("record_inserted", table=name, record_id=record[ID_FIELD])
            return dict(record)

    def get_record(self, name: str, record_id: str) -> Record:
        """Return a single record.

        Raises:
            TableNotFoundError: If the table does not exist.
            RecordNotFoundError: If no record has that id.
        """
        with self._observe("get_record", name):
            self._check_name(name)
            with self._locks.hold(name):
                table = self._load(name)
            index = table.find_index(record_id)
            if index is None:
                raise RecordNotFoundError(name, record_id)
            return table.records[index]

    def update_record(
        self, name: str, record_id: str, patch: Mapping[str, Any]
    ) -> Record:
        """Merge ``patch`` over a record in place and return the result.

        Fields in ``patch`` overwrite, fields absent from it are kept, and
        ``id`` is always restored to ``record_id``. The record keeps its
        position in the table.

        Raises:
            TableNotFoundError: If the table does not exist.
            RecordNotFoundError: If no record has that id.
            TypeError: If ``patch`` is not a mapping.
        """
        if not isinstance(patch, Mapping):
            raise TypeError(f"Record patch must be a mapping, got {type(patch).__name__}")

        with self._observe("update_record", name):
            self._check_name(name)
            with self._locks.hold(name):
                table = self._load(name)
                index = table.find_index(record_id)
                if index is None:
                    raise RecordNotFoundError(name, record_id)

                current = table.records[index]
                merged: Record = {**current, **patch, ID_FIELD: current[ID_FIELD]}
                table.records[index] = merged
                self._storage.save(name, table)

            self._logger.info(
                "record_updated", table=name, record_id=record_id, fields=sorted(patch)
            )
            return dict(merged)

    def delete_record(self, name: str, record_id: str) -> None:
        """Remove the record with ``record_id``.

        Raises:
            TableNotFoundError: If the table does not exist.
            RecordNotFoundError: If no record has that id.
        """
        with self._observe("delete_record", name):
            self._check_name(name)
            with self._locks.hold(name):
                table = self._load(name)
                index = table.find_index(record_id)
                if index is None:
                    raise RecordNotFoundError(name, record_id)

                del table.records[index]
                self._storage.save(name, table)

            self._logger.info("record_deleted", table=name, record_id=record_id)

    # ----- Queries -----

    def list_all(self, name: str) -> list[Record]:
        """Return every record in insertion order.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        with self._observe("list_all", name):
            self._check_name(name)
            with self._locks.hold(name):
                return self._load(name).records

    def list_records(
        self, name: str, predicates: Sequence[Predicate] | None = None
    ) -> list[Record]:
        """Return the records matching every predicate, in insertion order.

        Raises:
            TableNotFoundError: If the table does not exist.
            FilterSyntaxError: In strict mode, for an unknown operator.
        """
        with self._observe("list_records", name):
            self._check_name(name)
            with self._locks.hold(name):
                records = self._load(name).records

            self._metrics.records_scanned_total.inc(len(records))
            return filter_records(records, predicates, permissive=self._permissive)

    def query(self, name: str, expression: str | None) -> list[Record]:
        """List records matching a ``field<op>value,...`` filter expression.

        Raises:
            TableNotFoundError: If the table does not exist.
            FilterSyntaxError: In strict mode, for a malformed expression.
        """
        predicates = parse_filter(expression, permissive=self._permissive)
        return self.list_records(name, predicates)

    # ----- Internals -----

    def _check_name(self, name: str) -> None:
        if not is_valid_table_name(name):
            raise InvalidTableNameError(name)

    def _load(self, name: str) -> Table:
        """Load a table or raise TableNotFoundError.

        The caller has checked the name and holds the table lock.
        """
        table = self._storage.load(name)
        if table is None:
            raise TableNotFoundError(name)
        return table

    @contextmanager
    def _observe(self, operation: str, table: str | None = None) -> Generator[None, None, None]:
        """Trace, time and count one store operation."""
        attributes = {"jsondb.operation": operation}
        if table is not None:
            attributes["jsondb.table"] = str(table)

        start = time.perf_counter()
        status = "error"
        with trace_span(f"table_store.{operation}", attributes):
            try:
                yield
                status = "success"
            except TableStoreError as e:
                self._logger.info(
                    "operation_rejected", operation=operation, table=table, error=str(e)
                )
                raise
            except Exception:
                self._logger.exception("operation_failed", operation=operation, table=table)
                raise
            finally:
                self._metrics.operations_total.labels(operation=operation, status=status).inc()
                self._metrics.operation_latency_seconds.labels(operation=operation).observe(
                    time.perf_counter() - start
                )
