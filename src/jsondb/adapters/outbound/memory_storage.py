"""In-memory table storage adapter.

A simple in-memory implementation of TableStorage for testing and
development. Data is not persisted across restarts.

Usage:
    storage = InMemoryTableStorage()
    storage.save("users", Table(columns=[Column("name", "string")]))
    table = storage.load("users")
"""

from __future__ import annotations

import json

from jsondb.domain.entities import Table


class InMemoryTableStorage:
    """In-memory implementation of TableStorage.

    Tables are kept as encoded JSON documents, so values that could not
    be written to a file are rejected here as well and callers never share
    mutable state with the storage.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._tables: dict[str, str] = {}

    def exists(self, name: str) -> bool:
        return name in self._tables

    def load(self, name: str) -> Table | None:
        """Load a table from memory.

        Returns:
            A fresh copy of the table, or None if not found.
        """
        raw = self._tables.get(name)
        if raw is None:
            return None
        return Table.from_document(json.loads(raw))

    def save(self, name: str, table: Table) -> None:
        """Store a table in memory.

        Raises:
            TypeError: If a record holds a value JSON cannot encode.
        """
        self._tables[name] = json.dumps(table.to_document())

    def delete(self, name: str) -> bool:
        """Delete a table from memory.

        Returns:
            True if deleted, False if not found.
        """
        return self._tables.pop(name, None) is not None

    def list_names(self) -> list[str]:
        return sorted(self._tables)

    def __len__(self) -> int:
        return len(self._tables)
