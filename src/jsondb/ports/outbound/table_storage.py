"""Outbound port for table persistence.

This protocol defines the interface for persisting whole tables. The
store always reads and writes a table as one unit; storage adapters
never see partial updates.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from jsondb.domain.entities import Table


@runtime_checkable
class TableStorage(Protocol):
    """Protocol for table persistence.

    This is the contract that outbound adapters implement. Adapters do
    not lock; callers serialize access per table.
    """

    def exists(self, name: str) -> bool:
        """Check whether a table is persisted.

        Args:
            name: Table name
        """
        ...

    def load(self, name: str) -> Table | None:
        """Load a table.

        Args:
            name: Table name

        Returns:
            The table, or None if not persisted

        Raises:
            CorruptTableError: If the persisted unit cannot be decoded
        """
        ...

    def save(self, name: str, table: Table) -> None:
        """Persist a table, replacing any previous state atomically.

        Args:
            name: Table name
            table: Full table state to persist
        """
        ...

    def delete(self, name: str) -> bool:
        """Remove a persisted table.

        Args:
            name: Table name

        Returns:
            True if deleted, False if not found
        """
        ...

    def list_names(self) -> list[str]:
        """List all persisted table names.

        Returns:
            Table names, sorted
        """
        ...
