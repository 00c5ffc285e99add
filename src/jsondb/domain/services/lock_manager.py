"""Per-table locking.

Every store operation is a read-modify-write cycle over a whole table
file. The lock manager hands out one re-entrant lock per table name so
that concurrent operations on the same table are serialized while
operations on different tables proceed in parallel.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Generator


class TableLockManager:
    """Registry of per-table re-entrant locks.

    A table's lock exists only while some thread holds or waits for it,
    so the registry stays as small as the set of tables in use.

    Thread Safety:
        All operations are thread-safe.
    """

    def __init__(self) -> None:
        """Initialize the lock manager."""
        self._registry_lock = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}
        # Threads holding or waiting on each lock, re-entrant holds included
        self._holders: Dict[str, int] = {}

    @contextmanager
    def hold(self, table: str) -> Generator[None, None, None]:
        """Hold the lock for ``table`` for the duration of the block.

        Example:
            >>> locks = TableLockManager()
            >>> with locks.hold("users"):
            ...     pass
        """
        with self._registry_lock:
            lock = self._locks.get(table)
            if lock is None:
                lock = threading.RLock()
                self._locks[table] = lock
            self._holders[table] = self._holders.get(table, 0) + 1

        try:
            with lock:
                yield
        finally:
            with self._registry_lock:
                self._holders[table] -= 1
                if self._holders[table] == 0:
                    del self._holders[table]
                    del self._locks[table]

    def __len__(self) -> int:
        """Number of tables currently locked or awaited."""
        with self._registry_lock:
            return len(self._locks)
