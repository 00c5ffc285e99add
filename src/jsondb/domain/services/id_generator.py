"""Record id generation.

Ids are the wall-clock time in milliseconds as a decimal string. Two ids
issued in the same millisecond (or after the clock stepped backwards) get
a ``-<n>`` counter suffix, and any candidate already present in the table
is skipped, so ids never collide within a table.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Collection

from jsondb.domain.value_objects import RecordId


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class RecordIdGenerator:
    """Issues record ids that are unique within a table.

    Thread Safety:
        next_id() is thread-safe. Uniqueness against ids issued by other
        processes is only guaranteed through the ``existing`` argument.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        """Initialize the generator.

        Args:
            clock: Returns the current time in milliseconds. Defaults to
                the wall clock.
        """
        self._clock = clock or _wall_clock_ms
        self._lock = threading.Lock()
        self._last_ms = -1
        self._seq = 0

    def next_id(self, existing: Collection[str] = ()) -> RecordId:
        """Issue a new id.

        Args:
            existing: Ids already present in the target table.

        Returns:
            An id not in ``existing`` and never issued before by this generator.
        """
        with self._lock:
            now = self._clock()
            if now > self._last_ms:
                self._last_ms = now
                self._seq = 0
            else:
                self._seq += 1

            while True:
                candidate = self._format(self._last_ms, self._seq)
                if candidate not in existing:
                    return RecordId(candidate)
                self._seq += 1

    @staticmethod
    def _format(ms: int, seq: int) -> str:
        if seq == 0:
            return str(ms)
        return f"{ms}-{seq}"
