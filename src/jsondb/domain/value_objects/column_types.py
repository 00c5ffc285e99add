"""Column type vocabulary.

Column types are advisory: the store persists whatever values callers hand
it, and the declared type only drives caller-side input coercion.
"""

from __future__ import annotations

from enum import Enum


class ColumnType(str, Enum):
    """Known column types."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    DATE = "date"
    NULL = "null"

    @classmethod
    def parse(cls, token: str) -> ColumnType | None:
        """Map a declared type token to a known type, or None if unrecognized.

        Matching is exact: ``"Number"`` is not a number column.
        """
        try:
            return cls(token)
        except ValueError:
            return None
