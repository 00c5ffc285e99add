"""Identifiers for tables and records."""

from __future__ import annotations

from typing import NewType

RecordId = NewType("RecordId", str)
"""Store-assigned record identifier. Opaque string, immutable once issued."""

ID_FIELD = "id"
"""Name of the system-assigned identity field present on every record."""

_FORBIDDEN_NAME_CHARS = frozenset("/\\\x00")


def is_valid_table_name(name: str) -> bool:
    """Check that a table name maps to exactly one file inside the data directory.

    Example:
        >>> is_valid_table_name("users")
        True
        >>> is_valid_table_name("../etc/passwd")
        False
    """
    if not isinstance(name, str) or not name.strip():
        return False
    if name.startswith("."):
        return False
    return not any(ch in _FORBIDDEN_NAME_CHARS for ch in name)
