"""Caller-side coercion of user-entered text into a column's declared type.

The store itself never converts or validates values. Front-ends that
collect plain text (the interactive CLI) use these helpers to turn each
answer into the value a column of that type should hold.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any

from jsondb.domain.value_objects import ColumnType

_LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class CoercionError(ValueError):
    """Raised when text cannot be converted to the requested column type."""

    def __init__(self, raw: str, column_type: str, reason: str):
        super().__init__(f"Cannot convert {raw!r} to {column_type}: {reason}")
        self.raw = raw
        self.column_type = column_type


def coerce_value(raw: str, column_type: str | ColumnType) -> Any:
    """Convert raw input text to a value for a column of ``column_type``.

    Unrecognized column types keep the text unchanged.

    Raises:
        CoercionError: If a date cannot be parsed.

    Example:
        >>> coerce_value("30", "number"), coerce_value("TRUE", "boolean")
        (30, True)
        >>> coerce_value("a, b", "array")
        ['a', 'b']
    """
    if isinstance(column_type, ColumnType):
        known = column_type
    else:
        known = ColumnType.parse(column_type)

    if known == ColumnType.NUMBER:
        return _to_number(raw)
    elif known == ColumnType.BOOLEAN:
        return raw.strip().lower() == "true"
    elif known == ColumnType.ARRAY:
        return _to_array(raw)
    elif known == ColumnType.DATE:
        return _to_iso_date(raw, str(column_type))
    elif known == ColumnType.NULL:
        return None if raw == "null" else raw
    return raw


def _to_number(raw: str) -> int | float:
    # Leading numeric prefix, as in "12kg" -> 12; nothing numeric -> 0
    match = _LEADING_NUMBER_RE.match(raw)
    if not match:
        return 0
    value = float(match.group(0))
    if value == 0:
        return 0
    if value.is_integer() and abs(value) < 2**53:
        return int(value)
    return value


def _to_array(raw: str) -> list[Any]:
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None
    if isinstance(parsed, list):
        return parsed
    return [item.strip() for item in raw.split(",")]


def _to_iso_date(raw: str, column_type: str) -> str:
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise CoercionError(raw, column_type, "not an ISO-8601 date") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime("%Y-%m-%dT%H:%M:%S.") + f"{parsed.microsecond // 1000:03d}Z"
