"""Query engine: filters a record sequence by a conjunction of predicates.

Evaluation is a pure function of (records, predicates). A record matches
the filter set iff it matches every predicate; a record without the
predicate's field never matches it.

Value semantics:
    - Equality, inequality and the substring operators compare the
      lowercased text form of both sides.
    - Ordering operators compare both sides as numbers. Values with no
      numeric reading become NaN, so every ordering comparison against
      them is False; evaluation never raises on bad data.
"""

from __future__ import annotations

import json
import math
from typing import Any, Iterable, Sequence

from jsondb.domain.entities import Record
from jsondb.domain.value_objects import FilterOperator, Predicate
from jsondb.ports.inbound.table_store import FilterSyntaxError


def to_text(value: Any) -> str:
    """Render a stored value as text the way it reads in the JSON document.

    Example:
        >>> to_text(30.0), to_text(True), to_text(None), to_text(["a", 1])
        ('30', 'true', 'null', 'a,1')
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_text(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def to_number(value: Any) -> float:
    """Coerce a value to a float, returning NaN when it has no numeric reading.

    Booleans count as 0/1, None and blank strings as 0.

    Example:
        >>> to_number("26"), to_number(" 3.5 "), to_number(True)
        (26.0, 3.5, 1.0)
        >>> math.isnan(to_number("abc"))
        True
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        # float() accepts spellings like "nan" and "1_000" that are not numbers here
        if "_" in text or text.lower().lstrip("+-") in ("nan", "inf", "infinity"):
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def matches_predicate(record: Record, predicate: Predicate, permissive: bool = True) -> bool:
    """Evaluate one predicate against one record.

    Args:
        record: The record to test.
        predicate: The condition.
        permissive: If True, unknown operators match every record; if False
            they raise FilterSyntaxError.

    Returns:
        Whether the record satisfies the predicate.
    """
    if predicate.field not in record:
        return False

    op = predicate.known_operator
    if op is None:
        if permissive:
            return True
        raise FilterSyntaxError(f"Unknown filter operator: {predicate.operator!r}")

    record_value = record[predicate.field]

    if op.is_numeric():
        left = to_number(record_value)
        right = to_number(predicate.value)
        if op == FilterOperator.GT:
            return left > right
        elif op == FilterOperator.LT:
            return left < right
        elif op == FilterOperator.GE:
            return left >= right
        return left <= right

    left_text = to_text(record_value).lower()
    right_text = to_text(predicate.value).lower()
    if op == FilterOperator.EQ:
        return left_text == right_text
    elif op == FilterOperator.NE:
        return left_text != right_text
    elif op == FilterOperator.CONTAINS:
        return right_text in left_text
    elif op == FilterOperator.STARTS_WITH:
        return left_text.startswith(right_text)
    return left_text.endswith(right_text)


def matches_all(record: Record, predicates: Sequence[Predicate], permissive: bool = True) -> bool:
    """Check a record against a filter set (logical AND)."""
    return all(matches_predicate(record, p, permissive) for p in predicates)


def filter_records(
    records: Iterable[Record],
    predicates: Sequence[Predicate] | None = None,
    permissive: bool = True,
) -> list[Record]:
    """Return the records satisfying every predicate, in original order.

    An empty or absent predicate list returns all records unchanged.

    Raises:
        FilterSyntaxError: In strict mode, if a predicate has an unknown operator.
    """
    records = list(records)
    if not predicates:
        return records

    if not permissive:
        for predicate in predicates:
            if predicate.known_operator is None:
                raise FilterSyntaxError(f"Unknown filter operator: {predicate.operator!r}")

    return [r for r in records if matches_all(r, predicates, permissive)]
