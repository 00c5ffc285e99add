"""Filter predicates.

A predicate is a single ``{field, operator, value}`` condition. A filter set
is an ordered list of predicates combined with logical AND.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FilterOperator(str, Enum):
    """Operators understood by the query engine."""

    EQ = "=="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"

    @classmethod
    def parse(cls, token: str) -> FilterOperator | None:
        """Map an operator token to a known operator, or None if unrecognized."""
        try:
            return cls(token)
        except ValueError:
            return None

    def is_numeric(self) -> bool:
        return self in (FilterOperator.GT, FilterOperator.LT, FilterOperator.GE, FilterOperator.LE)


@dataclass(frozen=True, slots=True)
class Predicate:
    """A single filter condition.

    ``operator`` is kept as the raw token so that predicates built by callers
    with an operator the engine does not know can still be represented; how
    such predicates evaluate depends on the engine's permissive mode.

    Example:
        >>> Predicate("age", ">", "26").known_operator
        <FilterOperator.GT: '>'>
    """

    field: str
    operator: str
    value: Any

    @property
    def known_operator(self) -> FilterOperator | None:
        return FilterOperator.parse(self.operator)
