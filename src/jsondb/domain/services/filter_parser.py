"""Filter expression parsing.

A filter expression is a comma-separated list of ``field<op>value``
tokens, for example::

    name==yunus,age>25,email:contains:gmail

Symbolic operators are ``==``, ``!=``, ``>=``, ``<=``, ``>`` and ``<``.
Word operators are written ``:contains:``, ``:startsWith:`` and
``:endsWith:``; the trailing colon may be omitted.
"""

from __future__ import annotations

import re

from jsondb.domain.value_objects import Predicate
from jsondb.ports.inbound.table_store import FilterSyntaxError

# Two-character operators must come before their one-character prefixes
_OPERATOR_RE = re.compile(r"(==|!=|>=|<=|>|<|:contains:?|:startsWith:?|:endsWith:?)")


def parse_filter_token(token: str) -> Predicate | None:
    """Parse a single ``field<op>value`` token.

    Returns:
        The predicate, or None if the token has no operator or no field.

    Example:
        >>> parse_filter_token("age>=26")
        Predicate(field='age', operator='>=', value='26')
        >>> parse_filter_token("email:contains:gmail")
        Predicate(field='email', operator='contains', value='gmail')
    """
    parts = _OPERATOR_RE.split(token.strip(), maxsplit=1)
    if len(parts) < 3:
        return None

    field = parts[0].strip()
    if not field:
        return None
    operator = parts[1].strip(":")
    value = parts[2].strip()
    return Predicate(field=field, operator=operator, value=value)


def parse_filter(expression: str | None, permissive: bool = True) -> list[Predicate]:
    """Parse a filter expression into an ordered predicate list.

    Args:
        expression: Comma-separated ``field<op>value`` tokens. None or blank
            means no filtering.
        permissive: If True, malformed tokens are dropped silently; if False
            they raise FilterSyntaxError.

    Returns:
        Predicates in the order they were written.

    Raises:
        FilterSyntaxError: In strict mode, for a token that does not parse.
    """
    if expression is None or not expression.strip():
        return []

    predicates: list[Predicate] = []
    for token in expression.split(","):
        if not token.strip():
            continue
        predicate = parse_filter_token(token)
        if predicate is None:
            if permissive:
                continue
            raise FilterSyntaxError(f"Malformed filter token: {token.strip()!r}", token)
        predicates.append(predicate)

    return predicates
