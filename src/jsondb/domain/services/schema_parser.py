"""Column specification parsing.

A column spec is a comma-separated list of ``name:type`` pairs, e.g.
``"name:string, age:number"``. Whitespace around names and types is
ignored. Type tokens are not checked against the known column types.
"""

from __future__ import annotations

from jsondb.domain.entities import Column
from jsondb.ports.inbound.table_store import InvalidSchemaError


def parse_column_spec(spec: str) -> list[Column]:
    """Parse a column spec into an ordered list of columns.

    Args:
        spec: Comma-separated ``name:type`` pairs.

    Returns:
        Columns in declaration order.

    Raises:
        InvalidSchemaError: If an entry lacks ``:`` or has an empty name or type.

    Example:
        >>> parse_column_spec("a:string, b : number")
        [Column(name='a', type='string'), Column(name='b', type='number')]
    """
    if not isinstance(spec, str):
        raise InvalidSchemaError(f"Column spec must be a string, got {type(spec).__name__}")

    columns: list[Column] = []
    for entry in spec.split(","):
        parts = entry.strip().split(":")
        if len(parts) < 2:
            raise InvalidSchemaError(f"Column entry {entry.strip()!r} is missing ':'", entry)

        # Anything after a second ':' is ignored
        name, type_ = parts[0].strip(), parts[1].strip()
        if not name or not type_:
            raise InvalidSchemaError(
                f"Column entry {entry.strip()!r} needs a non-empty name and type", entry
            )
        columns.append(Column(name=name, type=type_))

    return columns


def format_column_spec(columns: list[Column] | list[dict[str, str]]) -> str:
    """Render columns back into ``name:type,...`` form.

    Accepts Column objects or ``{"name": ..., "type": ...}`` mappings, which
    is the shape the HTTP API receives.
    """
    pairs = []
    for column in columns:
        if isinstance(column, Column):
            pairs.append(f"{column.name}:{column.type}")
        else:
            pairs.append(f"{column.get('name', '')}:{column.get('type', '')}")
    return ",".join(pairs)
