"""Domain services for document store logic.

Services implement the logic that doesn't naturally fit within a single
entity: parsing column specs and filter expressions, evaluating
predicates, issuing record ids, per-table locking and caller-side value
coercion.
"""

from jsondb.domain.services.coercion import CoercionError, coerce_value
from jsondb.domain.services.filter_parser import parse_filter, parse_filter_token
from jsondb.domain.services.id_generator import RecordIdGenerator
from jsondb.domain.services.lock_manager import TableLockManager
from jsondb.domain.services.query_engine import (
    filter_records,
    matches_all,
    matches_predicate,
    to_number,
    to_text,
)
from jsondb.domain.services.schema_parser import format_column_spec, parse_column_spec

__all__ = [
    "CoercionError",
    "coerce_value",
    "parse_filter",
    "parse_filter_token",
    "RecordIdGenerator",
    "TableLockManager",
    "filter_records",
    "matches_all",
    "matches_predicate",
    "to_number",
    "to_text",
    "format_column_spec",
    "parse_column_spec",
]
