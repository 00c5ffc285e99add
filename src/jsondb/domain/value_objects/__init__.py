"""Value objects for the document store domain.

Exports:
    Column types:
        - ColumnType: Known declared column types (string, number, ...)

    Identifiers:
        - RecordId: Store-assigned record identifier
        - ID_FIELD: Name of the identity field
        - is_valid_table_name: Table name check

    Predicates:
        - FilterOperator: Operators understood by the query engine
        - Predicate: A single {field, operator, value} condition
"""

from jsondb.domain.value_objects.column_types import ColumnType
from jsondb.domain.value_objects.identifiers import (
    ID_FIELD,
    RecordId,
    is_valid_table_name,
)
from jsondb.domain.value_objects.predicate import FilterOperator, Predicate

__all__ = [
    # Column types
    "ColumnType",
    # Identifiers
    "ID_FIELD",
    "RecordId",
    "is_valid_table_name",
    # Predicates
    "FilterOperator",
    "Predicate",
]
