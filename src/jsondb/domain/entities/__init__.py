"""Domain entities for the document store.

Exports:
    - Column: Declared field name and type
    - Table: Columns plus records, with its persisted document form
    - Record: Field map type alias
"""

from jsondb.domain.entities.column import Column
from jsondb.domain.entities.table import Record, Table

__all__ = [
    "Column",
    "Record",
    "Table",
]
