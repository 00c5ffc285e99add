"""Table entity and its persisted document form.

A table document looks like::

    {
      "columns": [{"name": "name", "type": "string"}, ...],
      "data": [{"name": "Ali", "id": "1718000000000"}, ...]
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from jsondb.domain.entities.column import Column
from jsondb.domain.value_objects import ID_FIELD

Record = dict[str, Any]
"""One document in a table: a field map that always carries ``id``."""


@dataclass
class Table:
    """A named collection's columns and records, in insertion order."""

    columns: list[Column]
    records: list[Record] = field(default_factory=list)

    def find_index(self, record_id: str) -> int | None:
        """Position of the first record with ``record_id``, or None."""
        for index, record in enumerate(self.records):
            if record.get(ID_FIELD) == record_id:
                return index
        return None

    def record_ids(self) -> set[str]:
        return {str(r[ID_FIELD]) for r in self.records if ID_FIELD in r}

    def to_document(self) -> dict[str, Any]:
        return {
            "columns": [c.to_dict() for c in self.columns],
            "data": self.records,
        }

    @classmethod
    def from_document(cls, document: Any) -> Table:
        """Build a table from a decoded JSON document.

        Raises:
            ValueError: If the document does not have the table shape.
        """
        if not isinstance(document, dict):
            raise ValueError("Table document must be a JSON object")
        columns = document.get("columns")
        data = document.get("data")
        if not isinstance(columns, list) or not isinstance(data, list):
            raise ValueError("Table document requires 'columns' and 'data' arrays")
        if not all(isinstance(r, dict) for r in data):
            raise ValueError("Table records must be JSON objects")
        return cls(columns=[Column.from_dict(c) for c in columns], records=list(data))
