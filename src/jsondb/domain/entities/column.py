"""Column entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Column:
    """A declared field name and its intended value type.

    Columns are fixed at table creation. ``type`` keeps the raw token the
    caller declared, so unrecognized types round-trip unchanged.
    """

    name: str
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Column:
        """Build a column from its persisted form.

        Raises:
            ValueError: If ``name`` or ``type`` is missing.
        """
        try:
            return cls(name=str(data["name"]), type=str(data["type"]))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid column definition: {data!r}") from e
