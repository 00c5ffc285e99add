"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to callers (TableStorePort and its errors)
- Outbound ports: Dependencies on external systems (TableStorage)

Adapters implement these ports with concrete functionality.
"""

from jsondb.ports.inbound import (
    CorruptTableError,
    FilterSyntaxError,
    InvalidSchemaError,
    InvalidTableNameError,
    RecordNotFoundError,
    TableAlreadyExistsError,
    TableNotFoundError,
    TableStoreError,
    TableStorePort,
)
from jsondb.ports.outbound import TableStorage

__all__ = [
    # Inbound ports
    "TableStorePort",
    "TableStoreError",
    "InvalidSchemaError",
    "InvalidTableNameError",
    "TableAlreadyExistsError",
    "TableNotFoundError",
    "RecordNotFoundError",
    "FilterSyntaxError",
    "CorruptTableError",
    # Outbound ports
    "TableStorage",
]
