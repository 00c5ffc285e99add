"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: Handle incoming requests (REST, CLI)
- Outbound adapters: Implement external dependencies (table files)
"""

from jsondb.adapters.outbound import (
    InMemoryTableStorage,
    JsonFileTableStorage,
)

__all__ = [
    # Outbound adapters
    "InMemoryTableStorage",
    "JsonFileTableStorage",
]
