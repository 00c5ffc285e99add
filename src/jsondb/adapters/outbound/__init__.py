"""Outbound adapters - implementations of outbound ports.

Exports:
    - JsonFileTableStorage: One pretty-printed JSON file per table
    - InMemoryTableStorage: Dictionary-backed storage for tests
"""

from jsondb.adapters.outbound.json_file_storage import JsonFileTableStorage
from jsondb.adapters.outbound.memory_storage import InMemoryTableStorage

__all__ = [
    "JsonFileTableStorage",
    "InMemoryTableStorage",
]
