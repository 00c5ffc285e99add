"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for external systems that the
document store depends on, such as durable table persistence.
"""

from jsondb.ports.outbound.table_storage import TableStorage

__all__ = ["TableStorage"]
