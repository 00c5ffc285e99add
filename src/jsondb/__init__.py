"""
jsondb - Schema-typed JSON document store

Named tables with a fixed set of typed columns, persisted one JSON file per
table, manipulated through CRUD operations and a small filter language.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
