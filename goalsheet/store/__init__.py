"""Store layer - provides persistence for the application.

This module re-exports the public store classes and functions for easy importing.
"""

from goalsheet.store.kv import KeyValueStore, MemoryStore, SqliteStore
from goalsheet.store.registry import STORAGE_KEY, SheetRegistry
from goalsheet.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Stores
    "KeyValueStore",
    "MemoryStore",
    "SqliteStore",
    # Registry
    "STORAGE_KEY",
    "SheetRegistry",
]
