"""Key-value stores backing the sheet registry.

Stores are string-keyed and string-valued. SheetRegistry only needs get and
set, so anything implementing KeyValueStore can be injected.
"""

import sqlite3
from pathlib import Path
from typing import Protocol

from goalsheet.store.schema import get_db_path


class KeyValueStore(Protocol):
    """Minimal string key-value store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store, used for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqliteStore:
    """Store backed by the kv table of a SQLite database."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def get(self, key: str) -> str | None:
        """Get the value stored under key.

        Args:
            key: Key to look up.

        Returns:
            Stored value, or None if the key is absent.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under key.

        Args:
            key: Key to write.
            value: Value to store.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        finally:
            conn.close()
