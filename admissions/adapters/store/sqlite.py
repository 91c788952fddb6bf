"""SQLite key-value store adapter.

Implements KeyValueStorePort using a single SQLite table of JSON text
values. Provides durable, crash-safe storage with zero operational
overhead.
"""

import json
import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any

from admissions.core.ports import KeyValueStorePort

logger = logging.getLogger(__name__)


class SQLiteKeyValueStore(KeyValueStorePort):
    """SQLite-backed store with one row per key."""

    def __init__(self, db_path: str):
        """Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._schema_initialized = False

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def _init_schema(self) -> None:
        """Initialize database schema on first use.

        Only runs once per instance. Subsequent calls are no-ops.
        """
        if self._schema_initialized:
            return

        with closing(self._connect()) as conn, conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
        self._schema_initialized = True

    def get(self, key: str) -> Any | None:
        """Look up a key, returning None if absent or undecodable."""
        self._init_schema()

        with closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None

        try:
            return json.loads(row[0])
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(
                f"Failed to parse stored value for key {key}: {e}. "
                f"Value will be treated as absent.",
                extra={"key": key},
            )
            return None

    def set(self, key: str, value: Any) -> None:
        """Create or replace a key."""
        self._init_schema()
        payload = json.dumps(value)

        with closing(self._connect()) as conn, conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                (key, payload),
            )

    def remove(self, key: str) -> None:
        self._init_schema()

        with closing(self._connect()) as conn, conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))

