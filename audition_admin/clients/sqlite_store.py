"""SQLite-backed key/value storage that survives process restarts."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional


class SQLiteStore:
    """Durable string key/value store, one row per key."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    @property
    def path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_items (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def set_item(self, key: str, value: str) -> None:
        if not key:
            raise ValueError("Item key must be a non-empty string")

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_items (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )

    def get_item(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_items WHERE key = ?",
                (key,),
            ).fetchone()
        if not row:
            return None
        return row["value"]

    def remove_item(self, *keys: str) -> None:
        if not keys:
            return
        with self._connect() as conn:
            conn.executemany(
                "DELETE FROM kv_items WHERE key = ?",
                [(key,) for key in keys],
            )


__all__ = ["SQLiteStore"]
