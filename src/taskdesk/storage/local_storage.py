# src/taskdesk/storage/local_storage.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    SQLite key-value store holding string slots.

    One table, one row per key. Values are opaque strings; callers own
    the encoding (TaskSlotRepo stores a JSON array under a single key).

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "storage.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = len(self.keys())
        except sqlite3.Error:
            total = -1
        logger.info("LocalStorage ready db=%s keys=%s", self._db_path, total)

    @property
    def path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def get_item(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            cur = conn.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cur.fetchone()
            return str(row["value"]) if row else None
        finally:
            conn.close()

    def set_item(self, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, time.time()),
            )
            conn.commit()
            logger.debug("LocalStorage set key=%s bytes=%d", key, len(value))
        finally:
            conn.close()

    def remove_item(self, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    def keys(self) -> list[str]:
        conn = self._get_conn()
        try:
            cur = conn.execute("SELECT key FROM kv ORDER BY key ASC")
            return [str(r["key"]) for r in cur.fetchall()]
        finally:
            conn.close()
