# src/taskdeck/session/storage.py

from __future__ import annotations

import contextlib
import logging
import os
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_KEY = "token"


class SqliteCredentialStorage:
    """
    SQLite-backed credential storage, scoped by origin (API base URL).

    One row per (origin, key). Survives restarts of the client, like browser
    localStorage survives page reloads, and never leaks a credential across origins.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path, origin: str, key: str = DEFAULT_KEY) -> None:
        if not origin or not origin.strip():
            raise ValueError("origin is required")
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._origin = origin.strip().rstrip("/")
        self._key = key
        self._ensure_schema()
        with contextlib.suppress(Exception):
            # The file holds bearer tokens: keep it private on disk.
            os.chmod(self._db_path, 0o600)
        logger.info("Credential storage ready db=%s origin=%s", self._db_path, self._origin)

    @property
    def origin(self) -> str:
        return self._origin

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS credentials (
                    origin TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL,
                    PRIMARY KEY (origin, key)
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def get(self) -> str | None:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "SELECT value FROM credentials WHERE origin = ? AND key = ?",
                (self._origin, self._key),
            )
            row = cur.fetchone()
            return None if row is None else str(row["value"])
        finally:
            conn.close()

    def set(self, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO credentials (origin, key, value, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(origin, key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (self._origin, self._key, value, time.time()),
            )
            conn.commit()
        finally:
            conn.close()

    def clear(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                "DELETE FROM credentials WHERE origin = ? AND key = ?",
                (self._origin, self._key),
            )
            conn.commit()
        finally:
            conn.close()


class MemoryCredentialStorage:
    """In-process storage: lost on exit. Used by tests and ephemeral sessions."""

    def __init__(self, initial: str | None = None) -> None:
        self._value = initial

    def get(self) -> str | None:
        return self._value

    def set(self, value: str) -> None:
        self._value = value

    def clear(self) -> None:
        self._value = None
