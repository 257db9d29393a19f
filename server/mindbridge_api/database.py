"""Key-value storage areas backing the MindBridge state.

Two tiers mirror the browser storage the app was designed around:
a durable SQLite-backed area ("remember me", users, preferences) and a
per-session area that lives only as long as the process.
"""
import json
import os
import sqlite3
import threading
from contextlib import contextmanager
from typing import Any, Generator, Optional
import logging

from .config import get_settings
from .errors import StorageParseError

log = logging.getLogger(__name__)


class StorageArea:
    """String-keyed, string-valued store with JSON helpers."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def get_json(self, key: str, default: Any = None) -> Any:
        """
        Decode the JSON value stored under key.
        Returns default when the key is absent; raises StorageParseError
        when the stored text cannot be decoded.
        """
        raw = self.get(key)
        if raw is None or not raw.strip():
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageParseError(key, str(e)) from e

    def set_json(self, key: str, value: Any) -> None:
        self.set(key, json.dumps(value, ensure_ascii=False))


class MemoryStorage(StorageArea):
    """Per-session tier; cleared when the process exits."""

    def __init__(self):
        self._items: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class SQLiteStorage(StorageArea):
    """
    Durable tier stored in a single SQLite table.
    Opens a short-lived connection per operation.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._init_db()

    def _init_db(self) -> None:
        parent = os.path.dirname(self.db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with self._connect() as conn:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS storage (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM storage WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO storage (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def remove(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM storage WHERE key = ?", (key,))

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM storage")


class DatabaseManager:
    """
    Holds both storage tiers.

    `local` survives restarts; `session` is dropped with the process,
    like a browser's sessionStorage.
    """

    def __init__(self, settings=None, local: Optional[StorageArea] = None, session: Optional[StorageArea] = None):
        self.settings = settings or get_settings()
        self.local = local if local is not None else SQLiteStorage(self.settings.db_path)
        self.session = session if session is not None else MemoryStorage()
        log.debug("Storage ready (durable tier: %s)", getattr(self.local, "db_path", "memory"))
