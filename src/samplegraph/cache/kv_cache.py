"""
Key-value caches with per-key expiry.

Both backends follow the same command semantics as a Redis-style cache:
``set`` stores a value with no expiry, ``expire`` attaches a time-to-live
to an existing key, and expired keys behave as absent.
"""

from __future__ import annotations
import sqlite3
import time
import contextlib
from pathlib import Path
from typing import Optional, Dict, Callable, Tuple
from loguru import logger

from samplegraph.errors import CacheError


Clock = Callable[[], float]


class SQLiteKeyValueCache:
    """
    SQLite-backed key-value cache.

    Stores one row per key with an optional absolute expiry timestamp.
    Expired rows are ignored on read and removed by ``purge_expired``.
    """

    def __init__(self, cache_path: str | Path = "data/cache/samplegraph.db",
                 clock: Clock = time.time):
        """
        Initialize the cache.

        Args:
            cache_path: Path to the SQLite database file
            clock: Source of the current time in seconds
        """
        self.cache_path = Path(cache_path)
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        self.clock = clock
        try:
            self.conn = sqlite3.connect(str(self.cache_path))
        except sqlite3.Error as e:
            raise CacheError(f"cannot open cache at {self.cache_path}", e) from e
        self.conn.row_factory = sqlite3.Row
        self._create_schema()

    def _create_schema(self):
        with self._transaction() as cursor:
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value BLOB NOT NULL,
                    expires_at REAL  -- NULL = no expiry
                )
            """)
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_kv_expires ON kv(expires_at)")

    @contextlib.contextmanager
    def _transaction(self):
        """Context manager for database transactions; sqlite errors become CacheError."""
        try:
            cursor = self.conn.cursor()
            yield cursor
            self.conn.commit()
        except sqlite3.Error as e:
            with contextlib.suppress(sqlite3.Error):
                self.conn.rollback()
            raise CacheError("sqlite command failed", e) from e

    def _live_row(self, cursor, key: str):
        cursor.execute("""
            SELECT value FROM kv
            WHERE key = ? AND (expires_at IS NULL OR expires_at > ?)
        """, (key, self.clock()))
        return cursor.fetchone()

    def exists(self, key: str) -> bool:
        with self._transaction() as cursor:
            return self._live_row(cursor, key) is not None

    def get(self, key: str) -> Optional[bytes]:
        """Return the stored bytes, or None if the key is absent or expired."""
        with self._transaction() as cursor:
            row = self._live_row(cursor, key)
        return bytes(row["value"]) if row else None

    def set(self, key: str, value: bytes):
        with self._transaction() as cursor:
            cursor.execute("""
                INSERT OR REPLACE INTO kv (key, value, expires_at) VALUES (?, ?, NULL)
            """, (key, sqlite3.Binary(value)))
        logger.debug(f"Cached {len(value)} bytes under {key}")

    def expire(self, key: str, seconds: int) -> bool:
        """
        Set a time-to-live on a key.

        Args:
            key: The cache key
            seconds: Seconds from now until the key expires

        Returns:
            True if the key existed and now carries the expiry
        """
        with self._transaction() as cursor:
            cursor.execute("""
                UPDATE kv SET expires_at = ?
                WHERE key = ? AND (expires_at IS NULL OR expires_at > ?)
            """, (self.clock() + seconds, key, self.clock()))
            return cursor.rowcount > 0

    def purge_expired(self) -> int:
        """Delete expired rows and return how many were removed."""
        with self._transaction() as cursor:
            cursor.execute("DELETE FROM kv WHERE expires_at IS NOT NULL AND expires_at <= ?",
                           (self.clock(),))
            removed = cursor.rowcount
        if removed:
            logger.debug(f"Purged {removed} expired cache keys")
        return removed

    def get_cache_stats(self) -> Dict[str, int]:
        """Count live keys per key prefix (song, relationships, search)."""
        with self._transaction() as cursor:
            cursor.execute("""
                SELECT key FROM kv WHERE expires_at IS NULL OR expires_at > ?
            """, (self.clock(),))
            keys = [row["key"] for row in cursor.fetchall()]
        return _count_prefixes(keys)

    def close(self):
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class MemoryKeyValueCache:
    """In-process key-value cache with the same semantics as SQLiteKeyValueCache."""

    def __init__(self, clock: Clock = time.time):
        self.clock = clock
        self._data: Dict[str, Tuple[bytes, Optional[float]]] = {}

    def _live(self, key: str) -> Optional[bytes]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= self.clock():
            del self._data[key]
            return None
        return value

    def exists(self, key: str) -> bool:
        return self._live(key) is not None

    def get(self, key: str) -> Optional[bytes]:
        return self._live(key)

    def set(self, key: str, value: bytes):
        self._data[key] = (bytes(value), None)

    def expire(self, key: str, seconds: int) -> bool:
        value = self._live(key)
        if value is None:
            return False
        self._data[key] = (value, self.clock() + seconds)
        return True

    def purge_expired(self) -> int:
        before = len(self._data)
        for key in list(self._data):
            self._live(key)
        return before - len(self._data)

    def get_cache_stats(self) -> Dict[str, int]:
        return _count_prefixes([k for k in list(self._data) if self._live(k) is not None])

    def close(self):
        self._data.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _count_prefixes(keys) -> Dict[str, int]:
    stats = {"song": 0, "relationships": 0, "search": 0}
    for key in keys:
        prefix = key.split("/", 1)[0]
        stats[prefix] = stats.get(prefix, 0) + 1
    stats["total"] = len(keys)
    return stats
