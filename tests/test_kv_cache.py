"""
Tests for the key-value cache backends.
"""

import tempfile
import shutil
from pathlib import Path
import pytest

from samplegraph.cache import MemoryKeyValueCache, SQLiteKeyValueCache
from samplegraph.errors import CacheError


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self):
        return self.now


class KeyValueCacheContract:
    """Behaviour shared by every backend; subclasses provide make_cache."""

    def test_missing_key(self):
        """A missing key does not exist and reads as None."""
        assert not self.cache.exists("song/1")
        assert self.cache.get("song/1") is None

    def test_set_and_get(self):
        """Stored bytes come back unchanged."""
        self.cache.set("song/1", b'{"id": 1}')
        assert self.cache.exists("song/1")
        assert self.cache.get("song/1") == b'{"id": 1}'

    def test_expire(self):
        """A key disappears once its expiry passes."""
        self.cache.set("song/1", b"x")
        assert self.cache.expire("song/1", 60)

        self.clock.now += 59
        assert self.cache.exists("song/1")

        self.clock.now += 1
        assert not self.cache.exists("song/1")
        assert self.cache.get("song/1") is None

    def test_expire_missing_key(self):
        """Expiring a missing key reports False."""
        assert not self.cache.expire("song/404", 60)

    def test_set_clears_expiry(self):
        """Overwriting a key drops its expiry."""
        self.cache.set("search/x", b"a")
        self.cache.expire("search/x", 10)
        self.cache.set("search/x", b"b")

        self.clock.now += 100
        assert self.cache.get("search/x") == b"b"

    def test_purge_and_stats(self):
        """Purging drops expired keys; stats count live keys by prefix."""
        self.cache.set("song/1", b"a")
        self.cache.set("song/2", b"b")
        self.cache.set("relationships/1", b"[]")
        self.cache.set("search/foo", b"[]")
        self.cache.expire("song/2", 5)

        self.clock.now += 10
        assert self.cache.purge_expired() == 1

        stats = self.cache.get_cache_stats()
        assert stats == {"song": 1, "relationships": 1, "search": 1, "total": 3}


class TestMemoryKeyValueCache(KeyValueCacheContract):

    def setup_method(self):
        self.clock = FakeClock()
        self.cache = MemoryKeyValueCache(clock=self.clock)

    def teardown_method(self):
        self.cache.close()


class TestSQLiteKeyValueCache(KeyValueCacheContract):

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.cache_path = Path(self.temp_dir) / "cache" / "test_cache.db"
        self.clock = FakeClock()
        self.cache = SQLiteKeyValueCache(self.cache_path, clock=self.clock)

    def teardown_method(self):
        self.cache.close()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_creates_database(self):
        """The database file is created on open."""
        assert self.cache_path.exists()

    def test_persists_across_connections(self):
        """Values survive closing and reopening the database."""
        self.cache.set("song/1", b"persisted")
        self.cache.close()

        with SQLiteKeyValueCache(self.cache_path, clock=self.clock) as reopened:
            assert reopened.get("song/1") == b"persisted"

    def test_sqlite_errors_become_cache_errors(self):
        """sqlite3 failures surface as CacheError."""
        self.cache.conn.execute("DROP TABLE kv")
        with pytest.raises(CacheError):
            self.cache.exists("song/1")
