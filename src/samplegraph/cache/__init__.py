"""
Cache module for SampleGraph.

This module provides the key-value cache backends and the cache-aside
song store that reads through them, reducing repeated Genius API calls.
"""

from .kv_cache import SQLiteKeyValueCache, MemoryKeyValueCache
from .song_store import SongStore

__all__ = ["SQLiteKeyValueCache", "MemoryKeyValueCache", "SongStore"]
