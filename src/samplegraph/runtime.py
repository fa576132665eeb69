"""Construction of the long-lived store from settings."""

from __future__ import annotations
import contextlib
from typing import Iterator, Optional
from loguru import logger

from samplegraph.cache import MemoryKeyValueCache, SQLiteKeyValueCache, SongStore
from samplegraph.cache.song_store import SongSource
from samplegraph.config import Settings
from samplegraph.io import GeniusClient, GeniusSource


def make_cache(settings: Settings):
    if settings.cache_backend == "memory":
        return MemoryKeyValueCache()
    return SQLiteKeyValueCache(settings.cache_path)


def make_source(settings: Settings) -> GeniusSource:
    client = GeniusClient(settings.require_genius_key(), base_url=settings.genius_base_url)
    return GeniusSource(client)


@contextlib.contextmanager
def open_store(settings: Settings, source: Optional[SongSource] = None) -> Iterator[SongStore]:
    """
    Open a store for the lifetime of a ``with`` block.

    Args:
        settings: Loaded settings
        source: Song source to use instead of the Genius API
    """
    source = source if source is not None else make_source(settings)
    store = SongStore(make_cache(settings), source, settings.key_expiry)
    logger.debug(f"Opened {settings.cache_backend} store, key expiry {settings.key_expiry}s")
    try:
        yield store
    finally:
        store.close()
