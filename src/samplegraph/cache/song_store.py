"""
Cache-aside access to song data.

``SongStore`` answers song, relationship and search lookups from a
key-value cache and falls back to the metadata source on a miss, writing
the fresh value back with the configured expiry. Cached payloads are JSON
and use the keys ``song/<id>``, ``relationships/<id>`` and
``search/<query>``.
"""

from __future__ import annotations
import json
from typing import Any, Callable, List, Optional, Protocol, TypeVar
from loguru import logger

from samplegraph.errors import DataError, UpstreamError
from samplegraph.models import Relationship, RelationshipType, SongData


T = TypeVar("T")


class KeyValueCache(Protocol):
    """What the store needs from a cache backend."""

    def exists(self, key: str) -> bool: ...

    def get(self, key: str) -> Optional[bytes]: ...

    def set(self, key: str, value: bytes) -> Any: ...

    def expire(self, key: str, seconds: int) -> Any: ...


class SongSource(Protocol):
    """What the store needs from a metadata source."""

    def get_song(self, song_id: int) -> dict: ...

    def get_relationships(self, song_id: int) -> List[dict]: ...

    def search(self, query: str) -> List[dict]: ...


def song_key(song_id: int) -> str:
    return f"song/{song_id}"


def relationships_key(song_id: int) -> str:
    return f"relationships/{song_id}"


def search_key(query: str) -> str:
    return f"search/{query}"


class SongStore:
    """
    Read-through store over a key-value cache and a song source.

    Nothing is retried or locked here. Concurrent misses on the same key
    each fetch from the source and write; the last write wins.
    """

    def __init__(self, cache: KeyValueCache, source: SongSource, key_expiry: int):
        """
        Initialize the store.

        Args:
            cache: Key-value cache backend
            source: Metadata source used on cache misses
            key_expiry: Seconds a populated key lives in the cache
        """
        self.cache = cache
        self.source = source
        self.key_expiry = key_expiry

    def song(self, song_id: int) -> SongData:
        """Return the song with the given Genius id."""
        return self._read_through(
            song_key(song_id),
            compute=lambda: self._project_song(self.source.get_song(song_id)),
            encode=lambda song: song.to_dict(),
            decode=SongData.from_dict,
        )

    def relationships(self, song_id: int) -> List[Relationship]:
        """Return the relevant relationships of a song, in source order."""
        return self._read_through(
            relationships_key(song_id),
            compute=lambda: self._collect_relationships(song_id),
            encode=lambda rels: [r.to_dict() for r in rels],
            decode=lambda data: [Relationship.from_dict(r) for r in data],
        )

    def search(self, query: str) -> List[SongData]:
        """Return the songs matching a free-text query, in source order."""
        return self._read_through(
            search_key(query),
            compute=lambda: [self._project_hit(hit) for hit in self.source.search(query)],
            encode=lambda songs: [s.to_dict() for s in songs],
            decode=lambda data: [SongData.from_dict(s) for s in data],
        )

    def _read_through(self, key: str, compute: Callable[[], T],
                      encode: Callable[[T], Any], decode: Callable[[Any], T]) -> T:
        if self.cache.exists(key):
            logger.debug(f"Cache hit for {key}")
            payload = self.cache.get(key)
            if payload is None:
                raise DataError(f"cached value for {key} disappeared before it was read")
            try:
                return decode(json.loads(payload))
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                raise DataError(f"cached value for {key} is malformed", e) from e

        logger.debug(f"Cache miss for {key}")
        value = compute()
        try:
            payload = json.dumps(encode(value)).encode("utf-8")
        except (ValueError, TypeError) as e:
            raise DataError(f"cannot serialize value for {key}", e) from e
        self.cache.set(key, payload)
        self.cache.expire(key, self.key_expiry)
        return value

    def _collect_relationships(self, song_id: int) -> List[Relationship]:
        relationships = []
        for group in self.source.get_relationships(song_id):
            rel_type = RelationshipType.parse(group.get("relationship_type"))
            if not rel_type.is_relevant():
                continue
            for song in group.get("songs") or []:
                if song is None:
                    logger.warning(f"Skipping empty {rel_type.value} entry for song {song_id}")
                    continue
                relationships.append(Relationship(rel_type, self._project_song(song)))
        return relationships

    @staticmethod
    def _project_song(record: dict) -> SongData:
        try:
            return SongData.from_song(record)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise UpstreamError("malformed song record from source", e) from e

    @staticmethod
    def _project_hit(hit: dict) -> SongData:
        try:
            return SongData.from_hit(hit)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise UpstreamError("malformed search hit from source", e) from e

    def close(self):
        """Close the underlying cache, if it can be closed."""
        close = getattr(self.cache, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
