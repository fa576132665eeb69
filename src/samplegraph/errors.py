"""
Error types raised by SampleGraph.

Every failure surfaced by the store or the graph builder is one of three
kinds: the upstream metadata source failed, the key-value cache failed, or
a cached payload could not be decoded. The underlying exception is kept on
``cause`` and chained with ``raise ... from``.
"""

from __future__ import annotations
from typing import Optional


class SampleGraphError(Exception):
    """Base class for SampleGraph errors."""

    kind = "error"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self):
        if self.cause is not None:
            return f"{self.kind} error: {self.message} ({self.cause})"
        return f"{self.kind} error: {self.message}"


class UpstreamError(SampleGraphError):
    """The external metadata source rejected, timed out, or failed a request."""

    kind = "upstream"


class SongNotFound(UpstreamError):
    """The external metadata source has no song with the requested id."""

    def __init__(self, song_id: int, cause: Optional[BaseException] = None):
        super().__init__(f"song {song_id} not found", cause)
        self.song_id = song_id


class CacheError(SampleGraphError):
    """A command against the key-value cache failed."""

    kind = "cache"


class DataError(SampleGraphError):
    """A cached payload could not be decoded into the expected entity."""

    kind = "data"


class ConfigError(SampleGraphError):
    """Required configuration is missing or invalid."""

    kind = "config"
