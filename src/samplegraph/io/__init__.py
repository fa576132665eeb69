"""
IO module for SampleGraph.

This module provides the Genius API client and the song sources the
store falls back to on cache misses.
"""

from .genius_client import GeniusClient
from .sources import GeniusSource, FixtureSource

__all__ = ["GeniusClient", "GeniusSource", "FixtureSource"]
