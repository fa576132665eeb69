#!/usr/bin/env python
"""
Search Genius for songs, through the cache.

Usage:
    QUERY="kanye west stronger" python scripts/search_songs.py
"""

from __future__ import annotations
import os
import sys
from dotenv import load_dotenv
from loguru import logger

from samplegraph.config import load_settings
from samplegraph.errors import SampleGraphError
from samplegraph.io import FixtureSource
from samplegraph.runtime import open_store


def main():
    load_dotenv()

    query = os.getenv("QUERY", "")
    if not query:
        logger.error("QUERY environment variable is required")
        sys.exit(1)

    fixtures = os.getenv("FIXTURES")
    try:
        settings = load_settings(os.getenv("CONFIG_PATH", "configs/config.yaml"))
        source = FixtureSource.from_file(fixtures) if fixtures else None
        with open_store(settings, source) as store:
            songs = store.search(query)
    except SampleGraphError as e:
        logger.error(f"Search failed: {e}")
        sys.exit(1)

    logger.info(f"🔍 {len(songs)} results for '{query}'")
    for i, song in enumerate(songs, 1):
        logger.info(f"  {i}. {song.title} by {song.artist_name} (id {song.id})")


if __name__ == "__main__":
    main()
