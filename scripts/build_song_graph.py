#!/usr/bin/env python
"""
Build the graph of songs related to a seed song by samples and interpolations.

Usage:
    # Basic usage - graph two hops out from a song
    SONG_ID=378195 python scripts/build_song_graph.py

    # Custom degree and output file
    SONG_ID=378195 DEGREE=3 OUTPUT=data/graphs/kanye.json python scripts/build_song_graph.py

    # Offline, from a fixture file instead of the Genius API
    SONG_ID=1 FIXTURES=tests/fixtures/songs.yaml python scripts/build_song_graph.py
"""

from __future__ import annotations
import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from loguru import logger

from samplegraph.config import load_settings, parse_degree
from samplegraph.errors import SampleGraphError
from samplegraph.graph import GraphBuilder
from samplegraph.io import FixtureSource
from samplegraph.runtime import open_store


def main():
    """Main entry point for building song graphs."""
    load_dotenv()

    song_id = os.getenv("SONG_ID")
    if not song_id or not song_id.isdigit():
        logger.error("SONG_ID environment variable is required (a Genius song id)")
        print("\nUsage:")
        print("  SONG_ID=378195 python scripts/build_song_graph.py")
        print("\nOptional parameters:")
        print("  DEGREE=2             # Degrees of separation (default: from config)")
        print("  OUTPUT=path          # JSON output (default: data/graphs/graph_<id>.json)")
        print("  FIXTURES=path        # Use a JSON/YAML fixture file instead of Genius")
        sys.exit(1)

    try:
        settings = load_settings(os.getenv("CONFIG_PATH", "configs/config.yaml"))
        degree = parse_degree(os.getenv("DEGREE", settings.default_degree))
    except SampleGraphError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    output = Path(os.getenv("OUTPUT", f"data/graphs/graph_{song_id}.json"))
    fixtures = os.getenv("FIXTURES")
    source = FixtureSource.from_file(fixtures) if fixtures else None

    logger.info("=" * 60)
    logger.info("🎵 Building Song Graph")
    logger.info("=" * 60)
    logger.info(f"Seed Song: {song_id}")
    logger.info(f"Degree: {degree}")
    logger.info(f"Cache: {settings.cache_backend} ({settings.cache_path})")
    logger.info("=" * 60)

    try:
        with open_store(settings, source) as store:
            graph = GraphBuilder(store).build(int(song_id), degree)
    except (SampleGraphError, ValueError) as e:
        logger.error(f"Error building graph: {e}")
        sys.exit(1)

    stats = graph.get_graph_stats()
    logger.info(f"  • Nodes: {stats['nodes']}")
    logger.info(f"  • Edges: {stats['edges']}")
    for rel_type, count in stats["edges_by_type"].items():
        logger.info(f"  • {rel_type}: {count}")

    logger.info("\n🔗 Direct Relationships:")
    for neighbor in graph.neighbors(int(song_id)):
        logger.info(f"  {neighbor['relationship_type']} → {neighbor['title']} by {neighbor['artist_name']}")

    graph.export_to_json(output)


if __name__ == "__main__":
    main()
