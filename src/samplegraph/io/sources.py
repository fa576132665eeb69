"""
Song sources consumed by the store on cache misses.

A source is anything with ``get_song``, ``get_relationships`` and
``search``. ``GeniusSource`` talks to the live API; ``FixtureSource`` serves
song records from memory and backs tests and offline runs.
"""

from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping
import yaml
from loguru import logger

from samplegraph.errors import SongNotFound
from samplegraph.io.genius_client import GeniusClient


class GeniusSource:
    """Production source backed by the Genius API."""

    def __init__(self, client: GeniusClient):
        self.client = client

    def get_song(self, song_id: int) -> Dict[str, Any]:
        return self.client.get_song(song_id)

    def get_relationships(self, song_id: int) -> List[Dict[str, Any]]:
        """Raw relationship groups of a song: every type, both directions."""
        song = self.client.get_song(song_id)
        return song.get("song_relationships") or []

    def search(self, query: str) -> List[Dict[str, Any]]:
        return self.client.search(query)


class FixtureSource:
    """
    Source serving Genius-shaped song records from an id -> record mapping.

    Records use the same fields as the API: ``id``, ``title``,
    ``title_with_featured``, ``primary_artist.name`` and optionally
    ``song_relationships``.
    """

    def __init__(self, records: Mapping[int, Dict[str, Any]]):
        self.records = {int(song_id): record for song_id, record in records.items()}

    @classmethod
    def from_file(cls, path: str | Path) -> "FixtureSource":
        """
        Load fixtures from a JSON or YAML file.

        The file holds either a mapping of id to record or a list of records.
        """
        path = Path(path)
        with open(path, "r") as f:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        if isinstance(data, list):
            data = {record["id"]: record for record in data}
        logger.info(f"Loaded {len(data)} fixture songs from {path}")
        return cls(data)

    def get_song(self, song_id: int) -> Dict[str, Any]:
        try:
            return self.records[song_id]
        except KeyError:
            raise SongNotFound(song_id) from None

    def get_relationships(self, song_id: int) -> List[Dict[str, Any]]:
        return self.get_song(song_id).get("song_relationships") or []

    def search(self, query: str) -> List[Dict[str, Any]]:
        """Match the query against title and artist name, case-insensitively."""
        needle = query.lower()
        hits = []
        for song_id in sorted(self.records):
            record = self.records[song_id]
            haystack = " ".join([
                record.get("title_with_featured") or record.get("title") or "",
                (record.get("primary_artist") or {}).get("name", ""),
            ]).lower()
            if needle and needle in haystack:
                hits.append({"type": "song", "index": "song", "result": record})
        return hits
