"""
Song entities shared by the store, the graph builder and the cache.

All entities are immutable values with structural equality. ``to_dict`` /
``from_dict`` give the JSON shape stored in the cache, which must stay
stable for caches populated by earlier deployments.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any

from samplegraph.models.relationship_type import RelationshipType


@dataclass(frozen=True)
class SongData:
    """The slice of a Genius song record SampleGraph keeps."""

    id: int
    title: str
    artist_name: str

    @classmethod
    def from_song(cls, song: Dict[str, Any]) -> "SongData":
        """
        Project a full Genius song record.

        Args:
            song: Song record as returned by ``/songs/{id}``

        Returns:
            The song data
        """
        title = song.get("title_with_featured") or song.get("title") or ""
        artist = song.get("primary_artist") or {}
        return cls(id=int(song["id"]), title=title, artist_name=artist.get("name") or "")

    @classmethod
    def from_hit(cls, hit: Dict[str, Any]) -> "SongData":
        """Project a Genius search hit."""
        return cls.from_song(hit["result"])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SongData":
        title, artist_name = data["title"], data["artist_name"]
        if not isinstance(title, str) or not isinstance(artist_name, str):
            raise TypeError(f"song {data['id']} has non-string title or artist")
        return cls(id=int(data["id"]), title=title, artist_name=artist_name)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title, "artist_name": self.artist_name}


@dataclass(frozen=True)
class Relationship:
    """
    One outbound relationship from an implicit source song.

    The source song is whichever song the relationship was fetched for;
    only the related song is stored.
    """

    relationship_type: RelationshipType
    song: SongData

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Relationship":
        return cls(
            relationship_type=RelationshipType.parse(data["relationship_type"]),
            song=SongData.from_dict(data["song"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"relationship_type": self.relationship_type.value, "song": self.song.to_dict()}


@dataclass(frozen=True)
class GraphNode:
    """A song in a graph, with its degree of separation from the start song."""

    degree: int
    song: SongData

    @property
    def song_id(self) -> int:
        return self.song.id

    def to_dict(self) -> Dict[str, Any]:
        return {"degree": self.degree, "song": self.song.to_dict()}
