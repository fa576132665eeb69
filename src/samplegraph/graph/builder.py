"""
Bounded breadth-first construction of song graphs.

Starting from one song, the builder follows relevant relationships
through the store until it reaches the requested degree of separation.
"""

from __future__ import annotations
import collections
from typing import Dict, NamedTuple
from loguru import logger

from samplegraph.cache.song_store import SongStore
from samplegraph.graph.song_graph import SongGraph
from samplegraph.models import GraphNode, Relationship


class QueueItem(NamedTuple):
    """A song waiting to be expanded."""

    degree: int
    song_id: int
    node: GraphNode


class GraphBuilder:
    """
    Builds a SongGraph around a start song using breadth-first search.

    Every song id maps to exactly one node, created at the degree it was
    first discovered at. A store failure at any point aborts the whole
    build; no partial graph is returned.
    """

    def __init__(self, store: SongStore):
        self.store = store

    def build(self, start_id: int, degree: int) -> SongGraph:
        """
        Build the graph of songs within ``degree`` hops of a start song.

        Args:
            start_id: Genius ID of the start song
            degree: Maximum degree of separation from the start song

        Returns:
            The graph. With ``degree == 0`` it holds only the start song.
        """
        if degree < 0:
            raise ValueError(f"degree must be >= 0, got {degree}")

        logger.info(f"Building graph from song {start_id}, degree={degree}")

        graph = SongGraph()
        visited: Dict[int, GraphNode] = {}
        queue = collections.deque()

        start = GraphNode(0, self.store.song(start_id))
        graph.add_node(start)
        visited[start_id] = start
        queue.append(QueueItem(0, start_id, start))

        while queue:
            current = queue.popleft()
            if current.degree >= degree:
                continue

            next_degree = current.degree + 1
            relationships = self.store.relationships(current.song_id)
            logger.debug(f"Expanding song {current.song_id} (degree {current.degree}): "
                         f"{len(relationships)} relationships")

            for relationship in relationships:
                target_id = relationship.song.id
                if target_id not in visited:
                    node = GraphNode(next_degree, relationship.song)
                    graph.add_node(node)
                    visited[target_id] = node
                    graph.add_edge(current.song_id, target_id, relationship.relationship_type)
                    if next_degree < degree:
                        queue.append(QueueItem(next_degree, target_id, node))
                elif not self._seen_from_other_side(graph, current.song_id, relationship):
                    graph.add_edge(current.song_id, target_id, relationship.relationship_type)

        logger.success(f"Graph built: {graph.number_of_nodes()} nodes, "
                       f"{graph.number_of_edges()} edges")
        return graph

    @staticmethod
    def _seen_from_other_side(graph: SongGraph, song_id: int, relationship: Relationship) -> bool:
        # "A samples B" fetched for A and "B sampled_in A" fetched for B are one relationship.
        return graph.has_edge(relationship.song.id, song_id, relationship.relationship_type.invert())
