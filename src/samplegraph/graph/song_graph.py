"""
Song relationship graph using NetworkX.

Nodes are keyed by Genius song id and carry the song's degree of
separation from the traversal's start song. Edges are directed and
labelled with a RelationshipType; two songs may be joined by several
edges of different types.
"""

from __future__ import annotations
import collections
import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple
import networkx as nx
from loguru import logger

from samplegraph.models import GraphNode, RelationshipType

Edge = Tuple[int, int, RelationshipType]


class SongGraph:
    """
    Directed multigraph of songs.

    Node and edge insertion order is kept so that serialized output is
    deterministic for a deterministic store.
    """

    def __init__(self):
        self.graph = nx.MultiDiGraph()
        self._nodes: Dict[int, GraphNode] = {}
        self._edges: List[Edge] = []

    def add_node(self, node: GraphNode):
        """Add a song node; a song id can only be added once."""
        if node.song_id in self._nodes:
            raise ValueError(f"song {node.song_id} is already in the graph")
        self._nodes[node.song_id] = node
        self.graph.add_node(
            node.song_id,
            degree=node.degree,
            title=node.song.title,
            artist_name=node.song.artist_name,
        )

    def add_edge(self, src_id: int, dst_id: int, relationship_type: RelationshipType):
        self.graph.add_edge(src_id, dst_id, relationship_type=relationship_type)
        self._edges.append((src_id, dst_id, relationship_type))

    def has_edge(self, src_id: int, dst_id: int, relationship_type: RelationshipType) -> bool:
        edges = self.graph.get_edge_data(src_id, dst_id) or {}
        return any(data["relationship_type"] is relationship_type for data in edges.values())

    def node(self, song_id: int) -> GraphNode:
        return self._nodes[song_id]

    def nodes(self) -> List[GraphNode]:
        return list(self._nodes.values())

    def edges(self) -> List[Edge]:
        return list(self._edges)

    def number_of_nodes(self) -> int:
        return len(self._nodes)

    def number_of_edges(self) -> int:
        return len(self._edges)

    def __contains__(self, song_id) -> bool:
        return song_id in self._nodes

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def neighbors(self, song_id: int) -> List[Dict[str, Any]]:
        """
        Get the songs a song points to.

        Args:
            song_id: The song ID

        Returns:
            One dict per outbound edge, in insertion order
        """
        if song_id not in self._nodes:
            return []
        neighbors = []
        for src, dst, rel_type in self._edges:
            if src != song_id:
                continue
            node = self._nodes[dst]
            neighbors.append({
                "song_id": dst,
                "title": node.song.title,
                "artist_name": node.song.artist_name,
                "degree": node.degree,
                "relationship_type": rel_type,
            })
        return neighbors

    def get_path(self, src_id: int, dst_id: int) -> Optional[List[int]]:
        """
        Find the shortest directed path between two songs.

        Returns:
            List of song IDs forming the path, or None if no path exists
        """
        try:
            return nx.shortest_path(self.graph, src_id, dst_id)
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return None

    def get_graph_stats(self) -> Dict[str, Any]:
        """Get statistics about the graph."""
        by_degree = collections.Counter(node.degree for node in self._nodes.values())
        by_type = collections.Counter(rel_type.value for _, _, rel_type in self._edges)
        return {
            "nodes": self.number_of_nodes(),
            "edges": self.number_of_edges(),
            "max_degree": max(by_degree) if by_degree else 0,
            "nodes_by_degree": dict(sorted(by_degree.items())),
            "edges_by_type": dict(by_type),
        }

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the directed-graph document the web client reads.

        Edges reference nodes by their insertion position::

            {"nodes": [{"degree": 0, "song": {...}}, ...],
             "node_holes": [],
             "edge_property": "directed",
             "edges": [[0, 1, "samples"], ...]}
        """
        index = {song_id: i for i, song_id in enumerate(self._nodes)}
        return {
            "nodes": [node.to_dict() for node in self._nodes.values()],
            "node_holes": [],
            "edge_property": "directed",
            "edges": [[index[src], index[dst], rel_type.value] for src, dst, rel_type in self._edges],
        }

    def export_to_json(self, output_path: str | Path):
        """
        Export the graph to JSON format.

        Args:
            output_path: Path to save the JSON file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Graph exported to {output_path}")
