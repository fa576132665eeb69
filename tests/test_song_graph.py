"""
Tests for the SongGraph value.
"""

import json
import tempfile
import shutil
from pathlib import Path
import pytest

from samplegraph.graph import SongGraph
from samplegraph.models import GraphNode, RelationshipType, SongData


class TestSongGraph:
    """Tests for SongGraph."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.graph = SongGraph()
        self.graph.add_node(GraphNode(0, SongData(10, "Center", "A")))
        self.graph.add_node(GraphNode(1, SongData(20, "Sampled", "B")))
        self.graph.add_node(GraphNode(2, SongData(30, "Far", "C")))
        self.graph.add_edge(10, 20, RelationshipType.SAMPLES)
        self.graph.add_edge(20, 30, RelationshipType.INTERPOLATED_BY)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_duplicate_node_rejected(self):
        """Adding a song twice raises ValueError."""
        with pytest.raises(ValueError):
            self.graph.add_node(GraphNode(3, SongData(20, "Again", "B")))

    def test_has_edge_checks_type(self):
        """has_edge matches direction and relationship type."""
        assert self.graph.has_edge(10, 20, RelationshipType.SAMPLES)
        assert not self.graph.has_edge(10, 20, RelationshipType.INTERPOLATES)
        assert not self.graph.has_edge(20, 10, RelationshipType.SAMPLES)

    def test_repeated_edges_are_counted(self):
        """Repeated edges are all stored."""
        self.graph.add_edge(10, 20, RelationshipType.SAMPLES)
        assert self.graph.number_of_edges() == 3
        assert self.graph.graph.number_of_edges() == 3

    def test_to_dict_uses_insertion_indices(self):
        """Edges refer to nodes by insertion index."""
        data = self.graph.to_dict()

        assert data["edge_property"] == "directed"
        assert data["node_holes"] == []
        assert data["nodes"][0] == {"degree": 0, "song": {"id": 10, "title": "Center", "artist_name": "A"}}
        assert data["edges"] == [[0, 1, "samples"], [1, 2, "interpolated_by"]]

    def test_get_path(self):
        """Paths follow edge direction."""
        assert self.graph.get_path(10, 30) == [10, 20, 30]
        assert self.graph.get_path(30, 10) is None
        assert self.graph.get_path(10, 999) is None

    def test_neighbors(self):
        """Neighbors lists outgoing relationships."""
        neighbors = self.graph.neighbors(10)
        assert len(neighbors) == 1
        assert neighbors[0]["song_id"] == 20
        assert neighbors[0]["relationship_type"] is RelationshipType.SAMPLES
        assert self.graph.neighbors(999) == []

    def test_stats(self):
        """Stats count nodes by degree and edges by type."""
        stats = self.graph.get_graph_stats()
        assert stats["nodes"] == 3
        assert stats["edges"] == 2
        assert stats["max_degree"] == 2
        assert stats["nodes_by_degree"] == {0: 1, 1: 1, 2: 1}
        assert stats["edges_by_type"] == {"samples": 1, "interpolated_by": 1}

    def test_export_to_json(self):
        """The exported file matches to_dict."""
        path = Path(self.temp_dir) / "graphs" / "graph.json"
        self.graph.export_to_json(path)

        with open(path) as f:
            assert json.load(f) == self.graph.to_dict()
