"""
Models module for SampleGraph.

This module provides the relationship taxonomy and the song entities
passed between the store and the graph builder.
"""

from .relationship_type import RelationshipType
from .song import SongData, Relationship, GraphNode

__all__ = ["RelationshipType", "SongData", "Relationship", "GraphNode"]
