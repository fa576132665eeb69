"""
Graph module for SampleGraph.

This module provides the song relationship graph and the breadth-first
builder that assembles it from the song store.
"""

from .song_graph import SongGraph
from .builder import GraphBuilder

__all__ = ["SongGraph", "GraphBuilder"]
