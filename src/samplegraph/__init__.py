"""
SampleGraph: graphs of sampled and interpolated songs.
"""

__version__ = "0.1.0"
