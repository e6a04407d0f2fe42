"""
Indexer module for orchestrating reindexing.

Coordinates crawling, file index persistence and content cache
reconciliation, in the foreground or on a background thread.
"""

from .index_builder import IndexBuilder, IndexingStats, BackgroundIndexer

__all__ = [
    "IndexBuilder",
    "IndexingStats",
    "BackgroundIndexer"
]
