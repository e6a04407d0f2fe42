"""
Index module for PDF Scout.

Provides the crawler, the persisted file index and the persisted
content cache, along with the records they exchange.
"""

from .models import IndexedFile, CacheEntry
from .crawler import Crawler, CrawlStats
from .file_index import FileIndex
from .content_cache import ContentCache

__all__ = [
    "IndexedFile",
    "CacheEntry",
    "Crawler",
    "CrawlStats",
    "FileIndex",
    "ContentCache"
]
