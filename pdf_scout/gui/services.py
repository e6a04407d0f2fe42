"""
Long-lived backend objects shared by every Streamlit rerun.

One content cache, one file index and one search engine live for the
whole server process, so searches never reload the cache from disk.
Each browser session searches through its own SupersedingSearch over
the shared engine, so one session never cancels another.
"""

import threading
from typing import List, Optional

from ..core import get_logger
from ..index import ContentCache, FileIndex, IndexedFile
from ..indexer import BackgroundIndexer, IndexBuilder, IndexingStats
from ..search import SearchEngine, SupersedingSearch

logger = get_logger(__name__)


class ScoutServices:
    """Backend facade used by the web interface."""

    def __init__(self):
        self.cache = ContentCache()
        self.file_index = FileIndex()
        self.builder = IndexBuilder(file_index=self.file_index, cache=self.cache)
        self.indexer = BackgroundIndexer(
            builder=self.builder,
            on_complete=self._on_indexed,
            on_error=self._on_index_error
        )
        self.engine = SearchEngine(cache=self.cache)

        self._lock = threading.Lock()
        self._files: Optional[List[IndexedFile]] = None
        self.last_index_stats: Optional[IndexingStats] = None
        self.last_index_error: Optional[Exception] = None

    @property
    def files(self) -> Optional[List[IndexedFile]]:
        """Current index, or None while the first build is running."""
        with self._lock:
            return self._files

    @property
    def indexing(self) -> bool:
        return self.indexer.is_running

    def ensure_index(self) -> None:
        """Load the persisted index, or start the initial build in the background."""
        with self._lock:
            if self._files is not None:
                return

        files = self.file_index.load()
        if files is None:
            self.indexer.start()
            return

        with self._lock:
            self._files = files

    def new_search_runner(self) -> SupersedingSearch:
        """Create a search runner for one session, backed by the shared engine."""
        return SupersedingSearch(self.engine)

    def reindex(self) -> bool:
        """Start a background rebuild. Returns False if one is already running."""
        return self.indexer.start()

    def _on_indexed(self, files: List[IndexedFile], stats: IndexingStats) -> None:
        with self._lock:
            self._files = files
            self.last_index_stats = stats
            self.last_index_error = None

    def _on_index_error(self, error: Exception) -> None:
        with self._lock:
            self.last_index_error = error
            if self._files is None:
                self._files = []
