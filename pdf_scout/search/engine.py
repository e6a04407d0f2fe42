"""
Substring search over cached first-page text.

A search pass refreshes missing or stale cache entries through the text
extractor, using a bounded thread pool, then filters the index in its
original order by case-insensitive substring containment. The cache is
saved once per pass.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence, Tuple

from ..core import get_config, get_logger, PreconditionNotMet, SearchCancelled
from ..extraction import TextExtractor, ExtractionResult, ExtractionStatus
from ..index import CacheEntry, ContentCache, IndexedFile
from .models import SearchStats

logger = get_logger(__name__)


class SearchEngine:
    """
    Content search engine over an index of PDF files.

    Extraction runs on up to ``max_workers`` threads. Workers only return
    extraction results; the calling thread is the single writer of the
    cache, and the result list follows index order regardless of which
    extraction finished first.
    """

    def __init__(
        self,
        cache: ContentCache = None,
        extractor: TextExtractor = None,
        max_workers: int = None,
        min_query_length: int = None
    ):
        """
        Initialize the search engine.

        Args:
            cache: Content cache to read and refresh.
            extractor: Object providing extract_first_page(path) -> ExtractionResult.
            max_workers: Concurrent extractions per pass.
            min_query_length: Shortest trimmed query that triggers a search.
        """
        config = get_config()

        self.cache = cache if cache is not None else ContentCache()
        self.extractor = extractor or TextExtractor()
        self.max_workers = max_workers or config.search.max_workers
        self.min_query_length = min_query_length or config.search.min_query_length

        self.last_stats: Optional[SearchStats] = None

    def check_query(self, query: str) -> str:
        """
        Validate a query and return its lowercased form.

        Raises:
            PreconditionNotMet: If the trimmed query is too short.
        """
        if query is None or len(query.strip()) < self.min_query_length:
            raise PreconditionNotMet(
                f"Query must be at least {self.min_query_length} characters",
                query=query
            )
        return query.lower()

    def search(
        self,
        files: Sequence[IndexedFile],
        query: str,
        cancel_event: threading.Event = None
    ) -> List[IndexedFile]:
        """
        Return the files whose first-page text contains ``query``.

        Args:
            files: The file index, in the order results should follow.
            query: Text to look for, case-insensitively.
            cancel_event: When set, the pass stops and raises SearchCancelled.

        Returns:
            Matching files as a subsequence of ``files``. Empty without any
            extraction work when the query is too short.

        Raises:
            SearchCancelled: If ``cancel_event`` was set during the pass.
        """
        results, _ = self.search_with_stats(files, query, cancel_event=cancel_event)
        return results

    def search_with_stats(
        self,
        files: Sequence[IndexedFile],
        query: str,
        cancel_event: threading.Event = None
    ) -> Tuple[List[IndexedFile], SearchStats]:
        """
        Like search(), but also return the statistics of this pass.

        ``last_stats`` is shared by every caller of the engine; callers that
        search from several threads read their own pass's stats from here.
        """
        try:
            needle = self.check_query(query)
        except PreconditionNotMet as e:
            logger.debug(f"No search to run: {e.message}")
            stats = SearchStats(query=query or "", total_files=len(files))
            self.last_stats = stats
            return [], stats

        start_time = time.perf_counter()
        stats = SearchStats(query=query, total_files=len(files))
        self.last_stats = stats

        stale = [f for f in files if not self.cache.is_valid(f)]

        try:
            if stale:
                self._refresh(stale, stats, cancel_event)
        except SearchCancelled:
            stats.cancelled = True
            stats.execution_time_ms = (time.perf_counter() - start_time) * 1000
            # Entries extracted before cancellation are still valid.
            self.cache.save()
            raise

        results = []
        for indexed in files:
            entry = self.cache.get(indexed.path)
            if entry is not None and needle in entry.text:
                results.append(indexed)

        self.cache.save()

        stats.total_results = len(results)
        stats.execution_time_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"Search '{query}': {stats.total_results}/{stats.total_files} matches, "
            f"{stats.extracted} extracted, {stats.failed} failed "
            f"({stats.execution_time_ms:.0f} ms)"
        )
        return results, stats

    def _refresh(
        self,
        stale: List[IndexedFile],
        stats: SearchStats,
        cancel_event: Optional[threading.Event]
    ) -> None:
        """Extract stale files concurrently and write their entries."""
        logger.debug(f"Refreshing {len(stale)} stale cache entries")

        executor = ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(stale)),
            thread_name_prefix="scout-extract"
        )
        futures = {}

        try:
            futures = {
                executor.submit(self._extract, indexed, cancel_event): indexed
                for indexed in stale
            }

            for future in as_completed(futures):
                if cancel_event is not None and cancel_event.is_set():
                    raise SearchCancelled("Search superseded", query=stats.query)

                try:
                    indexed, result = future.result()
                except Exception as e:
                    indexed = futures[future]
                    logger.error(f"Extraction crashed for {indexed.path}: {e}")
                    result = ExtractionResult.failed(str(e) or type(e).__name__)
                if result is None:
                    continue

                self.cache.put(indexed.path, CacheEntry.from_extraction(indexed, result))
                stats.extracted += 1
                if result.status is ExtractionStatus.FAILED:
                    stats.failed += 1
        finally:
            for future in futures:
                future.cancel()
            executor.shutdown(wait=True)

    def _extract(
        self,
        indexed: IndexedFile,
        cancel_event: Optional[threading.Event]
    ) -> Tuple[IndexedFile, Optional[ExtractionResult]]:
        if cancel_event is not None and cancel_event.is_set():
            return indexed, None
        return indexed, self.extractor.extract_first_page(indexed.path)


class SupersedingSearch:
    """
    Runs searches where each new query cancels the one still in flight.

    Meant for callers that search on every keystroke: an obsolete pass
    stops early instead of finishing and overwriting fresher results.
    Only searches started through the same instance supersede each
    other, so concurrent users each get their own instance over one
    shared engine.
    """

    def __init__(self, engine: SearchEngine = None):
        self.engine = engine or SearchEngine()
        self.last_stats: Optional[SearchStats] = None
        self._lock = threading.Lock()
        self._current: Optional[threading.Event] = None

    def run(self, files: Sequence[IndexedFile], query: str) -> List[IndexedFile]:
        """
        Cancel any in-flight search, then search for ``query``.

        The statistics of a completed run are kept in ``last_stats``.

        Raises:
            SearchCancelled: If this search is itself superseded.
        """
        event = threading.Event()

        with self._lock:
            if self._current is not None:
                self._current.set()
            self._current = event

        try:
            results, stats = self.engine.search_with_stats(files, query, cancel_event=event)
        finally:
            with self._lock:
                if self._current is event:
                    self._current = None

        self.last_stats = stats
        return results

    def cancel(self) -> None:
        """Cancel the in-flight search, if any."""
        with self._lock:
            if self._current is not None:
                self._current.set()
