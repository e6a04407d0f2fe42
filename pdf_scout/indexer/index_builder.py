"""
Indexing pipeline for PDF Scout.

Rebuilds the file index from the configured roots, reconciles the content
cache with the new index, and can run the whole rebuild on a background
thread so an interactive caller stays responsive.
"""

import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from ..core import get_config, get_logger
from ..index import ContentCache, FileIndex, IndexedFile

logger = get_logger(__name__)


@dataclass
class IndexingStats:
    """Statistics from an indexing run."""
    roots: List[str] = field(default_factory=list)
    files_indexed: int = 0
    directories_visited: int = 0
    cache_entries_pruned: int = 0
    duration_ms: float = 0.0
    skipped_paths: List[str] = field(default_factory=list)


class IndexBuilder:
    """
    Orchestrates a full reindex.

    The file index is replaced wholesale; cache entries for paths that
    are no longer indexed are dropped so the cache does not grow forever.
    """

    def __init__(
        self,
        roots: Sequence[Union[str, Path]] = None,
        file_index: FileIndex = None,
        cache: ContentCache = None
    ):
        """
        Initialize the index builder.

        Args:
            roots: Directories to crawl. Defaults to config value.
            file_index: File index to rebuild.
            cache: Content cache to reconcile after each rebuild.
        """
        config = get_config()

        self.roots = list(roots) if roots is not None else list(config.crawl.roots)
        self.file_index = file_index or FileIndex()
        self.cache = cache if cache is not None else ContentCache()

    def rebuild(self, roots: Sequence[Union[str, Path]] = None) -> IndexingStats:
        """
        Crawl, persist the new index and prune the content cache.

        Args:
            roots: Override the configured roots for this run.

        Returns:
            IndexingStats for the run.
        """
        roots = list(roots) if roots is not None else self.roots
        start_time = time.perf_counter()

        logger.info(f"Rebuilding index for {len(roots)} roots")

        files = self.file_index.build(roots)
        crawl_stats = self.file_index.last_stats

        pruned = self.cache.prune(f.path for f in files)
        if pruned:
            self.cache.save()

        stats = IndexingStats(
            roots=[str(root) for root in roots],
            files_indexed=len(files),
            directories_visited=crawl_stats.directories_visited,
            cache_entries_pruned=pruned,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            skipped_paths=list(crawl_stats.skipped_paths)
        )

        logger.info(
            f"Index rebuilt: {stats.files_indexed} files, "
            f"{len(stats.skipped_paths)} skipped paths, "
            f"{stats.cache_entries_pruned} cache entries pruned "
            f"({stats.duration_ms:.0f} ms)"
        )
        return stats

    def load_or_build(self) -> List[IndexedFile]:
        """Return the persisted index, building it first if none exists."""
        files = self.file_index.load()

        if files is None:
            logger.info("No file index found, building initial index")
            self.rebuild()
            files = self.file_index.load() or []

        return files


class BackgroundIndexer:
    """
    Runs IndexBuilder.rebuild on a daemon thread.

    ``on_complete(files, stats)`` or ``on_error(exc)`` is called from the
    worker thread when the rebuild ends. Only one rebuild runs at a time.
    """

    def __init__(
        self,
        builder: IndexBuilder = None,
        on_complete: Callable[[List[IndexedFile], IndexingStats], None] = None,
        on_error: Callable[[Exception], None] = None
    ):
        self.builder = builder or IndexBuilder()
        self.on_complete = on_complete
        self.on_error = on_error

        self.files: Optional[List[IndexedFile]] = None
        self.stats: Optional[IndexingStats] = None
        self.error: Optional[Exception] = None

        self._thread: Optional[threading.Thread] = None
        self._done = threading.Event()
        self._lock = threading.Lock()

    def start(self, roots: Sequence[Union[str, Path]] = None) -> bool:
        """
        Start a rebuild in the background.

        Returns:
            True if started, False if a rebuild is already running.
        """
        with self._lock:
            if self.is_running:
                logger.info("Reindex already in progress")
                return False

            self.error = None
            self._done.clear()
            self._thread = threading.Thread(
                target=self._run,
                args=(roots,),
                name="BackgroundIndexer",
                daemon=True
            )
            self._thread.start()

        logger.info("Background reindex started")
        return True

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def wait(self, timeout: float = None) -> bool:
        """Block until the current rebuild ends. Returns False on timeout."""
        return self._done.wait(timeout)

    def _run(self, roots: Optional[Sequence[Union[str, Path]]]) -> None:
        try:
            stats = self.builder.rebuild(roots)
            files = self.builder.file_index.load() or []
        except Exception as e:
            logger.error(f"Background reindex failed: {e}")
            self.error = e
            if self.on_error:
                self.on_error(e)
        else:
            self.files = files
            self.stats = stats
            if self.on_complete:
                self.on_complete(files, stats)
        finally:
            self._done.set()


def progress_printer(files: List[IndexedFile], stats: IndexingStats) -> None:
    """Simple completion callback that prints to console."""
    print(f"Indexed {stats.files_indexed} PDFs in {stats.duration_ms / 1000:.1f}s")


if __name__ == "__main__":
    indexer = BackgroundIndexer(on_complete=progress_printer)
    indexer.start()

    print("Indexing in background...")
    while not indexer.wait(timeout=1.0):
        print(".", end="", flush=True)

    if indexer.error:
        print(f"\nFailed: {indexer.error}")
