"""
Directory crawler for recursive PDF discovery.

Walks each root depth-first with os.scandir, records matching files
with their modification time, and keeps going when a subtree cannot
be read.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set, Union

from ..core import get_config, get_logger
from .models import IndexedFile

logger = get_logger(__name__)


@dataclass
class CrawlStats:
    """Statistics accumulated across one or more crawls."""
    files_found: int = 0
    directories_visited: int = 0
    symlinks_skipped: int = 0
    skipped_paths: List[str] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_paths)


class Crawler:
    """
    Recursively discovers PDF files under a root directory.

    Unreadable directories are skipped and reported instead of aborting
    the crawl. Symlinked directories are only followed when asked to,
    and then a set of visited real paths guards against cycles.
    """

    def __init__(
        self,
        extensions: List[str] = None,
        follow_symlinks: bool = None,
        max_depth: int = None
    ):
        """
        Initialize the crawler.

        Args:
            extensions: File name suffixes to match (e.g., [".pdf"]).
            follow_symlinks: Descend into symlinked directories.
            max_depth: Maximum directory depth below the root.
        """
        config = get_config()

        self.extensions = extensions or config.crawl.extensions
        self.follow_symlinks = (
            config.crawl.follow_symlinks if follow_symlinks is None else follow_symlinks
        )
        self.max_depth = config.crawl.max_depth if max_depth is None else max_depth

        self.extensions = tuple(ext.lower() for ext in self.extensions)

    def crawl(self, root: Union[str, Path], stats: CrawlStats = None) -> List[IndexedFile]:
        """
        Crawl one root directory.

        Args:
            root: Directory to crawl.
            stats: Optional stats object to accumulate into.

        Returns:
            Matching files sorted by path.
        """
        stats = stats if stats is not None else CrawlStats()
        root_path = os.path.abspath(os.path.expanduser(str(root)))

        if not os.path.isdir(root_path):
            logger.error(f"Root directory does not exist: {root_path}")
            stats.skipped_paths.append(root_path)
            return []

        logger.info(f"Crawling directory: {root_path}")

        results: List[IndexedFile] = []
        visited: Set[str] = {os.path.realpath(root_path)}
        before = stats.skipped_count

        self._walk(root_path, 0, results, visited, stats)

        results.sort(key=lambda f: f.path)
        stats.files_found += len(results)

        logger.info(
            f"Crawl complete: {len(results)} files found in {root_path}, "
            f"{stats.skipped_count - before} paths skipped"
        )
        return results

    def _walk(
        self,
        directory: str,
        depth: int,
        results: List[IndexedFile],
        visited: Set[str],
        stats: CrawlStats
    ) -> None:
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {directory}: {e}")
            stats.skipped_paths.append(directory)
            return

        stats.directories_visited += 1

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=self.follow_symlinks):
                    if self.follow_symlinks:
                        real = os.path.realpath(entry.path)
                        if real in visited:
                            logger.debug(f"Already visited, skipping: {entry.path}")
                            stats.symlinks_skipped += 1
                            continue
                        visited.add(real)

                    if depth + 1 > self.max_depth:
                        logger.warning(f"Max depth {self.max_depth} reached, skipping: {entry.path}")
                        stats.skipped_paths.append(entry.path)
                        continue

                    self._walk(entry.path, depth + 1, results, visited, stats)

                elif entry.is_file(follow_symlinks=self.follow_symlinks):
                    if not entry.name.lower().endswith(self.extensions):
                        continue
                    mtime = entry.stat(follow_symlinks=True).st_mtime
                    results.append(IndexedFile(path=entry.path, mtime=mtime))

                elif entry.is_symlink():
                    stats.symlinks_skipped += 1

            except OSError as e:
                logger.warning(f"Cannot access {entry.path}: {e}")
                stats.skipped_paths.append(entry.path)


if __name__ == "__main__":
    import sys

    test_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(".")

    crawler = Crawler(extensions=[".pdf"])
    crawl_stats = CrawlStats()

    print(f"Crawling: {test_dir}")
    print("-" * 50)

    files = crawler.crawl(test_dir, crawl_stats)
    for indexed in files[:10]:
        print(f"  {indexed.filename}")
    if len(files) > 10:
        print("  ... (showing first 10 only)")

    print(f"\n{len(files)} files, {crawl_stats.skipped_count} skipped paths")
