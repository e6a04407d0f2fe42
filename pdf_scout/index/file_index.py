"""
Persisted file index for PDF Scout.

Holds the result of the last full crawl as a JSON array of
{path, mtime} records. Every build replaces the previous index
wholesale; nothing is merged.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..core import get_config, get_logger, CacheCorruptionError, FilesystemError
from ..utils import ensure_directory, atomic_write_json, read_json
from .crawler import Crawler, CrawlStats
from .models import IndexedFile

logger = get_logger(__name__)


class FileIndex:
    """
    Builds, persists and reloads the list of indexed documents.

    ``load()`` returns None when no index was ever persisted, which is
    how callers decide to trigger the initial build.
    """

    def __init__(
        self,
        index_path: Union[str, Path] = None,
        crawler: Crawler = None
    ):
        """
        Initialize the file index.

        Args:
            index_path: Location of the JSON index. Defaults to config value.
            crawler: Crawler used by build(). Created from config if omitted.
        """
        config = get_config()

        self.path = Path(index_path or config.paths.index_path)
        self.crawler = crawler or Crawler()
        self.last_stats: Optional[CrawlStats] = None

    def ensure_directory(self) -> Path:
        """Create the index directory; safe to call repeatedly."""
        try:
            return ensure_directory(self.path.parent)
        except OSError as e:
            raise FilesystemError(
                f"Cannot create index directory: {e}",
                path=str(self.path.parent)
            )

    def exists(self) -> bool:
        return self.path.exists()

    def build(self, roots: Iterable[Union[str, Path]]) -> List[IndexedFile]:
        """
        Crawl every root, persist the combined result and return it.

        Results are concatenated in root-list order. A path reached from
        two overlapping roots is kept once, at its first position.

        Args:
            roots: Directories to crawl.

        Returns:
            The new index.
        """
        stats = CrawlStats()
        files: List[IndexedFile] = []
        seen = set()

        for root in roots:
            for indexed in self.crawler.crawl(root, stats):
                if indexed.path in seen:
                    continue
                seen.add(indexed.path)
                files.append(indexed)

        self.save(files)
        self.last_stats = stats

        if stats.skipped_paths:
            logger.warning(f"Index built with {stats.skipped_count} skipped paths")

        logger.info(f"Indexed {len(files)} files into {self.path}")
        return files

    def save(self, files: List[IndexedFile]) -> None:
        """Persist ``files`` as the whole index."""
        self.ensure_directory()

        try:
            atomic_write_json(self.path, [f.to_dict() for f in files])
        except OSError as e:
            raise FilesystemError(f"Cannot write file index: {e}", path=str(self.path))

    def load(self) -> Optional[List[IndexedFile]]:
        """
        Reload the persisted index.

        Returns:
            The index, an empty list for an empty index, or None if no
            index has been persisted or the stored one is unreadable.
        """
        if not self.path.exists():
            return None

        try:
            return self._read()
        except CacheCorruptionError as e:
            logger.warning(f"Ignoring unreadable file index: {e.message}")
            return None

    def _read(self) -> List[IndexedFile]:
        try:
            data = read_json(self.path)
        except (OSError, ValueError) as e:
            raise CacheCorruptionError(f"{self.path}: {e}", path=str(self.path))

        if not isinstance(data, list):
            raise CacheCorruptionError(
                f"{self.path}: expected a JSON array",
                path=str(self.path)
            )

        try:
            return [IndexedFile.from_dict(item) for item in data]
        except (KeyError, TypeError) as e:
            raise CacheCorruptionError(
                f"{self.path}: malformed record ({e})",
                path=str(self.path)
            )
