"""
Persisted content cache for PDF Scout.

Maps each file path to the lowercased first-page text extracted from it
and the modification time it was extracted at. One long-lived instance
holds the working copy in memory; saves rewrite the whole JSON document
through a temp file and rename.
"""

import threading
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from ..core import get_config, get_logger, CacheCorruptionError, FilesystemError
from ..utils import ensure_directory, atomic_write_json, read_json
from .models import CacheEntry, IndexedFile

logger = get_logger(__name__)


class ContentCache:
    """
    Path-keyed cache of extracted first-page text.

    An entry is valid for a file only while its stored mtime equals
    the file's mtime. All access goes through a lock so the preview
    surface can read while a search pass writes.
    """

    def __init__(self, cache_path: Union[str, Path] = None):
        """
        Initialize the content cache.

        Args:
            cache_path: Location of the JSON cache. Defaults to config value.
        """
        config = get_config()

        self.path = Path(cache_path or config.paths.content_path)
        self._entries: Dict[str, CacheEntry] = {}
        self._loaded = False
        self._lock = threading.RLock()

    def load(self) -> Dict[str, CacheEntry]:
        """
        Read the persisted cache into memory.

        Returns:
            A copy of the mapping; empty if nothing was persisted or the
            stored document cannot be parsed.
        """
        with self._lock:
            if not self.path.exists():
                self._entries = {}
            else:
                try:
                    self._entries = self._read()
                except CacheCorruptionError as e:
                    logger.warning(f"Content cache unreadable, starting empty: {e.message}")
                    self._entries = {}

            self._loaded = True
            logger.debug(f"Loaded {len(self._entries)} cache entries from {self.path}")
            return dict(self._entries)

    def save(self, entries: Dict[str, CacheEntry] = None) -> None:
        """
        Persist the whole cache.

        Args:
            entries: Mapping to persist and adopt as the working copy.
                     Defaults to the current working copy.
        """
        with self._lock:
            if entries is not None:
                self._entries = dict(entries)
                self._loaded = True

            self._ensure_loaded()
            payload = {path: entry.to_dict() for path, entry in self._entries.items()}

            try:
                ensure_directory(self.path.parent)
                atomic_write_json(self.path, payload)
            except OSError as e:
                raise FilesystemError(f"Cannot write content cache: {e}", path=str(self.path))

        logger.debug(f"Saved {len(payload)} cache entries to {self.path}")

    def get(self, path: str) -> Optional[CacheEntry]:
        with self._lock:
            self._ensure_loaded()
            return self._entries.get(path)

    def put(self, path: str, entry: CacheEntry) -> None:
        with self._lock:
            self._ensure_loaded()
            self._entries[path] = entry

    def is_valid(self, file: IndexedFile) -> bool:
        """True if a cache entry exists for ``file`` at its current mtime."""
        entry = self.get(file.path)
        return entry is not None and entry.is_valid_for(file)

    def prune(self, keep_paths: Iterable[str]) -> int:
        """
        Drop entries whose path is not in ``keep_paths``.

        Returns:
            Number of entries removed.
        """
        keep = set(keep_paths)

        with self._lock:
            self._ensure_loaded()
            stale = [path for path in self._entries if path not in keep]
            for path in stale:
                del self._entries[path]

        if stale:
            logger.info(f"Pruned {len(stale)} cache entries for files no longer indexed")
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            self._ensure_loaded()
            return len(self._entries)

    def __contains__(self, path: str) -> bool:
        return self.get(path) is not None

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _read(self) -> Dict[str, CacheEntry]:
        try:
            data = read_json(self.path)
        except (OSError, ValueError) as e:
            raise CacheCorruptionError(f"{self.path}: {e}", path=str(self.path))

        if not isinstance(data, dict):
            raise CacheCorruptionError(
                f"{self.path}: expected a JSON object",
                path=str(self.path)
            )

        try:
            return {path: CacheEntry.from_dict(value) for path, value in data.items()}
        except (KeyError, TypeError, AttributeError) as e:
            raise CacheCorruptionError(
                f"{self.path}: malformed entry ({e})",
                path=str(self.path)
            )
