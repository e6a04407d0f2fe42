"""
Data models for the file index and content cache.

Defines the records persisted to disk and exchanged between the
crawler, the search engine and the presentation layer.
"""

from dataclasses import dataclass
from typing import Dict

from ..extraction.models import ExtractionResult, ExtractionStatus


STATUS_OK = "ok"
STATUS_EMPTY = "empty"
STATUS_FAILED = "failed"

_STATUS_BY_EXTRACTION = {
    ExtractionStatus.SUCCESS: STATUS_OK,
    ExtractionStatus.EMPTY_PAGE: STATUS_EMPTY,
    ExtractionStatus.FAILED: STATUS_FAILED,
}


@dataclass(frozen=True)
class IndexedFile:
    """
    A discovered document.

    Attributes:
        path: Absolute path, unique within one index.
        mtime: Modification time (seconds since epoch) observed at crawl time.
    """
    path: str
    mtime: float

    @property
    def filename(self) -> str:
        """Final path component, for display."""
        return self.path.replace("\\", "/").rsplit("/", 1)[-1]

    def to_dict(self) -> Dict:
        return {"path": self.path, "mtime": self.mtime}

    @classmethod
    def from_dict(cls, data: Dict) -> "IndexedFile":
        return cls(path=str(data["path"]), mtime=data["mtime"])


@dataclass
class CacheEntry:
    """
    Extracted first-page text for one file.

    Attributes:
        mtime: File modification time when the text was extracted.
        text: Lowercased first-page text (empty for failures and blank pages).
        status: "ok", "empty" or "failed".
    """
    mtime: float
    text: str
    status: str = STATUS_OK

    def is_valid_for(self, file: IndexedFile) -> bool:
        """True when the entry was extracted from the file's current version."""
        return self.mtime == file.mtime

    @property
    def failed(self) -> bool:
        return self.status == STATUS_FAILED

    def to_dict(self) -> Dict:
        return {"mtime": self.mtime, "text": self.text, "status": self.status}

    @classmethod
    def from_dict(cls, data: Dict) -> "CacheEntry":
        return cls(
            mtime=data["mtime"],
            text=str(data["text"]),
            status=data.get("status", STATUS_OK)
        )

    @classmethod
    def from_extraction(cls, file: IndexedFile, result: ExtractionResult) -> "CacheEntry":
        """Build the entry recorded after extracting ``file``; failures become sentinels."""
        return cls(
            mtime=file.mtime,
            text=result.text,
            status=_STATUS_BY_EXTRACTION[result.status]
        )
