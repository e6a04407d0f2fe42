"""
Result types for text extraction.

Separates a genuinely empty first page from a failed extraction so the
cache and the UI can treat them differently.
"""

from dataclasses import dataclass
from enum import Enum


class ExtractionStatus(str, Enum):
    """Outcome of one extraction attempt."""
    SUCCESS = "success"
    EMPTY_PAGE = "empty_page"
    FAILED = "failed"


@dataclass(frozen=True)
class ExtractionResult:
    """
    Tagged result of first-page extraction.

    Attributes:
        status: Outcome of the extraction.
        text: Lowercased text; always empty unless status is SUCCESS.
        reason: Failure description when status is FAILED.
        truncated: True if converter output was cut at the size bound.
        backend: Name of the backend that produced the result.
    """
    status: ExtractionStatus
    text: str = ""
    reason: str = ""
    truncated: bool = False
    backend: str = ""

    @classmethod
    def success(cls, text: str, truncated: bool = False, backend: str = "") -> "ExtractionResult":
        return cls(ExtractionStatus.SUCCESS, text=text, truncated=truncated, backend=backend)

    @classmethod
    def empty_page(cls, backend: str = "") -> "ExtractionResult":
        return cls(ExtractionStatus.EMPTY_PAGE, backend=backend)

    @classmethod
    def failed(cls, reason: str, backend: str = "") -> "ExtractionResult":
        return cls(ExtractionStatus.FAILED, reason=reason, backend=backend)

    @property
    def ok(self) -> bool:
        return self.status is ExtractionStatus.SUCCESS
