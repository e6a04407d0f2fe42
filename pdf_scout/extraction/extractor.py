"""
Unified first-page extraction interface with automatic fallback.

Wraps the extraction backends, attempts the fallback when the primary
backend fails or returns no text, and reports the outcome as a tagged
ExtractionResult instead of raising.
"""

from pathlib import Path
from typing import Tuple, Union

from ..core import get_config, get_logger, ExtractionError
from .models import ExtractionResult
from .pdftotext_backend import PdftotextBackend
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend

logger = get_logger(__name__)


BACKENDS = {
    "pdftotext": PdftotextBackend,
    "pypdf": PyPDFBackend,
    "pdfplumber": PDFPlumberBackend
}


class TextExtractor:
    """
    First-page text extraction with automatic backend fallback.

    Tries the primary backend first, falls back to the secondary one
    if extraction fails or produces empty text. Text is lowercased and
    capped at max_output_bytes characters.
    """

    def __init__(
        self,
        primary_backend: str = None,
        fallback_backend: str = None,
        max_output_bytes: int = None
    ):
        """
        Initialize the extractor with configured backends.

        Args:
            primary_backend: Name of primary backend ("pdftotext", "pypdf" or "pdfplumber").
            fallback_backend: Name of fallback backend, or "none" to disable.
            max_output_bytes: Cap on the length of returned text.
        """
        config = get_config()

        primary_name = primary_backend or config.extraction.primary_backend
        fallback_name = fallback_backend or config.extraction.fallback_backend
        self.max_output_bytes = max_output_bytes or config.extraction.max_output_bytes

        if primary_name not in BACKENDS:
            raise ExtractionError(f"Unknown backend: {primary_name}")

        if fallback_name in (None, "", "none"):
            fallback_name = None
        elif fallback_name not in BACKENDS:
            raise ExtractionError(f"Unknown backend: {fallback_name}")

        self.primary = BACKENDS[primary_name]()
        self.fallback = BACKENDS[fallback_name]() if fallback_name and fallback_name != primary_name else None

        logger.debug(
            f"Initialized extractor: primary={primary_name}, fallback={fallback_name}"
        )

    def extract_first_page(self, filepath: Union[str, Path]) -> ExtractionResult:
        """
        Extract lowercased first-page text using available backends.

        Args:
            filepath: Path to the PDF file.

        Returns:
            SUCCESS with text, EMPTY_PAGE if every backend found no text,
            or FAILED with the primary backend's error message.
        """
        filepath = Path(filepath)
        primary_error = None
        empty_from = ""

        for backend in (self.primary, self.fallback):
            if backend is None:
                continue

            try:
                text, truncated = _read_first_page(backend, filepath)
            except OSError as e:
                error = ExtractionError(
                    f"{backend.name} could not read {filepath.name}: {e}",
                    filepath=str(filepath)
                )
                logger.debug(error.message)
                if primary_error is None:
                    primary_error = error
                continue
            except ExtractionError as e:
                logger.debug(f"{backend.name} failed on {filepath.name}: {e.message}")
                if primary_error is None:
                    primary_error = e
                continue

            if text.strip():
                return self._success(text, backend.name, truncated)

            logger.debug(f"{backend.name} returned empty text: {filepath.name}")
            empty_from = empty_from or backend.name

        if empty_from:
            return ExtractionResult.empty_page(backend=empty_from)

        logger.warning(f"Extraction failed for {filepath}: {primary_error.message}")
        return ExtractionResult.failed(primary_error.message, backend=self.primary.name)

    def extract_first_page_text(self, filepath: Union[str, Path]) -> str:
        """
        Extract lowercased first-page text, or an empty string on failure.

        Args:
            filepath: Path to the PDF file.

        Returns:
            Extracted text.
        """
        return self.extract_first_page(filepath).text

    def _success(self, text: str, backend_name: str, truncated: bool = False) -> ExtractionResult:
        if len(text) > self.max_output_bytes:
            truncated = True
            text = text[:self.max_output_bytes]
        return ExtractionResult.success(text.lower(), truncated=truncated, backend=backend_name)


def _read_first_page(backend, filepath: Path) -> Tuple[str, bool]:
    """Run one backend, returning its text and whether its output was cut short."""
    read = getattr(backend, "read_first_page", None)
    if read is not None:
        return read(filepath)
    return backend.extract_first_page(filepath), False


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m pdf_scout.extraction.extractor <pdf_file>")
        sys.exit(1)

    pdf_path = Path(sys.argv[1])
    if not pdf_path.exists():
        print(f"File not found: {pdf_path}")
        sys.exit(1)

    result = TextExtractor().extract_first_page(pdf_path)
    print(f"Status: {result.status.value} (backend: {result.backend})")

    if result.reason:
        print(f"Reason: {result.reason}")

    if result.text:
        preview = result.text[:300] + "..." if len(result.text) > 300 else result.text
        print("\n=== First page ===")
        print(preview)
