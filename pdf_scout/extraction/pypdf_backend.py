"""
pypdf-based text extraction backend.

Pure-Python fallback used when pdftotext is unavailable or fails.
Handles encryption detection and empty password decryption.
"""

from pathlib import Path
from typing import Union

from pypdf import PdfReader

from ..core import get_logger, ExtractionError

logger = get_logger(__name__)


class PyPDFBackend:
    """
    First-page text extraction using the pypdf library.

    Slower than pdftotext but needs no external binary.
    """

    name = "pypdf"

    def extract_first_page(self, filepath: Union[str, Path]) -> str:
        """
        Extract text from page 1 of a PDF.

        Args:
            filepath: Path to the PDF file.

        Returns:
            Extracted text, empty if the page has no text layer.

        Raises:
            ExtractionError: If the file cannot be opened or parsed.
        """
        filepath = Path(filepath)

        try:
            reader = PdfReader(filepath)

            if reader.is_encrypted:
                try:
                    reader.decrypt("")
                except Exception:
                    raise ExtractionError(
                        "PDF is encrypted and cannot be decrypted",
                        filepath=str(filepath)
                    )

            if len(reader.pages) == 0:
                logger.debug(f"No pages in {filepath.name}")
                return ""

            return reader.pages[0].extract_text() or ""

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"pypdf extraction failed: {e}",
                filepath=str(filepath)
            )
