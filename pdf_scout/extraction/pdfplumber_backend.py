"""
pdfplumber-based text extraction backend.

Better handling of complex layouts and multi-column first pages.
Slower than pdftotext and pypdf.
"""

from pathlib import Path
from typing import Union

import pdfplumber

from ..core import get_logger, ExtractionError

logger = get_logger(__name__)


class PDFPlumberBackend:
    """First-page text extraction using the pdfplumber library."""

    name = "pdfplumber"

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
            with pdfplumber.open(filepath) as pdf:
                if not pdf.pages:
                    logger.debug(f"No pages in {filepath.name}")
                    return ""

                return pdf.pages[0].extract_text() or ""

        except Exception as e:
            raise ExtractionError(
                f"pdfplumber extraction failed: {e}",
                filepath=str(filepath)
            )
