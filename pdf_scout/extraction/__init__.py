"""
Extraction module for PDF Scout.

Provides first-page text extraction with multiple backends
(pdftotext, pypdf and pdfplumber) and automatic fallback.
"""

from .models import ExtractionResult, ExtractionStatus
from .pdftotext_backend import PdftotextBackend
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend
from .extractor import TextExtractor

__all__ = [
    "ExtractionResult",
    "ExtractionStatus",
    "PdftotextBackend",
    "PyPDFBackend",
    "PDFPlumberBackend",
    "TextExtractor"
]
