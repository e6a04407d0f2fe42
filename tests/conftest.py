"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, sample PDFs, a fake text extractor and
a temporary configuration that every test runs under, so no test ever
touches the real cache directory.
"""

import json
import threading
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Dict, Generator, List

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from pdf_scout.extraction.models import ExtractionResult  # noqa: E402


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="pdf_scout_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    data_dir = temp_dir / "data"
    data_dir.mkdir()

    cache_dir = temp_dir / "cache"

    logs_dir = temp_dir / "output" / "logs"
    logs_dir.mkdir(parents=True)

    config_data = {
        "paths": {
            "cache_directory": str(cache_dir),
            "logs_directory": str(logs_dir)
        },
        "crawl": {
            "roots": [str(data_dir)],
            "extensions": [".pdf"],
            "follow_symlinks": False,
            "max_depth": 32
        },
        "extraction": {
            "primary_backend": "pdftotext",
            "fallback_backend": "pypdf",
            "pdftotext_binary": "pdftotext",
            "max_output_bytes": 1048576,
            "timeout_seconds": 10
        },
        "search": {
            "min_query_length": 2,
            "max_workers": 2,
            "snippet_radius": 80,
            "preview_chars": 3000
        },
        "gui": {
            "page_title": "Test PDF Scout"
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from pdf_scout.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Reset the logger initialization flag between tests.
    """
    from pdf_scout.core import logger
    logger._logger_initialized = False
    yield
    logger._logger_initialized = False


@pytest.fixture(autouse=True)
def configured(temp_config: Path, reset_config_singleton):
    """Load the temporary config so components never default to real paths."""
    from pdf_scout.core.config_loader import get_config
    return get_config(temp_config)


@pytest.fixture
def cache_dir(configured) -> Path:
    """The cache directory of the temporary config."""
    return configured.paths.cache_directory


@pytest.fixture
def sample_pdf_content() -> bytes:
    """
    Create minimal valid PDF content for testing.

    Returns:
        Bytes representing a minimal PDF with text.
    """
    # Minimal PDF with "Hello World" text
    pdf_content = b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792]
   /Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT /F1 12 Tf 100 700 Td (Hello World) Tj ET
endstream
endobj
5 0 obj
<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>
endobj
xref
0 6
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000266 00000 n
0000000359 00000 n
trailer
<< /Size 6 /Root 1 0 R >>
startxref
434
%%EOF"""
    return pdf_content


@pytest.fixture
def sample_pdf(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """
    Create a sample PDF file for testing.

    Returns:
        Path to the created PDF file.
    """
    pdf_path = temp_dir / "sample.pdf"
    pdf_path.write_bytes(sample_pdf_content)
    return pdf_path


@pytest.fixture
def sample_pdf_collection(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """
    Create multiple sample PDF files in a directory structure.

    Returns:
        Path to the data directory containing PDFs.
    """
    data_dir = temp_dir / "data"
    data_dir.mkdir(exist_ok=True)

    subdir1 = data_dir / "folder1"
    subdir1.mkdir()

    subdir2 = data_dir / "folder2" / "nested"
    subdir2.mkdir(parents=True)

    (data_dir / "root_doc.pdf").write_bytes(sample_pdf_content)
    (subdir1 / "doc1.pdf").write_bytes(sample_pdf_content)
    (subdir1 / "doc2.PDF").write_bytes(sample_pdf_content)
    (subdir2 / "doc3.pdf").write_bytes(sample_pdf_content)

    # Non-PDF files (should be ignored)
    (data_dir / "readme.txt").write_text("Not a PDF")
    (subdir1 / "notes.pdf.bak").write_text("Not a PDF either")

    return data_dir


class FakeExtractor:
    """
    Stand-in for TextExtractor that returns canned text.

    Texts are looked up by full path, then by file name; anything else
    gets ``default``. Calls are recorded per path.
    """

    def __init__(self, texts: Dict[str, str] = None, default: str = "", failing: List[str] = None):
        self.texts = texts or {}
        self.default = default
        self.failing = set(failing or [])
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def extract_first_page(self, path) -> ExtractionResult:
        path = str(path)
        with self._lock:
            self.calls.append(path)

        name = Path(path).name
        if path in self.failing or name in self.failing:
            return ExtractionResult.failed("converter crashed", backend="fake")

        text = self.texts.get(path, self.texts.get(name, self.default))
        if not text.strip():
            return ExtractionResult.empty_page(backend="fake")
        return ExtractionResult.success(text.lower(), backend="fake")

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def fake_extractor_factory():
    """Build FakeExtractor instances."""
    return FakeExtractor
