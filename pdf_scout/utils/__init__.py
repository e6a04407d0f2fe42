"""
Utility module providing shared helper functions.

Contains file operations and text processing utilities used across
the application. Depends only on the standard library.
"""

from .file_utils import (
    ensure_directory,
    atomic_write_json,
    read_json
)
from .text_utils import (
    collapse_whitespace,
    truncate_text,
    format_size
)

__all__ = [
    "ensure_directory",
    "atomic_write_json",
    "read_json",
    "collapse_whitespace",
    "truncate_text",
    "format_size"
]
