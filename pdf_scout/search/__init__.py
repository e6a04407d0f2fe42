"""
Search module for PDF Scout.

Provides the substring search engine over cached first-page text,
search statistics, and snippet/highlight helpers for previews.
"""

from .models import SearchStats
from .engine import SearchEngine, SupersedingSearch
from .snippets import extract_snippet, highlight_match

__all__ = [
    "SearchStats",
    "SearchEngine",
    "SupersedingSearch",
    "extract_snippet",
    "highlight_match"
]
