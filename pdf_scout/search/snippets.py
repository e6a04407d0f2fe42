"""
Preview snippet and highlight helpers.

Pure functions of (text, query) used by the presentation layer to show
a bounded excerpt around a match with the matched text emphasized.
"""

import re

from ..utils import collapse_whitespace


def extract_snippet(text: str, query: str, radius: int = 80) -> str:
    """
    Cut a window of ``radius`` characters on each side of the first match.

    Matching is case-insensitive. Whitespace runs in the window are
    collapsed and the ends trimmed.

    Args:
        text: Text to search in.
        query: Text to locate.
        radius: Characters kept before and after the match.

    Returns:
        The snippet, or empty string when ``query`` does not occur.
    """
    if not text or not query:
        return ""

    idx = text.lower().find(query.lower())
    if idx == -1:
        return ""

    start = max(0, idx - radius)
    end = min(len(text), idx + len(query) + radius)

    return collapse_whitespace(text[start:end])


def highlight_match(snippet: str, query: str, marker: str = "**") -> str:
    """
    Wrap every case-insensitive occurrence of ``query`` in ``marker``.

    Examples:
        >>> highlight_match("ABC Needle DEF", "needle")
        'ABC **Needle** DEF'
    """
    if not snippet or not query:
        return snippet or ""

    pattern = re.compile(re.escape(query), re.IGNORECASE)
    return pattern.sub(lambda m: f"{marker}{m.group(0)}{marker}", snippet)
