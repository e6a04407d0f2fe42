"""
PDF Scout Package.

Content-based search over large PDF collections: first-page text is
extracted once, cached against each file's modification time, and
queried with plain case-insensitive substring matching.
"""

__version__ = "1.0.0"
