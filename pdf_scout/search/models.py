"""
Data models for search functionality.
"""

from dataclasses import dataclass


@dataclass
class SearchStats:
    """
    Statistics about a search execution.

    Attributes:
        query: The original query text.
        total_files: Number of indexed files scanned.
        total_results: Number of matching files.
        extracted: Files whose text was (re-)extracted during the pass.
        failed: Extractions that failed during the pass.
        execution_time_ms: Wall time of the pass in milliseconds.
        cancelled: True if the pass was superseded before finishing.
    """
    query: str
    total_files: int = 0
    total_results: int = 0
    extracted: int = 0
    failed: int = 0
    execution_time_ms: float = 0.0
    cancelled: bool = False
