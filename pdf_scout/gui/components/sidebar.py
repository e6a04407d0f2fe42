"""
Sidebar component for PDF Scout.

Displays index statistics, the crawled roots and the reindex action.
"""

import streamlit as st
from typing import List
from pathlib import Path

from ...utils import format_size
from ..services import ScoutServices


def render_sidebar(services: ScoutServices, roots: List[Path]) -> bool:
    """
    Render the sidebar.

    Args:
        services: Backend facade.
        roots: Configured root directories.

    Returns:
        True if the user asked for a reindex.
    """
    with st.sidebar:
        st.title("PDF Scout")

        st.subheader("Index")
        _render_statistics(services)

        st.divider()

        st.subheader("Folders")
        for root in roots:
            st.caption(str(root))

        st.divider()

        reindex = st.button(
            "Reindex folders",
            use_container_width=True,
            disabled=services.indexing,
            help="Crawl every folder again and replace the index"
        )

        if services.indexing:
            st.info("Indexing folders...")

        _render_help()

    return reindex


def _render_statistics(services: ScoutServices) -> None:
    """Display index and cache statistics."""
    files = services.files

    col1, col2 = st.columns(2)

    with col1:
        st.metric("PDFs", f"{len(files):,}" if files is not None else "-")

    with col2:
        st.metric("Cached", f"{len(services.cache):,}")

    if services.cache.path.exists():
        st.caption(f"Cache size: {format_size(services.cache.path.stat().st_size)}")

    stats = services.last_index_stats
    if stats and stats.skipped_paths:
        st.warning(f"{len(stats.skipped_paths)} folders could not be read during the last reindex")


def _render_help() -> None:
    """Display search help text."""
    with st.expander("Search help"):
        st.markdown("""
        - Matches text on the **first page** of each PDF
        - Case-insensitive, exact substring match
        - Type at least two characters
        - The first search after a reindex extracts text and can be slow;
          later searches use the cache
        """)
