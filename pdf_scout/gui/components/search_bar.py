"""
Search bar component for PDF Scout.

Provides the search input and the results header.
"""

import streamlit as st

from ...search import SearchStats
from ..state import get_state, set_state


def render_search_bar(placeholder: str) -> str:
    """
    Render the search input.

    Args:
        placeholder: Placeholder text for the empty input.

    Returns:
        The current query text.
    """
    query = st.text_input(
        "Search",
        value=get_state("search_query", ""),
        placeholder=placeholder,
        key="search_input",
        label_visibility="collapsed"
    )

    set_state("search_query", query)
    return query


def render_search_header(stats: SearchStats) -> None:
    """
    Render the results header with search statistics.

    Args:
        stats: Statistics of the search that produced the results.
    """
    if not stats:
        return

    col1, col2, col3 = st.columns([2, 2, 1])

    with col1:
        title = f"Results ({stats.total_results:,})" if stats.total_results else "No matches"
        st.markdown(f"**{title}** in {stats.total_files:,} PDFs")

    with col2:
        st.caption(f"Query: \"{stats.query}\"")

    with col3:
        st.caption(f"{stats.execution_time_ms:.0f} ms")

    if stats.extracted:
        st.caption(
            f"Extracted {stats.extracted} first pages during this search "
            f"({stats.failed} failed)"
        )
