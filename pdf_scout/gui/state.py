"""
Session state for the Streamlit page.

Streamlit reruns the whole script on every interaction. Whatever must
survive a rerun (the query, the results it produced, the open preview,
pending notifications, the session's search runner) is kept in
st.session_state under these keys.
"""

import streamlit as st
from typing import Any, List, Optional


DEFAULT_STATE = {
    "search_query": "",
    "search_results": [],
    "search_stats": None,
    "searched_query": "",
    "searched_index": None,
    "selected_path": None,
    "indexing_notified": True,
}

# Reset whenever the query is too short to search.
SEARCH_KEYS = (
    "search_results",
    "search_stats",
    "searched_query",
    "searched_index",
    "selected_path",
)


def init_state() -> None:
    """Fill in missing keys; values from earlier reruns are kept."""
    for key, default_value in DEFAULT_STATE.items():
        if key not in st.session_state:
            st.session_state[key] = default_value


def get_state(key: str, default: Any = None) -> Any:
    return st.session_state.get(key, default)


def set_state(key: str, value: Any) -> None:
    st.session_state[key] = value


def clear_search_state() -> None:
    """Forget the last search and close any open preview."""
    for key in SEARCH_KEYS:
        st.session_state[key] = DEFAULT_STATE[key]


def is_search_current(query: str, files: Optional[List]) -> bool:
    """
    True if the stored results were produced for this query and index.

    The index is compared by identity: a reindex hands the page a new
    list, which must trigger a fresh search even for the same query.
    """
    return (
        get_state("searched_query") == query
        and get_state("searched_index") == id(files)
    )


def remember_search(query: str, files: List, results: List, stats: Any) -> None:
    """Store a completed search so reruns can render it without searching."""
    set_state("search_results", results)
    set_state("search_stats", stats)
    set_state("searched_query", query)
    set_state("searched_index", id(files))


def get_search_runner(services: Any) -> Any:
    """
    Return this session's search runner, creating it on first use.

    Args:
        services: Shared backend facade providing new_search_runner().
    """
    runner = st.session_state.get("search_runner")
    if runner is None:
        runner = services.new_search_runner()
        st.session_state["search_runner"] = runner
    return runner


def toggle_selected(path: str) -> None:
    """Open the full-text preview for ``path``, or close it if already open."""
    current = get_state("selected_path")
    set_state("selected_path", None if current == path else path)
