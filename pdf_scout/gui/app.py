"""
Main Streamlit application for PDF Scout.

Entry point that assembles the sidebar, search bar and results list.
The index is built on a background thread on first use, so the page
stays responsive while a large collection is crawled.

Note: This file is run directly by Streamlit, so it needs to
set up the Python path before importing other modules.
"""

import sys
from pathlib import Path

# Add project root to path for imports when run directly by Streamlit
_project_root = Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import streamlit as st  # noqa: E402

from pdf_scout.core import get_config, get_logger, SearchCancelled  # noqa: E402
from pdf_scout.gui.services import ScoutServices  # noqa: E402
from pdf_scout.gui.state import (  # noqa: E402
    init_state,
    get_state,
    set_state,
    clear_search_state,
    is_search_current,
    remember_search,
    get_search_runner,
)
from pdf_scout.gui.components import (  # noqa: E402
    render_sidebar,
    render_search_bar,
    render_search_header,
    render_results,
)

logger = get_logger(__name__)


@st.cache_resource
def get_services() -> ScoutServices:
    """Create the backend objects once per server process."""
    return ScoutServices()


def main():
    """Main application entry point."""
    config = get_config()

    st.set_page_config(
        page_title=config.gui.page_title,
        page_icon="📄",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    init_state()

    services = get_services()
    services.ensure_index()

    if render_sidebar(services, config.crawl.roots):
        if services.reindex():
            set_state("indexing_notified", False)
            st.toast("Reindexing folders...")
        st.rerun()

    _notify_indexing(services)

    st.title(config.gui.page_title)
    query = render_search_bar(config.gui.search_placeholder)

    files = services.files
    if files is None:
        st.info("Indexing folders... Searches become available when the first index is ready.")
        if st.button("Refresh"):
            st.rerun()
        return

    if len(query.strip()) < config.search.min_query_length:
        clear_search_state()
        _render_welcome(len(files), config.search.min_query_length)
        return

    if not is_search_current(query, files):
        _execute_search(services, files, query)

    _render_results_section(services, config)


def _notify_indexing(services: ScoutServices) -> None:
    """Show a one-time toast when a background reindex finishes."""
    if services.indexing or get_state("indexing_notified"):
        return

    set_state("indexing_notified", True)

    if services.last_index_error:
        st.toast(f"Reindex failed: {services.last_index_error}")
    elif services.last_index_stats:
        st.toast(f"Reindexed {services.last_index_stats.files_indexed:,} PDFs")


def _execute_search(services: ScoutServices, files, query: str) -> None:
    """
    Run the search and store results in state.

    A failed or superseded search keeps the previous results on screen.
    """
    with st.spinner("Searching..."):
        try:
            runner = get_search_runner(services)
            results = runner.run(files, query)
        except SearchCancelled:
            logger.debug(f"Search for '{query}' superseded")
            return
        except Exception as e:
            logger.error(f"Search error: {e}")
            st.toast("Search failed")
            st.error(f"Search failed: {e}")
            return

    remember_search(query, files, results, runner.last_stats)


def _render_results_section(services: ScoutServices, config) -> None:
    """Render the search results section."""
    stats = get_state("search_stats")
    results = get_state("search_results", [])

    render_search_header(stats)

    if not results:
        return

    st.divider()

    render_results(
        results,
        services.cache,
        get_state("searched_query", ""),
        config.search.snippet_radius,
        config.search.preview_chars
    )


def _render_welcome(file_count: int, min_query_length: int) -> None:
    """Render welcome message when no search has been performed."""
    st.markdown(f"""
    ### Search inside your PDFs

    {file_count:,} PDFs are indexed. Type at least {min_query_length} characters to search
    the text of their first pages.

    Use **Reindex folders** in the sidebar after adding or moving files.
    """)


if __name__ == "__main__":
    main()
