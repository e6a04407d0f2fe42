"""
Results list component for displaying search results.

Renders each matching file with its path, modification date and a
preview of the first page with the query highlighted. An opened card
also offers the PDF itself for download.
"""

import streamlit as st
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ...core import get_logger
from ...index import ContentCache, IndexedFile
from ...search import extract_snippet, highlight_match
from ...utils import truncate_text
from ..state import get_state, toggle_selected

logger = get_logger(__name__)


NO_TEXT_MESSAGE = "_No extractable text found on first page._"


def render_results(
    results: List[IndexedFile],
    cache: ContentCache,
    query: str,
    radius: int,
    preview_chars: int
) -> None:
    """
    Render the list of search results.

    Args:
        results: Matching files in index order.
        cache: Content cache, read-only, for preview text.
        query: Query the results were produced for.
        radius: Snippet radius around the match.
        preview_chars: Maximum characters of full first-page text shown.
    """
    if not results:
        return

    for idx, indexed in enumerate(results):
        _render_result_card(indexed, idx, cache, query, radius, preview_chars)


def _render_result_card(
    indexed: IndexedFile,
    idx: int,
    cache: ContentCache,
    query: str,
    radius: int,
    preview_chars: int
) -> None:
    """Render a single result card with expander."""
    selected = get_state("selected_path") == indexed.path

    with st.expander(f"**{indexed.filename}**", expanded=selected):
        st.code(indexed.path, language=None)
        st.caption(f"Last modified: {_format_mtime(indexed.mtime)}")

        entry = cache.get(indexed.path)
        text = entry.text if entry else ""

        snippet = extract_snippet(text, query, radius)
        highlighted = highlight_match(snippet, query)

        st.markdown("---")
        st.markdown(f"...{highlighted}..." if highlighted else "_No preview available_")
        st.markdown("---")

        col1, col2 = st.columns(2)

        with col1:
            if st.button("Full first page", key=f"text_btn_{idx}", use_container_width=True):
                toggle_selected(indexed.path)
                st.rerun()

        with col2:
            folder = Path(indexed.path).parent
            st.markdown(
                f'<a href="file://{folder}" target="_blank">'
                f'<button style="width:100%">Open folder</button></a>',
                unsafe_allow_html=True
            )

        if selected:
            st.text_area(
                "First page",
                value=truncate_text(text, preview_chars) if text else "",
                placeholder=NO_TEXT_MESSAGE,
                height=300,
                key=f"content_area_{idx}"
            )
            _render_download_button(indexed, idx)


def _format_mtime(mtime: float) -> str:
    return datetime.fromtimestamp(mtime).strftime("%Y-%m-%d %H:%M")


def _render_download_button(indexed: IndexedFile, idx: int) -> None:
    """
    Render a button that hands the PDF to the browser.

    Args:
        indexed: The result whose file is offered.
        idx: Position of the card, used to keep widget keys unique.
    """
    pdf_data = read_pdf_bytes(indexed.path)
    if pdf_data is None:
        st.warning("The PDF can no longer be read. Try reindexing the folders.")
        return

    st.download_button(
        label="Open PDF",
        data=pdf_data,
        file_name=indexed.filename,
        mime="application/pdf",
        key=f"download_{idx}"
    )


def read_pdf_bytes(path: str) -> Optional[bytes]:
    """Return the file's bytes, or None if it is missing or unreadable."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        logger.warning(f"Cannot read {path}: {e}")
        return None
