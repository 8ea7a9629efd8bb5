"""Session state management for the ScentLocker Streamlit UI.

This module manages all persistent state across Streamlit reruns: the
current query and search mode, the filter selections, the latest search
and visual-search results with their history.
"""

from dataclasses import dataclass
from typing import List, Optional

import streamlit as st

from scentlocker.core.search.filters import (
    FragranceFilters,
    count_active_filters,
    get_default_filters,
)
from scentlocker.core.use_cases import SearchMode, SearchResult, VisualSearchResult


@dataclass
class VisualSearchEntry:
    """Record of one visual search shown in the history strip."""

    fragrance_name: Optional[str]
    similarity: Optional[float]
    added_to_locker: bool
    message: str


def initialize_session_state() -> None:
    """Initialize all session state variables with defaults."""

    if "query" not in st.session_state:
        st.session_state.query = ""

    if "search_mode" not in st.session_state:
        st.session_state.search_mode = SearchMode.AUTO

    if "filters" not in st.session_state:
        st.session_state.filters = get_default_filters()

    if "search_result" not in st.session_state:
        st.session_state.search_result = None

    if "visual_result" not in st.session_state:
        st.session_state.visual_result = None

    if "visual_history" not in st.session_state:
        st.session_state.visual_history = []


def update_query(query: str, mode: SearchMode = SearchMode.AUTO) -> bool:
    """Store the query text and mode.

    Returns:
        True if either changed, meaning the search must run again.
    """
    changed = query != st.session_state.query or mode != st.session_state.search_mode
    st.session_state.query = query
    st.session_state.search_mode = mode
    return changed


def update_filters(filters: FragranceFilters) -> None:
    """Persist the filter selections built by the sidebar."""
    st.session_state.filters = filters


def reset_filters() -> None:
    """Reset every filter to its default (no restriction)."""
    st.session_state.filters = get_default_filters()


def active_filter_count() -> int:
    return count_active_filters(st.session_state.filters)


def update_search_result(result: Optional[SearchResult]) -> None:
    """Cache the latest search result."""
    st.session_state.search_result = result


def clear_search() -> None:
    """Clear the query and its results."""
    st.session_state.query = ""
    st.session_state.search_result = None


def record_visual_result(result: VisualSearchResult) -> None:
    """Store a visual search result and append it to the history strip."""
    st.session_state.visual_result = result
    entry = VisualSearchEntry(
        fragrance_name=result.fragrance.name if result.fragrance else None,
        similarity=result.similarity,
        added_to_locker=result.added_to_locker,
        message=result.message,
    )
    st.session_state.visual_history.append(entry)


def get_visual_history(limit: int = 5) -> List[VisualSearchEntry]:
    """Most recent visual searches, newest first."""
    return list(reversed(st.session_state.visual_history))[:limit]
