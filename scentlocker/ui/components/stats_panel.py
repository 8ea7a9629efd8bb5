"""Statistics panel component for locker insights."""

from typing import List, Tuple

import streamlit as st

from scentlocker.core.locker_stats import LockerStats
from scentlocker.ui.utils import format_average_rating


def _render_ranking(title: str, counts: List[Tuple[str, int]], empty_text: str) -> None:
    st.markdown(f"**{title}**")
    if not counts:
        st.caption(empty_text)
        return
    for label, count in counts:
        st.markdown(f"{label} · **{count}**")


def render_stats_panel(stats: LockerStats) -> None:
    """Render collection insights for the locker.

    Args:
        stats: Statistics computed from the saved collection
    """
    if stats.is_empty:
        return

    st.markdown("### 📊 Collection Insights")

    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric(
            label="Total Fragrances",
            value=stats.total,
            help="Number of saved fragrances"
        )

    with col2:
        st.metric(
            label="Unique Brands",
            value=stats.unique_brands,
        )

    with col3:
        st.metric(
            label="Average Rating",
            value=format_average_rating(stats.average_rating),
            help="Mean over rated fragrances only"
        )

    notes_col, brands_col, accords_col = st.columns(3)

    with notes_col:
        _render_ranking("Top Notes", stats.top_notes, "No notes data available")

    with brands_col:
        _render_ranking("Top Brands", stats.top_brands, "No brand data available")

    with accords_col:
        _render_ranking("Top Accords", stats.top_accords, "No accord data available")

    st.markdown("---")
