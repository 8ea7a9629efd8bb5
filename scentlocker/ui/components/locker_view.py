"""Locker (personal collection) view component."""

import streamlit as st

from scentlocker.core.locker import Locker
from scentlocker.ui.components.fragrance_card import render_fragrance_card
from scentlocker.ui.components.stats_panel import render_stats_panel


def render_locker(locker: Locker) -> None:
    """Render the saved collection, newest last.

    Args:
        locker: User's collection
    """
    st.markdown(f"### 🔐 My Locker ({len(locker)})")

    if not len(locker):
        st.markdown(
            """
            <div class="empty-state">
                <div class="empty-state-icon">🧴</div>
                <h3>Your locker is empty</h3>
                <p>Add fragrances from search results or identify a bottle with the camera.</p>
            </div>
            """,
            unsafe_allow_html=True
        )
        return

    render_stats_panel(locker.stats())

    for idx, fragrance in enumerate(locker.collection):
        render_fragrance_card(fragrance, locker, key_prefix=f"locker{idx}")
