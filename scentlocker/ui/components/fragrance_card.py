"""Fragrance card component."""

from typing import Optional

import streamlit as st

from scentlocker.core.locker import Locker
from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.domain.entities.vibe import VibeMatch
from scentlocker.ui.utils import (
    format_notes,
    format_price,
    format_rating,
    format_similarity_score,
    format_vibe_scores,
    get_score_color,
    top_accords,
    truncate_text,
)
from scentlocker.utils.exceptions import LockerPersistenceError

_NO_IMAGE_HTML = (
    '<div style="background-color: #f0f0f0; padding: 4rem 2rem; '
    'text-align: center; border-radius: 8px; color: #999;">'
    '<div style="font-size: 3rem; margin-bottom: 0.5rem;">🧴</div>'
    '<div>No Image Available</div></div>'
)


def render_fragrance_card(
    fragrance: Fragrance,
    locker: Locker,
    vibe_match: Optional[VibeMatch] = None,
    key_prefix: str = "",
) -> None:
    """Render a fragrance with image, pyramid, accords and a locker toggle.

    Args:
        fragrance: Fragrance to show
        locker: User's collection, for the add/remove button
        vibe_match: Vibe similarity and explanation, in vibe mode
        key_prefix: Prefix for component keys
    """
    with st.container():
        st.markdown("---")

        col_img, col_details = st.columns([1, 2])

        with col_img:
            if fragrance.image:
                st.image(fragrance.image, use_container_width=True)
            else:
                st.markdown(_NO_IMAGE_HTML, unsafe_allow_html=True)

        with col_details:
            st.markdown(f"### {truncate_text(fragrance.name, 60)}")

            metadata_parts = []
            if fragrance.brand:
                metadata_parts.append(f"🏷️ **{fragrance.brand}**")
            if fragrance.year:
                metadata_parts.append(f"📅 {fragrance.year}")
            if fragrance.country:
                metadata_parts.append(f"🌍 {fragrance.country}")
            if fragrance.oil_type:
                metadata_parts.append(fragrance.oil_type)
            if metadata_parts:
                st.markdown(" | ".join(metadata_parts))

            st.markdown(
                f"{format_rating(fragrance.rating, fragrance.rating_count)}"
                f" · {format_price(fragrance.price)}"
            )

            if vibe_match is not None:
                color = get_score_color(vibe_match.similarity)
                st.markdown(
                    f'<span class="score-badge" style="background-color: {color}20; color: {color};">'
                    f'{format_similarity_score(vibe_match.similarity)}</span> '
                    f'{vibe_match.explanation}',
                    unsafe_allow_html=True
                )
                if vibe_match.vibe_scores:
                    st.caption(format_vibe_scores(vibe_match.vibe_scores))

            accords = top_accords(fragrance)
            if accords:
                st.markdown("**Accords:** " + ", ".join(name for name, _ in accords))

            st.markdown(f"**Top:** {format_notes(fragrance.top)}")
            st.markdown(f"**Heart:** {format_notes(fragrance.middle)}")
            st.markdown(f"**Base:** {format_notes(fragrance.base)}")

            render_locker_toggle(fragrance, locker, key=f"{key_prefix}_locker")


def render_locker_toggle(fragrance: Fragrance, locker: Locker, key: str) -> None:
    """Add/remove button bound to locker membership."""
    try:
        if locker.contains(fragrance):
            if st.button("🗑️ Remove from locker", key=key):
                locker.remove(fragrance)
                st.rerun()
        else:
            if st.button("➕ Add to locker", key=key, type="primary"):
                locker.add(fragrance)
                st.rerun()
    except LockerPersistenceError as e:
        st.error(f"Could not save your locker: {e.message}")
