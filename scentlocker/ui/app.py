"""ScentLocker Streamlit UI - Main Application.

Search a fragrance dataset by name or by vibe, identify a bottle from a
photo, and keep a personal locker of saved perfumes.
"""

import asyncio

import streamlit as st

from scentlocker.core.catalog import FragranceCatalog
from scentlocker.core.locker import Locker
from scentlocker.core.use_cases import (
    SearchFragrancesUseCase,
    SearchMode,
    VisualSearchUseCase,
)
from scentlocker.core.visual_matcher import VisualMatcher
from scentlocker.infrastructure.locker.json_locker import JsonLockerRepository
from scentlocker.infrastructure.vision.hf_embedding_client import HuggingFaceEmbeddingClient
from scentlocker.ui.components import (
    render_filters,
    render_fragrance_card,
    render_locker,
)
from scentlocker.ui.state_manager import (
    active_filter_count,
    get_visual_history,
    initialize_session_state,
    record_visual_result,
    reset_filters,
    update_filters,
    update_query,
    update_search_result,
)
from scentlocker.ui.styles import get_custom_css
from scentlocker.ui.utils import format_similarity_score, read_upload
from scentlocker.utils import get_config, get_logger, log_exception
from scentlocker.utils.config import AppConfig
from scentlocker.utils.exceptions import AppException

logger = get_logger(__name__)

MODE_LABELS = {
    SearchMode.AUTO: "Auto",
    SearchMode.LEXICAL: "Name / brand / note",
    SearchMode.VIBE: "Vibe",
}


# Cache the dataset and locker to avoid reloading on every rerun
@st.cache_resource
def initialize_services():
    """Load configuration, the catalog and the locker once.

    Returns:
        Tuple of (config, catalog, search use case, locker)
    """
    try:
        config = get_config()
        catalog = FragranceCatalog.from_path(config.dataset.path)
        catalog.load()
        search = SearchFragrancesUseCase.from_config(config, catalog)
        locker = Locker(JsonLockerRepository(config.locker.storage_path))
        return config, catalog, search, locker

    except (AppException, FileNotFoundError, ValueError) as e:
        log_exception(logger, "initialize services", e)
        st.error(f"Failed to initialize: {e}")
        st.stop()


async def _identify(config: AppConfig, catalog: FragranceCatalog, locker: Locker, image: bytes):
    async with HuggingFaceEmbeddingClient.from_config(config.vision) as provider:
        use_case = VisualSearchUseCase(
            catalog=catalog,
            provider=provider,
            locker=locker,
            matcher=VisualMatcher(threshold=config.vision.match_threshold),
            candidate_limit=config.vision.candidate_limit,
        )
        return await use_case.execute(image)


def render_search_tab(search: SearchFragrancesUseCase, locker: Locker) -> None:
    col_query, col_mode = st.columns([3, 1])
    with col_query:
        query = st.text_input(
            "Search fragrances",
            value=st.session_state.query,
            placeholder='Try "orchid" or "something dark and sweet for date night"',
        )
    with col_mode:
        mode = st.selectbox(
            "Mode",
            options=list(SearchMode),
            index=list(SearchMode).index(st.session_state.search_mode),
            format_func=lambda m: MODE_LABELS[m],
        )

    update_query(query, mode)

    # Streamlit reruns on submit, so every run searches with the current filters
    if not query.strip():
        update_search_result(None)
        st.info("👆 Type a fragrance name, a brand, a note, or describe a mood")
        return

    try:
        result = search.execute(query, mode=mode, filters=st.session_state.filters)
    except AppException as e:
        log_exception(logger, "search", e)
        st.error(f"Search failed: {e.message}")
        return

    update_search_result(result)

    if not result.fragrances:
        st.warning(result.message)
        return

    st.markdown(
        f"### 🎯 {result.count} result(s) · {MODE_LABELS[result.mode]} search"
    )
    if result.vibe_matches:
        for idx, match in enumerate(result.vibe_matches):
            render_fragrance_card(match.fragrance, locker, vibe_match=match, key_prefix=f"vibe{idx}")
    else:
        for idx, fragrance in enumerate(result.fragrances):
            render_fragrance_card(fragrance, locker, key_prefix=f"lex{idx}")


def render_visual_tab(config: AppConfig, catalog: FragranceCatalog, locker: Locker) -> None:
    st.markdown("Take a photo of a bottle, or upload one, to find it and save it to your locker.")

    source = st.radio("Image source", options=["Camera", "Upload"], horizontal=True)
    if source == "Camera":
        captured = st.camera_input("Take a photo")
    else:
        captured = st.file_uploader("Upload a photo", type=["jpg", "jpeg", "png", "webp"])

    if captured is not None and st.button("🔍 Identify Fragrance", use_container_width=True, type="primary"):
        with st.spinner("Comparing with catalog images..."):
            try:
                result = asyncio.run(_identify(config, catalog, locker, read_upload(captured)))
                record_visual_result(result)
            except AppException as e:
                log_exception(logger, "visual search", e)
                st.error(e.message)

    result = st.session_state.visual_result
    if result is not None:
        if result.matched:
            st.markdown(
                f'<div class="match-banner"><h3>{result.fragrance.name}</h3>'
                f'<div>{result.fragrance.brand} · '
                f'{format_similarity_score(result.similarity)} similar</div></div>',
                unsafe_allow_html=True
            )
            if result.added_to_locker:
                st.success("✅ Added to your locker")
            render_fragrance_card(result.fragrance, locker, key_prefix="visual")
        else:
            st.warning(result.message)

    history = get_visual_history()
    if history:
        st.markdown("#### Recent identifications")
        for entry in history:
            label = entry.fragrance_name or "No match"
            st.caption(f"{label}: {entry.message}")


def main():
    """Main application entry point."""

    st.set_page_config(
        page_title="ScentLocker - Fragrance Search",
        page_icon="🧴",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    st.markdown(get_custom_css(), unsafe_allow_html=True)

    initialize_session_state()

    config, catalog, search, locker = initialize_services()

    # ==================== HEADER ====================
    st.title("🧴 ScentLocker")
    st.markdown("**Find perfumes by name or by vibe**, and keep track of your collection")

    if len(catalog) == 0:
        st.warning(
            "⚠️ **The fragrance dataset is empty!** "
            "Convert a CSV export first:\n\n"
            "`scentlocker convert perfumes.csv data/perfumes.json`"
        )

    st.info(f"📦 Dataset contains **{len(catalog):,}** fragrances · 🔐 Locker holds **{len(locker)}**")

    # ==================== SIDEBAR ====================
    with st.sidebar:
        count = active_filter_count()
        st.markdown(
            f'## Filters <span class="filter-count">{count}</span>',
            unsafe_allow_html=True
        )
        if count and st.button("↺ Reset filters", use_container_width=True):
            reset_filters()
            st.rerun()

    filters = render_filters(
        st.session_state.filters,
        brands=catalog.brands(),
        accords=catalog.accords(),
        countries=catalog.countries(),
    )
    update_filters(filters)

    # ==================== MAIN PANEL ====================
    tab_search, tab_visual, tab_locker = st.tabs(["🔍 Search", "📸 Visual Search", "🔐 My Locker"])

    with tab_search:
        render_search_tab(search, locker)

    with tab_visual:
        render_visual_tab(config, catalog, locker)

    with tab_locker:
        render_locker(locker)

    # ==================== FOOTER ====================
    st.markdown("---")
    st.markdown(
        """
        <div style="text-align: center; color: #666; padding: 1rem;">
            <small>ScentLocker v0.1 | Built with Streamlit</small>
        </div>
        """,
        unsafe_allow_html=True
    )


if __name__ == "__main__":
    main()
