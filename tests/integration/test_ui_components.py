"""Integration tests for UI components."""

import pytest

from scentlocker.core.search.filters import FragranceFilters
from scentlocker.core.use_cases import SearchMode, SearchResult, VisualSearchResult
from scentlocker.domain.entities.vibe import VibeScore, VibeType
from scentlocker.ui.components.filters import split_notes
from scentlocker.ui.state_manager import (
    active_filter_count,
    clear_search,
    get_visual_history,
    initialize_session_state,
    record_visual_result,
    reset_filters,
    update_filters,
    update_query,
    update_search_result,
)
from scentlocker.ui.utils import (
    format_average_rating,
    format_notes,
    format_price,
    format_rating,
    format_similarity_score,
    format_vibe_scores,
    get_score_color,
    top_accords,
    truncate_text,
)


class MockSessionState:
    """Mock Streamlit session state."""

    def __init__(self):
        self.data = {}

    def __setattr__(self, name, value):
        if name == "data":
            super().__setattr__(name, value)
        else:
            self.data[name] = value

    def __getattr__(self, name):
        if name == "data":
            return super().__getattribute__(name)
        return self.data.get(name)

    def __contains__(self, name):
        return name in self.data


@pytest.fixture
def mock_st_session_state(monkeypatch):
    """Mock Streamlit session state."""
    import streamlit as st

    mock_state = MockSessionState()
    monkeypatch.setattr("streamlit.session_state", mock_state, raising=False)

    return mock_state


class TestStateManager:
    """Test session state management."""

    def test_initialize_session_state(self, mock_st_session_state):
        """Test session state initialization."""
        initialize_session_state()

        import streamlit as st

        assert st.session_state.query == ""
        assert st.session_state.search_mode == SearchMode.AUTO
        assert st.session_state.filters.is_default()
        assert "search_result" in st.session_state
        assert st.session_state.visual_history == []

    def test_initialize_keeps_existing_values(self, mock_st_session_state):
        """Test reruns do not wipe state."""
        import streamlit as st

        st.session_state.query = "black orchid"
        initialize_session_state()

        assert st.session_state.query == "black orchid"

    def test_update_query_reports_changes(self, mock_st_session_state):
        """Test the search only reruns when the input changed."""
        initialize_session_state()

        assert update_query("dark sweet") is True
        assert update_query("dark sweet") is False
        assert update_query("dark sweet", SearchMode.LEXICAL) is True

    def test_filter_persistence(self, mock_st_session_state):
        """Test filter settings are persisted and counted."""
        import streamlit as st

        initialize_session_state()
        update_filters(FragranceFilters(brands=["Dior"], min_rating=4.0))

        assert st.session_state.filters.brands == ["Dior"]
        assert active_filter_count() == 2

        reset_filters()
        assert active_filter_count() == 0

    def test_clear_search(self, mock_st_session_state):
        """Test clearing drops the query and cached result."""
        import streamlit as st

        initialize_session_state()
        update_query("orchid")
        update_search_result(SearchResult(query="orchid", mode=SearchMode.LEXICAL))

        clear_search()

        assert st.session_state.query == ""
        assert st.session_state.search_result is None

    def test_visual_history_newest_first(self, mock_st_session_state, black_orchid):
        """Test the visual history strip."""
        import streamlit as st

        initialize_session_state()
        record_visual_result(VisualSearchResult(message="No matching fragrance found."))
        record_visual_result(
            VisualSearchResult(
                fragrance=black_orchid,
                similarity=0.91,
                added_to_locker=True,
                message="Matched Black Orchid (91% similar)",
            )
        )

        history = get_visual_history()

        assert [entry.fragrance_name for entry in history] == ["Black Orchid", None]
        assert history[0].added_to_locker is True
        assert st.session_state.visual_result.fragrance == black_orchid
        assert len(get_visual_history(limit=1)) == 1


class TestFormatting:
    """Test display helpers."""

    def test_format_price(self):
        assert format_price(95) == "$95.00"
        assert format_price(None) == "N/A"

    def test_format_rating(self):
        assert format_rating(4.123, 1234) == "★ 4.12 (1,234)"
        assert format_rating(3.9) == "★ 3.90"
        assert format_rating(None) == "No rating"

    def test_similarity_and_color(self):
        assert format_similarity_score(0.923) == "92.3%"
        assert format_similarity_score(0.923, as_percentage=False) == "0.923"
        assert get_score_color(0.85) == "#00C853"
        assert get_score_color(0.1) == "#DD2C00"

    def test_format_notes(self):
        assert format_notes([]) == "-"
        assert format_notes(["a", "b"]) == "a, b"
        assert format_notes(list("abcdefgh"), max_notes=6) == "a, b, c, d, e, f +2 more"

    def test_top_accords(self, sample_fragrances):
        aventus = sample_fragrances[5]
        assert top_accords(aventus, limit=2) == [("fruity", 100), ("woody", 80)]

    def test_format_vibe_scores(self):
        scores = [VibeScore(VibeType.DARK, 1.0), VibeScore(VibeType.SWEET, 0.64)]
        assert format_vibe_scores(scores) == "Dark 100% · Sweet 64%"

    def test_truncate_text(self):
        assert truncate_text("short") == "short"
        assert truncate_text("x" * 60, max_length=10) == "xxxxxxx..."

    def test_split_notes(self):
        assert split_notes(" vanilla, ,oud ,") == ["vanilla", "oud"]

    def test_format_average_rating(self):
        assert format_average_rating(4.04) == "4.0/5"
        assert format_average_rating(None) == "N/A"
