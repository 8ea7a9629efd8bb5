"""UI components for the ScentLocker Streamlit app."""

from .filters import render_filters
from .fragrance_card import render_fragrance_card, render_locker_toggle
from .locker_view import render_locker
from .stats_panel import render_stats_panel

__all__ = [
    "render_filters",
    "render_fragrance_card",
    "render_locker_toggle",
    "render_locker",
    "render_stats_panel",
]
