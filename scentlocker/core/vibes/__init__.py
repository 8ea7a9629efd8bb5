"""Vibe taxonomy, scoring engine and query intent detection."""

from .engine import VibeEngine, VibeScoreCache
from .intent import is_vibe_query
from .taxonomy import CONTEXT_MAPPINGS, VIBE_TAXONOMY, build_note_index

__all__ = [
    "CONTEXT_MAPPINGS",
    "VIBE_TAXONOMY",
    "VibeEngine",
    "VibeScoreCache",
    "build_note_index",
    "is_vibe_query",
]
