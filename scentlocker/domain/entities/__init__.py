# Domain Entities Package
"""
Core business entities as dataclasses.
"""

from .fragrance import Fragrance
from .vibe import VibeMapping, VibeMatch, VibeScore, VibeType
from .visual_match import ImageCandidate, ImageSource, VisualMatch

__all__ = [
    "Fragrance",
    "ImageCandidate",
    "ImageSource",
    "VibeMapping",
    "VibeMatch",
    "VibeScore",
    "VibeType",
    "VisualMatch",
]
