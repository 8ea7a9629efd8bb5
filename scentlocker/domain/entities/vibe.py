"""
Vibe value objects: categories, taxonomy entries, scores and matches.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from .fragrance import Fragrance


class VibeType(str, Enum):
    """Coarse mood/style categories used as semantic search axes."""

    FRESH = "fresh"
    CLEAN = "clean"
    SWEET = "sweet"
    DARK = "dark"
    WOODY = "woody"
    SPICY = "spicy"
    POWDERY = "powdery"
    SMOKY = "smoky"
    FLORAL = "floral"
    CITRUS = "citrus"
    AQUATIC = "aquatic"
    GREEN = "green"
    WARM = "warm"
    COOL = "cool"
    GOURMAND = "gourmand"
    ORIENTAL = "oriental"
    MASCULINE = "masculine"
    FEMININE = "feminine"
    UNISEX = "unisex"

    @property
    def label(self) -> str:
        """Display form, e.g. ``Dark``."""
        return self.value.capitalize()


@dataclass(frozen=True)
class VibeMapping:
    """
    Taxonomy entry for one vibe.

    Contextual vibes (masculine, feminine, unisex) carry a weight below
    1.0 so that gendered keywords do not dominate a profile.
    """

    notes: Tuple[str, ...]
    accords: Tuple[str, ...]
    weight: float = 1.0

    def __post_init__(self) -> None:
        if not self.notes and not self.accords:
            raise ValueError("A vibe mapping needs at least one note or accord")
        if not 0.0 < self.weight <= 1.0:
            raise ValueError(f"Vibe weight must be within (0, 1], got {self.weight}")


@dataclass(frozen=True)
class VibeScore:
    """Normalized strength of one vibe in a fragrance or query (0-1)."""

    vibe: VibeType
    score: float


@dataclass
class VibeMatch:
    """Result of a vibe search for a single fragrance."""

    fragrance: Fragrance
    similarity: float
    explanation: str
    vibe_scores: List[VibeScore] = field(default_factory=list)
