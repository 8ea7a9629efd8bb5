"""
Collection insights for the locker.

Counts are ordered by frequency; ties keep the order in which the value
first appeared in the collection.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from scentlocker.domain.entities.fragrance import Fragrance

DEFAULT_TOP_N = 5


@dataclass(frozen=True)
class LockerStats:
    """
    Summary of a saved collection.

    Attributes:
        total: Number of saved fragrances.
        unique_brands: Distinct non-empty brands.
        average_rating: Mean over rated fragrances, None when none is rated.
        top_notes: Most common top notes with counts.
        top_brands: Most common brands with counts.
        top_accords: Most common accords with counts.
    """
    total: int = 0
    unique_brands: int = 0
    average_rating: Optional[float] = None
    top_notes: List[Tuple[str, int]] = field(default_factory=list)
    top_brands: List[Tuple[str, int]] = field(default_factory=list)
    top_accords: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.total == 0


def compute_locker_stats(
    fragrances: Iterable[Fragrance],
    top_n: int = DEFAULT_TOP_N,
) -> LockerStats:
    """
    Compute collection statistics.

    Args:
        fragrances: Saved fragrances.
        top_n: Length of each most-common list.

    Returns:
        LockerStats for the collection.
    """
    items = list(fragrances)

    brands = Counter(f.brand for f in items if f.brand)
    notes = Counter(note for f in items for note in f.top)
    accords = Counter(accord for f in items for accord in f.accords)

    ratings = [f.rating for f in items if f.rating]
    average = sum(ratings) / len(ratings) if ratings else None

    return LockerStats(
        total=len(items),
        unique_brands=len(brands),
        average_rating=average,
        top_notes=notes.most_common(top_n),
        top_brands=brands.most_common(top_n),
        top_accords=accords.most_common(top_n),
    )
