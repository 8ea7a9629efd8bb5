"""
Multi-criteria fragrance filters.

FragranceFilters is built fresh from UI state for every search and
applied as an AND of independent predicates. A filter left at its
default value imposes no restriction.

Example:
    >>> filters = FragranceFilters(accords=["floral"], min_rating=4.0)
    >>> apply_filters(fragrances, filters)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import FrozenSet, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, model_validator

from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.utils.logger import get_logger

logger = get_logger(__name__)

WearContext = Literal["day", "night", "office", "date"]
Concentration = Literal["EDT", "EDP", "Parfum"]
HouseType = Literal["Designer", "Niche", "Indie"]

MAX_PRICE = 10000.0

# Keywords searched for inside note and accord names
WEAR_CONTEXT_KEYWORDS = {
    "day": ("fresh", "clean", "citrus", "light"),
    "night": ("dark", "warm", "oriental", "woody"),
    "office": ("clean", "fresh", "subtle", "professional"),
    "date": ("sweet", "warm", "floral", "gourmand"),
}


def _current_year() -> int:
    return date.today().year


class PriceRange(BaseModel):
    """Inclusive price bounds."""

    min: float = Field(default=0.0, ge=0.0)
    max: float = Field(default=MAX_PRICE, ge=0.0)

    @model_validator(mode='after')
    def validate_bounds(self) -> 'PriceRange':
        if self.min > self.max:
            raise ValueError(f"Price min {self.min} exceeds max {self.max}")
        return self


class YearRange(BaseModel):
    """Inclusive release-year bounds."""

    min: int = Field(default=0, ge=0)
    max: int = Field(default_factory=_current_year)

    @model_validator(mode='after')
    def validate_bounds(self) -> 'YearRange':
        if self.min > self.max:
            raise ValueError(f"Year min {self.min} exceeds max {self.max}")
        return self


class FragranceFilters(BaseModel):
    """
    Search filters submitted from the UI.

    ``house_type`` is accepted for form compatibility but never applied:
    the dataset has no authoritative house-type data.
    """

    price_range: PriceRange = Field(default_factory=PriceRange)
    brands: List[str] = Field(default_factory=list)
    accords: List[str] = Field(default_factory=list)
    wear_context: List[WearContext] = Field(default_factory=list)
    min_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    concentration: List[Concentration] = Field(default_factory=list)
    notes_include: List[str] = Field(default_factory=list)
    notes_exclude: List[str] = Field(default_factory=list)
    house_type: List[HouseType] = Field(default_factory=list)
    brand_origin: List[str] = Field(default_factory=list)
    year_range: YearRange = Field(default_factory=YearRange)
    min_review_count: Optional[int] = Field(default=None, ge=0)

    def active_fields(self) -> List[str]:
        """Names of the filter criteria that restrict results."""
        defaults = YearRange()
        checks: List[Tuple[str, bool]] = [
            ("price_min", self.price_range.min > 0),
            ("price_max", self.price_range.max < MAX_PRICE),
            ("brands", bool(self.brands)),
            ("accords", bool(self.accords)),
            ("wear_context", bool(self.wear_context)),
            ("min_rating", self.min_rating > 0),
            ("concentration", bool(self.concentration)),
            ("notes_include", bool(self.notes_include)),
            ("notes_exclude", bool(self.notes_exclude)),
            ("brand_origin", bool(self.brand_origin)),
            ("year_min", self.year_range.min > defaults.min),
            ("year_max", self.year_range.max < defaults.max),
            ("min_review_count", bool(self.min_review_count)),
        ]
        return [name for name, active in checks if active]

    def is_default(self) -> bool:
        return not self.active_fields()


DEFAULT_FILTERS = FragranceFilters()


def get_default_filters() -> FragranceFilters:
    """Fresh filters with no restriction."""
    return FragranceFilters()


def count_active_filters(filters: FragranceFilters) -> int:
    """Number of active criteria, for the filter badge in the UI."""
    return len(filters.active_fields())


@dataclass(frozen=True)
class _FilterSets:
    """Lowercased lookup sets built once per apply_filters call."""

    brands: FrozenSet[str]
    accords: FrozenSet[str]
    concentrations: FrozenSet[str]
    origins: FrozenSet[str]
    notes_include: FrozenSet[str]
    notes_exclude: FrozenSet[str]

    @classmethod
    def from_filters(cls, filters: FragranceFilters) -> "_FilterSets":
        return cls(
            brands=frozenset(b.lower() for b in filters.brands),
            accords=frozenset(a.lower() for a in filters.accords),
            concentrations=frozenset(c.upper() for c in filters.concentration),
            origins=frozenset(c.lower() for c in filters.brand_origin),
            notes_include=frozenset(n.lower() for n in filters.notes_include),
            notes_exclude=frozenset(n.lower() for n in filters.notes_exclude),
        )


def _overlaps(a: str, b: str) -> bool:
    return a in b or b in a


def _lower_notes(fragrance: Fragrance) -> List[str]:
    return [note.lower() for note in fragrance.all_notes if note]


def matches_wear_context(fragrance: Fragrance, contexts: Sequence[str]) -> bool:
    """True if any note or accord contains a keyword of any selected context."""
    if not contexts:
        return True

    names = _lower_notes(fragrance) + [accord.lower() for accord in fragrance.accords]
    for context in contexts:
        for keyword in WEAR_CONTEXT_KEYWORDS.get(context, ()):
            if any(keyword in name for name in names):
                return True
    return False


def _passes(fragrance: Fragrance, filters: FragranceFilters, sets: _FilterSets) -> bool:
    # Range checks only apply to fragrances carrying the field
    if fragrance.price is not None:
        if not filters.price_range.min <= fragrance.price <= filters.price_range.max:
            return False

    if sets.brands and fragrance.brand.lower() not in sets.brands:
        return False

    if sets.accords:
        if not fragrance.accords:
            return False
        accords = [accord.lower() for accord in fragrance.accords]
        if not any(_overlaps(a, wanted) for a in accords for wanted in sets.accords):
            return False

    if filters.wear_context and not matches_wear_context(fragrance, filters.wear_context):
        return False

    if filters.min_rating > 0:
        if fragrance.rating is None or fragrance.rating < filters.min_rating:
            return False

    if sets.concentrations:
        if not fragrance.oil_type:
            return False
        oil_type = fragrance.oil_type.upper()
        if not any(conc in oil_type for conc in sets.concentrations):
            return False

    if sets.notes_include or sets.notes_exclude:
        notes = _lower_notes(fragrance)
        for required in sets.notes_include:
            if not any(_overlaps(note, required) for note in notes):
                return False
        for excluded in sets.notes_exclude:
            if any(_overlaps(note, excluded) for note in notes):
                return False

    if sets.origins:
        if not fragrance.country or fragrance.country.lower() not in sets.origins:
            return False

    if fragrance.year is not None:
        if not filters.year_range.min <= fragrance.year <= filters.year_range.max:
            return False

    if filters.min_review_count:
        if fragrance.rating_count is None or fragrance.rating_count < filters.min_review_count:
            return False

    return True


def apply_filters(
    fragrances: Sequence[Fragrance],
    filters: Optional[FragranceFilters],
) -> List[Fragrance]:
    """
    Keep the fragrances passing every active filter, preserving order.

    Args:
        fragrances: Candidates.
        filters: Criteria; None or defaults return the input unchanged.

    Returns:
        Filtered list. Applying the same filters twice changes nothing.
    """
    if filters is None:
        return list(fragrances)

    if filters.house_type:
        logger.debug(f"House type filter ignored, no data source: {filters.house_type}")

    if filters.is_default():
        return list(fragrances)

    sets = _FilterSets.from_filters(filters)
    result = [f for f in fragrances if _passes(f, filters, sets)]
    logger.debug(
        f"Filters {filters.active_fields()} kept {len(result)}/{len(fragrances)} fragrances"
    )
    return result
