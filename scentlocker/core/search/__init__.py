"""Lexical search and the filter engine."""

from .filters import (
    DEFAULT_FILTERS,
    WEAR_CONTEXT_KEYWORDS,
    FragranceFilters,
    PriceRange,
    YearRange,
    apply_filters,
    count_active_filters,
    get_default_filters,
)
from .lexical import LexicalSearch

__all__ = [
    "DEFAULT_FILTERS",
    "WEAR_CONTEXT_KEYWORDS",
    "FragranceFilters",
    "LexicalSearch",
    "PriceRange",
    "YearRange",
    "apply_filters",
    "count_active_filters",
    "get_default_filters",
]
