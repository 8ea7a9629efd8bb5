# Use Cases Package
"""
Application use cases (business logic).

Use cases orchestrate the catalog, the search engines, the visual
matcher and the locker.
"""

from scentlocker.core.use_cases.search_fragrances import (
    SearchFragrancesUseCase,
    SearchMode,
    SearchResult,
)
from scentlocker.core.use_cases.visual_search import (
    NO_CANDIDATES_MESSAGE,
    NO_MATCH_MESSAGE,
    VisualSearchResult,
    VisualSearchUseCase,
)

__all__ = [
    # Search
    "SearchFragrancesUseCase",
    "SearchMode",
    "SearchResult",
    # Visual search
    "NO_CANDIDATES_MESSAGE",
    "NO_MATCH_MESSAGE",
    "VisualSearchResult",
    "VisualSearchUseCase",
]
