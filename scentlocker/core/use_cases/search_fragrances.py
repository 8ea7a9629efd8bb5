# Search Fragrances Use Case
"""
Use case for searching the catalog by name or by vibe.

Lexical and vibe search are mutually exclusive per query; in "auto"
mode the query intent heuristic picks one.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from scentlocker.core.catalog import FragranceCatalog
from scentlocker.core.search.filters import FragranceFilters, apply_filters
from scentlocker.core.search.lexical import LexicalSearch
from scentlocker.core.vibes.engine import VibeEngine
from scentlocker.core.vibes.intent import is_vibe_query
from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.domain.entities.vibe import VibeMatch
from scentlocker.utils.config import AppConfig
from scentlocker.utils.exceptions import InvalidInputError
from scentlocker.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)


class SearchMode(str, Enum):
    """How a query is interpreted."""

    AUTO = "auto"
    LEXICAL = "lexical"
    VIBE = "vibe"


@dataclass
class SearchResult:
    """Result of a catalog search."""
    query: str
    mode: SearchMode
    fragrances: List[Fragrance] = field(default_factory=list)
    vibe_matches: List[VibeMatch] = field(default_factory=list)
    message: str = ""

    @property
    def count(self) -> int:
        return len(self.fragrances)


class SearchFragrancesUseCase:
    """
    Searches the loaded catalog.

    This use case:
    1. Resolves the search mode (auto uses the intent heuristic)
    2. Runs lexical search, filtering its ranked superset, or
    3. Filters the first ``vibe_scan_limit`` records and runs vibe search
    4. Returns ranked fragrances, plus vibe explanations in vibe mode

    An unloaded or empty catalog yields empty results, not an error.
    """

    def __init__(
        self,
        catalog: FragranceCatalog,
        lexical: Optional[LexicalSearch] = None,
        vibe_engine: Optional[VibeEngine] = None,
        vibe_scan_limit: int = 2000,
        default_limit: int = 20,
        vibe_limit: int = 5,
    ):
        self.catalog = catalog
        self.lexical = lexical or LexicalSearch()
        self.vibe_engine = vibe_engine or VibeEngine()
        self.vibe_scan_limit = vibe_scan_limit
        self.default_limit = default_limit
        self.vibe_limit = vibe_limit

    @classmethod
    def from_config(cls, config: AppConfig, catalog: FragranceCatalog) -> "SearchFragrancesUseCase":
        return cls(
            catalog=catalog,
            lexical=LexicalSearch(
                scan_limit=config.dataset.lexical_scan_limit,
                min_query_length=config.search.min_query_length,
                exhaustive=config.search.exhaustive,
            ),
            vibe_engine=VibeEngine(exhaustive=config.search.exhaustive),
            vibe_scan_limit=config.dataset.vibe_scan_limit,
            default_limit=config.search.default_limit,
            vibe_limit=config.search.vibe_limit,
        )

    def resolve_mode(self, query: str, mode: SearchMode = SearchMode.AUTO) -> SearchMode:
        if mode != SearchMode.AUTO:
            return mode
        return SearchMode.VIBE if is_vibe_query(query) else SearchMode.LEXICAL

    def search_lexical(
        self,
        query: str,
        limit: Optional[int] = None,
        filters: Optional[FragranceFilters] = None,
    ) -> List[Fragrance]:
        """Name/brand/note substring search over the catalog."""
        if not self.catalog.is_loaded:
            logger.warning("Dataset not loaded yet, lexical search returns nothing")
            return []
        return self.lexical.search(
            self.catalog.fragrances, query, limit or self.default_limit, filters
        )

    def search_by_vibe(
        self,
        query: str,
        limit: Optional[int] = None,
        filters: Optional[FragranceFilters] = None,
    ) -> List[VibeMatch]:
        """
        Vibe search over the first ``vibe_scan_limit`` records.

        Filters are applied to that window before scoring.
        """
        if not query or not query.strip():
            return []
        if not self.catalog.is_loaded:
            logger.warning("Dataset not loaded yet, vibe search returns nothing")
            return []

        window = self.catalog.fragrances[: self.vibe_scan_limit]
        if filters is not None:
            window = apply_filters(window, filters)

        return self.vibe_engine.search_by_vibe(window, query, limit or self.vibe_limit)

    def execute(
        self,
        query: str,
        mode: SearchMode = SearchMode.AUTO,
        limit: Optional[int] = None,
        filters: Optional[FragranceFilters] = None,
    ) -> SearchResult:
        """
        Search the catalog.

        Args:
            query: User text.
            mode: auto, lexical or vibe.
            limit: Maximum results (mode default when None).
            filters: Optional criteria.

        Returns:
            SearchResult with the resolved mode and ranked fragrances.

        Raises:
            InvalidInputError: If ``limit`` is not positive.
        """
        if limit is not None and limit <= 0:
            raise InvalidInputError("limit must be positive", field="limit", value=limit)

        resolved = self.resolve_mode(query, mode)

        with log_execution_time(logger, f"{resolved.value} search '{query}'"):
            if resolved == SearchMode.VIBE:
                matches = self.search_by_vibe(query, limit, filters)
                result = SearchResult(
                    query=query,
                    mode=resolved,
                    fragrances=[m.fragrance for m in matches],
                    vibe_matches=matches,
                )
            else:
                result = SearchResult(
                    query=query,
                    mode=resolved,
                    fragrances=self.search_lexical(query, limit, filters),
                )

        if not result.fragrances:
            result.message = self._empty_message(query, resolved)
        return result

    def _empty_message(self, query: str, mode: SearchMode) -> str:
        if not self.catalog.is_loaded:
            return "The fragrance dataset is not loaded yet."
        if len(query.strip()) < self.lexical.min_query_length:
            return f"Type at least {self.lexical.min_query_length} characters to search."
        if mode == SearchMode.VIBE:
            return f'No fragrances match the vibe "{query}".'
        return f'No fragrances found for "{query}".'
