"""
Lexical substring search over fragrance name, brand, notes and description.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from scentlocker.core.search.filters import FragranceFilters, apply_filters
from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.utils.logger import get_logger

logger = get_logger(__name__)

NAME_MATCH_SCORE = 100
BRAND_MATCH_SCORE = 50
NOTE_MATCH_SCORE = 10
DESCRIPTION_MATCH_SCORE = 5
# Description only counts for weak candidates
DESCRIPTION_SCORE_CEILING = 50

DEFAULT_SCAN_LIMIT = 5000
EARLY_EXIT_FACTOR = 3
PREFILTER_FACTOR = 2


class LexicalSearch:
    """
    Case-insensitive substring search with additive scoring.

    Scoring per fragrance:
    - name contains the query: +100, accepted without further scoring
    - brand contains the query: +50
    - every note containing the query: +10
    - description contains the query: +5, only while the score is below 50

    Bounded scan: only the first ``scan_limit`` records are scored, and
    the scan stops once ``3 * limit`` candidates exist at the moment a
    name match is found. Results can therefore miss matches further in
    the dataset; ``exhaustive=True`` removes both bounds.

    Attributes:
        scan_limit: Records scored per search.
        min_query_length: Shorter (trimmed) queries return nothing.
        exhaustive: Disable the scan bounds.
    """

    def __init__(
        self,
        scan_limit: int = DEFAULT_SCAN_LIMIT,
        min_query_length: int = 2,
        exhaustive: bool = False,
    ) -> None:
        self.scan_limit = scan_limit
        self.min_query_length = min_query_length
        self.exhaustive = exhaustive

    @staticmethod
    def score(fragrance: Fragrance, term: str) -> int:
        """
        Score one fragrance against a lowercased, trimmed term.

        Returns:
            0 when nothing matched.
        """
        if term in fragrance.name.lower():
            return NAME_MATCH_SCORE

        score = 0
        if fragrance.brand and term in fragrance.brand.lower():
            score += BRAND_MATCH_SCORE

        note_hits = sum(1 for note in fragrance.all_notes if note and term in note.lower())
        score += note_hits * NOTE_MATCH_SCORE

        if fragrance.description and score < DESCRIPTION_SCORE_CEILING:
            if term in fragrance.description.lower():
                score += DESCRIPTION_MATCH_SCORE

        return score

    def rank(
        self,
        fragrances: Sequence[Fragrance],
        query: str,
        limit: int,
    ) -> List[Tuple[Fragrance, int]]:
        """
        Score and order candidates, best first.

        Ties keep dataset order. Returns at most ``2 * limit`` entries,
        the superset later narrowed by filters.
        """
        term = (query or "").lower().strip()
        if len(term) < self.min_query_length or not fragrances or limit <= 0:
            return []

        candidates = fragrances if self.exhaustive else fragrances[: self.scan_limit]
        scored: List[Tuple[Fragrance, int]] = []

        for fragrance in candidates:
            score = self.score(fragrance, term)
            if score <= 0:
                continue
            scored.append((fragrance, score))
            if (
                not self.exhaustive
                and len(scored) >= limit * EARLY_EXIT_FACTOR
                and term in fragrance.name.lower()
            ):
                break

        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[: limit * PREFILTER_FACTOR]

    def search(
        self,
        fragrances: Sequence[Fragrance],
        query: str,
        limit: int = 20,
        filters: Optional[FragranceFilters] = None,
    ) -> List[Fragrance]:
        """
        Search fragrances by substring.

        Args:
            fragrances: Dataset snapshot.
            query: Search text; fewer than ``min_query_length`` characters
                after trimming yields no results.
            limit: Maximum number of results.
            filters: Optional criteria applied to the ranked superset of
                ``2 * limit`` candidates before truncation, so a filtered
                search may return fewer than ``limit`` results even when
                more matches exist.

        Returns:
            Ranked fragrances, at most ``limit``.
        """
        ranked = [fragrance for fragrance, _ in self.rank(fragrances, query, limit)]
        if filters is not None:
            ranked = apply_filters(ranked, filters)

        logger.debug(f"Lexical search '{query}': {len(ranked)} results (limit {limit})")
        return ranked[:limit]
