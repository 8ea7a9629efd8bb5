"""
Vibe engine: scores fragrances and free-text queries on the vibe axes
and ranks fragrances by cosine similarity to the query.

Example:
    >>> engine = VibeEngine()
    >>> matches = engine.search_by_vibe(fragrances, "dark sweet", limit=5)
    >>> matches[0].explanation
    'Matches your Dark vibe'
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from scentlocker.core.scoring.similarity import sparse_cosine_similarity
from scentlocker.core.vibes.taxonomy import (
    CONTEXT_MAPPINGS,
    VIBE_TAXONOMY,
    NoteContribution,
    build_note_index,
)
from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.domain.entities.vibe import VibeMapping, VibeMatch, VibeScore, VibeType
from scentlocker.utils.logger import get_logger

logger = get_logger(__name__)

# Query parsing weights
VIBE_NAME_WEIGHT = 1.0
CONTEXT_PHRASE_WEIGHT = 0.8
NOTE_MENTION_WEIGHT = 0.5

# Fragrance scoring: substring note hits count half
PARTIAL_NOTE_FACTOR = 0.5

# Ranking
MIN_SIMILARITY = 0.1
EARLY_EXIT_SIMILARITY = 0.3
SCAN_FACTOR = 15
EARLY_EXIT_FACTOR = 3
TOP_VIBE_SCORES = 5

# Explanation
EXPLANATION_TOP_N = 3
EXPLANATION_MIN_WEIGHT = 0.1

QueryVibes = Dict[VibeType, float]


class VibeScoreCache:
    """
    Per-engine cache of fragrance vibe profiles keyed by (name, brand).

    Unbounded: the dataset is read-only and loaded once. Writes are
    idempotent, recomputing a key stores the same value.
    """

    def __init__(self) -> None:
        self._scores: Dict[Tuple[str, str], List[VibeScore]] = {}

    def get(self, key: Tuple[str, str]) -> Optional[List[VibeScore]]:
        return self._scores.get(key)

    def set(self, key: Tuple[str, str], scores: List[VibeScore]) -> None:
        self._scores[key] = scores

    def clear(self) -> None:
        self._scores.clear()

    def __contains__(self, key: Tuple[str, str]) -> bool:
        return key in self._scores

    def __len__(self) -> int:
        return len(self._scores)


class VibeEngine:
    """
    Heuristic semantic search over the vibe taxonomy.

    Both the note index and the score cache belong to the instance, so
    independent engines (and tests) never share state.

    Attributes:
        taxonomy: Vibe -> VibeMapping table.
        context_mappings: Context phrase -> implied vibes.
        cache: Vibe profile cache.
        exhaustive: When True, scan every fragrance and skip the early
            exit. Otherwise the scan is bounded to ``limit * 15`` records
            and stops once ``limit * 3`` matches exist and the latest one
            is weaker than 0.3, so the global top results are not
            guaranteed on large inputs.
    """

    def __init__(
        self,
        taxonomy: Mapping[VibeType, VibeMapping] = VIBE_TAXONOMY,
        context_mappings: Mapping[str, Sequence[VibeType]] = CONTEXT_MAPPINGS,
        cache: Optional[VibeScoreCache] = None,
        exhaustive: bool = False,
    ) -> None:
        self.taxonomy = taxonomy
        self.context_mappings = context_mappings
        self.cache = cache if cache is not None else VibeScoreCache()
        self.exhaustive = exhaustive
        self._note_index: Dict[str, List[NoteContribution]] = build_note_index(taxonomy)

    # ------------------------------------------------------------------
    # Fragrance profile
    # ------------------------------------------------------------------

    def compute_vibe_scores(self, fragrance: Fragrance) -> List[VibeScore]:
        """
        Compute the normalized vibe profile of a fragrance.

        Notes found verbatim in the taxonomy add their vibe weight; other
        notes fall back to substring matching in both directions at half
        weight. Every declared accord adds ``weight * intensity / 100``
        (capped at 1) to each vibe whose accord list matches it by
        substring. Scores are divided by the largest one.

        Returns:
            Nonzero VibeScores sorted descending, the first being 1.0.
            Empty when nothing matched.
        """
        weights: Dict[VibeType, float] = {vibe: 0.0 for vibe in self.taxonomy}

        for raw_note in fragrance.all_notes:
            if not raw_note:
                continue
            note = raw_note.lower()
            exact = self._note_index.get(note)
            if exact:
                for vibe, weight in exact:
                    weights[vibe] += weight
                continue
            for vibe, mapping in self.taxonomy.items():
                for vibe_note in mapping.notes:
                    vibe_note = vibe_note.lower()
                    if vibe_note in note or note in vibe_note:
                        weights[vibe] += mapping.weight * PARTIAL_NOTE_FACTOR

        for accord_name, intensity in fragrance.accords.items():
            accord = accord_name.lower()
            strength = min(intensity / 100.0, 1.0)
            for vibe, mapping in self.taxonomy.items():
                for vibe_accord in mapping.accords:
                    vibe_accord = vibe_accord.lower()
                    if vibe_accord in accord or accord in vibe_accord:
                        weights[vibe] += mapping.weight * strength

        max_weight = max(weights.values(), default=0.0)
        if max_weight <= 0:
            return []

        scores = [
            VibeScore(vibe=vibe, score=min(weight / max_weight, 1.0))
            for vibe, weight in weights.items()
            if weight > 0
        ]
        # Stable: ties keep taxonomy order
        scores.sort(key=lambda s: s.score, reverse=True)
        return scores

    def get_vibe_scores(self, fragrance: Fragrance) -> List[VibeScore]:
        """Cached variant of :meth:`compute_vibe_scores`."""
        cached = self.cache.get(fragrance.key)
        if cached is not None:
            return cached
        scores = self.compute_vibe_scores(fragrance)
        self.cache.set(fragrance.key, scores)
        return scores

    # ------------------------------------------------------------------
    # Query parsing
    # ------------------------------------------------------------------

    def parse_vibe_query(self, query: str) -> QueryVibes:
        """
        Turn a free-text query into a vibe weight vector summing to 1.

        Three additive passes over the lowercased text:
        - every vibe name contained in it adds 1.0 to that vibe
        - every context phrase contained in it spreads 0.8 evenly over
          the vibes it implies
        - every taxonomy note contained in it adds 0.5 to its vibe

        Returns:
            Weight for every vibe. All zeros when the query carries no
            vibe signal.
        """
        text = query.lower().strip()
        weights: QueryVibes = {vibe: 0.0 for vibe in self.taxonomy}
        if not text:
            return weights

        for vibe in self.taxonomy:
            if vibe.value in text:
                weights[vibe] += VIBE_NAME_WEIGHT

        for phrase, vibes in self.context_mappings.items():
            if vibes and phrase in text:
                share = CONTEXT_PHRASE_WEIGHT / len(vibes)
                for vibe in vibes:
                    weights[vibe] += share

        for vibe, mapping in self.taxonomy.items():
            for note in mapping.notes:
                if note.lower() in text:
                    weights[vibe] += NOTE_MENTION_WEIGHT

        total = sum(weights.values())
        if total > 0:
            for vibe in weights:
                weights[vibe] /= total

        return weights

    # ------------------------------------------------------------------
    # Similarity and explanation
    # ------------------------------------------------------------------

    @staticmethod
    def similarity(query_vibes: Mapping[VibeType, float], scores: Iterable[VibeScore]) -> float:
        """Sparse cosine similarity between a query vector and a profile."""
        profile = {s.vibe: s.score for s in scores}
        return sparse_cosine_similarity(query_vibes, profile)

    @staticmethod
    def explain(
        query_vibes: Mapping[VibeType, float],
        scores: Sequence[VibeScore],
        similarity: float,
    ) -> str:
        """
        Human-readable reason for a match.

        Shared top vibes are named ("Matches your Dark, Sweet vibes");
        otherwise the similarity band picks a canned phrase.
        """
        ranked_query = sorted(
            ((vibe, weight) for vibe, weight in query_vibes.items() if weight > EXPLANATION_MIN_WEIGHT),
            key=lambda item: item[1],
            reverse=True,
        )
        top_query = [vibe for vibe, _ in ranked_query[:EXPLANATION_TOP_N]]
        top_fragrance = [
            s.vibe for s in scores if s.score > EXPLANATION_MIN_WEIGHT
        ][:EXPLANATION_TOP_N]

        shared = [vibe for vibe in top_query if vibe in top_fragrance]
        if shared:
            names = ", ".join(vibe.label for vibe in shared)
            suffix = "s" if len(shared) > 1 else ""
            return f"Matches your {names} vibe{suffix}"

        if similarity > 0.7:
            return "Strong vibe match with complementary notes"
        if similarity > 0.5:
            return "Good vibe alignment with similar character"
        return "Partial vibe match"

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search_by_vibe(
        self,
        fragrances: Sequence[Fragrance],
        query: str,
        limit: int = 5,
    ) -> List[VibeMatch]:
        """
        Rank fragrances by vibe similarity to a free-text query.

        Args:
            fragrances: Candidate fragrances, scanned in order.
            query: Mood/occasion text such as "fresh summer office".
            limit: Maximum number of matches returned.

        Returns:
            Matches with similarity above 0.1, best first. Empty when the
            query has no vibe signal.
        """
        if limit <= 0:
            return []

        query_vibes = self.parse_vibe_query(query)
        if not any(weight > 0 for weight in query_vibes.values()):
            logger.debug(f"No vibe signal in query '{query}'")
            return []

        if self.exhaustive:
            scan_limit = len(fragrances)
        else:
            scan_limit = min(len(fragrances), limit * SCAN_FACTOR)

        matches: List[VibeMatch] = []
        for fragrance in fragrances[:scan_limit]:
            scores = self.get_vibe_scores(fragrance)

            # Fast reject: no shared nonzero vibe
            if not any(query_vibes.get(s.vibe, 0.0) > 0 for s in scores):
                continue

            similarity = self.similarity(query_vibes, scores)
            if similarity <= MIN_SIMILARITY:
                continue

            matches.append(
                VibeMatch(
                    fragrance=fragrance,
                    similarity=similarity,
                    explanation=self.explain(query_vibes, scores, similarity),
                    vibe_scores=list(scores[:TOP_VIBE_SCORES]),
                )
            )

            if (
                not self.exhaustive
                and len(matches) >= limit * EARLY_EXIT_FACTOR
                and matches[-1].similarity < EARLY_EXIT_SIMILARITY
            ):
                break

        matches.sort(key=lambda m: m.similarity, reverse=True)
        logger.debug(
            f"Vibe search '{query}': scanned {scan_limit}, "
            f"{len(matches)} candidates, returning {min(len(matches), limit)}"
        )
        return matches[:limit]
