"""
Visual matching of a bottle photo against candidate fragrance images.

Embeddings come from an external provider; this module only compares
them. A candidate is accepted when its cosine similarity to the query
exceeds the match threshold (0.7 by default).
"""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

from scentlocker.core.scoring.similarity import cosine_similarity
from scentlocker.domain.entities.visual_match import ImageCandidate, ImageSource, VisualMatch
from scentlocker.domain.interfaces.embedding_provider import EmbeddingProvider
from scentlocker.utils.exceptions import AppException
from scentlocker.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

DEFAULT_MATCH_THRESHOLD = 0.7


class VisualMatcher:
    """
    Finds the candidate image most similar to a query embedding.

    Attributes:
        threshold: Similarity that the best candidate must exceed.
    """

    def __init__(self, threshold: float = DEFAULT_MATCH_THRESHOLD) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.threshold = threshold

    def rank(
        self,
        query_embedding: Sequence[float],
        candidates: Sequence[ImageCandidate],
    ) -> List[VisualMatch]:
        """
        Score every candidate, best first. No pruning.

        Raises:
            EmbeddingMismatchError: If a candidate's dimension differs
                from the query's.
        """
        scored = [
            VisualMatch(item=c.item, similarity=cosine_similarity(query_embedding, c.embedding))
            for c in candidates
        ]
        scored.sort(key=lambda m: m.similarity, reverse=True)
        return scored

    def select(self, ranked: Sequence[VisualMatch]) -> Optional[VisualMatch]:
        """Return the first ranked match if it clears the threshold."""
        if ranked and ranked[0].similarity > self.threshold:
            return ranked[0]
        return None

    def find_match(
        self,
        query_embedding: Sequence[float],
        candidates: Sequence[ImageCandidate],
    ) -> Optional[VisualMatch]:
        """
        Best candidate above the threshold.

        Args:
            query_embedding: Embedding of the captured image.
            candidates: Pre-computed embeddings with their items.

        Returns:
            The best match, or None when no candidate is similar enough.

        Raises:
            EmbeddingMismatchError: If dimensions differ.
        """
        match = self.select(self.rank(query_embedding, candidates))
        if match is None:
            logger.debug(f"No visual match above {self.threshold} among {len(candidates)} candidates")
        return match

    async def match_image(
        self,
        image: bytes,
        sources: Sequence[ImageSource],
        provider: EmbeddingProvider,
    ) -> Optional[VisualMatch]:
        """
        Embed a captured image and every candidate image, then match.

        The captured image and the candidates are embedded concurrently.
        A candidate whose embedding cannot be obtained for any reason, or
        whose dimension differs, scores 0.0 and the comparison continues.

        Raises:
            EmbeddingProviderError: If the captured image itself cannot
                be embedded. Pending candidate requests are cancelled.
        """

        async def fetch(source: ImageSource) -> Optional[List[float]]:
            try:
                return await provider.embed_url(source.url)
            except Exception as e:
                logger.warning(f"Embedding {source.url} failed: {e}")
                return None

        def compare(query_embedding, source: ImageSource, embedding) -> VisualMatch:
            similarity = 0.0
            if embedding is not None:
                try:
                    similarity = cosine_similarity(query_embedding, embedding)
                except AppException as e:
                    logger.warning(f"Comparison with {source.url} failed: {e}")
            return VisualMatch(item=source.item, similarity=similarity)

        with log_execution_time(logger, f"visual match over {len(sources)} candidates"):
            fetches = [asyncio.create_task(fetch(s)) for s in sources]
            try:
                query_embedding, *embeddings = await asyncio.gather(
                    provider.embed_image(image), *fetches
                )
            except BaseException:
                for f in fetches:
                    f.cancel()
                raise

            comparisons = [
                compare(query_embedding, source, embedding)
                for source, embedding in zip(sources, embeddings)
            ]

        ranked = sorted(comparisons, key=lambda m: m.similarity, reverse=True)
        match = self.select(ranked)
        if match is not None:
            logger.info(f"Visual match found (similarity {match.similarity:.3f})")
        return match
