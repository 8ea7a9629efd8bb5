# Scoring Package
"""
Similarity scoring for image embeddings and vibe vectors.

Example:
    >>> from scentlocker.core.scoring import cosine_similarity
    >>> sim = cosine_similarity(emb_a, emb_b)
"""

from .similarity import (
    cosine_similarity,
    sparse_cosine_similarity,
)

__all__ = [
    "cosine_similarity",
    "sparse_cosine_similarity",
]
