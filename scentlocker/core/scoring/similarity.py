"""
Cosine similarity computation functions.

Dense similarity is used for image embeddings, sparse similarity for
vibe vectors where most of the 19 categories are zero.

Example:
    >>> from scentlocker.core.scoring.similarity import cosine_similarity
    >>> sim = cosine_similarity(embedding_a, embedding_b)
    >>> print(f"Similarity: {sim:.4f}")
"""

from __future__ import annotations

import math
from typing import Hashable, List, Mapping, Sequence, Union

import numpy as np

from scentlocker.utils.exceptions import EmbeddingMismatchError

# Type alias for vectors
VectorLike = Union[np.ndarray, List[float], Sequence[float]]


def cosine_similarity(
    vec_a: VectorLike,
    vec_b: VectorLike,
) -> float:
    """
    Compute cosine similarity between two vectors.

    Cosine similarity measures the angle between vectors, ranging from:
    - 1.0: Identical direction (most similar)
    - 0.0: Orthogonal (no similarity)
    - -1.0: Opposite direction (least similar)

    Args:
        vec_a: First vector (numpy array or sequence).
        vec_b: Second vector (numpy array or sequence).

    Returns:
        Cosine similarity score in range [-1, 1]. 0.0 when either
        vector has zero magnitude.

    Raises:
        EmbeddingMismatchError: If vectors have different dimensions.

    Example:
        >>> cosine_similarity([1.0, 0.0], [1.0, 0.0])
        1.0
        >>> cosine_similarity([1.0, 0.0], [0.0, 1.0])
        0.0
    """
    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)

    if a.shape != b.shape:
        raise EmbeddingMismatchError(
            f"Embeddings must have the same length: {a.shape} vs {b.shape}",
            expected=a.shape[0] if a.ndim else None,
            actual=b.shape[0] if b.ndim else None,
        )

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)

    if norm_a == 0 or norm_b == 0:
        return 0.0

    similarity = np.dot(a, b) / (norm_a * norm_b)

    # Clip floating point overshoot
    return float(np.clip(similarity, -1.0, 1.0))


def sparse_cosine_similarity(
    query: Mapping[Hashable, float],
    target: Mapping[Hashable, float],
) -> float:
    """
    Cosine similarity between two sparse vectors stored as mappings.

    The dot product only visits keys present in ``target``; magnitudes
    cover every entry of each side.

    Args:
        query: Key -> weight (e.g. vibe -> query weight).
        target: Key -> weight (e.g. vibe -> fragrance score).

    Returns:
        Similarity in [0, 1] for non-negative inputs, 0.0 when either
        side has zero magnitude.
    """
    dot = 0.0
    for key, weight in target.items():
        dot += query.get(key, 0.0) * weight

    query_magnitude = math.sqrt(sum(w * w for w in query.values()))
    target_magnitude = math.sqrt(sum(w * w for w in target.values()))

    if query_magnitude == 0 or target_magnitude == 0:
        return 0.0

    return min(1.0, dot / (query_magnitude * target_magnitude))
