"""Unit tests for cosine similarity helpers."""

import math

import numpy as np
import pytest

from scentlocker.core.scoring.similarity import (
    cosine_similarity,
    sparse_cosine_similarity,
)
from scentlocker.utils.exceptions import EmbeddingMismatchError, ScoringError


class TestCosineSimilarity:
    """Test dense cosine similarity."""

    def test_self_similarity_is_one(self):
        vec = np.random.randn(512)
        assert cosine_similarity(vec, vec) == pytest.approx(1.0)

    def test_symmetric(self):
        a = np.random.randn(64)
        b = np.random.randn(64)
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)

    def test_accepts_plain_lists(self):
        assert cosine_similarity([3.0, 4.0], [6.0, 8.0]) == pytest.approx(1.0)

    def test_zero_vector_scores_zero(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0

    def test_dimension_mismatch_raises(self):
        with pytest.raises(EmbeddingMismatchError) as exc_info:
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])

        assert exc_info.value.context["expected_dim"] == 2
        assert exc_info.value.context["actual_dim"] == 3

    def test_mismatch_is_value_error(self):
        """Numeric callers can catch the mismatch as a ValueError."""
        with pytest.raises(ValueError):
            cosine_similarity([1.0], [1.0, 2.0])

        assert issubclass(EmbeddingMismatchError, ScoringError)

    def test_result_is_python_float(self):
        assert isinstance(cosine_similarity([1.0, 2.0], [2.0, 1.0]), float)


class TestSparseCosineSimilarity:
    """Test mapping-based similarity used for vibe vectors."""

    def test_identical_mappings(self):
        vec = {"dark": 0.5, "sweet": 0.5}
        assert sparse_cosine_similarity(vec, vec) == pytest.approx(1.0)

    def test_disjoint_keys(self):
        assert sparse_cosine_similarity({"dark": 1.0}, {"fresh": 1.0}) == 0.0

    def test_magnitude_covers_all_query_entries(self):
        query = {"dark": 1.0, "fresh": 1.0}
        target = {"dark": 1.0}
        assert sparse_cosine_similarity(query, target) == pytest.approx(1 / math.sqrt(2))

    def test_empty_side_scores_zero(self):
        assert sparse_cosine_similarity({}, {"dark": 1.0}) == 0.0
        assert sparse_cosine_similarity({"dark": 1.0}, {}) == 0.0

    def test_capped_at_one(self):
        vec = {"a": 0.1, "b": 0.2, "c": 0.3}
        assert sparse_cosine_similarity(vec, dict(vec)) <= 1.0
