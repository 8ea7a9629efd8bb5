"""Unit tests for locker collection insights."""

import pytest

from scentlocker.core.locker_stats import compute_locker_stats
from scentlocker.domain.entities.fragrance import Fragrance


class TestComputeLockerStats:
    """Test counts, averages and most-common rankings."""

    def test_empty_collection(self):
        stats = compute_locker_stats([])

        assert stats.is_empty
        assert stats.average_rating is None
        assert stats.top_notes == []
        assert stats.top_brands == []

    def test_totals_and_average(self, sample_fragrances):
        stats = compute_locker_stats(sample_fragrances)

        assert stats.total == 6
        assert stats.unique_brands == 5
        assert stats.average_rating == pytest.approx(4.0)

    def test_average_ignores_unrated(self):
        stats = compute_locker_stats(
            [
                Fragrance(name="A", brand="X", rating=4.5),
                Fragrance(name="B", brand="X"),
                Fragrance(name="C", brand="Y", rating=3.5),
            ]
        )

        assert stats.total == 3
        assert stats.average_rating == pytest.approx(4.0)

    def test_no_rated_items(self):
        stats = compute_locker_stats([Fragrance(name="A")])
        assert stats.average_rating is None
        assert stats.unique_brands == 0

    def test_top_notes_count_top_tier_only(self, sample_fragrances):
        stats = compute_locker_stats(sample_fragrances, top_n=3)

        assert stats.top_notes == [("Bergamot", 3), ("Apple", 2), ("Sicilian Lemon", 1)]

    def test_top_brands_ties_keep_first_seen_order(self, sample_fragrances):
        stats = compute_locker_stats(sample_fragrances, top_n=3)

        assert stats.top_brands == [("Tom Ford", 2), ("Dolce & Gabbana", 1), ("Dior", 1)]

    def test_top_accords(self, sample_fragrances):
        stats = compute_locker_stats(sample_fragrances, top_n=3)

        assert stats.top_accords == [("woody", 3), ("citrus", 2), ("floral", 2)]

    def test_default_lists_capped_at_five(self, sample_fragrances):
        stats = compute_locker_stats(sample_fragrances)

        assert len(stats.top_accords) == 5
        assert len(stats.top_brands) == 5


class TestLockerStats:
    """Test stats through the locker."""

    def test_stats_follow_mutations(self, locker, sample_fragrances):
        assert locker.stats().is_empty

        for fragrance in sample_fragrances[:3]:
            locker.add(fragrance)
        locker.remove(sample_fragrances[1])

        stats = locker.stats(top_n=2)
        assert stats.total == 2
        assert stats.top_brands == [("Tom Ford", 1), ("Dior", 1)]
        assert stats.average_rating == pytest.approx(4.0)
