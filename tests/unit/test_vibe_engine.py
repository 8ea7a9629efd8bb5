"""Unit tests for the vibe engine."""

import math

import pytest

from scentlocker.core.vibes.engine import VibeEngine, VibeScoreCache
from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.domain.entities.vibe import VibeScore, VibeType


@pytest.fixture
def engine() -> VibeEngine:
    return VibeEngine()


class TestComputeVibeScores:
    """Test fragrance vibe profiles."""

    def test_black_orchid_profile(self, engine, black_orchid):
        scores = engine.compute_vibe_scores(black_orchid)
        profile = {s.vibe: s.score for s in scores}

        assert scores[0] == VibeScore(VibeType.ORIENTAL, 1.0)
        assert profile[VibeType.DARK] == pytest.approx(1.8 / 2.8)
        assert profile[VibeType.WARM] == pytest.approx(1.8 / 2.8)
        assert profile[VibeType.SWEET] == pytest.approx(1.0 / 2.8)
        assert VibeType.FRESH not in profile

    def test_scores_in_unit_range_with_max_one(self, engine, sample_fragrances):
        for fragrance in sample_fragrances:
            scores = engine.compute_vibe_scores(fragrance)
            assert scores, fragrance.name
            assert max(s.score for s in scores) == 1.0
            assert all(0.0 < s.score <= 1.0 for s in scores)

    def test_sorted_descending(self, engine, sample_fragrances):
        for fragrance in sample_fragrances:
            values = [s.score for s in engine.compute_vibe_scores(fragrance)]
            assert values == sorted(values, reverse=True)

    def test_ties_keep_taxonomy_order(self, engine):
        # "sugar" maps to SWEET only, "salt" to AQUATIC only
        fragrance = Fragrance(name="Salted Sugar", top=("salt", "sugar"))
        scores = engine.compute_vibe_scores(fragrance)
        assert [s.vibe for s in scores] == [VibeType.SWEET, VibeType.AQUATIC]

    def test_no_signal_returns_empty(self, engine):
        fragrance = Fragrance(name="Mystery", top=("xyzzy",))
        assert engine.compute_vibe_scores(fragrance) == []

    def test_partial_note_match_counts_half(self, engine):
        exact = engine.compute_vibe_scores(Fragrance(name="A", top=("sugar", "salt")))
        partial = engine.compute_vibe_scores(Fragrance(name="B", top=("brown sugar", "salt")))

        exact_profile = {s.vibe: s.score for s in exact}
        partial_profile = {s.vibe: s.score for s in partial}

        # exact: sweet 1.0 vs aquatic 1.0; partial: sweet 0.5 vs aquatic 1.0
        assert exact_profile[VibeType.SWEET] == 1.0
        assert partial_profile[VibeType.SWEET] == pytest.approx(0.5)
        assert partial_profile[VibeType.AQUATIC] == 1.0

    def test_accord_intensity_capped(self, engine):
        loud = engine.compute_vibe_scores(Fragrance(name="A", accords={"smoky": 100}))
        assert loud[0] == VibeScore(VibeType.SMOKY, 1.0)

    def test_cached_scores(self, engine, black_orchid):
        first = engine.get_vibe_scores(black_orchid)
        second = engine.get_vibe_scores(black_orchid)

        assert first is second
        assert black_orchid.key in engine.cache
        assert len(engine.cache) == 1

    def test_injected_cache_is_used_and_clearable(self, black_orchid):
        cache = VibeScoreCache()
        engine = VibeEngine(cache=cache)
        engine.get_vibe_scores(black_orchid)

        assert len(cache) == 1
        cache.clear()
        assert len(cache) == 0

    def test_engines_do_not_share_cache(self, black_orchid):
        a = VibeEngine()
        b = VibeEngine()
        a.get_vibe_scores(black_orchid)
        assert len(b.cache) == 0


class TestParseVibeQuery:
    """Test query vectors."""

    def test_dark_sweet(self, engine):
        vibes = engine.parse_vibe_query("dark sweet")
        assert vibes[VibeType.DARK] == pytest.approx(0.5)
        assert vibes[VibeType.SWEET] == pytest.approx(0.5)
        assert sum(vibes.values()) == pytest.approx(1.0)

    def test_context_phrase_spreads_weight(self, engine):
        vibes = engine.parse_vibe_query("summer")
        for vibe in (VibeType.FRESH, VibeType.CITRUS, VibeType.AQUATIC, VibeType.COOL):
            assert vibes[vibe] == pytest.approx(0.25)

    def test_note_mentions(self, engine):
        vibes = engine.parse_vibe_query("vanilla")
        assert vibes[VibeType.SWEET] > 0
        assert vibes[VibeType.GOURMAND] > 0
        assert sum(vibes.values()) == pytest.approx(1.0)

    def test_case_insensitive(self, engine):
        assert engine.parse_vibe_query("DARK") == engine.parse_vibe_query("dark")

    def test_no_signal_is_zero_vector(self, engine):
        vibes = engine.parse_vibe_query("qwerty")
        assert set(vibes) == set(VibeType)
        assert all(weight == 0.0 for weight in vibes.values())


class TestExplain:
    """Test match explanations."""

    def test_single_shared_vibe(self):
        query = {VibeType.DARK: 1.0}
        scores = [VibeScore(VibeType.ORIENTAL, 1.0), VibeScore(VibeType.DARK, 0.6)]
        assert VibeEngine.explain(query, scores, 0.5) == "Matches your Dark vibe"

    def test_several_shared_vibes(self):
        query = {VibeType.DARK: 0.5, VibeType.SWEET: 0.5}
        scores = [VibeScore(VibeType.SWEET, 1.0), VibeScore(VibeType.DARK, 0.8)]
        assert VibeEngine.explain(query, scores, 0.9) == "Matches your Dark, Sweet vibes"

    @pytest.mark.parametrize(
        "similarity, expected",
        [
            (0.8, "Strong vibe match with complementary notes"),
            (0.6, "Good vibe alignment with similar character"),
            (0.2, "Partial vibe match"),
        ],
    )
    def test_similarity_bands_without_shared_vibes(self, similarity, expected):
        query = {VibeType.FRESH: 1.0}
        scores = [VibeScore(VibeType.DARK, 1.0)]
        assert VibeEngine.explain(query, scores, similarity) == expected

    def test_weak_weights_are_not_named(self):
        query = {VibeType.DARK: 0.05, VibeType.FRESH: 0.95}
        scores = [VibeScore(VibeType.DARK, 1.0)]
        assert VibeEngine.explain(query, scores, 0.2) == "Partial vibe match"


class TestSearchByVibe:
    """Test vibe ranking."""

    def test_black_orchid_dark_sweet(self, engine, black_orchid):
        matches = engine.search_by_vibe([black_orchid], "dark sweet")

        assert len(matches) == 1
        match = matches[0]
        assert match.fragrance == black_orchid
        assert match.similarity > 0.1
        assert match.similarity == pytest.approx(0.5 / math.sqrt(0.5 * 2.5))
        assert "Dark" in match.explanation or "Sweet" in match.explanation

    def test_top_five_vibe_scores_attached(self, engine, black_orchid):
        match = engine.search_by_vibe([black_orchid], "dark sweet")[0]
        assert len(match.vibe_scores) == 5
        assert match.vibe_scores[0].vibe == VibeType.ORIENTAL

    def test_sorted_by_similarity(self, engine, sample_fragrances):
        matches = engine.search_by_vibe(sample_fragrances, "fresh citrus summer", limit=5)
        assert matches
        similarities = [m.similarity for m in matches]
        assert similarities == sorted(similarities, reverse=True)
        assert all(s > 0.1 for s in similarities)
        assert matches[0].fragrance.name == "Light Blue"

    def test_limit_respected(self, engine, sample_fragrances):
        assert len(engine.search_by_vibe(sample_fragrances, "sweet floral", limit=2)) <= 2

    def test_no_signal_returns_empty(self, engine, sample_fragrances):
        assert engine.search_by_vibe(sample_fragrances, "qwerty") == []

    def test_non_positive_limit(self, engine, sample_fragrances):
        assert engine.search_by_vibe(sample_fragrances, "dark", limit=0) == []

    def test_candidates_without_shared_vibe_excluded(self, engine):
        salty = Fragrance(name="Sea Salt", top=("salt",))
        assert engine.search_by_vibe([salty], "dark") == []

    def test_bounded_scan_can_miss_late_matches(self):
        filler = [Fragrance(name=f"Vanilla {i}", base=("vanilla",)) for i in range(50)]
        perfect = Fragrance(name="Pure Sugar", top=("sugar",))
        fragrances = filler + [perfect]

        bounded = VibeEngine().search_by_vibe(fragrances, "sweet", limit=2)
        exhaustive = VibeEngine(exhaustive=True).search_by_vibe(fragrances, "sweet", limit=2)

        assert perfect not in [m.fragrance for m in bounded]
        assert exhaustive[0].fragrance == perfect
        assert exhaustive[0].similarity == pytest.approx(1.0)
