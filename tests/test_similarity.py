"""
Tests for token-set similarity.
"""
import pytest

from tangkhul_translate.similarity import calculate_similarity, jaccard_scorer, rank_by_similarity


class TestCalculateSimilarity:
    """Tests for calculate_similarity (Jaccard index)."""

    def test_identical_text_scores_one(self):
        """Test that a non-empty text is fully similar to itself."""
        assert calculate_similarity("good morning", "good morning") == 1.0

    def test_normalization_applied(self):
        """Test that case and punctuation do not affect similarity."""
        assert calculate_similarity("Good morning!", "good MORNING") == 1.0

    def test_word_order_ignored(self):
        """Test that token order does not matter."""
        assert calculate_similarity("I am happy", "happy am I") == 1.0

    def test_repetition_ignored(self):
        """Test that repeated tokens count once."""
        assert calculate_similarity("very very good", "very good") == 1.0

    def test_disjoint_texts_score_zero(self):
        """Test that texts sharing no tokens score zero."""
        assert calculate_similarity("hello there", "good night") == 0.0

    def test_empty_text_scores_zero(self):
        """Test that an empty side scores zero, even against empty."""
        assert calculate_similarity("", "hello") == 0.0
        assert calculate_similarity("hello", "") == 0.0
        assert calculate_similarity("", "") == 0.0

    def test_partial_overlap(self):
        """Test intersection over union for partially overlapping texts."""
        assert calculate_similarity("good morning", "good morning sir") == pytest.approx(2 / 3)

    @pytest.mark.parametrize("a,b", [
        ("good morning", "good morning sir"),
        ("how are you", "you are how"),
        ("one two three", "three four"),
        ("", "something"),
    ])
    def test_symmetric(self, a, b):
        """Test that similarity(a, b) == similarity(b, a)."""
        assert calculate_similarity(a, b) == calculate_similarity(b, a)


class TestRankBySimilarity:
    """Tests for the rapidfuzz-backed candidate filter."""

    def test_scorer_uses_percentage_scale(self):
        """Test that the rapidfuzz adapter reports 0-100."""
        assert jaccard_scorer("good morning", "good morning sir") == pytest.approx(200 / 3)

    def test_filters_by_threshold(self):
        """Test that only candidates at or above threshold are returned."""
        choices = {0: "good morning", 1: "good night", 2: "hello"}

        ranked = rank_by_similarity("good morning", choices, threshold=0.3)

        assert dict(ranked) == {0: 1.0, 1: pytest.approx(1 / 3)}
        assert ranked[0] == (0, 1.0)

    def test_high_threshold_keeps_best_only(self):
        """Test that a strict threshold drops weaker candidates."""
        choices = {0: "good morning", 1: "good night"}

        assert rank_by_similarity("good morning", choices, threshold=0.5) == [(0, 1.0)]

    def test_threshold_is_inclusive(self):
        """Test that a candidate exactly at threshold is kept."""
        choices = {7: "how are you today"}

        ranked = rank_by_similarity("how are you doing today", choices, threshold=0.8)

        assert ranked == [(7, 0.8)]

    def test_empty_choices(self):
        """Test that no candidates yields no matches."""
        assert rank_by_similarity("hello", {}, threshold=0.0) == []
