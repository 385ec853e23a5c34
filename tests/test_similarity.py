"""
Tests for similarity scoring between normalized keys.
"""
import pytest
from hypothesis import given, strategies as st

from media_resolver.resolution import (
    are_similar,
    consecutive_prefix_match,
    edit_distance,
    is_strict_match,
    score_similarity,
    similarity_percent,
)

_keys = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789", max_size=30)


class TestEditDistance:
    """Tests for edit_distance."""

    def test_classic_example(self):
        """Test the kitten/sitting distance."""
        assert edit_distance("kitten", "sitting") == 3

    def test_empty_sides(self):
        """Test that distance to empty is the other length."""
        assert edit_distance("", "") == 0
        assert edit_distance("abc", "") == 3
        assert edit_distance("", "abcd") == 4


class TestSimilarityPercent:
    """Tests for similarity_percent."""

    def test_identical_keys_score_100(self):
        assert similarity_percent("naruto", "naruto") == 100.0

    def test_empty_conventions(self):
        """Test that two empties score 100 and one empty scores 0."""
        assert similarity_percent("", "") == 100.0
        assert similarity_percent("abc", "") == 0.0
        assert similarity_percent("", "abc") == 0.0

    def test_rounded_to_two_decimals(self):
        """Test (7 - 3) / 7 rounded to two decimals."""
        assert similarity_percent("kitten", "sitting") == 57.14

    def test_relative_to_longer_key(self):
        """Test that a season suffix lowers similarity against the bare title."""
        assert similarity_percent("attackontitan2nd", "attackontitan") == 81.25
        assert similarity_percent("attackontitanseason2", "attackontitan") == 65.0

    @given(_keys, _keys)
    def test_symmetric_and_bounded(self, a, b):
        """Test symmetry and the 0-100 range."""
        score = similarity_percent(a, b)
        assert 0.0 <= score <= 100.0
        assert score == similarity_percent(b, a)

    @given(_keys.filter(bool))
    def test_self_similarity_is_100(self, a):
        assert similarity_percent(a, a) == 100.0


class TestConsecutivePrefixMatch:
    """Tests for consecutive_prefix_match."""

    @pytest.mark.parametrize("a, b, expected", [
        ("onepiece", "onepeace", 4),
        ("attackontitan", "attackonmars", 8),
        ("abc", "abcdef", 3),
        ("naruto", "naruto", 6),
        ("xbcdef", "abcdef", 0),
        ("", "abc", 0),
    ])
    def test_literal_table(self, a, b, expected):
        """Test anchored prefix counts against known values."""
        assert consecutive_prefix_match(a, b) == expected

    def test_no_resynchronization_after_mismatch(self):
        """Test that characters after the first mismatch are never counted."""
        assert consecutive_prefix_match("abXdefghij", "abYdefghij") == 2

    @given(_keys, _keys)
    def test_symmetric(self, a, b):
        assert consecutive_prefix_match(a, b) == consecutive_prefix_match(b, a)


class TestStrictMatch:
    """Tests for is_strict_match and score_similarity."""

    def test_long_prefix_matches_despite_low_similarity(self):
        """Test that the prefix gate ignores overall similarity."""
        result = is_strict_match("abcdefxxxxxxxxxx", "abcdefyyyyyyyyyy")

        assert result.consecutive_count == 6
        assert result.similarity == 37.5
        assert result.is_match is True

    def test_short_prefix_rejected_despite_high_similarity(self):
        """Test that high similarity alone does not pass the gate."""
        result = is_strict_match("abcdxfgh", "abcdyfgh")

        assert result.consecutive_count == 4
        assert result.similarity == 87.5
        assert result.is_match is False

    def test_gate_is_exactly_five(self):
        assert is_strict_match("abcdeX", "abcdeY").is_match is True
        assert is_strict_match("abcdX", "abcdY").is_match is False

    def test_custom_minimum(self):
        assert is_strict_match("abcdX", "abcdY", min_consecutive=4).is_match is True

    def test_empty_key_never_matches(self):
        result = is_strict_match("", "")
        assert result.is_match is False
        assert result.similarity == 0.0

    def test_score_similarity_shape(self):
        """Test the external call surface of the scorer."""
        scored = score_similarity("attackontitan2nd", "attackontitan").to_dict()

        assert scored == {
            "similarity": 81.25,
            "consecutive_count": 13,
            "is_strict_match": True,
        }


class TestAreSimilar:
    """Tests for the adaptive near-duplicate check."""

    def test_short_titles_allow_one_edit(self):
        assert are_similar("naruto", "narutp") is True
        assert are_similar("naruto", "nartp") is False

    def test_medium_titles_allow_two_edits(self):
        assert are_similar("fullmetalalchemist", "fullmetalalchemyst") is True
        assert are_similar("fullmetalalchemist", "fulmetalalchemyst") is True
        assert are_similar("fullmetalalchemist", "fulmetalalkemyst") is False

    def test_empty_is_never_similar(self):
        assert are_similar("", "") is False
        assert are_similar("abc", "") is False
