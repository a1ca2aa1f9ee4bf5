"""
Unit tests for worker rating aggregation.

Tests half-up rounding and the full-recount average used by the
rating triggers.

Run: python3 -m pytest utils/__tests__/test_rating.py -v
"""

import pytest

from utils.rating import compute_worker_rating, is_valid_rating, round_half_up


class TestRoundHalfUp:
    """Tests for half-up rounding."""

    @pytest.mark.parametrize("value,expected", [
        (4.5, 4.5),
        (4.0, 4.0),
        (1.6666666666666667, 1.67),
        (4.125, 4.13),
        (2.675, 2.68),  # 2.67 with built-in round()
        (3.333, 3.33),
    ])
    def test_rounds_to_two_decimals(self, value, expected):
        """Should round half-up to 2 decimal places by default."""
        assert round_half_up(value) == expected

    def test_custom_decimals(self):
        """Should honor an explicit number of decimals."""
        assert round_half_up(4.25, decimals=1) == 4.3
        assert round_half_up(4.449, decimals=0) == 4.0


class TestIsValidRating:
    """Tests for rating validation."""

    def test_numbers_are_valid(self):
        assert is_valid_rating(5)
        assert is_valid_rating(3.5)

    def test_non_numbers_are_invalid(self):
        assert not is_valid_rating(None)
        assert not is_valid_rating("5")
        assert not is_valid_rating(True)

    def test_non_finite_numbers_are_invalid(self):
        """Firestore can store Infinity and NaN; neither can be averaged."""
        assert not is_valid_rating(float("inf"))
        assert not is_valid_rating(float("-inf"))
        assert not is_valid_rating(float("nan"))


class TestComputeWorkerRating:
    """Tests for compute_worker_rating."""

    def test_two_reviews(self):
        """[4, 5] -> 4.5 over 2 reviews."""
        rating = compute_worker_rating("w1", [4, 5])

        assert rating.worker_id == "w1"
        assert rating.avg_rating == 4.5
        assert rating.rating_count == 2

    def test_adding_a_third_review(self):
        """[4, 5, 3] -> 4.0 over 3 reviews."""
        rating = compute_worker_rating("w1", [4, 5, 3])

        assert rating.avg_rating == 4.0
        assert rating.rating_count == 3

    def test_repeating_decimal_is_rounded(self):
        """[1, 2, 2] -> 1.67."""
        rating = compute_worker_rating("w1", [1, 2, 2])

        assert rating.avg_rating == 1.67
        assert rating.rating_count == 3

    def test_no_reviews(self):
        """Empty review set -> 0 / 0."""
        rating = compute_worker_rating("w1", [])

        assert rating.avg_rating == 0.0
        assert rating.rating_count == 0

    def test_invalid_ratings_are_left_out(self):
        """Missing or non-numeric ratings count towards neither sum nor count."""
        rating = compute_worker_rating("w1", [5, None, "4", 3])

        assert rating.avg_rating == 4.0
        assert rating.rating_count == 2

    def test_non_finite_ratings_are_left_out(self):
        """Infinity / NaN must not break rounding or poison the average."""
        rating = compute_worker_rating("w1", [5, float("inf"), float("nan")])

        assert rating.avg_rating == 5.0
        assert rating.rating_count == 1

    def test_to_update_uses_firestore_field_names(self):
        """Worker update payload should use the app's camelCase field names."""
        update = compute_worker_rating("w1", [4, 5]).to_update()

        assert update == {"avgRating": 4.5, "ratingCount": 2}
