"""
Tests for Interval bounds.
"""

import math

import pytest

from nlpcore import Interval, InvalidInterval, InvalidScale


class TestIntervalConstruction:
    def test_default_is_unbounded(self):
        """Test the default interval."""
        interval = Interval()
        assert interval.lower == -math.inf
        assert interval.upper == math.inf
        assert interval.is_unbounded

    def test_factories(self):
        """Test interval factories."""
        assert Interval.lower_bounded(25.0).as_tuple() == (25.0, math.inf)
        assert Interval.upper_bounded(0.0).as_tuple() == (-math.inf, 0.0)
        assert Interval.equality(40.0).as_tuple() == (40.0, 40.0)
        assert Interval.between(1, 5).as_tuple() == (1.0, 5.0)
        assert Interval.unbounded() == Interval()

    def test_equality_flag(self):
        """Test equality intervals."""
        assert Interval.equality(3.0).is_equality
        assert not Interval(1.0, 5.0).is_equality

    def test_one_sided_flags(self):
        """Test one-sided intervals."""
        lower = Interval.lower_bounded(2.0)
        assert lower.is_bounded_below
        assert not lower.is_bounded_above

    def test_lower_above_upper_rejected(self):
        """Test rejecting reversed ends."""
        with pytest.raises(InvalidInterval):
            Interval(5.0, 1.0)

    def test_nan_rejected(self):
        """Test rejecting NaN ends."""
        with pytest.raises(InvalidInterval):
            Interval(float("nan"), 1.0)

    def test_invalid_interval_is_value_error(self):
        """Test the builtin base of InvalidInterval."""
        with pytest.raises(ValueError):
            Interval(2.0, -2.0)

    def test_immutable(self):
        """Test that intervals are frozen."""
        interval = Interval(1.0, 5.0)
        with pytest.raises(AttributeError):
            interval.lower = 0.0


class TestIntervalQueries:
    def test_distance_and_contains(self):
        """Test distance and membership."""
        interval = Interval(1.0, 5.0)
        assert interval.distance(3.0) == 0.0
        assert interval.distance(0.5) == pytest.approx(0.5)
        assert interval.distance(6.0) == pytest.approx(1.0)
        assert interval.contains(5.0)
        assert not interval.contains(5.1)
        assert interval.contains(5.1, tolerance=0.2)

    def test_nan_is_never_inside(self):
        """Test that NaN lies infinitely far from any interval."""
        assert Interval.unbounded().distance(float("nan")) == math.inf
        assert not Interval(0.0, 1.0).contains(float("nan"), tolerance=1e9)

    def test_project(self):
        """Test projection into an interval."""
        interval = Interval(1.0, 5.0)
        assert interval.project(0.0) == 1.0
        assert interval.project(7.0) == 5.0
        assert interval.project(2.5) == 2.5
        assert Interval.unbounded().project(0.0) == 0.0

    def test_scaled(self):
        """Test scaling an interval."""
        assert Interval(1.0, 5.0).scaled(2.0).as_tuple() == (2.0, 10.0)
        assert Interval.lower_bounded(25.0).scaled(0.1).upper == math.inf

    def test_scaled_rejects_non_positive(self):
        """Test rejecting invalid scales."""
        with pytest.raises(InvalidScale):
            Interval(1.0, 5.0).scaled(0.0)
        with pytest.raises(InvalidScale):
            Interval(1.0, 5.0).scaled(-1.0)

    def test_str(self):
        """Test interval notation."""
        assert str(Interval(1.0, 5.0)) == "[1, 5]"
        assert str(Interval.lower_bounded(25.0)) == "[25, inf)"
        assert str(Interval.upper_bounded(0.0)) == "(-inf, 0]"
