"""
Tests for the sampling interval calculation.
"""

from fractions import Fraction

import pytest

from batchperf.api.queries.interval import (compute_interval_seconds, format_interval,
                                            format_timespan, validate_whole_minutes,
                                            validate_window)
from batchperf.core.errors import InvalidWindowError


class TestComputeIntervalSeconds:
    """Test interval derivation from the point budget."""

    @pytest.mark.parametrize("window,expected", [
        (1, 10),
        (100, 10),
        (166, 10),
        (167, 20),
        (1000, 60),
        (1440, 90),
        (10080, 610),
        (43200, 2600),
    ])
    def test_known_windows(self, window, expected):
        assert compute_interval_seconds(window) == expected

    def test_always_multiple_of_ten_and_at_least_ten(self):
        for window in range(1, 5000, 7):
            seconds = compute_interval_seconds(window)
            assert seconds % 10 == 0
            assert seconds >= 10

    def test_monotonically_non_decreasing(self):
        previous = 0
        for window in range(1, 20000, 13):
            seconds = compute_interval_seconds(window)
            assert seconds >= previous
            previous = seconds

    def test_buckets_stay_within_budget(self):
        for window in (1, 59, 60, 999, 1000, 1001, 1440, 10080):
            buckets = window * 60 / compute_interval_seconds(window)
            assert buckets <= 1000

    def test_custom_point_budget(self):
        assert compute_interval_seconds(60, point_budget=60) == 60


class TestWindowValidation:
    """Test rejection of bad windows."""

    @pytest.mark.parametrize("window", [0, -1, -60])
    def test_non_positive_window_rejected(self, window):
        with pytest.raises(InvalidWindowError) as exc_info:
            compute_interval_seconds(window)
        assert exc_info.value.window_minutes == window

    @pytest.mark.parametrize("window", ["60", None, True, float("nan"), float("inf")])
    def test_non_numeric_window_rejected(self, window):
        with pytest.raises(InvalidWindowError):
            validate_window(window)

    def test_whole_minutes_required_for_timespan(self):
        assert validate_whole_minutes(60.0) == 60
        with pytest.raises(InvalidWindowError, match="whole number"):
            validate_whole_minutes(2.5)


class TestFractionalWindows:
    """Test windows that are not whole minutes."""

    @pytest.mark.parametrize("window,expected", [
        (0.01, 10),
        (2.5, 10),
        (166.6, 10),
        (166.7, 20),
        (1439.5, 90),
    ])
    def test_known_fractional_windows(self, window, expected):
        assert compute_interval_seconds(window) == expected

    def test_always_multiple_of_ten_and_at_least_ten(self):
        previous = 0
        for step in range(1, 4000):
            seconds = compute_interval_seconds(step * 0.37)
            assert seconds % 10 == 0
            assert seconds >= 10
            assert seconds >= previous
            previous = seconds

    def test_fraction_window(self):
        assert compute_interval_seconds(Fraction(5, 2)) == 10


class TestFormatting:
    """Test ISO-8601 style duration strings."""

    def test_format_interval(self):
        assert format_interval(10) == "PT10S"

    def test_format_timespan(self):
        assert format_timespan(100) == "PT100M"
