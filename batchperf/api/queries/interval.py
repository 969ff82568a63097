"""
Sampling interval derived from the requested window.

The interval is chosen so a window never returns more than POINT_BUDGET
buckets, snapped up to a 10 second step that upstream aggregation accepts.
"""

import math
from numbers import Real

from ...core.errors import InvalidWindowError

# Maximum buckets per metric; also the `top` cap sent with every query
POINT_BUDGET = 1000


def validate_window(window_minutes: Real) -> Real:
    """Reject anything that is not a positive, finite number of minutes."""
    if (isinstance(window_minutes, bool) or not isinstance(window_minutes, Real)
            or not math.isfinite(window_minutes) or window_minutes <= 0):
        raise InvalidWindowError(window_minutes)
    return window_minutes


def validate_whole_minutes(window_minutes: Real) -> int:
    """Positive window that is also a whole number of minutes, as the wire timespan needs."""
    validate_window(window_minutes)
    if not float(window_minutes).is_integer():
        raise InvalidWindowError(window_minutes, "must be a whole number of minutes")
    return int(window_minutes)


def compute_interval_seconds(window_minutes: Real, point_budget: int = POINT_BUDGET) -> int:
    """
    Interval in whole seconds, a multiple of 10 and never below 10.

    Examples:
        >>> compute_interval_seconds(100)
        10
        >>> compute_interval_seconds(1440)
        90
        >>> compute_interval_seconds(2.5)
        10
    """
    validate_window(window_minutes)
    return math.ceil(window_minutes * 60 / point_budget / 10) * 10


def format_interval(seconds: int) -> str:
    return f"PT{seconds}S"


def format_timespan(window_minutes: int) -> str:
    return f"PT{window_minutes}M"
