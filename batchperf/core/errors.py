"""
Error taxonomy for query building and result reshaping.

None of these are retried locally: they are either caller misuse or
upstream shape drift, and all of them propagate to the caller.
"""

from typing import Optional


class PerformanceQueryError(Exception):
    """Base class for all batchperf errors."""


class ConfigurationError(PerformanceQueryError):
    """Catalog and reshaper dispatch have drifted apart (programming error)."""


class InvalidWindowError(PerformanceQueryError):
    """Requested time window is not a positive number of minutes."""

    def __init__(self, window_minutes, reason: str = "must be a positive number of minutes"):
        self.window_minutes = window_minutes
        super().__init__(f"window {reason}, got {window_minutes!r}")


class MalformedPayloadError(PerformanceQueryError):
    """A raw bucket lacks a field its metric's processing strategy needs."""

    def __init__(self, metric_key: str, bucket_index: Optional[int], detail: str):
        self.metric_key = metric_key
        self.bucket_index = bucket_index
        self.detail = detail
        where = f"bucket {bucket_index}" if bucket_index is not None else "result body"
        super().__init__(f"malformed {metric_key} payload at {where}: {detail}")
