"""
Bucket-level extraction shared by the reshaping strategies.

A raw App Insights metrics body looks like:

    {"start": ..., "end": ..., "interval": "PT10S",
     "segments": [                                   # one per time bucket
         {"start": "...", "end": "...",
          "segments": [                              # one per first dimension
              {"cloud/roleInstance": "tvm-1", "customMetrics/Cpu usage": {"avg": 12.5}},
              ...]},
         ...]}

SegmentProcessor turns such a body into one Sample per bucket for metrics
that are not fanned out per device.
"""

import logging
from datetime import datetime
from numbers import Real
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from ..api.queries.catalog import MetricDefinition
from ..api.schemas import PerformanceSeries, Sample
from ..core.errors import MalformedPayloadError

logger = logging.getLogger("batchperf.reshape")

_datetime_adapter = TypeAdapter(datetime)


def bucket_midpoint(metric_key: str, index: int, bucket: Dict[str, Any]) -> datetime:
    """Midpoint of the bucket's [start, end) range."""
    try:
        start = _datetime_adapter.validate_python(bucket["start"])
        end = _datetime_adapter.validate_python(bucket["end"])
    except KeyError as e:
        raise MalformedPayloadError(metric_key, index, f"missing bucket {e.args[0]!r}") from None
    except ValidationError as e:
        raise MalformedPayloadError(metric_key, index, f"invalid bucket time: {e.errors()[0]['msg']}") from None

    try:
        duration = end - start
    except TypeError:
        raise MalformedPayloadError(metric_key, index, "inconsistent bucket time zones") from None
    if duration.total_seconds() < 0:
        raise MalformedPayloadError(metric_key, index, "bucket ends before it starts")
    return start + duration / 2


def read_average(metric_key: str, index: int, node: Dict[str, Any], upstream_metric_id: str) -> float:
    """Averaged value stored under the upstream metric id, e.g. node["customMetrics/Cpu usage"]["avg"]."""
    aggregate = node.get(upstream_metric_id)
    if not isinstance(aggregate, dict) or "avg" not in aggregate:
        raise MalformedPayloadError(metric_key, index, f"missing {upstream_metric_id!r} average")
    value = aggregate["avg"]
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MalformedPayloadError(metric_key, index, f"non-numeric {upstream_metric_id!r} average: {value!r}")
    return float(value)


def buckets_of(metric_key: str, body: Any) -> List[Dict[str, Any]]:
    """Time buckets of a raw metric body."""
    if not isinstance(body, dict) or not isinstance(body.get("segments"), list):
        raise MalformedPayloadError(metric_key, None, "missing segments list")
    return body["segments"]


class SegmentProcessor:
    """
    Extracts a flat series for one metric definition.

    A bucket-level aggregate is used as is. Otherwise the nested segments are
    walked, one level per segmentation dimension, and the leaf averages are
    merged by mean: several hosts of a pool, or several disks of a host,
    collapse into one value, while a singleton passes through unchanged.
    """

    def __init__(self, definition: MetricDefinition):
        self.definition = definition
        self.metric_key = definition.key.value
        self.dimensions = definition.segment_dimensions

    def process(self, body: Any) -> PerformanceSeries:
        return [self.process_bucket(index, bucket) for index, bucket in enumerate(buckets_of(self.metric_key, body))]

    def process_bucket(self, index: int, bucket: Dict[str, Any]) -> Sample:
        if not isinstance(bucket, dict):
            raise MalformedPayloadError(self.metric_key, index, "bucket is not an object")
        time = bucket_midpoint(self.metric_key, index, bucket)
        values = self._collect(index, bucket, depth=0)
        value: Optional[float] = sum(values) / len(values) if values else None
        return Sample(time=time, value=value)

    def _collect(self, index: int, node: Dict[str, Any], depth: int) -> List[float]:
        upstream_id = self.definition.upstream_metric_id
        if upstream_id in node:
            return [read_average(self.metric_key, index, node, upstream_id)]

        children = node.get("segments")
        if not isinstance(children, list):
            raise MalformedPayloadError(self.metric_key, index, f"neither {upstream_id!r} nor segments present")
        if depth >= len(self.dimensions):
            raise MalformedPayloadError(self.metric_key, index, f"nested deeper than segment path {self.definition.segment_path!r}")

        values = []
        for child in children:
            if not isinstance(child, dict):
                raise MalformedPayloadError(self.metric_key, index, "segment is not an object")
            values.extend(self._collect(index, child, depth + 1))
        return values
