"""
Result reshaping.

Turns the raw metrics batch response into a PerformanceReport: a flat series
for most metrics, or one series per CPU/GPU ordinal for the metrics the
catalog marks as per-device.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Tuple, Union

from ..api.queries.catalog import MetricDefinition, MetricKind, get_metric_definition
from ..api.schemas import PerDeviceSeries, PerformanceReport, PerformanceSeries, Sample
from ..core.errors import ConfigurationError, MalformedPayloadError
from .processor import SegmentProcessor, bucket_midpoint, buckets_of, read_average

logger = logging.getLogger("batchperf.reshape")


def reshape_flat(definition: MetricDefinition, body: Any) -> PerformanceSeries:
    """One sample per bucket, extracted by the definition's SegmentProcessor."""
    return SegmentProcessor(definition).process(body)


def reshape_per_device(definition: MetricDefinition, body: Any) -> PerDeviceSeries:
    """
    Fan a bucketed response out into one series per device ordinal.

    Devices missing from a bucket get no sample for it (sparse, not zero-filled).
    Device keys appear in first-seen order.
    """
    metric_key = definition.key.value
    device_field = definition.device.dimension
    usages: PerDeviceSeries = {}

    for index, bucket in enumerate(buckets_of(metric_key, body)):
        if not isinstance(bucket, dict):
            raise MalformedPayloadError(metric_key, index, "bucket is not an object")
        time = bucket_midpoint(metric_key, index, bucket)

        device_segments = bucket.get("segments")
        if not isinstance(device_segments, list):
            raise MalformedPayloadError(metric_key, index, "missing per-device segments")

        for device_segment in device_segments:
            if not isinstance(device_segment, dict):
                raise MalformedPayloadError(metric_key, index, "segment is not an object")
            device_id = device_segment.get(device_field)
            if device_id is None or device_id == "":
                raise MalformedPayloadError(metric_key, index, f"missing device dimension {device_field!r}")
            value = read_average(metric_key, index, device_segment, definition.upstream_metric_id)
            usages.setdefault(str(device_id), []).append(Sample(time=time, value=value))

    return usages


# Closed dispatch over every MetricKind
RESHAPERS: Dict[MetricKind, Callable[[MetricDefinition, Any], Union[PerformanceSeries, PerDeviceSeries]]] = {
    MetricKind.FLAT: reshape_flat,
    MetricKind.PER_DEVICE: reshape_per_device,
}

_unhandled = [kind.value for kind in MetricKind if kind not in RESHAPERS]
if _unhandled:
    raise ConfigurationError(f"metric kinds without reshaper: {', '.join(_unhandled)}")


def _iter_results(raw_result: Union[Iterable[Dict[str, Any]], Mapping[str, Any]]) -> Iterable[Tuple[str, Any]]:
    """
    Yield (metric key, metric body) pairs.

    Accepts the metrics batch response as returned by the API
    ([{"id": ..., "body": {"value": {...}}}, ...]) or an already keyed mapping
    {key: {"segments": [...]}}.
    """
    if isinstance(raw_result, Mapping):
        yield from raw_result.items()
        return

    for entry in raw_result:
        if not isinstance(entry, dict) or "id" not in entry:
            raise MalformedPayloadError("<unknown>", None, "result entry without id")
        metric_key = entry["id"]
        body = entry.get("body")
        if not isinstance(body, dict) or "value" not in body:
            raise MalformedPayloadError(str(metric_key), None, "missing body.value")
        yield metric_key, body["value"]


def reshape(raw_result: Union[Iterable[Dict[str, Any]], Mapping[str, Any]]) -> PerformanceReport:
    """
    Reshape a raw metrics batch response into a PerformanceReport.

    Args:
        raw_result: Batch response entries, in any order

    Returns:
        Mapping metric key -> series (flat) or device ordinal -> series (per-device),
        for exactly the keys present in the response

    Raises:
        ConfigurationError: a key is not in the metric catalog
        MalformedPayloadError: a bucket lacks a field its metric needs
    """
    report: PerformanceReport = {}
    for metric_key, body in _iter_results(raw_result):
        definition = get_metric_definition(metric_key)
        report[definition.key] = RESHAPERS[definition.kind](definition, body)

    logger.debug(f"Reshaped {len(report)} metric results")
    return report
