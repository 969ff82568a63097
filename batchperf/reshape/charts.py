"""
Chart data preparation.

Converts a PerformanceReport into pandas frames and into the aligned column
layout uPlot expects: one shared timestamp array plus one value array per
line, with None where a line has no sample.
"""

from typing import Any, Dict, List, Optional

import pandas as pd

from ..api.schemas import PerformanceReport

FRAME_COLUMNS = ["metric", "device", "time", "value"]


def report_to_frame(report: PerformanceReport) -> pd.DataFrame:
    """
    Flatten a report into a long DataFrame.

    Returns:
        DataFrame with columns: metric, device, time, value.
        device is None for flat metrics.
    """
    rows = []
    for metric_key, series in report.items():
        metric = getattr(metric_key, "value", metric_key)
        if isinstance(series, dict):
            for device, samples in series.items():
                rows.extend({"metric": metric, "device": device, "time": s.time, "value": s.value} for s in samples)
        else:
            rows.extend({"metric": metric, "device": None, "time": s.time, "value": s.value} for s in series)

    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["time"] = pd.to_datetime(df["time"], utc=True)
    df["value"] = df["value"].astype("float64")
    return df


def _clean(values: List[Any]) -> List[Optional[float]]:
    # NaN is not valid JSON; uPlot renders None as a gap
    return [None if pd.isna(v) else float(v) for v in values]


def to_chart_columns(report: PerformanceReport) -> Dict[str, Dict[str, Any]]:
    """
    Aligned chart columns per metric.

    Returns:
        {metric: {"timestamps": [epoch seconds...], "series": {label: [values...]}}}
        label is the metric key for flat metrics and the device ordinal otherwise.
    """
    df = report_to_frame(report)
    charts: Dict[str, Dict[str, Any]] = {}
    if df.empty:
        return charts

    df["label"] = df["device"].where(df["device"].notna(), df["metric"])

    for metric, group in df.groupby("metric", sort=False):
        # Keep first-seen device order rather than pandas' sorted columns
        labels = list(dict.fromkeys(group["label"]))
        wide = (group.groupby(["time", "label"], sort=False)["value"].mean()
                .unstack("label")
                .sort_index()
                .reindex(columns=labels))

        timestamps = [ts.timestamp() for ts in wide.index]
        charts[metric] = {
            "timestamps": timestamps,
            "series": {str(label): _clean(wide[label].tolist()) for label in labels},
        }

    return charts
