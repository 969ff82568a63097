#!/usr/bin/env python3
"""
batchperf API Schemas - Pydantic Models for Queries and Results
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .queries.catalog import MetricKey
from .queries.filters import FilterExpression
from .queries.odata import to_odata


class QueryParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    aggregation: Literal["avg"] = "avg"
    upstream_metric_id: str
    filter: FilterExpression
    interval: str = Field(..., pattern=r"^PT\d+S$")
    timespan: str = Field(..., pattern=r"^PT\d+M$")
    segment: str = Field(..., min_length=1)
    top: int = 1000


class QueryDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: MetricKey
    parameters: QueryParameters

    def to_wire(self, serialize: Callable[[FilterExpression], str] = to_odata) -> Dict[str, Any]:
        """Body item of an App Insights metrics batch request."""
        params = self.parameters
        return {
            "id": self.key.value,
            "parameters": {
                "aggregation": params.aggregation,
                "metricId": params.upstream_metric_id,
                "filter": serialize(params.filter),
                "interval": params.interval,
                "timespan": params.timespan,
                "segment": params.segment,
                "top": params.top,
            },
        }


class Sample(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: datetime
    value: Optional[float]  # None marks a bucket with no data


PerformanceSeries = List[Sample]
PerDeviceSeries = Dict[str, PerformanceSeries]
PerformanceReport = Dict[MetricKey, Union[PerformanceSeries, PerDeviceSeries]]
