"""
Metric Query Modules

Query building split by concern:
- catalog.py: Metric catalog and per-device classification
- interval.py: Sampling interval from window length
- filters.py: Pool/node identity filter expressions
- odata.py: OData serialization of filter expressions
- builder.py: One query descriptor per catalog entry
"""

from .catalog import (METRIC_CATALOG, DeviceClass, MetricDefinition, MetricKey,
                      MetricKind, get_metric_definition)
from .interval import POINT_BUDGET, compute_interval_seconds
from .filters import And, Equals, FilterExpression, compose_identity_filter
from .odata import to_odata
from .builder import build_node_query, build_pool_query

__all__ = [
    # Catalog
    'METRIC_CATALOG',
    'DeviceClass',
    'MetricDefinition',
    'MetricKey',
    'MetricKind',
    'get_metric_definition',

    # Interval
    'POINT_BUDGET',
    'compute_interval_seconds',

    # Filters
    'And',
    'Equals',
    'FilterExpression',
    'compose_identity_filter',
    'to_odata',

    # Builders
    'build_pool_query',
    'build_node_query',
]
