"""
batchperf - pool and node performance telemetry

Builds batched App Insights metric queries for a compute pool (or one node)
and reshapes the segmented response into chart-ready time series.
"""

from .api.queries import build_node_query, build_pool_query
from .reshape import reshape

__all__ = ["build_pool_query", "build_node_query", "reshape"]
