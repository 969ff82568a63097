"""
Query batch builder.

Produces one QueryDescriptor per catalog entry for a pool (or a single node
of that pool) over the last N minutes. Every descriptor in a batch shares
the same identity filter, interval and timespan.
"""

import logging
from typing import List, Optional

from ..schemas import QueryDescriptor, QueryParameters
from .catalog import METRIC_CATALOG
from .filters import compose_identity_filter
from .interval import (POINT_BUDGET, compute_interval_seconds, format_interval,
                       format_timespan, validate_whole_minutes)

logger = logging.getLogger("batchperf.queries")


def _build_query(pool_id: str, node_id: Optional[str], window_minutes: int) -> List[QueryDescriptor]:
    window_minutes = validate_whole_minutes(window_minutes)

    timespan = format_timespan(window_minutes)
    interval = format_interval(compute_interval_seconds(window_minutes))
    identity_filter = compose_identity_filter(pool_id, node_id)

    descriptors = [
        QueryDescriptor(
            key=key,
            parameters=QueryParameters(
                aggregation="avg",
                upstream_metric_id=metric.upstream_metric_id,
                filter=identity_filter,
                interval=interval,
                timespan=timespan,
                segment=metric.segment_path,
                top=POINT_BUDGET,
            ),
        )
        for key, metric in METRIC_CATALOG.items()
    ]

    target = f"node {node_id} of pool {pool_id}" if node_id else f"pool {pool_id}"
    logger.debug(f"Built {len(descriptors)} metric queries for {target} ({timespan}, {interval})")
    return descriptors


def build_pool_query(pool_id: str, window_minutes: int) -> List[QueryDescriptor]:
    """
    Metric queries covering every node of a pool.

    Args:
        pool_id: Pool id (App Insights role name)
        window_minutes: Look-back window in minutes, must be > 0

    Returns:
        One descriptor per catalog entry, in catalog order

    Raises:
        InvalidWindowError: window_minutes is not a positive whole number of minutes
    """
    return _build_query(pool_id, None, window_minutes)


def build_node_query(pool_id: str, node_id: str, window_minutes: int) -> List[QueryDescriptor]:
    """
    Metric queries narrowed to one node of a pool.

    Same as build_pool_query, with the node predicate AND-ed onto the pool filter.
    """
    if not node_id:
        raise ValueError("node_id is required for a node query")
    return _build_query(pool_id, node_id, window_minutes)
