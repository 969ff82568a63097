"""
Performance service.

Runs the whole build -> execute -> reshape flow for a pool or a node.
"""

import logging
from typing import Any, Dict

from .insights_client import AppInsightsClient
from .queries import build_node_query, build_pool_query
from .schemas import PerformanceReport
from ..reshape import reshape

logger = logging.getLogger("batchperf.performance")


class PerformanceService:
    """Pool and node performance metrics backed by an App Insights client."""

    def __init__(self, client: AppInsightsClient):
        self.client = client

    def get_pool_performance(self, app_id: str, pool_id: str, last_n_minutes: int) -> PerformanceReport:
        descriptors = build_pool_query(pool_id, last_n_minutes)
        logger.info(f"Fetching pool performance for {pool_id} over last {last_n_minutes} minutes")
        return reshape(self.client.metrics(app_id, descriptors))

    def get_node_performance(self, app_id: str, pool_id: str, node_id: str, last_n_minutes: int) -> PerformanceReport:
        descriptors = build_node_query(pool_id, node_id, last_n_minutes)
        logger.info(f"Fetching node performance for {pool_id}/{node_id} over last {last_n_minutes} minutes")
        return reshape(self.client.metrics(app_id, descriptors))

    def run_query(self, app_id: str, query: str) -> Dict[str, Any]:
        """Free-text query passthrough (non-metrics path)."""
        return self.client.query(app_id, query)
