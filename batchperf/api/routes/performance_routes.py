#!/usr/bin/env python3
"""
Performance Routes - Pool and Node Performance Time Series
"""

import json
import logging
import urllib.error
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query

from ...core.errors import InvalidWindowError, MalformedPayloadError
from ...reshape.charts import to_chart_columns
from ..performance import PerformanceService
from ..schemas import PerformanceReport

logger = logging.getLogger("batchperf.server")


def serialize_report(report: PerformanceReport) -> Dict[str, Any]:
    """JSON-ready report: {metric: [samples]} or {metric: {device: [samples]}}."""
    data = {}
    for metric_key, series in report.items():
        if isinstance(series, dict):
            data[metric_key.value] = {
                device: [s.model_dump(mode="json") for s in samples]
                for device, samples in series.items()
            }
        else:
            data[metric_key.value] = [s.model_dump(mode="json") for s in series]
    return data


def create_performance_routes(service: PerformanceService, default_window_minutes: int = 60) -> APIRouter:
    """Create performance-related routes."""
    router = APIRouter()

    def _respond(fetch, target: str, minutes: int, layout: str) -> Dict[str, Any]:
        try:
            report = fetch()
        except InvalidWindowError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except MalformedPayloadError as e:
            logger.error(f"Malformed metrics payload for {target}: {e}")
            raise HTTPException(status_code=502, detail=str(e))
        except (urllib.error.URLError, json.JSONDecodeError) as e:
            logger.error(f"App Insights request failed for {target}: {e}")
            raise HTTPException(status_code=502, detail="App Insights request failed")

        data = to_chart_columns(report) if layout == "columns" else serialize_report(report)
        return {
            "data": data,
            "target": target,
            "minutes": minutes,
            "layout": layout,
        }

    @router.get("/api/apps/{app_id}/pools/{pool_id}/performance")
    def get_pool_performance(
        app_id: str,
        pool_id: str,
        minutes: Optional[int] = Query(None),
        layout: str = Query("series", pattern="^(series|columns)$"),
    ):
        """Performance series for every node of a pool."""
        minutes = default_window_minutes if minutes is None else minutes
        return _respond(
            lambda: service.get_pool_performance(app_id, pool_id, minutes),
            pool_id, minutes, layout,
        )

    @router.get("/api/apps/{app_id}/pools/{pool_id}/nodes/{node_id}/performance")
    def get_node_performance(
        app_id: str,
        pool_id: str,
        node_id: str,
        minutes: Optional[int] = Query(None),
        layout: str = Query("series", pattern="^(series|columns)$"),
    ):
        """Performance series for a single node, including per-CPU/GPU breakdowns."""
        minutes = default_window_minutes if minutes is None else minutes
        return _respond(
            lambda: service.get_node_performance(app_id, pool_id, node_id, minutes),
            f"{pool_id}/{node_id}", minutes, layout,
        )

    @router.get("/api/apps/{app_id}/query")
    def run_query(app_id: str, query: str = Query(..., min_length=1)):
        """Free-text App Insights query passthrough."""
        try:
            return service.run_query(app_id, query)
        except (urllib.error.URLError, json.JSONDecodeError) as e:
            logger.error(f"App Insights query failed for app {app_id}: {e}")
            raise HTTPException(status_code=502, detail="App Insights request failed")

    return router
