#!/usr/bin/env python3
"""
batchperf FastAPI application factory
"""

import logging
from typing import Optional

from fastapi import FastAPI

from ..api.insights_client import AppInsightsClient
from ..api.performance import PerformanceService
from ..api.routes.performance_routes import create_performance_routes
from .config import ServerConfig

logger = logging.getLogger("batchperf.server")


def create_app(config: ServerConfig, client: Optional[AppInsightsClient] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        config: Server configuration
        client: App Insights client; created from config and APPINSIGHTS_API_KEY when None
    """
    if client is None:
        client = AppInsightsClient(base_url=config.app_insights_url, timeout=config.request_timeout)

    app = FastAPI(title="batchperf")
    service = PerformanceService(client)
    app.include_router(create_performance_routes(service, config.default_window_minutes))

    logger.info(f"batchperf app created (App Insights: {config.app_insights_url})")
    return app
