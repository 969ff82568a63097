#!/usr/bin/env python3
"""
batchperf Server Configuration

Settings come from a YAML file; anything missing falls back to defaults.
The App Insights API key is never part of the file, it is read from the
APPINSIGHTS_API_KEY environment variable (or .env) by the client.
"""

import logging

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger("batchperf.config")


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    # Upstream telemetry service
    app_insights_url: str = "https://api.applicationinsights.io/v1"
    request_timeout: int = 30
    # Window used when a request does not specify one
    default_window_minutes: int = Field(60, gt=0)


def load_config_from(path: str) -> ServerConfig:
    """Load server configuration from YAML file."""
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    logger.info(f"Loaded configuration from: {path}")
    return ServerConfig(**data)
