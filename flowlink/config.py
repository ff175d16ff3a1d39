from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field


class ApiConfig(BaseModel):
    """Configuration for the FlowLink REST API client."""

    backend: Literal["http", "inmemory"] = "http"
    base_url: str = "http://localhost:3001/api"
    token: Optional[str] = None
    timeout: float = 10.0
    max_retries: int = 0


class EngineConfig(BaseModel):
    """Workflow engine tuning."""

    history_limit: int = 50
    history_max_age_days: float = 7
    default_delay_ms: int = 1000
    step_timeout: Optional[float] = None


class FlowLinkConfig(BaseModel):
    """Top-level configuration model."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    database_url: Optional[str] = None


def load_config(path: Optional[str] = None) -> FlowLinkConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to FLOWLINK_CONFIG env
            variable or 'flowlink.yaml' in the current directory.
    """

    config_path = path or os.getenv("FLOWLINK_CONFIG", "flowlink.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = FlowLinkConfig(**data)
    else:
        config = FlowLinkConfig()

    base_url = os.getenv("FLOWLINK_API_BASE_URL")
    if base_url:
        config.api.base_url = base_url
    token = os.getenv("FLOWLINK_API_TOKEN")
    if token:
        config.api.token = token

    env_db_url = os.getenv("FLOWLINK_DATABASE_URL") or os.getenv("DATABASE_URL")
    if env_db_url:
        config.database_url = env_db_url
    return config
