"""API client factory and initialization."""

from __future__ import annotations

import os
from typing import Optional

from ..config import FlowLinkConfig, load_config
from .base import BaseApiClient
from .http import HttpApiClient
from .inmemory import InMemoryApiClient


def get_api_client(
    backend: Optional[str] = None, config: Optional[FlowLinkConfig] = None
) -> BaseApiClient:
    """Factory function to get the configured API client."""

    config = config or load_config()
    backend = (
        backend or os.getenv("FLOWLINK_API_BACKEND") or config.api.backend
    ).lower()

    if backend == "inmemory":
        return InMemoryApiClient()
    elif backend == "http":
        return HttpApiClient(
            base_url=config.api.base_url,
            token=config.api.token,
            timeout=config.api.timeout,
            max_retries=config.api.max_retries,
        )
    else:
        raise ValueError(f"Unsupported API backend: {backend}")


__all__ = ["BaseApiClient", "HttpApiClient", "InMemoryApiClient", "get_api_client"]
