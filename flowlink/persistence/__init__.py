"""Execution history persistence for FlowLink."""

from __future__ import annotations

import os
from typing import Optional

from ..config import FlowLinkConfig, load_config
from .api import ApiExecutionStore
from .inmemory import InMemoryExecutionStore
from .models import ExecutionRecord
from .sqlite import SQLiteExecutionStore
from .store import ExecutionStore, QueryableExecutionStore

_store_instance: QueryableExecutionStore | None = None


def get_store(
    database_url: Optional[str] = None, config: Optional[FlowLinkConfig] = None
) -> QueryableExecutionStore:
    """Factory function to obtain a queryable execution store.

    The backend is selected from ``database_url``, which can be provided
    explicitly, via ``FLOWLINK_DATABASE_URL`` / ``DATABASE_URL``, or from the
    loaded configuration. Without a database an in-memory store is returned.
    """

    global _store_instance
    if _store_instance is not None and database_url is None and config is None:
        return _store_instance

    config = config or load_config()
    database_url = (
        database_url
        or os.getenv("FLOWLINK_DATABASE_URL")
        or os.getenv("DATABASE_URL")
        or config.database_url
    )

    if not database_url:
        _store_instance = InMemoryExecutionStore()
        return _store_instance

    if database_url.startswith("sqlite://"):
        path = database_url.replace("sqlite://", "", 1)
        _store_instance = SQLiteExecutionStore(path)
    else:
        raise ValueError(f"Unsupported database backend: {database_url}")

    return _store_instance


__all__ = [
    "ExecutionRecord",
    "ExecutionStore",
    "QueryableExecutionStore",
    "ApiExecutionStore",
    "InMemoryExecutionStore",
    "SQLiteExecutionStore",
    "get_store",
]
