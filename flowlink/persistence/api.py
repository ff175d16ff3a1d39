"""Execution history reported to the FlowLink REST API."""

from __future__ import annotations

from ..api.base import BaseApiClient
from .models import ExecutionRecord


class ApiExecutionStore:
    """POST execution summaries to ``/workflow-executions``."""

    def __init__(self, api: BaseApiClient) -> None:
        self._api = api

    async def record_execution(self, record: ExecutionRecord) -> None:
        await self._api.record_execution(record.model_dump(mode="json", by_alias=True))
