"""In-memory implementation of the execution store."""

from __future__ import annotations

from typing import Dict

from .models import ExecutionRecord


class InMemoryExecutionStore:
    """Keep execution records in local memory.

    Useful for tests or when no database is configured. Data is not
    persisted across process restarts.
    """

    def __init__(self) -> None:
        self._records: Dict[str, ExecutionRecord] = {}

    async def record_execution(self, record: ExecutionRecord) -> None:
        self._records[record.execution_id] = record

    async def get_execution(self, execution_id: str) -> ExecutionRecord | None:
        return self._records.get(execution_id)

    async def list_executions(self, limit: int | None = None) -> list[ExecutionRecord]:
        records = sorted(
            self._records.values(), key=lambda r: r.recorded_at, reverse=True
        )
        return records[:limit] if limit is not None else records
