"""Store abstraction for execution history persistence."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import ExecutionRecord


class ExecutionStore(Protocol):
    """Protocol for execution history backends."""

    async def record_execution(self, record: ExecutionRecord) -> None:
        """Persist the summary of a finished execution."""


@runtime_checkable
class QueryableExecutionStore(ExecutionStore, Protocol):
    """Execution store that can also read history back."""

    async def get_execution(self, execution_id: str) -> ExecutionRecord | None:
        """Retrieve the record for ``execution_id``."""

    async def list_executions(self, limit: int | None = None) -> list[ExecutionRecord]:
        """Return records, most recently recorded first."""
