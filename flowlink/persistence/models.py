"""Data models for recorded execution history."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..contracts import Execution


class ExecutionRecord(BaseModel):
    """Summary of a finished execution as reported to the history store."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    workflow_id: Optional[str] = None
    execution_id: str
    status: str
    duration_ms: Optional[int] = None
    steps: int = 0
    input_data: dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_execution(cls, execution: Execution) -> "ExecutionRecord":
        return cls(
            workflow_id=execution.workflow_id,
            execution_id=execution.id,
            status=execution.status.value,
            duration_ms=execution.duration_ms,
            steps=len(execution.steps),
            input_data=execution.input_data,
            error=execution.error,
        )
