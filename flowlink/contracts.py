"""Core data contracts for FlowLink workflows and their executions."""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_execution_id() -> str:
    """Return a process-unique execution identifier."""
    millis = int(utcnow().timestamp() * 1000)
    return f"exec_{millis}_{uuid.uuid4().hex[:9]}"


class StepType(str, Enum):
    TRIGGER = "trigger"
    ACTION = "action"
    CONDITION = "condition"
    DELAY = "delay"


class ExecutionStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    COMPLETED_CONDITIONAL = "completed_conditional"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not ExecutionStatus.RUNNING


class StepStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class Step(_CamelModel):
    """One unit of work in a workflow. Immutable once parsed."""

    model_config = ConfigDict(
        populate_by_name=True, alias_generator=to_camel, frozen=True
    )

    id: Optional[str] = None
    # Kept as a plain string so unknown kinds surface as step failures.
    type: str
    platform: Optional[str] = None
    event: Optional[str] = None
    action: Optional[str] = None
    config: Dict[str, Any] = Field(default_factory=dict)
    continue_on_error: bool = False

    @property
    def trigger_event(self) -> Optional[str]:
        """Trigger event name, read from the step or its config."""
        return self.event or self.config.get("event")

    @property
    def action_name(self) -> Optional[str]:
        """Action name, read from the step or its config."""
        return self.action or self.config.get("action")


class Workflow(_CamelModel):
    """User-defined automation: metadata plus the raw step list."""

    workflow_id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    steps_json: Union[str, List[Any], None] = Field(
        default=None,
        validation_alias=AliasChoices("stepsJson", "steps_json", "steps"),
        serialization_alias="stepsJson",
    )
    enabled: bool = True

    def raw_steps(self) -> Any:
        """Return the step list, decoding it first when stored as JSON text."""
        if isinstance(self.steps_json, str):
            return json.loads(self.steps_json)
        return self.steps_json

    def parse_steps(self) -> List[Step]:
        """Parse the raw step list into typed steps.

        Raises:
            ValueError: If the steps are not a JSON list of mappings.
        """
        raw = self.raw_steps()
        if not isinstance(raw, list):
            raise ValueError("Workflow steps must be a list")
        steps: List[Step] = []
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                raise ValueError(f"Step {index + 1} must be a mapping")
            steps.append(Step.model_validate(item))
        return steps


class StepExecution(_CamelModel):
    """Recorded outcome of running one step within one execution."""

    step_id: str
    type: str
    platform: Optional[str] = None
    status: StepStatus = StepStatus.RUNNING
    start_time: datetime = Field(default_factory=utcnow)
    end_time: Optional[datetime] = None
    duration_ms: Optional[int] = None
    input: Dict[str, Any] = Field(default_factory=dict)
    output: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    def finish(self) -> None:
        self.end_time = utcnow()
        self.duration_ms = _elapsed_ms(self.start_time, self.end_time)


class Execution(_CamelModel):
    """One run of a workflow with its own context and step trace."""

    id: str = Field(default_factory=generate_execution_id)
    workflow_id: Optional[str] = None
    status: ExecutionStatus = ExecutionStatus.RUNNING
    start_time: datetime = Field(default_factory=utcnow)
    end_time: Optional[datetime] = None
    duration_ms: Optional[int] = None
    steps: List[StepExecution] = Field(default_factory=list)
    input_data: Dict[str, Any] = Field(default_factory=dict)
    context: Dict[str, Any] = Field(default_factory=dict)
    current_step_index: int = 0
    total_steps: int = 0
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def finish(self) -> None:
        if self.end_time is None:
            self.end_time = utcnow()
        self.duration_ms = _elapsed_ms(self.start_time, self.end_time)


def _elapsed_ms(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() * 1000)


__all__ = [
    "StepType",
    "ExecutionStatus",
    "StepStatus",
    "Step",
    "Workflow",
    "StepExecution",
    "Execution",
    "generate_execution_id",
    "utcnow",
]
