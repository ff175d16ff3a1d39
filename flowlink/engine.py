"""Workflow execution engine: owns executions and drives their steps."""

from __future__ import annotations

import asyncio
import copy
import logging
import threading
from datetime import timedelta
from typing import Any, Dict, List, Optional

from .adapters import AdapterRegistry, create_default_registry
from .api import get_api_client
from .api.base import BaseApiClient
from .conditions import ConditionEvaluator
from .config import FlowLinkConfig, load_config
from .contracts import (
    Execution,
    ExecutionStatus,
    StepStatus,
    StepType,
    Workflow,
    utcnow,
)
from .errors import ValidationError
from .executor import StepExecutor
from .persistence import ApiExecutionStore, ExecutionRecord, ExecutionStore
from .validation import Validator, WorkflowValidator

logger = logging.getLogger(__name__)

# Completed step outputs live under this context key, by step id.
STEP_OUTPUTS_KEY = "steps"


class WorkflowEngine:
    """Run workflows and keep the registry of active and finished executions.

    Each execution runs as its own asyncio task; steps inside one execution
    are strictly sequential. The registry is guarded by a single lock that is
    never held across an ``await``.
    """

    def __init__(
        self,
        api_client: Optional[BaseApiClient] = None,
        validator: Optional[Validator] = None,
        registry: Optional[AdapterRegistry] = None,
        store: Optional[ExecutionStore] = None,
        config: Optional[FlowLinkConfig] = None,
        evaluator: Optional[ConditionEvaluator] = None,
    ) -> None:
        self.config = config or load_config()
        self.api = api_client or get_api_client(config=self.config)
        self._validator = validator or WorkflowValidator()
        self.registry = registry or create_default_registry(self.api)
        self._store = store or ApiExecutionStore(self.api)
        self._step_executor = StepExecutor(
            self.registry,
            evaluator=evaluator,
            default_delay_ms=self.config.engine.default_delay_ms,
            step_timeout=self.config.engine.step_timeout,
        )

        self._lock = threading.Lock()
        self._active: Dict[str, Execution] = {}
        self._history: Dict[str, Execution] = {}
        self._tasks: Dict[str, asyncio.Task] = {}

    # ------------------------------------------------------------------
    # Running workflows
    async def start(
        self,
        workflow: Workflow,
        input_data: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> Execution:
        """Register a new execution and schedule its run.

        Returns the execution handle without waiting for any step.
        """
        step_context = copy.deepcopy(context or {})
        if STEP_OUTPUTS_KEY in step_context:
            logger.warning(
                f"Context key '{STEP_OUTPUTS_KEY}' is reserved for step outputs; "
                "the caller's value is replaced"
            )
        step_context[STEP_OUTPUTS_KEY] = {}
        execution = Execution(
            workflow_id=workflow.workflow_id,
            input_data=copy.deepcopy(input_data or {}),
            context=step_context,
        )
        with self._lock:
            self._active[execution.id] = execution

        logger.info(
            f"Starting execution {execution.id} of workflow {workflow.workflow_id}"
        )
        task = asyncio.create_task(self._run(workflow, execution))
        self._tasks[execution.id] = task
        task.add_done_callback(lambda _t: self._tasks.pop(execution.id, None))
        return execution

    async def execute_workflow(
        self,
        workflow: Workflow,
        input_data: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> Execution:
        """Run ``workflow`` to a terminal state and return its execution."""
        execution = await self.start(workflow, input_data, context)
        await self.wait(execution.id)
        return execution

    async def wait(self, execution_id: str) -> Optional[Execution]:
        """Wait for a scheduled execution to finish running."""
        task = self._tasks.get(execution_id)
        if task is not None:
            await asyncio.shield(task)
        return self.get_execution_by_id(execution_id)

    async def _run(self, workflow: Workflow, execution: Execution) -> None:
        try:
            self._validator.validate(workflow)
            steps = workflow.parse_steps()
            execution.total_steps = len(steps)

            for index, step in enumerate(steps):
                if execution.is_terminal:
                    break
                execution.current_step_index = index

                step_execution = await self._step_executor.execute(
                    step, execution, index
                )
                execution.steps.append(step_execution)
                if step_execution.status is StepStatus.COMPLETED:
                    execution.context[STEP_OUTPUTS_KEY][
                        step_execution.step_id
                    ] = step_execution.output

                if (
                    step_execution.status is StepStatus.FAILED
                    and not step.continue_on_error
                ):
                    self._transition(
                        execution, ExecutionStatus.FAILED, step_execution.error
                    )
                    break

                if (
                    step.type == StepType.CONDITION.value
                    and step_execution.status is StepStatus.COMPLETED
                    and not step_execution.output["conditionMet"]
                ):
                    self._transition(execution, ExecutionStatus.COMPLETED_CONDITIONAL)
                    break

            self._transition(execution, ExecutionStatus.COMPLETED)

        except ValidationError as exc:
            logger.warning(f"Execution {execution.id} rejected: {exc.describe()}")
            self._transition(execution, ExecutionStatus.FAILED, str(exc))
        except asyncio.CancelledError:
            self._transition(execution, ExecutionStatus.CANCELLED)
            raise
        except Exception as exc:
            logger.exception(f"Workflow execution {execution.id} failed")
            self._transition(execution, ExecutionStatus.FAILED, str(exc))
        finally:
            self._finalize(execution)
            await self._persist(execution)

    def _transition(
        self,
        execution: Execution,
        status: ExecutionStatus,
        error: Optional[str] = None,
    ) -> bool:
        """Move a running execution to ``status``. Terminal states are final."""
        with self._lock:
            if execution.is_terminal:
                return False
            execution.status = status
            if error is not None:
                execution.error = error
            return True

    def _finalize(self, execution: Execution) -> None:
        with self._lock:
            execution.finish()
            self._active.pop(execution.id, None)
            self._history[execution.id] = execution
        logger.info(
            f"Execution {execution.id} finished with status {execution.status.value} "
            f"after {len(execution.steps)}/{execution.total_steps} steps"
        )

    async def _persist(self, execution: Execution) -> None:
        try:
            await self._store.record_execution(ExecutionRecord.from_execution(execution))
        except Exception as exc:
            logger.warning(f"Failed to store execution history for {execution.id}: {exc}")

    # ------------------------------------------------------------------
    # Monitoring and management
    def cancel_execution(self, execution_id: str) -> bool:
        """Cancel an active execution.

        The step currently running is allowed to finish; no further step
        starts. Returns ``False`` if the execution is unknown or already
        terminal.
        """
        with self._lock:
            execution = self._active.get(execution_id)
            if execution is None or execution.is_terminal:
                return False
            execution.status = ExecutionStatus.CANCELLED
            execution.finish()
            self._history[execution_id] = self._active.pop(execution_id)
        logger.info(f"Execution {execution_id} cancelled")
        return True

    def get_active_executions(self) -> List[Execution]:
        with self._lock:
            return list(self._active.values())

    def get_execution_history(self, limit: Optional[int] = None) -> List[Execution]:
        """Return finished executions, most recently started first."""
        if limit is None:
            limit = self.config.engine.history_limit
        with self._lock:
            executions = list(self._history.values())
        executions.sort(key=lambda e: e.start_time, reverse=True)
        return executions[:limit]

    def get_execution_by_id(self, execution_id: str) -> Optional[Execution]:
        if not isinstance(execution_id, str):
            raise TypeError(
                f"execution_id must be a str, not {type(execution_id).__name__}"
            )
        with self._lock:
            return self._active.get(execution_id) or self._history.get(execution_id)

    def cleanup_history(self, max_age: Optional[timedelta] = None) -> int:
        """Drop history entries started more than ``max_age`` ago.

        Returns the number of executions removed.
        """
        if max_age is None:
            max_age = timedelta(days=self.config.engine.history_max_age_days)
        cutoff = utcnow() - max_age
        with self._lock:
            expired = [
                execution_id
                for execution_id, execution in self._history.items()
                if execution.start_time < cutoff
            ]
            for execution_id in expired:
                del self._history[execution_id]
        if expired:
            logger.info(f"Removed {len(expired)} executions from history")
        return len(expired)


__all__ = ["WorkflowEngine"]
