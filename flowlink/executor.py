"""Step execution for FlowLink workflows."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from .adapters.registry import AdapterRegistry
from .conditions import ConditionEvaluator
from .contracts import Execution, Step, StepExecution, StepStatus, StepType
from .errors import (
    AdapterError,
    UnsupportedPlatformError,
    UnsupportedStepTypeError,
)

logger = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 1000


class StepExecutor:
    """Run a single step against an execution and record the outcome.

    ``execute`` never raises for step failures: the error is captured on the
    returned ``StepExecution`` with status ``failed``.
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        evaluator: Optional[ConditionEvaluator] = None,
        default_delay_ms: int = DEFAULT_DELAY_MS,
        step_timeout: Optional[float] = None,
    ) -> None:
        self._registry = registry
        self._evaluator = evaluator or ConditionEvaluator()
        self._default_delay_ms = default_delay_ms
        self._step_timeout = step_timeout

    async def execute(
        self, step: Step, execution: Execution, index: int
    ) -> StepExecution:
        step_execution = StepExecution(
            step_id=step.id or f"step_{index}",
            type=step.type,
            platform=step.platform,
            input=dict(step.config),
        )

        try:
            step_execution.output = await self._dispatch(step, execution)
            step_execution.status = StepStatus.COMPLETED
            logger.info(
                f"Step {step_execution.step_id} ({step.type}) of execution {execution.id} completed"
            )
        except Exception as exc:
            step_execution.status = StepStatus.FAILED
            step_execution.error = str(exc)
            logger.warning(
                f"Step {step_execution.step_id} of execution {execution.id} failed: {exc}"
            )
        finally:
            step_execution.finish()

        return step_execution

    async def _dispatch(self, step: Step, execution: Execution) -> Dict[str, Any]:
        if step.type == StepType.TRIGGER.value:
            adapter = self._adapter_for(step)
            return await self._with_timeout(step, adapter.execute_trigger(step, execution))

        if step.type == StepType.ACTION.value:
            adapter = self._adapter_for(step)
            return await self._with_timeout(step, adapter.execute_action(step, execution))

        if step.type == StepType.CONDITION.value:
            met = self._evaluator.evaluate(step, execution.context)
            return {"conditionMet": bool(met)}

        if step.type == StepType.DELAY.value:
            delay_ms = step.config.get("delay") or self._default_delay_ms
            await asyncio.sleep(float(delay_ms) / 1000)
            return {"delayCompleted": True}

        raise UnsupportedStepTypeError(f"Unknown step type: {step.type}", step)

    def _adapter_for(self, step: Step):
        adapter = self._registry.get(step.platform)
        if adapter is None:
            raise UnsupportedPlatformError(
                f"Unsupported {step.type} platform: {step.platform}", step
            )
        return adapter

    async def _with_timeout(self, step: Step, call) -> Dict[str, Any]:
        if self._step_timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self._step_timeout)
        except asyncio.TimeoutError as exc:
            raise AdapterError(
                f"{step.platform} {step.type} timed out after {self._step_timeout}s",
                step,
                exc,
            ) from exc
