"""Base class for platform adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Dict, TypeVar

from ..errors import AdapterError, UnsupportedOperationError

if TYPE_CHECKING:
    from ..api.base import BaseApiClient
    from ..contracts import Execution, Step

T = TypeVar("T")


class PlatformAdapter:
    """Translate trigger and action steps for one platform into API calls.

    Subclasses set ``platform`` and override the capabilities they support;
    the defaults reject the step.
    """

    platform: str = ""

    def __init__(self, api: "BaseApiClient") -> None:
        self.api = api

    async def execute_trigger(
        self, step: "Step", execution: "Execution"
    ) -> Dict[str, Any]:
        raise UnsupportedOperationError(
            f"{self.platform} does not support triggers", step
        )

    async def execute_action(
        self, step: "Step", execution: "Execution"
    ) -> Dict[str, Any]:
        raise UnsupportedOperationError(
            f"{self.platform} does not support actions", step
        )

    async def _call(self, step: "Step", label: str, call: Awaitable[T]) -> T:
        """Await an API call, wrapping any failure with the step and cause."""
        try:
            return await call
        except Exception as exc:
            raise AdapterError(f"{label} failed: {exc}", step, exc) from exc
