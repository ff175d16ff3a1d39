"""Exception hierarchy for the FlowLink workflow engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from .contracts import Step


class FlowLinkError(Exception):
    """Base class for all FlowLink errors."""


class ValidationError(FlowLinkError):
    """Structural problem with a workflow definition, raised before any step runs."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        code: Optional[str] = None,
        errors: Optional[List["ValidationError"]] = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.code = code
        self.errors = errors or []

    def describe(self) -> str:
        """Return the message followed by every collected field problem."""
        if not self.errors:
            return str(self)
        details = "; ".join(f"{e.field}: {e}" for e in self.errors)
        return f"{self}: {details}"


class WorkflowExecutionError(FlowLinkError):
    """Step-level failure carrying the offending step and original cause."""

    def __init__(
        self,
        message: str,
        step: Optional["Step"] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.step = step
        self.original_error = original_error


class UnsupportedStepTypeError(WorkflowExecutionError):
    """Step kind is not one of trigger, action, condition or delay."""


class UnsupportedPlatformError(WorkflowExecutionError):
    """No adapter is registered for the step's platform."""


class UnsupportedOperatorError(WorkflowExecutionError):
    """Condition step uses an operator the evaluator does not know."""


class UnsupportedOperationError(WorkflowExecutionError):
    """Adapter does not support the requested trigger event or action."""


class AdapterError(WorkflowExecutionError):
    """A call to the external API collaborator failed inside an adapter."""


class ApiError(FlowLinkError):
    """Failure reported by the FlowLink REST API or the network beneath it."""

    def __init__(self, message: str, status: int = 0, data: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.data = data


__all__ = [
    "FlowLinkError",
    "ValidationError",
    "WorkflowExecutionError",
    "UnsupportedStepTypeError",
    "UnsupportedPlatformError",
    "UnsupportedOperatorError",
    "UnsupportedOperationError",
    "AdapterError",
    "ApiError",
]
