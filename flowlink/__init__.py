"""FlowLink: workflow automation engine for the FlowLink CRM."""

from .adapters import AdapterRegistry, PlatformAdapter, create_default_registry
from .api import get_api_client
from .contracts import (
    Execution,
    ExecutionStatus,
    Step,
    StepExecution,
    StepStatus,
    StepType,
    Workflow,
)
from .engine import WorkflowEngine
from .interpolation import get_context_value, interpolate
from .persistence import get_store
from .validation import WorkflowValidator

__version__ = "0.1.0"
__all__ = [
    "AdapterRegistry",
    "PlatformAdapter",
    "create_default_registry",
    "get_api_client",
    "get_store",
    "Execution",
    "ExecutionStatus",
    "Step",
    "StepExecution",
    "StepStatus",
    "StepType",
    "Workflow",
    "WorkflowEngine",
    "WorkflowValidator",
    "get_context_value",
    "interpolate",
]
