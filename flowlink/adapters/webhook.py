from __future__ import annotations

from typing import Any, Dict

from ..contracts import Execution, Step
from .base import PlatformAdapter


class WebhookAdapter(PlatformAdapter):
    """Inbound webhooks: the payload was delivered with the execution input."""

    platform = "Webhook"

    async def execute_trigger(self, step: Step, execution: Execution) -> Dict[str, Any]:
        data = execution.input_data.get("webhook") or {}
        return {"webhookReceived": True, "data": data}
