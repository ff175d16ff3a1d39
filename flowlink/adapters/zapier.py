from __future__ import annotations

from typing import Any, Dict

from ..contracts import Execution, Step
from ..interpolation import interpolate_value
from .base import PlatformAdapter


class ZapierAdapter(PlatformAdapter):
    platform = "Zapier"

    async def execute_action(self, step: Step, execution: Execution) -> Dict[str, Any]:
        data = interpolate_value(step.config.get("data") or {}, execution.context)
        await self._call(
            step,
            "Zapier action",
            self.api.trigger_zapier_webhook(
                step.config.get("integrationId"), step.config.get("webhookUrl"), data
            ),
        )
        return {"webhookTriggered": True, "data": data}
