from __future__ import annotations

from typing import Any, Dict

from ..contracts import Execution, Step
from ..errors import UnsupportedOperationError
from ..interpolation import interpolate
from .base import PlatformAdapter


class SlackAdapter(PlatformAdapter):
    platform = "Slack"

    async def execute_trigger(self, step: Step, execution: Execution) -> Dict[str, Any]:
        # Slack events arrive through the webhook trigger; nothing to poll.
        return {"message": "Slack trigger executed"}

    async def execute_action(self, step: Step, execution: Execution) -> Dict[str, Any]:
        action = step.action_name
        if action != "send_message":
            raise UnsupportedOperationError(f"Unsupported Slack action: {action}", step)

        channel = step.config.get("channel")
        message = interpolate(str(step.config.get("message") or ""), execution.context)
        await self._call(
            step,
            "Slack action",
            self.api.send_slack_message(
                step.config.get("integrationId"), channel, message
            ),
        )
        return {"messageSent": True, "channel": channel, "message": message}
