from __future__ import annotations

import logging
from typing import Any, Dict

from ..contracts import Execution, Step
from ..interpolation import interpolate
from .base import PlatformAdapter

logger = logging.getLogger(__name__)


class EmailAdapter(PlatformAdapter):
    """Render outgoing email. Delivery is not wired to a mail service yet."""

    platform = "Email"

    async def execute_action(self, step: Step, execution: Execution) -> Dict[str, Any]:
        email = {
            key: interpolate(str(step.config.get(key) or ""), execution.context)
            for key in ("to", "subject", "body")
        }
        logger.info(f"Email would be sent to {email['to']}: {email['subject']}")
        return {"emailSent": True, **email}
