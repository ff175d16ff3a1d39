"""Adapter for the built-in CRM record store."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..contracts import Execution, Step
from ..errors import UnsupportedOperationError, WorkflowExecutionError
from ..interpolation import get_context_value, interpolate, interpolate_value
from .base import PlatformAdapter

logger = logging.getLogger(__name__)


def _as_records(response: Any) -> List[Any]:
    if isinstance(response, list):
        return response
    if isinstance(response, dict):
        for key in ("records", "data"):
            if isinstance(response.get(key), list):
                return response[key]
    return []


def build_record_data(config: Dict[str, Any], context: Dict[str, Any]) -> Dict[str, Any]:
    """Interpolate the configured ``fields`` into a record payload."""
    return {"data": interpolate_value(config.get("fields") or {}, context)}


class CRMAdapter(PlatformAdapter):
    platform = "CRM"

    async def execute_trigger(self, step: Step, execution: Execution) -> Dict[str, Any]:
        since = execution.context.get("lastCheck") or execution.start_time.isoformat()
        event = step.trigger_event

        if event == "new_record":
            response = await self._call(
                step,
                "CRM trigger",
                self.api.get_crm_records({"created_after": since}),
            )
            records = _as_records(response)
            return {"newRecords": len(records), "records": records}

        if event == "updated_record":
            response = await self._call(
                step,
                "CRM trigger",
                self.api.get_crm_records({"updated_after": since}),
            )
            records = _as_records(response)
            return {"updatedRecords": len(records), "records": records}

        raise UnsupportedOperationError(f"Unsupported CRM trigger event: {event}", step)

    async def execute_action(self, step: Step, execution: Execution) -> Dict[str, Any]:
        action = step.action_name

        if action == "create_record":
            record_data = build_record_data(step.config, execution.context)
            record = await self._call(
                step, "CRM action", self.api.create_crm_record(record_data)
            )
            return {"recordId": (record or {}).get("recordId"), "record": record}

        if action == "update_record":
            record_id = self._resolve_record_id(step, execution)
            record_data = build_record_data(step.config, execution.context)
            record = await self._call(
                step, "CRM action", self.api.update_crm_record(record_id, record_data)
            )
            return {"recordId": record_id, "record": record}

        raise UnsupportedOperationError(f"Unsupported CRM action: {action}", step)

    def _resolve_record_id(self, step: Step, execution: Execution) -> str:
        # recordId is a context path; templates and literal ids are accepted too.
        reference = step.config.get("recordId")
        if not reference:
            raise WorkflowExecutionError("CRM update_record requires a recordId", step)
        reference = str(reference)
        if "{{" in reference:
            return interpolate(reference, execution.context)
        value = get_context_value(reference, execution.context)
        if value is None:
            logger.debug(f"recordId {reference!r} not in context, using it literally")
            return reference
        return str(value)
