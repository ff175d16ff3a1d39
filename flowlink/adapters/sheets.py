"""Adapter for Google Sheets integrations."""

from __future__ import annotations

from typing import Any, Dict

from ..contracts import Execution, Step
from ..errors import UnsupportedOperationError
from ..interpolation import interpolate_value
from .base import PlatformAdapter


class GoogleSheetsAdapter(PlatformAdapter):
    platform = "Google Sheets"

    async def execute_trigger(self, step: Step, execution: Execution) -> Dict[str, Any]:
        config = step.config
        data = await self._call(
            step,
            "Google Sheets trigger",
            self.api.get_sheet_data(
                config.get("integrationId"),
                config.get("spreadsheetId"),
                config.get("range"),
            ),
        )
        values = (data or {}).get("values") or []
        return {"rowCount": len(values), "data": values}

    async def execute_action(self, step: Step, execution: Execution) -> Dict[str, Any]:
        config = step.config
        action = step.action_name
        values = interpolate_value(config.get("values") or [], execution.context)

        if action == "append_row":
            rows = [values]
        elif action == "update_range":
            rows = values
        else:
            raise UnsupportedOperationError(
                f"Unsupported Google Sheets action: {action}", step
            )

        await self._call(
            step,
            "Google Sheets action",
            self.api.update_sheet_data(
                config.get("integrationId"),
                config.get("spreadsheetId"),
                config.get("range"),
                rows,
            ),
        )
        if action == "append_row":
            return {"rowsAdded": 1, "values": values}
        return {"rowsUpdated": len(rows), "values": rows}
