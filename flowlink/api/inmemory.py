"""In-memory API client for testing and local simulation."""

from __future__ import annotations

import asyncio
import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from ..errors import ApiError
from .base import BaseApiClient


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryApiClient(BaseApiClient):
    """Simple in-process CRM, spreadsheet and chat backend.

    Every call is appended to ``calls`` as ``(operation, arguments)``.
    ``failures`` maps an operation name to the exception it should raise.
    """

    def __init__(self, failures: Optional[Dict[str, Exception]] = None) -> None:
        self.failures: Dict[str, Exception] = dict(failures or {})
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.records: Dict[str, Dict[str, Any]] = {}
        self.sheets: Dict[Tuple[str, str], List[Any]] = defaultdict(list)
        self.messages: List[Dict[str, Any]] = []
        self.webhooks: List[Dict[str, Any]] = []
        self.executions: List[Dict[str, Any]] = []
        self._lock = asyncio.Lock()

    def fail(self, operation: str, error: Optional[Exception] = None) -> None:
        """Make ``operation`` raise ``error`` (an ``ApiError`` by default)."""
        self.failures[operation] = error or ApiError(f"{operation} failed", 500)

    async def _call(self, operation: str, **arguments: Any) -> None:
        async with self._lock:
            self.calls.append((operation, arguments))
        error = self.failures.get(operation)
        if error is not None:
            raise error

    def calls_to(self, operation: str) -> List[Dict[str, Any]]:
        return [args for name, args in self.calls if name == operation]

    # ------------------------------------------------------------------
    async def get_crm_records(self, filters: Optional[Dict[str, Any]] = None) -> Any:
        await self._call("get_crm_records", filters=filters or {})
        return list(self.records.values())

    async def create_crm_record(self, record_data: Dict[str, Any]) -> Dict[str, Any]:
        await self._call("create_crm_record", record_data=record_data)
        record_id = f"rec_{uuid.uuid4().hex[:12]}"
        record = {"recordId": record_id, "createdAt": _now(), **record_data}
        self.records[record_id] = record
        return record

    async def update_crm_record(
        self, record_id: str, record_data: Dict[str, Any]
    ) -> Dict[str, Any]:
        await self._call("update_crm_record", record_id=record_id, record_data=record_data)
        if record_id not in self.records:
            raise ApiError("Record not found", 404, {"recordId": record_id})
        record = self.records[record_id]
        record.update(record_data)
        record["updatedAt"] = _now()
        return record

    async def get_sheet_data(
        self, integration_id: str, spreadsheet_id: str, range: str
    ) -> Dict[str, Any]:
        await self._call(
            "get_sheet_data",
            integration_id=integration_id,
            spreadsheet_id=spreadsheet_id,
            range=range,
        )
        return {"range": range, "values": list(self.sheets[(spreadsheet_id, range)])}

    async def update_sheet_data(
        self,
        integration_id: str,
        spreadsheet_id: str,
        range: str,
        values: List[Any],
    ) -> Dict[str, Any]:
        await self._call(
            "update_sheet_data",
            integration_id=integration_id,
            spreadsheet_id=spreadsheet_id,
            range=range,
            values=values,
        )
        self.sheets[(spreadsheet_id, range)].extend(values)
        return {"updatedRows": len(values)}

    async def send_slack_message(
        self, integration_id: str, channel: str, message: str
    ) -> Dict[str, Any]:
        await self._call(
            "send_slack_message",
            integration_id=integration_id,
            channel=channel,
            message=message,
        )
        self.messages.append({"channel": channel, "message": message})
        return {"ok": True}

    async def trigger_zapier_webhook(
        self, integration_id: str, webhook_url: str, data: Dict[str, Any]
    ) -> Dict[str, Any]:
        await self._call(
            "trigger_zapier_webhook",
            integration_id=integration_id,
            webhook_url=webhook_url,
            data=data,
        )
        self.webhooks.append({"webhookUrl": webhook_url, "data": data})
        return {"ok": True}

    async def record_execution(self, record: Dict[str, Any]) -> Dict[str, Any]:
        await self._call("record_execution", record=record)
        self.executions.append(record)
        return {"ok": True}
