"""httpx implementation of the FlowLink API client."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..errors import ApiError
from ..utils.retry import retry_async
from .base import BaseApiClient

logger = logging.getLogger(__name__)


class HttpApiClient(BaseApiClient):
    """Talk to the FlowLink REST API over HTTP."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001/api",
        token: Optional[str] = None,
        timeout: float = 10.0,
        max_retries: int = 0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.max_retries = max_retries
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url, headers=headers, timeout=timeout, transport=transport
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Transport failures are retried up to ``max_retries`` times with
        exponential backoff.

        Raises:
            ApiError: On a non-2xx response, or once retries are exhausted.
        """
        try:
            response = await retry_async(
                lambda: self._client.request(method, endpoint, json=body, params=params),
                self.max_retries,
                retry_on=(httpx.TransportError,),
                label=f"{method} {endpoint}",
            )
        except httpx.TransportError as exc:
            raise ApiError("Network error", 0, {"originalError": str(exc)}) from exc
        logger.debug(f"{method} {endpoint} -> {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            message = "API request failed"
            if isinstance(data, dict) and data.get("message"):
                message = data["message"]
            raise ApiError(message, response.status_code, data)
        return data

    # ------------------------------------------------------------------
    async def get_crm_records(self, filters: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("/crm-records", params=filters or None)

    async def create_crm_record(self, record_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("/crm-records", method="POST", body=record_data)

    async def update_crm_record(
        self, record_id: str, record_data: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self.request(
            f"/crm-records/{record_id}", method="PUT", body=record_data
        )

    async def get_sheet_data(
        self, integration_id: str, spreadsheet_id: str, range: str
    ) -> Dict[str, Any]:
        return await self.request(
            f"/integrations/google-sheets/{integration_id}/data",
            method="POST",
            body={"spreadsheetId": spreadsheet_id, "range": range},
        )

    async def update_sheet_data(
        self,
        integration_id: str,
        spreadsheet_id: str,
        range: str,
        values: List[Any],
    ) -> Dict[str, Any]:
        return await self.request(
            f"/integrations/google-sheets/{integration_id}/update",
            method="POST",
            body={"spreadsheetId": spreadsheet_id, "range": range, "values": values},
        )

    async def send_slack_message(
        self, integration_id: str, channel: str, message: str
    ) -> Dict[str, Any]:
        return await self.request(
            f"/integrations/slack/{integration_id}/message",
            method="POST",
            body={"channel": channel, "message": message},
        )

    async def trigger_zapier_webhook(
        self, integration_id: str, webhook_url: str, data: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self.request(
            f"/integrations/zapier/{integration_id}/trigger",
            method="POST",
            body={"webhookUrl": webhook_url, "data": data},
        )

    async def record_execution(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("/workflow-executions", method="POST", body=record)
