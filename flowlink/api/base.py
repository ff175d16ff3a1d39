"""Base interface for the FlowLink API collaborator."""

from __future__ import annotations

import abc
from typing import Any, Dict, List, Optional


class BaseApiClient(metaclass=abc.ABCMeta):
    """Abstract client for the record and integration operations adapters use.

    Every method is an independent fallible call; implementations raise
    ``ApiError`` on failure.
    """

    async def close(self) -> None:
        """Release underlying connections (no-op by default)."""
        pass

    @abc.abstractmethod
    async def get_crm_records(self, filters: Optional[Dict[str, Any]] = None) -> Any:
        """Read CRM records matching ``filters``."""
        raise NotImplementedError

    @abc.abstractmethod
    async def create_crm_record(self, record_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a CRM record and return it."""
        raise NotImplementedError

    @abc.abstractmethod
    async def update_crm_record(
        self, record_id: str, record_data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Update a CRM record and return it."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_sheet_data(
        self, integration_id: str, spreadsheet_id: str, range: str
    ) -> Dict[str, Any]:
        """Read a spreadsheet range. The response carries ``values``."""
        raise NotImplementedError

    @abc.abstractmethod
    async def update_sheet_data(
        self,
        integration_id: str,
        spreadsheet_id: str,
        range: str,
        values: List[Any],
    ) -> Dict[str, Any]:
        """Write ``values`` rows into a spreadsheet range."""
        raise NotImplementedError

    @abc.abstractmethod
    async def send_slack_message(
        self, integration_id: str, channel: str, message: str
    ) -> Dict[str, Any]:
        """Post ``message`` to a chat channel."""
        raise NotImplementedError

    @abc.abstractmethod
    async def trigger_zapier_webhook(
        self, integration_id: str, webhook_url: str, data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Fire a generic automation webhook with ``data``."""
        raise NotImplementedError

    @abc.abstractmethod
    async def record_execution(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Store an execution summary in the execution history."""
        raise NotImplementedError
