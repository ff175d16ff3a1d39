"""Platform adapters and the registry the step executor dispatches through."""

from __future__ import annotations

from ..api.base import BaseApiClient
from .base import PlatformAdapter
from .crm import CRMAdapter
from .email import EmailAdapter
from .registry import AdapterRegistry
from .sheets import GoogleSheetsAdapter
from .slack import SlackAdapter
from .webhook import WebhookAdapter
from .zapier import ZapierAdapter

BUILTIN_ADAPTERS = (
    CRMAdapter,
    GoogleSheetsAdapter,
    SlackAdapter,
    WebhookAdapter,
    EmailAdapter,
    ZapierAdapter,
)


def create_default_registry(api: BaseApiClient) -> AdapterRegistry:
    """Build a registry with every built-in platform adapter bound to ``api``."""
    return AdapterRegistry(adapter_cls(api) for adapter_cls in BUILTIN_ADAPTERS)


__all__ = [
    "AdapterRegistry",
    "PlatformAdapter",
    "CRMAdapter",
    "GoogleSheetsAdapter",
    "SlackAdapter",
    "WebhookAdapter",
    "EmailAdapter",
    "ZapierAdapter",
    "create_default_registry",
]
