"""Registry mapping platform names to adapters."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .base import PlatformAdapter

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Dispatch table from platform name to ``PlatformAdapter``.

    New platforms are added by registering an adapter; the step executor only
    ever looks adapters up here.
    """

    def __init__(self, adapters: Optional[Iterable[PlatformAdapter]] = None) -> None:
        self._adapters: Dict[str, PlatformAdapter] = {}
        for adapter in adapters or []:
            self.register(adapter)

    def register(self, adapter: PlatformAdapter) -> None:
        """Add ``adapter`` under its platform name, replacing any previous one."""
        if not adapter.platform:
            raise ValueError("Adapter must declare a platform name")
        if adapter.platform in self._adapters:
            logger.debug(f"Replacing adapter for platform {adapter.platform}")
        self._adapters[adapter.platform] = adapter

    def get(self, platform: Optional[str]) -> Optional[PlatformAdapter]:
        if platform is None:
            return None
        return self._adapters.get(platform)

    def __contains__(self, platform: object) -> bool:
        return platform in self._adapters

    @property
    def platforms(self) -> List[str]:
        return sorted(self._adapters)
