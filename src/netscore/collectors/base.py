"""Base collector interface."""

from abc import ABC, abstractmethod
from typing import Optional

import httpx


class BaseCollector(ABC):
    """Abstract base class for data collectors."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this collector is available (has required credentials, etc.)."""
        pass

    async def close(self):
        """Release any held resources."""
        pass


class HttpCollector(BaseCollector):
    """Collector backed by an owned (or injected) httpx.AsyncClient."""

    TIMEOUT = 30.0

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=self.TIMEOUT)

    async def close(self):
        """Close the HTTP client if this collector created it."""
        if self._owns_client:
            await self.client.aclose()
