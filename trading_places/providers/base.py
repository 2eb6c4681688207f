from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

import httpx

from ..config import Settings, get_settings
from ..services.cache import CacheService
from ..services.http_pool import get_http_client
from ..services.rate_limiter import RateLimiter
from ..utils.retry import fetch_json

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """Shared plumbing for HTTP-backed providers.

    Cache and rate limiter are handed in by the composition root so every
    provider in a process shares the same instances.
    """

    def __init__(
        self,
        cache: CacheService,
        rate_limiter: Optional[RateLimiter] = None,
        settings: Optional[Settings] = None,
        client_factory: Callable[[], httpx.AsyncClient] = get_http_client,
    ) -> None:
        self.settings = settings or get_settings()
        self.cache = cache
        self.rate_limiter = rate_limiter
        self._client_factory = client_factory

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client_factory()

    async def _get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        *,
        max_retries: Optional[int] = None,
    ) -> Any:
        return await fetch_json(
            self.client,
            url,
            params=params,
            max_retries=max_retries or self.settings.max_retries,
            backoff_seconds=self.settings.retry_backoff_seconds,
            rate_limiter=self.rate_limiter,
        )

    def _cached(self, key: str) -> Optional[Any]:
        value = self.cache.get(key)
        if value is not None:
            logger.debug("%s cache hit: %s", self.provider_name, key)
        return value
