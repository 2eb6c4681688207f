"""
Shared HTTP client pool for the World Bank and UN Comtrade providers.

One httpx.AsyncClient per running event loop, created lazily and reused for
every provider call on that loop. Timeouts and the User-Agent come from
Settings.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import Any, Dict, Optional

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)


class HTTPClientPool:
    _loop_clients: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, httpx.AsyncClient] = weakref.WeakKeyDictionary()
    _sync_client: Optional[httpx.AsyncClient] = None
    _MAX_CONNECTIONS = 20
    _MAX_KEEPALIVE_CONNECTIONS = 10
    _KEEPALIVE_EXPIRY = 5.0
    _CONNECT_TIMEOUT = 10.0

    @classmethod
    def _current_loop(cls) -> Optional[asyncio.AbstractEventLoop]:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    @classmethod
    def _initialize_client(cls) -> httpx.AsyncClient:
        settings = get_settings()
        limits = httpx.Limits(
            max_connections=cls._MAX_CONNECTIONS,
            max_keepalive_connections=cls._MAX_KEEPALIVE_CONNECTIONS,
            keepalive_expiry=cls._KEEPALIVE_EXPIRY,
        )
        timeout = httpx.Timeout(
            timeout=settings.http_timeout_seconds,
            connect=min(cls._CONNECT_TIMEOUT, settings.http_timeout_seconds),
        )
        client = httpx.AsyncClient(
            limits=limits,
            timeout=timeout,
            http2=True,
            follow_redirects=True,
            headers={
                "Accept": "application/json",
                "User-Agent": settings.user_agent,
            },
        )
        logger.info(
            "HTTP client initialized: max_connections=%s, timeout=%ss",
            cls._MAX_CONNECTIONS,
            settings.http_timeout_seconds,
        )
        return client

    @classmethod
    def get_client(cls) -> httpx.AsyncClient:
        """Return the client bound to the current event loop."""
        loop = cls._current_loop()
        if loop is None:
            if cls._sync_client is None or cls._sync_client.is_closed:
                cls._sync_client = cls._initialize_client()
            return cls._sync_client

        client = cls._loop_clients.get(loop)
        if client is None or client.is_closed:
            client = cls._initialize_client()
            cls._loop_clients[loop] = client
        return client

    @classmethod
    async def close(cls) -> None:
        loop_clients = list(cls._loop_clients.values())
        sync_client = cls._sync_client
        if not loop_clients and sync_client is None:
            return

        cls._loop_clients = weakref.WeakKeyDictionary()
        cls._sync_client = None

        clients = ([sync_client] if sync_client is not None else []) + loop_clients
        seen = set()
        for client in clients:
            if id(client) in seen:
                continue
            seen.add(id(client))
            try:
                await client.aclose()
            except Exception as exc:  # pragma: no cover - closing a dead loop's client
                logger.debug("Error closing HTTP client: %s", exc)
        logger.info("HTTP client pool closed")

    @classmethod
    def get_stats(cls) -> Dict[str, Any]:
        active = sum(1 for c in cls._loop_clients.values() if not c.is_closed)
        if cls._sync_client is not None and not cls._sync_client.is_closed:
            active += 1
        if not active:
            return {"status": "not_initialized", "active_clients": 0}
        return {
            "status": "active",
            "active_clients": active,
            "limits": {
                "max_connections": cls._MAX_CONNECTIONS,
                "max_keepalive_connections": cls._MAX_KEEPALIVE_CONNECTIONS,
                "keepalive_expiry": cls._KEEPALIVE_EXPIRY,
            },
        }


def get_http_client() -> httpx.AsyncClient:
    return HTTPClientPool.get_client()


async def close_http_pool() -> None:
    """Close every pooled client (call on application shutdown)."""
    await HTTPClientPool.close()
