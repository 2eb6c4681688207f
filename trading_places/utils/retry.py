"""Error types and the retry/settle helpers used by every provider call."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Dict, Optional, TypeVar

import httpx

from ..services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATE_LIMIT_STATUS = 429


class DataNotAvailableError(Exception):
    """Raised when requested data could not be produced."""


class FetchError(DataNotAvailableError):
    def __init__(self, url: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class RateLimitedError(FetchError):
    """HTTP 429 from a provider, or the local limiter refused the call."""

    def __init__(
        self,
        url: str,
        message: str = "Rate limit reached",
        status_code: Optional[int] = RATE_LIMIT_STATUS,
        retry_after: Optional[float] = None,
    ) -> None:
        super().__init__(url, message, status_code=status_code)
        self.retry_after = retry_after


def _retry_after(response: Any) -> Optional[float]:
    headers = getattr(response, "headers", None) or {}
    raw = headers.get("Retry-After")
    try:
        return float(raw) if raw is not None else None
    except (TypeError, ValueError):
        return None


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    *,
    max_retries: int = 3,
    backoff_seconds: float = 1.0,
    rate_limiter: Optional[RateLimiter] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """GET ``url`` and decode JSON, retrying transient failures.

    Non-2xx responses and network errors are retried up to ``max_retries``
    attempts in total, sleeping ``backoff_seconds * attempt`` in between.
    A 429 (or a refusal from ``rate_limiter``) raises RateLimitedError at once.
    """
    last_error: Optional[FetchError] = None

    for attempt in range(1, max_retries + 1):
        if rate_limiter is not None and not rate_limiter.can_make_request():
            raise RateLimitedError(
                url,
                "Local request budget exhausted",
                status_code=None,
                retry_after=rate_limiter.get_time_until_reset(),
            )

        try:
            response = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            last_error = FetchError(url, f"{type(exc).__name__}: {exc}")
        else:
            status = response.status_code
            if status == RATE_LIMIT_STATUS:
                raise RateLimitedError(url, retry_after=_retry_after(response))
            if 200 <= status < 300:
                try:
                    return response.json()
                except ValueError as exc:
                    last_error = FetchError(url, f"Invalid JSON payload: {exc}", status_code=status)
            else:
                last_error = FetchError(url, f"HTTP {status}", status_code=status)

        if attempt < max_retries:
            delay = backoff_seconds * attempt
            logger.warning(
                "Request to %s failed (%s), attempt %s/%s. Retrying in %.1fs",
                url,
                last_error,
                attempt,
                max_retries,
                delay,
            )
            await asyncio.sleep(delay)

    if last_error is None:
        raise FetchError(url, "No request attempted (max_retries < 1)")
    raise last_error


async def settle(awaitable: Awaitable[T], default: T, label: str) -> T:
    """Await one branch of a settle-all fan-out, mapping failure to ``default``."""
    try:
        return await awaitable
    except Exception as exc:
        logger.warning("%s failed, using default: %s: %s", label, type(exc).__name__, exc)
        return default
