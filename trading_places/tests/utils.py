from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import httpx


def run(coro):
    """Run ``coro`` on a fresh event loop."""
    return asyncio.run(coro)


class MockAsyncResponse:
    def __init__(self, payload: Any, status_code: int = 200, headers: Optional[Dict[str, str]] = None) -> None:
        self._payload = payload
        self.status_code = status_code
        self.headers = headers or {}

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class MockAsyncClient:
    """Records every GET and answers from a queue or a handler.

    ``responses`` is either a sequence handed out in order or a callable
    ``(url, params) -> response``. An exception is raised instead of returned.
    """

    def __init__(
        self,
        responses: Union[Sequence[Union[MockAsyncResponse, Exception]], Callable[..., Any]],
    ) -> None:
        self._handler = responses if callable(responses) else None
        self._responses = [] if callable(responses) else list(responses)
        self.calls: List[Tuple[str, Optional[Dict[str, Any]]]] = []
        self.is_closed = False

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None, headers: Any = None) -> MockAsyncResponse:
        self.calls.append((url, dict(params) if params else None))
        if self._handler is not None:
            response = self._handler(url, params or {})
            if isinstance(response, Exception):
                raise response
            return response
        if not self._responses:
            raise httpx.ConnectError("no more mock responses")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def aclose(self) -> None:
        self.is_closed = True


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def world_bank_page(rows: List[Dict[str, Any]], pages: int = 1, page: int = 1) -> MockAsyncResponse:
    return MockAsyncResponse([{"page": page, "pages": pages, "per_page": 2000, "total": len(rows)}, rows])


def world_bank_row(iso3: str, name: str, indicator: str, year: int, value: Optional[float]) -> Dict[str, Any]:
    return {
        "indicator": {"id": indicator, "value": indicator},
        "country": {"id": iso3[:2], "value": name},
        "countryiso3code": iso3,
        "date": str(year),
        "value": value,
    }


def comtrade_partner_row(partner: str, flow: str, value: float, partner_code: str = "156") -> Dict[str, Any]:
    return {
        "partnerDesc": partner,
        "partnerCode": partner_code,
        "flowCode": flow,
        "primaryValue": value,
    }
