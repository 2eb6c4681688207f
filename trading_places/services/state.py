"""
Stateful accessors for a presentation layer.

Each controller holds a ``{data, loading, error, last_updated}`` state model.
A failed fetch sets ``error`` and keeps the previous data; with no previous
data the static fallback is shown instead of an empty view.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ..countries import DASHBOARD_COUNTRIES
from ..fallback_data import fallback_snapshot
from ..models import HistoricalTradeDataState, TradeDataState
from .cache import CacheService
from .sources import select_source
from .trade_data import TradeDataService

logger = logging.getLogger(__name__)


class TradeDataController:
    def __init__(
        self,
        service: TradeDataService,
        cache: CacheService,
        country_codes: Optional[Sequence[str]] = None,
        enable_real_data: bool = False,
    ) -> None:
        self.service = service
        self.cache = cache
        self.country_codes: List[str] = list(country_codes or DASHBOARD_COUNTRIES)
        self.enable_real_data = enable_real_data
        self.state = TradeDataState()
        self._refresh_task: Optional[asyncio.Task] = None

    async def fetch(self) -> TradeDataState:
        self.state = self.state.model_copy(update={"loading": True, "error": None})
        source = select_source(self.enable_real_data, self.service)
        try:
            snapshot = await source.fetch_snapshot(self.country_codes)
        except Exception as exc:
            logger.error("Trade data fetch failed: %s", exc, exc_info=True)
            update = {"loading": False, "error": f"Failed to fetch trade data: {exc}"}
            if not self.state.data:
                fallback = fallback_snapshot()
                update.update(data=fallback.countries, global_stats=fallback.global_stats, is_real_data=False)
            self.state = self.state.model_copy(update=update)
            return self.state

        self.state = TradeDataState(
            data=snapshot.countries,
            global_stats=snapshot.global_stats,
            loading=False,
            error=None,
            last_updated=snapshot.last_updated or datetime.now(timezone.utc).isoformat(),
            is_real_data=snapshot.is_real_data,
        )
        return self.state

    async def refresh(self) -> TradeDataState:
        """Drop every cached response and fetch again."""
        self.cache.clear()
        return await self.fetch()

    async def toggle(self) -> TradeDataState:
        self.enable_real_data = not self.enable_real_data
        logger.info("Real data %s", "enabled" if self.enable_real_data else "disabled")
        return await self.fetch()

    async def _auto_refresh(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            await self.fetch()

    def start_auto_refresh(self, interval_seconds: Optional[float] = None) -> asyncio.Task:
        """Refresh every ``interval_seconds`` until ``close`` is called."""
        interval = interval_seconds or self.service.settings.refresh_interval_seconds
        if self._refresh_task is not None and not self._refresh_task.done():
            return self._refresh_task
        self._refresh_task = asyncio.get_running_loop().create_task(self._auto_refresh(interval))
        return self._refresh_task

    async def close(self) -> None:
        task, self._refresh_task = self._refresh_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


class HistoricalTradeDataController:
    def __init__(
        self,
        service: TradeDataService,
        cache: CacheService,
        country_codes: Optional[Sequence[str]] = None,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        enable_real_data: bool = False,
    ) -> None:
        self.service = service
        self.cache = cache
        self.country_codes: List[str] = list(country_codes or DASHBOARD_COUNTRIES)
        self.start_year = start_year
        self.end_year = end_year
        self.enable_real_data = enable_real_data
        self.state = HistoricalTradeDataState()

    async def fetch(self) -> HistoricalTradeDataState:
        """Year-indexed live data; a no-op while real data is disabled."""
        if not self.enable_real_data:
            logger.debug("Real data disabled, skipping historical fetch")
            return self.state

        self.state = self.state.model_copy(update={"loading": True, "error": None})
        try:
            historical = await self.service.fetch_comprehensive_historical_data(
                self.country_codes, self.start_year, self.end_year
            )
        except Exception as exc:
            logger.error("Historical trade data fetch failed: %s", exc, exc_info=True)
            self.state = self.state.model_copy(
                update={"loading": False, "error": f"Failed to fetch historical trade data: {exc}"}
            )
            return self.state

        self.state = HistoricalTradeDataState(
            yearly_data=historical.yearly_data,
            trends=historical.trends,
            global_trends=historical.global_trends,
            loading=False,
            last_updated=datetime.now(timezone.utc).isoformat(),
        )
        return self.state

    async def refresh(self) -> HistoricalTradeDataState:
        self.cache.clear()
        return await self.fetch()
