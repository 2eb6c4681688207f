"""Composition root: one cache and one rate limiter shared by every provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .config import Settings, get_settings
from .providers.comtrade import ComtradeProvider
from .providers.tariffs import TariffProvider
from .providers.worldbank import WorldBankProvider
from .services.cache import CacheService
from .services.http_pool import close_http_pool
from .services.rate_limiter import RateLimiter
from .services.state import HistoricalTradeDataController, TradeDataController
from .services.trade_data import TradeDataService

logger = logging.getLogger(__name__)


@dataclass
class TradingPlacesApp:
    settings: Settings
    cache: CacheService
    rate_limiter: RateLimiter
    world_bank: WorldBankProvider
    comtrade: ComtradeProvider
    tariffs: TariffProvider
    service: TradeDataService

    def trade_data_controller(
        self,
        country_codes: Optional[Sequence[str]] = None,
        enable_real_data: Optional[bool] = None,
    ) -> TradeDataController:
        return TradeDataController(
            self.service,
            self.cache,
            country_codes,
            self.settings.enable_real_data if enable_real_data is None else enable_real_data,
        )

    def historical_controller(
        self,
        country_codes: Optional[Sequence[str]] = None,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        enable_real_data: Optional[bool] = None,
    ) -> HistoricalTradeDataController:
        return HistoricalTradeDataController(
            self.service,
            self.cache,
            country_codes,
            start_year,
            end_year,
            self.settings.enable_real_data if enable_real_data is None else enable_real_data,
        )

    async def aclose(self) -> None:
        await close_http_pool()


def create_app(settings: Optional[Settings] = None) -> TradingPlacesApp:
    settings = settings or get_settings()
    cache = CacheService(ttl_seconds=settings.cache_ttl_seconds)
    rate_limiter = RateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    world_bank = WorldBankProvider(cache, rate_limiter, settings)
    comtrade = ComtradeProvider(cache, rate_limiter, settings)
    tariffs = TariffProvider()
    service = TradeDataService(world_bank, comtrade, tariffs, cache, settings)
    logger.debug("Application created (real data %s)", "on" if settings.enable_real_data else "off")
    return TradingPlacesApp(
        settings=settings,
        cache=cache,
        rate_limiter=rate_limiter,
        world_bank=world_bank,
        comtrade=comtrade,
        tariffs=tariffs,
        service=service,
    )
