"""Static and live snapshot sources behind one interface."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

from ..countries import DASHBOARD_COUNTRIES, to_iso2
from ..fallback_data import fallback_country_records, fallback_global_stats
from ..models import TradeSnapshot

if TYPE_CHECKING:
    from .trade_data import TradeDataService

logger = logging.getLogger(__name__)


class TradeDataSource(Protocol):
    is_real_data: bool

    async def fetch_snapshot(self, country_codes: Optional[Sequence[str]] = None) -> TradeSnapshot:
        ...


class StaticTradeSource:
    """Serves the bundled fallback table; never touches the network."""

    is_real_data = False

    async def fetch_snapshot(self, country_codes: Optional[Sequence[str]] = None) -> TradeSnapshot:
        records = fallback_country_records()
        if country_codes:
            wanted = {to_iso2(code) for code in country_codes}
            records = [r for r in records if r.code in wanted]
        return TradeSnapshot(
            countries=records,
            global_stats=fallback_global_stats(),
            is_real_data=False,
            last_updated=datetime.now(timezone.utc).isoformat(),
        )


class LiveTradeSource:
    """Live provider data merged onto the fallback table."""

    is_real_data = True

    def __init__(self, service: TradeDataService) -> None:
        self.service = service

    async def fetch_snapshot(self, country_codes: Optional[Sequence[str]] = None) -> TradeSnapshot:
        return await self.service.fetch_snapshot(country_codes or DASHBOARD_COUNTRIES)


def select_source(enable_real_data: bool, service: Optional[TradeDataService] = None) -> TradeDataSource:
    if enable_real_data:
        if service is None:
            raise ValueError("A TradeDataService is required when real data is enabled")
        return LiveTradeSource(service)
    return StaticTradeSource()
