"""
Aggregator over the World Bank, Comtrade and tariff sources.

Every sub-fetch runs inside ``settle`` so one failing provider only costs its
own fields; the merged snapshot is cached under the sorted country list.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import Settings, get_settings
from ..countries import to_iso2, to_iso3
from ..fallback_data import fallback_country_records, fallback_global_stats
from ..models import (
    CountryTradeProfile,
    CountryTradeRecord,
    GrowthRates,
    HistoricalTradeData,
    LiveCountryRecord,
    MetricRecord,
    PartnerRecord,
    TariffInfo,
    TradeCategories,
    TradeSnapshot,
)
from ..providers.comtrade import ComtradeProvider
from ..providers.tariffs import TariffProvider
from ..providers.worldbank import WorldBankProvider
from ..utils.retry import settle
from .aggregation import compute_country_trends, compute_global_trends
from .cache import CacheService
from .merge import compute_global_stats, merge_country_record

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TradeDataService:
    def __init__(
        self,
        world_bank: WorldBankProvider,
        comtrade: ComtradeProvider,
        tariffs: TariffProvider,
        cache: CacheService,
        settings: Optional[Settings] = None,
    ) -> None:
        self.world_bank = world_bank
        self.comtrade = comtrade
        self.tariffs = tariffs
        self.cache = cache
        self.settings = settings or get_settings()

    @staticmethod
    def snapshot_cache_key(country_codes: Sequence[str]) -> str:
        return f"trade-data-{'-'.join(sorted(to_iso2(c) for c in country_codes))}"

    async def _country_details(self, iso3: str) -> Tuple[List[PartnerRecord], TradeCategories, Optional[TariffInfo]]:
        return await asyncio.gather(
            settle(self.comtrade.fetch_partner_data(iso3), [], f"Comtrade partners {iso3}"),
            settle(self.comtrade.fetch_trade_categories(iso3), TradeCategories(), f"Comtrade categories {iso3}"),
            settle(self.tariffs.fetch_tariff_data(iso3), None, f"Tariffs {iso3}"),
        )

    async def fetch_live_records(self, country_codes: Sequence[str]) -> Dict[str, LiveCountryRecord]:
        """Raw live data per requested code (alpha-2 keys).

        Countries the providers know nothing about still get a record, with
        every field empty, so the merge falls back cleanly.
        """
        iso3_codes = [to_iso3(code) for code in country_codes]

        metrics, growth, diversification = await asyncio.gather(
            settle(self.world_bank.fetch_trade_metrics(iso3_codes), [], "World Bank trade metrics"),
            settle(self.world_bank.fetch_growth_rates(iso3_codes), {}, "World Bank growth rates"),
            settle(self.comtrade.fetch_diversification(iso3_codes), {}, "Comtrade diversification"),
        )
        metrics_by_code: Dict[str, MetricRecord] = {m.country_code: m for m in metrics}

        details = await asyncio.gather(*[self._country_details(iso3) for iso3 in iso3_codes])

        records: Dict[str, LiveCountryRecord] = {}
        for iso3, (partners, categories, tariff_info) in zip(iso3_codes, details):
            code = to_iso2(iso3)
            records[code] = LiveCountryRecord(
                code=code,
                country_code=iso3,
                metrics=metrics_by_code.get(iso3),
                growth=growth.get(iso3) or GrowthRates(),
                diversification_index=diversification.get(iso3),
                categories=categories,
                trading_partners=partners,
                tariff_info=tariff_info,
            )
        logger.info(
            "Live records: %s countries, %s with metrics, %s with partners",
            len(records),
            sum(1 for r in records.values() if r.metrics is not None),
            sum(1 for r in records.values() if r.has_real_partners),
        )
        return records

    @staticmethod
    def _record_without_fallback(live: LiveCountryRecord) -> Optional[CountryTradeRecord]:
        metrics = live.metrics
        if metrics is None:
            return None
        return CountryTradeRecord(
            code=live.code,
            country_code=live.country_code,
            name=metrics.country,
            year=metrics.year,
            exports=metrics.exports,
            imports=metrics.imports,
            gdp=metrics.gdp,
            population=metrics.population or 0.0,
            trade_intensity=metrics.trade_intensity,
            diversification_index=(
                live.diversification_index if live.diversification_index is not None else 0.5
            ),
            export_growth=live.growth.export_growth,
            import_growth=live.growth.import_growth,
            top_exports=list(live.categories.exports),
            top_imports=list(live.categories.imports),
            trading_partners=list(live.trading_partners),
            tariff_info=live.tariff_info,
            has_real_metrics=True,
            has_real_categories=live.has_real_categories,
            has_real_partners=live.has_real_partners,
            has_real_growth=live.has_real_growth,
        )

    async def fetch_snapshot(self, country_codes: Sequence[str]) -> TradeSnapshot:
        """Merged records plus recomputed global stats for ``country_codes``.

        A cache hit is returned as is, with no partial refresh.
        """
        cache_key = self.snapshot_cache_key(country_codes)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Trade snapshot cache hit: %s", cache_key)
            return cached

        live = await self.fetch_live_records(country_codes)
        fallbacks = {record.code: record for record in fallback_country_records()}

        countries: List[CountryTradeRecord] = []
        for code in dict.fromkeys(to_iso2(c) for c in country_codes):
            fallback = fallbacks.get(code)
            if fallback is not None:
                countries.append(merge_country_record(fallback, live.get(code)))
                continue
            record = self._record_without_fallback(live[code]) if code in live else None
            if record is None:
                logger.warning("No fallback or live data for %s, skipping", code)
                continue
            countries.append(record)

        snapshot = TradeSnapshot(
            countries=countries,
            global_stats=compute_global_stats(countries, fallback_global_stats()),
            is_real_data=any(c.has_real_metrics for c in countries),
            last_updated=_now(),
        )
        self.cache.set(cache_key, snapshot)
        return snapshot

    async def fetch_country_trade_profile(self, country_code: str) -> CountryTradeProfile:
        iso3 = to_iso3(country_code)
        metrics, (partners, categories, tariff_info) = await asyncio.gather(
            settle(self.world_bank.fetch_trade_metrics([iso3]), [], f"World Bank metrics {iso3}"),
            self._country_details(iso3),
        )
        return CountryTradeProfile(
            basic_metrics=metrics[0] if metrics else None,
            trading_partners=partners,
            trade_categories=categories,
            tariff_info=tariff_info,
            last_updated=_now(),
        )

    async def fetch_comprehensive_historical_data(
        self,
        country_codes: Sequence[str],
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
    ) -> HistoricalTradeData:
        start = start_year or self.settings.default_start_year
        end = end_year or self.settings.default_end_year
        iso3_codes = [to_iso3(code) for code in country_codes]

        yearly = await self.world_bank.fetch_historical_trade_data(iso3_codes, start, end)
        return HistoricalTradeData(
            yearly_data=yearly,
            trends=compute_country_trends(yearly, list(country_codes)),
            global_trends=compute_global_trends(yearly, start, end),
        )
