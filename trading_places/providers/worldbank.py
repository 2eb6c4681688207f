from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import GrowthRates, MetricRecord, Observation
from ..services.aggregation import (
    build_yearly_records,
    calculate_growth_rates,
    latest_complete_records,
)
from ..utils.retry import settle
from .base import BaseProvider

logger = logging.getLogger(__name__)

# Field name -> World Bank WDI indicator
TRADE_INDICATORS: Dict[str, str] = {
    "exports": "NE.EXP.GNFS.CD",  # Exports of goods and services (current US$)
    "imports": "NE.IMP.GNFS.CD",  # Imports of goods and services (current US$)
    "gdp": "NY.GDP.MKTP.CD",  # GDP (current US$)
    "population": "SP.POP.TOTL",  # Population, total
}

GROWTH_INDICATORS: Dict[str, str] = {
    "exports": TRADE_INDICATORS["exports"],
    "imports": TRADE_INDICATORS["imports"],
}

PER_PAGE = 2000
MAX_PAGES = 10


class WorldBankProvider(BaseProvider):
    """Aggregate macro indicators from the World Bank v2 API.

    Country codes are joined into one request per indicator; each indicator
    is fetched independently so one failing series never sinks the others.
    """

    @property
    def provider_name(self) -> str:
        return "World Bank"

    @staticmethod
    def _country_segment(country_codes: Sequence[str]) -> str:
        return ";".join(code.upper() for code in country_codes)

    @staticmethod
    def _parse_rows(rows: Optional[List[Dict[str, Any]]], indicator_id: str) -> List[Observation]:
        observations: List[Observation] = []
        for row in rows or []:
            if not isinstance(row, dict):
                continue
            country_code = row.get("countryiso3code") or (row.get("country") or {}).get("id")
            try:
                year = int(str(row.get("date"))[:4])
            except (TypeError, ValueError):
                continue
            if not country_code:
                continue

            value = row.get("value")
            try:
                value = float(value) if value is not None else None
            except (TypeError, ValueError):
                value = None

            observations.append(
                Observation(
                    country=(row.get("country") or {}).get("value") or country_code,
                    country_code=country_code,
                    year=year,
                    indicator_id=(row.get("indicator") or {}).get("id") or indicator_id,
                    value=value,
                )
            )
        return observations

    async def fetch_indicator(
        self,
        country_codes: Sequence[str],
        indicator_id: str,
        start_year: int,
        end_year: int,
    ) -> List[Observation]:
        """Fetch one indicator series for all ``country_codes``.

        World Bank pages are ``[meta, rows]``; ``rows`` is null when nothing
        matches, and an error payload is ``[{"message": [...]}]``.
        """
        url = (
            f"{self.settings.world_bank_base_url.rstrip('/')}/country/"
            f"{self._country_segment(country_codes)}/indicator/{indicator_id}"
        )
        observations: List[Observation] = []
        page = 1
        while page <= MAX_PAGES:
            params = {
                "format": "json",
                "date": f"{start_year}:{end_year}",
                "per_page": PER_PAGE,
                "page": page,
            }
            payload = await self._get_json(url, params)

            if not isinstance(payload, list) or not payload:
                logger.warning("Unexpected World Bank payload for %s: %r", indicator_id, payload)
                break
            meta = payload[0] if isinstance(payload[0], dict) else {}
            if "message" in meta:
                logger.warning("World Bank error for %s: %s", indicator_id, meta["message"])
                break

            rows = payload[1] if len(payload) > 1 else None
            observations.extend(self._parse_rows(rows, indicator_id))

            try:
                pages = int(meta.get("pages") or 1)
            except (TypeError, ValueError):
                pages = 1
            if page >= pages:
                break
            page += 1

        return observations

    async def fetch_indicators(
        self,
        country_codes: Sequence[str],
        start_year: int,
        end_year: int,
        indicators: Mapping[str, str] = TRADE_INDICATORS,
    ) -> Dict[str, List[Observation]]:
        """Fetch several indicators concurrently, keyed by field name.

        A failed indicator comes back as an empty series.
        """
        fields = list(indicators.keys())
        results = await asyncio.gather(
            *[
                settle(
                    self.fetch_indicator(country_codes, indicators[field], start_year, end_year),
                    [],
                    f"World Bank {field} ({indicators[field]})",
                )
                for field in fields
            ]
        )
        return dict(zip(fields, results))

    async def fetch_trade_metrics(
        self,
        country_codes: Sequence[str],
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
    ) -> List[MetricRecord]:
        """Current snapshot: the most recent complete year for each country."""
        start = start_year or self.settings.snapshot_start_year
        end = end_year or self.settings.default_end_year
        series = await self.fetch_indicators(country_codes, start, end)
        records = latest_complete_records(series)
        logger.info(
            "World Bank snapshot: %s/%s countries with complete data (%s-%s)",
            len(records),
            len(country_codes),
            start,
            end,
        )
        return records

    async def fetch_historical_trade_data(
        self,
        country_codes: Sequence[str],
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
    ) -> Dict[int, List[MetricRecord]]:
        start = start_year or self.settings.default_start_year
        end = end_year or self.settings.default_end_year
        cache_key = f"historical-trade-{'-'.join(country_codes)}-{start}-{end}"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        try:
            series = await self.fetch_indicators(country_codes, start, end)
            yearly = build_yearly_records(series)
        except Exception as exc:
            logger.error("Error fetching historical World Bank data: %s", exc, exc_info=True)
            return {}

        if yearly:
            self.cache.set(cache_key, yearly)
        logger.info("Fetched historical trade data: %s years", len(yearly))
        return yearly

    async def fetch_growth_rates(
        self,
        country_codes: Sequence[str],
        current_year: Optional[int] = None,
    ) -> Dict[str, GrowthRates]:
        """Export/import growth between the last complete year and the one before."""
        cache_key = f"growth-rates-{'-'.join(country_codes)}"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        current = current_year or datetime.now(timezone.utc).year - 1
        previous = current - 1
        try:
            series = await self.fetch_indicators(country_codes, previous, current, GROWTH_INDICATORS)
            result = calculate_growth_rates(series, current, previous)
        except Exception as exc:
            logger.error("Error fetching growth rates: %s", exc, exc_info=True)
            return {}

        if result:
            self.cache.set(cache_key, result)
        return result
