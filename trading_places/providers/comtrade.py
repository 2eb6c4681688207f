from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..countries import comtrade_reporter_code, to_iso3
from ..models import PartnerRecord, TradeCategories
from ..services.aggregation import process_partner_records
from ..services.metrics import DEFAULT_DIVERSIFICATION_INDEX, diversification_index, is_number
from ..utils.retry import FetchError, RateLimitedError
from .base import BaseProvider

logger = logging.getLogger(__name__)

TOP_CATEGORIES = 5
CATEGORY_MAX_RECORDS = 8
PARTNER_MAX_RECORDS = 250


class ComtradeProvider(BaseProvider):
    """Bilateral partner and category detail from the UN Comtrade API.

    Comtrade applies aggressive short-window rate limits, so nothing here
    raises: a 429 stops the current year loop and the caller gets whatever
    was collected (usually nothing) instead of an exception.
    """

    FLOW_MAPPINGS: Dict[str, str] = {
        "EXPORT": "X",
        "EXPORTS": "X",
        "IMPORT": "M",
        "IMPORTS": "M",
        "BOTH": "X,M",
    }

    @property
    def provider_name(self) -> str:
        return "Comtrade"

    @property
    def _url(self) -> str:
        # Commodity trade, annual frequency, HS classification
        return f"{self.settings.comtrade_base_url.rstrip('/')}/C/A/HS"

    @staticmethod
    def _flow_code(flow: Optional[str]) -> str:
        if not flow:
            return "X,M"
        return ComtradeProvider.FLOW_MAPPINGS.get(flow.upper(), "X,M")

    def _params(
        self,
        country_code: str,
        year: int,
        flow: Optional[str],
        commodity_code: str = "TOTAL",
        partner_code: Optional[str] = None,
        max_records: Optional[int] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "reporterCode": comtrade_reporter_code(country_code),
            "period": str(year),
            "cmdCode": commodity_code,
            "flowCode": self._flow_code(flow),
            "format": "json",
        }
        if partner_code is not None:
            params["partnerCode"] = partner_code
        if max_records:
            params["maxRecords"] = max_records
        if self.settings.comtrade_api_key:
            params["subscription-key"] = self.settings.comtrade_api_key
        return params

    def _fallback_years(self, year: int) -> List[int]:
        return [year - offset for offset in range(self.settings.comtrade_year_fallbacks)]

    async def _fetch_partner_year(self, country_code: str, year: int, max_retries: Optional[int] = None) -> List[PartnerRecord]:
        payload = await self._get_json(
            self._url,
            self._params(country_code, year, "BOTH", max_records=PARTNER_MAX_RECORDS),
            max_retries=max_retries,
        )
        return process_partner_records(payload)

    async def fetch_partner_data(self, country_code: str, year: Optional[int] = None) -> List[PartnerRecord]:
        """Top 10 trading partners for ``country_code``.

        Tries ``year`` and then up to two earlier years, since Comtrade
        publishes with a lag. Returns an empty list when nothing is available.

        Args:
            country_code: Alpha-2, alpha-3 or Comtrade numeric reporter code
            year: Preferred reference year (defaults to settings)

        Returns:
            Partner records sorted by trade volume, at most 10
        """
        target_year = year or self.settings.comtrade_default_year
        iso3 = to_iso3(country_code)
        cache_key = f"comtrade-{iso3}-{target_year}-partners"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        try:
            fetched_any = False
            rate_limited = False
            for try_year in self._fallback_years(target_year):
                try:
                    partners = await self._fetch_partner_year(iso3, try_year)
                except RateLimitedError:
                    logger.warning("Comtrade rate limit reached for %s, using cache or fallback", iso3)
                    rate_limited = True
                    break
                except FetchError as exc:
                    logger.warning("Failed to fetch Comtrade partners for %s %s: %s", iso3, try_year, exc)
                    continue

                fetched_any = True
                if partners:
                    self.cache.set(cache_key, partners)
                    return partners
                logger.info("No Comtrade partner data for %s in %s, trying earlier year", iso3, try_year)

            if fetched_any and not rate_limited:
                self.cache.set(cache_key, [])
        except Exception as exc:
            logger.error("Error fetching Comtrade partner data for %s: %s", iso3, exc, exc_info=True)
        return []

    @staticmethod
    def _top_categories(payload: Any) -> List[str]:
        rows = payload.get("data") if isinstance(payload, dict) else None
        if not rows:
            return []
        rows = [row for row in rows if isinstance(row, dict)]
        rows.sort(
            key=lambda row: row.get("primaryValue") if is_number(row.get("primaryValue")) else 0,
            reverse=True,
        )
        return [row.get("cmdDesc") or "Unknown" for row in rows[:TOP_CATEGORIES]]

    async def fetch_trade_categories(self, country_code: str, year: Optional[int] = None) -> TradeCategories:
        """Top export and import HS chapters (AG2) for ``country_code``."""
        target_year = year or self.settings.comtrade_default_year
        iso3 = to_iso3(country_code)
        cache_key = f"comtrade-{iso3}-{target_year}-categories"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        try:
            for try_year in self._fallback_years(target_year):
                results: Tuple[Any, ...] = await asyncio.gather(
                    self._get_json(
                        self._url,
                        self._params(iso3, try_year, "EXPORT", "AG2", partner_code="0", max_records=CATEGORY_MAX_RECORDS),
                    ),
                    self._get_json(
                        self._url,
                        self._params(iso3, try_year, "IMPORT", "AG2", partner_code="0", max_records=CATEGORY_MAX_RECORDS),
                    ),
                    return_exceptions=True,
                )

                if any(isinstance(r, RateLimitedError) for r in results):
                    logger.warning("Comtrade rate limit reached, using fallback categories for %s", iso3)
                    break
                errors = [r for r in results if isinstance(r, BaseException)]
                if errors:
                    logger.warning("Failed to fetch categories for %s %s: %s", iso3, try_year, errors[0])
                    continue

                export_payload, import_payload = results
                categories = TradeCategories(
                    exports=self._top_categories(export_payload),
                    imports=self._top_categories(import_payload),
                )
                self.cache.set(cache_key, categories)
                return categories
        except Exception as exc:
            logger.error("Error fetching trade categories for %s: %s", iso3, exc, exc_info=True)
        return TradeCategories()

    async def fetch_historical_partner_data(
        self,
        country_code: str,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
    ) -> Dict[int, List[PartnerRecord]]:
        """Partner breakdowns for the most recent years in ``[start_year, end_year]``.

        Years are fetched newest first, one request each, with a fixed delay
        between requests. A 429 aborts the loop; the years gathered before it
        are returned but not cached.
        """
        start = start_year or self.settings.default_start_year
        end = end_year or self.settings.comtrade_default_year
        iso3 = to_iso3(country_code)
        cache_key = f"comtrade-historical-{iso3}-{start}-{end}"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        years = list(range(end, start - 1, -1))[: self.settings.comtrade_max_history_years]
        historical: Dict[int, List[PartnerRecord]] = {}
        aborted = False

        for index, year in enumerate(years):
            if index:
                await asyncio.sleep(self.settings.comtrade_year_delay_seconds)
            try:
                historical[year] = await self._fetch_partner_year(iso3, year, max_retries=1)
            except RateLimitedError:
                logger.warning("Comtrade rate limit reached, stopping historical fetch for %s at %s", iso3, year)
                aborted = True
                break
            except FetchError as exc:
                logger.warning("Failed to fetch Comtrade data for %s %s: %s", iso3, year, exc)

        if not aborted:
            self.cache.set(cache_key, historical)
        return historical

    async def fetch_diversification(
        self,
        country_codes: Sequence[str],
        year: Optional[int] = None,
    ) -> Dict[str, float]:
        """Diversification index (1 - HHI over partner volumes) per country.

        Countries are processed one after another to stay under Comtrade's
        rate limit; no partner data yields the 0.5 placeholder.
        """
        cache_key = f"complexity-{'-'.join(country_codes)}"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        result: Dict[str, float] = {}
        any_partners = False
        for code in country_codes:
            try:
                partners = await self.fetch_partner_data(code, year)
                any_partners = any_partners or bool(partners)
                result[code] = diversification_index(p.trade_volume for p in partners)
            except Exception as exc:
                logger.warning("Diversification for %s unavailable: %s", code, exc)
                result[code] = DEFAULT_DIVERSIFICATION_INDEX

        # All placeholders: leave uncached so the next call retries.
        if any_partners:
            self.cache.set(cache_key, result)
        return result
