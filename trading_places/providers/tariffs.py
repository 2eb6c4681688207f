from __future__ import annotations

import logging

from ..countries import to_iso2
from ..fallback_data import fallback_tariff_info
from ..models import TariffInfo

logger = logging.getLogger(__name__)


class TariffProvider:
    """Tariff profiles per country.

    There is no free live tariff feed, so this serves the curated MFN and
    applied-rate patterns; unknown countries get an empty profile.
    """

    @property
    def provider_name(self) -> str:
        return "Tariff patterns"

    async def fetch_tariff_data(self, country_code: str) -> TariffInfo:
        info = fallback_tariff_info(to_iso2(country_code))
        if not info.sector_tariffs:
            logger.debug("No tariff pattern for %s", country_code)
        return info
