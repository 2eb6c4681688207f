"""
Field-by-field merge of live provider output onto the static fallback records.

Numeric measures (exports, imports, GDP, population, trade intensity) override
the fallback only when they are finite and strictly positive; anything else,
including a genuine zero, keeps the fallback value. Growth rates and the
diversification index override whenever they are finite. Lists override when
non-empty. Trade balance is never merged, it is recomputed from the result.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..models import CountryTradeRecord, GlobalStats, LiveCountryRecord
from .metrics import is_number

logger = logging.getLogger(__name__)

TOP_TRADING_NATIONS = 5

POSITIVE_FIELDS = ("exports", "imports", "gdp", "population", "trade_intensity")


def positive_number(value: Any) -> Optional[float]:
    """``value`` as a float when it is a finite number > 0, else None."""
    if is_number(value) and value > 0:
        return float(value)
    return None


def finite_number(value: Any) -> Optional[float]:
    return float(value) if is_number(value) else None


def merge_country_record(fallback: CountryTradeRecord, live: Optional[LiveCountryRecord]) -> CountryTradeRecord:
    """Overlay ``live`` onto a copy of ``fallback``; ``fallback`` is not modified."""
    if live is None:
        return fallback.model_copy(deep=True)

    updates: Dict[str, Any] = {}
    metrics = live.metrics
    if metrics is not None:
        for field in POSITIVE_FIELDS:
            value = positive_number(getattr(metrics, field))
            if value is not None:
                updates[field] = value
        updates["year"] = metrics.year
        updates["has_real_metrics"] = True

    if live.has_real_growth:
        for field in ("export_growth", "import_growth"):
            value = finite_number(getattr(live.growth, field))
            if value is not None:
                updates[field] = value
        updates["has_real_growth"] = True

    diversification = finite_number(live.diversification_index)
    if diversification is not None:
        updates["diversification_index"] = diversification

    if live.categories.exports:
        updates["top_exports"] = list(live.categories.exports)
    if live.categories.imports:
        updates["top_imports"] = list(live.categories.imports)
    updates["has_real_categories"] = live.has_real_categories

    if live.trading_partners:
        updates["trading_partners"] = [p.model_copy() for p in live.trading_partners]
    updates["has_real_partners"] = live.has_real_partners

    if live.tariff_info is not None:
        updates["tariff_info"] = live.tariff_info.model_copy(deep=True)

    return fallback.model_copy(update=updates, deep=True)


def _mean(values: Sequence[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def compute_global_stats(countries: Sequence[CountryTradeRecord], fallback: GlobalStats) -> GlobalStats:
    """Global aggregates recomputed from the merged per-country set.

    ``fallback`` fills whatever cannot be derived (no positive total, no
    intensities) and always supplies ``fastest_growing``.
    """
    total = sum(c.exports + c.imports for c in countries)

    exporters: List[CountryTradeRecord] = sorted(
        (c for c in countries if positive_number(c.exports) is not None),
        key=lambda c: c.exports,
        reverse=True,
    )
    intensity = _mean([c.trade_intensity for c in countries if positive_number(c.trade_intensity) is not None])
    diversification = _mean([c.diversification_index for c in countries if is_number(c.diversification_index)])
    growth = _mean([(c.export_growth + c.import_growth) / 2 for c in countries])

    return GlobalStats(
        total_world_trade=total if positive_number(total) is not None else fallback.total_world_trade,
        top_trading_nations=[c.name for c in exporters[:TOP_TRADING_NATIONS]] or list(fallback.top_trading_nations),
        fastest_growing=list(fallback.fastest_growing),
        average_trade_intensity=intensity if intensity is not None else fallback.average_trade_intensity,
        average_diversification_index=(
            diversification if diversification is not None else fallback.average_diversification_index
        ),
        global_trade_growth=growth if growth is not None else fallback.global_trade_growth,
    )
