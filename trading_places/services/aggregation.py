"""
Record assembly from raw provider output.

World Bank observations are grouped by (country, year) and scaled: trade and
GDP to billions of US dollars, population to millions. A record is emitted
only when exports, imports and GDP are all present; partial country-years are
dropped, never zero-filled.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..countries import to_iso3
from ..models import (
    CountryTrend,
    CountryTrendPoint,
    GlobalTrends,
    GrowthRates,
    MetricRecord,
    Observation,
    PartnerRecord,
    YearRange,
)
from .metrics import growth_rate, is_number

logger = logging.getLogger(__name__)

SCALES: Dict[str, float] = {
    "exports": 1e9,
    "imports": 1e9,
    "gdp": 1e9,
    "population": 1e6,
}
REQUIRED_FIELDS = ("exports", "imports", "gdp")

EXCLUDED_PARTNERS = {"World", "Areas, nes"}
TOP_PARTNERS = 10
TOP_EXPORTERS = 5


def _group_observations(series: Mapping[str, Iterable[Observation]]) -> Dict[str, Dict[int, Dict[str, Any]]]:
    grouped: Dict[str, Dict[int, Dict[str, Any]]] = defaultdict(dict)
    for field, observations in series.items():
        scale = SCALES.get(field)
        if scale is None:
            continue
        for obs in observations:
            if not is_number(obs.value):
                continue
            entry = grouped[obs.country_code].setdefault(
                obs.year,
                {"country": obs.country, "country_code": obs.country_code, "year": obs.year},
            )
            entry[field] = obs.value / scale
    return grouped


def _to_record(entry: Mapping[str, Any]) -> Optional[MetricRecord]:
    if not all(is_number(entry.get(field)) for field in REQUIRED_FIELDS):
        return None
    return MetricRecord.model_validate(entry)


def build_yearly_records(series: Mapping[str, Iterable[Observation]]) -> Dict[int, List[MetricRecord]]:
    """Every complete country-year, indexed by year (ascending)."""
    yearly: Dict[int, List[MetricRecord]] = defaultdict(list)
    for years in _group_observations(series).values():
        for year, entry in years.items():
            record = _to_record(entry)
            if record is not None:
                yearly[year].append(record)
    return {year: yearly[year] for year in sorted(yearly)}


def latest_complete_records(series: Mapping[str, Iterable[Observation]]) -> List[MetricRecord]:
    """Per country, the most recent year that has a complete record."""
    records: List[MetricRecord] = []
    for country_code, years in _group_observations(series).items():
        for year in sorted(years, reverse=True):
            record = _to_record(years[year])
            if record is not None:
                records.append(record)
                break
        else:
            logger.debug("No complete year for %s", country_code)
    return records


def calculate_growth_rates(
    series: Mapping[str, Iterable[Observation]],
    current_year: int,
    previous_year: int,
) -> Dict[str, GrowthRates]:
    """Export/import growth per country between two years.

    Countries with current-year data always get an entry; a missing
    comparison leaves that rate at 0.0 with ``has_data`` unset.
    """
    values: Dict[str, Dict[str, Dict[int, float]]] = defaultdict(lambda: defaultdict(dict))
    for field in ("exports", "imports"):
        for obs in series.get(field, []):
            if is_number(obs.value):
                values[obs.country_code][field][obs.year] = obs.value

    result: Dict[str, GrowthRates] = {}
    for country_code, fields in values.items():
        if not any(current_year in by_year for by_year in fields.values()):
            continue
        rates = GrowthRates()
        for field, attr in (("exports", "export_growth"), ("imports", "import_growth")):
            by_year = fields.get(field, {})
            growth = growth_rate(by_year.get(current_year), by_year.get(previous_year))
            if growth is not None:
                setattr(rates, attr, growth)
                rates.has_data = True
        result[country_code] = rates
    return result


def process_partner_records(payload: Any, limit: int = TOP_PARTNERS) -> List[PartnerRecord]:
    """Turn a Comtrade partner breakdown into the top ``limit`` partners by volume.

    Shares are percentages of the reporter's total over all partners seen, so
    the truncated list need not sum to 100.
    """
    rows = payload.get("data") if isinstance(payload, dict) else None
    if not rows:
        return []

    partners: Dict[str, Dict[str, float]] = {}
    for row in rows:
        if not isinstance(row, dict):
            continue
        partner = row.get("partnerDesc")
        if not partner or partner in EXCLUDED_PARTNERS or str(row.get("partnerCode")) == "0":
            continue
        value = row.get("primaryValue")
        value = float(value) if is_number(value) else 0.0

        flow = str(row.get("flowCode") or row.get("flowDesc") or "").upper()
        totals = partners.setdefault(partner, {"exports": 0.0, "imports": 0.0})
        if flow in ("X", "EXPORT"):
            totals["exports"] += value
        elif flow in ("M", "IMPORT"):
            totals["imports"] += value

    total_trade = sum(t["exports"] + t["imports"] for t in partners.values())
    records = [
        PartnerRecord(
            country=name,
            trade_volume=(t["exports"] + t["imports"]) / 1e9,
            balance=(t["exports"] - t["imports"]) / 1e9,
            share=(t["exports"] + t["imports"]) / total_trade * 100 if total_trade > 0 else 0.0,
        )
        for name, t in partners.items()
    ]
    records.sort(key=lambda p: p.trade_volume, reverse=True)
    return records[:limit]


def _total_growth(first: float, last: float) -> float:
    if first <= 0:
        return 0.0
    return growth_rate(last, first) or 0.0


def compute_country_trends(
    yearly: Mapping[int, Sequence[MetricRecord]],
    country_codes: Sequence[str],
) -> Dict[str, CountryTrend]:
    """Trend summary per requested code, for countries with at least two years."""
    trends: Dict[str, CountryTrend] = {}
    for code in country_codes:
        iso3 = to_iso3(code)
        points = [
            CountryTrendPoint(
                year=year,
                exports=record.exports,
                imports=record.imports,
                trade_balance=record.trade_balance,
                gdp=record.gdp,
                trade_intensity=record.trade_intensity,
            )
            for year, records in yearly.items()
            for record in records
            if record.country_code == iso3
        ]
        points.sort(key=lambda p: p.year)
        if len(points) < 2:
            continue

        first, last = points[0], points[-1]
        trends[code] = CountryTrend(
            data=points,
            export_growth_total=_total_growth(first.exports, last.exports),
            import_growth_total=_total_growth(first.imports, last.imports),
            average_exports=sum(p.exports for p in points) / len(points),
            average_imports=sum(p.imports for p in points) / len(points),
            years_with_data=len(points),
        )
    return trends


def compute_global_trends(
    yearly: Mapping[int, Sequence[MetricRecord]],
    start_year: int,
    end_year: int,
) -> GlobalTrends:
    world_trade: Dict[int, float] = {}
    top_exporters: Dict[int, List[str]] = {}
    for year, records in yearly.items():
        world_trade[year] = sum(r.exports + r.imports for r in records)
        ranked = sorted(records, key=lambda r: r.exports, reverse=True)
        top_exporters[year] = [r.country for r in ranked[:TOP_EXPORTERS]]

    return GlobalTrends(
        total_years=len(yearly),
        year_range=YearRange(start=start_year, end=end_year),
        total_world_trade_by_year=world_trade,
        top_exporters_by_year=top_exporters,
    )
