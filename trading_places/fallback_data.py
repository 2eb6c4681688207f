"""
Static dashboard data used when live data is disabled or unavailable.

Trade and GDP in billions of US dollars, population in millions, growth and
trade intensity in percent.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .countries import to_iso3
from .models import CountryTradeRecord, GlobalStats, TariffInfo, TradeSnapshot


def _partners(*rows: tuple) -> List[Dict[str, Any]]:
    return [
        {"country": country, "trade_volume": volume, "balance": balance, "share": share}
        for country, volume, balance, share in rows
    ]


FALLBACK_COUNTRIES: List[Dict[str, Any]] = [
    {
        "name": "United States", "code": "US", "region": "North America",
        "exports": 1691.2, "imports": 1780.4, "gdp": 25439.7, "population": 331.9,
        "trade_intensity": 13.6, "diversification_index": 0.78,
        "export_growth": 2.3, "import_growth": 3.1,
        "top_exports": ["Machinery", "Electronics", "Aircraft", "Medical Equipment", "Chemicals"],
        "top_imports": ["Electronics", "Machinery", "Vehicles", "Textiles", "Oil"],
        "trading_partners": _partners(
            ("China", 559.2, -345.2, 16.5), ("Canada", 614.9, 12.3, 18.1), ("Mexico", 614.5, -130.1, 18.0),
            ("Japan", 218.2, -68.8, 6.4), ("Germany", 171.2, -67.1, 5.0),
        ),
    },
    {
        "name": "China", "code": "CN", "region": "Asia",
        "exports": 3360.0, "imports": 2824.6, "gdp": 17963.2, "population": 1439.3,
        "trade_intensity": 34.4, "diversification_index": 0.65,
        "export_growth": 8.7, "import_growth": 6.2,
        "top_exports": ["Electronics", "Machinery", "Textiles", "Furniture", "Toys"],
        "top_imports": ["Oil", "Machinery", "Electronics", "Chemicals", "Metals"],
        "trading_partners": _partners(
            ("United States", 559.2, 345.2, 9.0), ("Japan", 317.4, 45.6, 5.1), ("South Korea", 240.4, 78.9, 3.9),
            ("Germany", 198.7, 23.4, 3.2), ("India", 125.6, 67.8, 2.0),
        ),
    },
    {
        "name": "Germany", "code": "DE", "region": "Europe",
        "exports": 1560.0, "imports": 1249.2, "gdp": 4082.5, "population": 83.2,
        "trade_intensity": 68.8, "diversification_index": 0.82,
        "export_growth": 4.2, "import_growth": 3.8,
        "top_exports": ["Machinery", "Vehicles", "Chemicals", "Electronics", "Pharmaceuticals"],
        "top_imports": ["Oil", "Machinery", "Electronics", "Chemicals", "Textiles"],
        "trading_partners": _partners(
            ("United States", 171.2, 67.1, 6.1), ("China", 198.7, -23.4, 7.1), ("France", 156.8, 45.2, 5.6),
            ("Netherlands", 189.3, 12.7, 6.7), ("Italy", 134.5, 23.8, 4.8),
        ),
    },
    {
        "name": "Japan", "code": "JP", "region": "Asia",
        "exports": 738.0, "imports": 692.8, "gdp": 4231.1, "population": 125.8,
        "trade_intensity": 33.8, "diversification_index": 0.71,
        "export_growth": 1.8, "import_growth": 2.4,
        "top_exports": ["Vehicles", "Electronics", "Machinery", "Chemicals", "Steel"],
        "top_imports": ["Oil", "Electronics", "Machinery", "Chemicals", "Food"],
        "trading_partners": _partners(
            ("China", 317.4, -45.6, 22.2), ("United States", 218.2, 68.8, 15.3), ("South Korea", 89.3, 12.4, 6.3),
            ("Germany", 67.8, 8.9, 4.7), ("Australia", 45.6, -12.3, 3.2),
        ),
    },
    {
        "name": "United Kingdom", "code": "GB", "region": "Europe",
        "exports": 423.8, "imports": 469.5, "gdp": 3070.7, "population": 67.3,
        "trade_intensity": 29.1, "diversification_index": 0.69,
        "export_growth": -1.2, "import_growth": 0.8,
        "top_exports": ["Services", "Machinery", "Chemicals", "Vehicles", "Pharmaceuticals"],
        "top_imports": ["Oil", "Machinery", "Electronics", "Vehicles", "Chemicals"],
        "trading_partners": _partners(
            ("United States", 89.4, 12.3, 10.0), ("Germany", 78.9, -23.4, 8.8), ("China", 67.8, -45.6, 7.6),
            ("Netherlands", 56.7, 8.9, 6.3), ("France", 45.6, -12.3, 5.1),
        ),
    },
    {
        "name": "India", "code": "IN", "region": "Asia",
        "exports": 324.2, "imports": 402.5, "gdp": 3386.4, "population": 1380.0,
        "trade_intensity": 21.4, "diversification_index": 0.58,
        "export_growth": 12.4, "import_growth": 15.7,
        "top_exports": ["Textiles", "Pharmaceuticals", "IT Services", "Jewelry", "Chemicals"],
        "top_imports": ["Oil", "Electronics", "Machinery", "Gold", "Coal"],
        "trading_partners": _partners(
            ("United States", 78.9, 23.4, 10.9), ("China", 125.6, -67.8, 17.3), ("UAE", 45.2, -12.3, 6.2),
            ("Germany", 23.8, 5.6, 3.3), ("Singapore", 18.7, 2.1, 2.6),
        ),
    },
    {
        "name": "Brazil", "code": "BR", "region": "South America",
        "exports": 280.4, "imports": 212.6, "gdp": 1608.9, "population": 215.3,
        "trade_intensity": 30.6, "diversification_index": 0.52,
        "export_growth": 8.9, "import_growth": 5.2,
        "top_exports": ["Soybeans", "Iron Ore", "Oil", "Meat", "Sugar"],
        "top_imports": ["Machinery", "Electronics", "Chemicals", "Vehicles", "Oil"],
        "trading_partners": _partners(
            ("China", 89.4, 34.5, 18.1), ("United States", 45.6, 12.3, 9.2), ("Argentina", 23.8, 8.9, 4.8),
            ("Germany", 18.7, 5.6, 3.8), ("Netherlands", 15.2, 3.4, 3.1),
        ),
    },
    {
        "name": "South Korea", "code": "KR", "region": "Asia",
        "exports": 512.8, "imports": 423.4, "gdp": 1810.9, "population": 51.7,
        "trade_intensity": 51.7, "diversification_index": 0.76,
        "export_growth": 6.8, "import_growth": 4.9,
        "top_exports": ["Electronics", "Vehicles", "Machinery", "Chemicals", "Steel"],
        "top_imports": ["Oil", "Electronics", "Machinery", "Chemicals", "Coal"],
        "trading_partners": _partners(
            ("China", 240.4, 78.9, 25.6), ("United States", 89.3, 12.4, 9.5), ("Japan", 67.8, 8.9, 7.2),
            ("Vietnam", 45.6, 23.4, 4.9), ("Germany", 34.5, 5.6, 3.7),
        ),
    },
    {
        "name": "Canada", "code": "CA", "region": "North America",
        "exports": 456.7, "imports": 433.3, "gdp": 1990.8, "population": 38.0,
        "trade_intensity": 44.8, "diversification_index": 0.61,
        "export_growth": 3.2, "import_growth": 4.1,
        "top_exports": ["Oil", "Lumber", "Minerals", "Machinery", "Aircraft"],
        "top_imports": ["Vehicles", "Machinery", "Electronics", "Chemicals", "Oil"],
        "trading_partners": _partners(
            ("United States", 614.9, 12.3, 69.1), ("China", 45.6, -23.4, 5.1), ("Mexico", 23.8, 5.6, 2.7),
            ("Germany", 18.7, 3.4, 2.1), ("Japan", 15.2, 2.1, 1.7),
        ),
    },
    {
        "name": "Australia", "code": "AU", "region": "Oceania",
        "exports": 312.4, "imports": 266.8, "gdp": 1542.7, "population": 25.7,
        "trade_intensity": 37.5, "diversification_index": 0.48,
        "export_growth": 7.8, "import_growth": 5.4,
        "top_exports": ["Iron Ore", "Coal", "Gold", "Natural Gas", "Wheat"],
        "top_imports": ["Machinery", "Vehicles", "Electronics", "Oil", "Chemicals"],
        "trading_partners": _partners(
            ("China", 123.4, 67.8, 21.3), ("Japan", 45.6, 12.3, 7.9), ("United States", 34.5, 5.6, 6.0),
            ("South Korea", 23.8, 8.9, 4.1), ("India", 18.7, 3.4, 3.2),
        ),
    },
    {
        "name": "Mexico", "code": "MX", "region": "North America",
        "exports": 417.8, "imports": 430.1, "gdp": 1289.3, "population": 130.3,
        "trade_intensity": 55.7, "diversification_index": 0.63,
        "export_growth": 9.2, "import_growth": 11.5,
        "top_exports": ["Vehicles", "Electronics", "Machinery", "Oil", "Agricultural Products"],
        "top_imports": ["Electronics", "Machinery", "Vehicles", "Oil", "Chemicals"],
        "trading_partners": _partners(
            ("United States", 614.5, -130.1, 72.4), ("China", 45.6, -23.4, 5.4), ("Canada", 23.8, 5.6, 2.8),
            ("Germany", 18.7, 3.4, 2.2), ("Japan", 15.2, 2.1, 1.8),
        ),
    },
    {
        "name": "Russia", "code": "RU", "region": "Europe/Asia",
        "exports": 345.6, "imports": 188.9, "gdp": 1835.9, "population": 146.2,
        "trade_intensity": 29.1, "diversification_index": 0.41,
        "export_growth": -5.2, "import_growth": -8.7,
        "top_exports": ["Oil", "Natural Gas", "Metals", "Wheat", "Chemicals"],
        "top_imports": ["Machinery", "Electronics", "Vehicles", "Pharmaceuticals", "Food"],
        "trading_partners": _partners(
            ("China", 89.4, 45.6, 16.7), ("Germany", 45.6, 12.3, 8.5), ("Netherlands", 34.5, 8.9, 6.4),
            ("Turkey", 23.8, 5.6, 4.4), ("Belarus", 18.7, 3.4, 3.5),
        ),
    },
    {
        "name": "Saudi Arabia", "code": "SA", "region": "Middle East",
        "exports": 298.7, "imports": 64.2, "gdp": 793.5, "population": 35.0,
        "trade_intensity": 45.8, "diversification_index": 0.23,
        "export_growth": 12.3, "import_growth": 8.9,
        "top_exports": ["Oil", "Petrochemicals", "Minerals", "Plastics", "Fertilizers"],
        "top_imports": ["Machinery", "Vehicles", "Electronics", "Food", "Pharmaceuticals"],
        "trading_partners": _partners(
            ("China", 67.8, 23.4, 18.2), ("India", 45.6, 12.3, 12.3), ("Japan", 34.5, 8.9, 9.3),
            ("United States", 23.8, 5.6, 6.4), ("South Korea", 18.7, 3.4, 5.0),
        ),
    },
    {
        "name": "France", "code": "FR", "region": "Europe",
        "exports": 578.4, "imports": 511.2, "gdp": 2630.0, "population": 67.0,
        "trade_intensity": 41.4, "diversification_index": 0.80,
        "export_growth": 3.8, "import_growth": 3.2,
        "top_exports": ["Aircraft", "Machinery", "Pharmaceuticals", "Vehicles", "Wine"],
        "top_imports": ["Machinery", "Vehicles", "Oil", "Electronics", "Chemicals"],
        "trading_partners": _partners(
            ("Germany", 156.8, -45.2, 14.4), ("United States", 89.3, 23.4, 8.2), ("Italy", 78.9, 12.3, 7.3),
            ("Spain", 67.8, 8.9, 6.2), ("Belgium", 56.7, 5.6, 5.2),
        ),
    },
    {
        "name": "Italy", "code": "IT", "region": "Europe",
        "exports": 542.8, "imports": 497.5, "gdp": 2000.0, "population": 59.0,
        "trade_intensity": 52.0, "diversification_index": 0.77,
        "export_growth": 4.1, "import_growth": 3.7,
        "top_exports": ["Machinery", "Vehicles", "Pharmaceuticals", "Fashion", "Furniture"],
        "top_imports": ["Oil", "Machinery", "Vehicles", "Chemicals", "Electronics"],
        "trading_partners": _partners(
            ("Germany", 134.5, -23.8, 13.0), ("France", 78.9, -12.3, 7.6), ("United States", 67.8, 18.7, 6.5),
            ("Spain", 56.7, 9.8, 5.5), ("Switzerland", 45.6, 7.8, 4.4),
        ),
    },
    {
        "name": "Spain", "code": "ES", "region": "Europe",
        "exports": 387.6, "imports": 375.2, "gdp": 1400.0, "population": 47.0,
        "trade_intensity": 54.5, "diversification_index": 0.73,
        "export_growth": 5.2, "import_growth": 4.8,
        "top_exports": ["Vehicles", "Machinery", "Pharmaceuticals", "Food", "Chemicals"],
        "top_imports": ["Oil", "Machinery", "Vehicles", "Electronics", "Chemicals"],
        "trading_partners": _partners(
            ("France", 67.8, -8.9, 8.9), ("Germany", 56.7, -12.3, 7.4), ("Italy", 45.6, -9.8, 6.0),
            ("Portugal", 34.5, 5.6, 4.5), ("United States", 23.8, 3.4, 3.1),
        ),
    },
    {
        "name": "Indonesia", "code": "ID", "region": "Asia",
        "exports": 256.4, "imports": 221.7, "gdp": 1120.0, "population": 274.0,
        "trade_intensity": 42.7, "diversification_index": 0.54,
        "export_growth": 9.8, "import_growth": 7.4,
        "top_exports": ["Palm Oil", "Coal", "Natural Gas", "Textiles", "Electronics"],
        "top_imports": ["Machinery", "Oil", "Chemicals", "Electronics", "Steel"],
        "trading_partners": _partners(
            ("China", 89.4, -23.4, 18.7), ("Singapore", 45.6, 12.3, 9.5), ("Japan", 34.5, -8.9, 7.2),
            ("United States", 23.8, 9.8, 5.0), ("India", 18.7, 5.6, 3.9),
        ),
    },
    {
        "name": "Turkey", "code": "TR", "region": "Europe",
        "exports": 234.5, "imports": 269.3, "gdp": 819.0, "population": 85.0,
        "trade_intensity": 61.5, "diversification_index": 0.69,
        "export_growth": 8.2, "import_growth": 9.7,
        "top_exports": ["Vehicles", "Machinery", "Textiles", "Steel", "Food"],
        "top_imports": ["Oil", "Machinery", "Chemicals", "Electronics", "Metals"],
        "trading_partners": _partners(
            ("Germany", 45.6, -8.9, 9.1), ("China", 34.5, -12.3, 6.9), ("Russia", 28.7, -15.6, 5.7),
            ("United States", 23.8, 5.6, 4.7), ("Italy", 18.9, 3.4, 3.8),
        ),
    },
]

FALLBACK_GLOBAL_STATS: Dict[str, Any] = {
    "total_world_trade": 28400.0,
    "top_trading_nations": ["China", "United States", "Germany", "Japan", "Netherlands"],
    "fastest_growing": ["Vietnam", "India", "Bangladesh", "Mexico", "Poland"],
    "average_trade_intensity": 35.2,
    "average_diversification_index": 0.58,
    "global_trade_growth": 4.8,
}

# MFN and applied rates, in percent
TARIFF_PATTERNS: Dict[str, Dict[str, Any]] = {
    "US": {
        "average_mfn": 3.4,
        "average_applied": 2.0,
        "sector_tariffs": [
            {"sector": "Agricultural products", "mfn": 5.2, "applied": 5.2},
            {"sector": "Non-agricultural products", "mfn": 3.2, "applied": 1.8},
            {"sector": "Textiles and clothing", "mfn": 11.4, "applied": 11.4},
            {"sector": "Steel", "mfn": 0.0, "applied": 25.0},
            {"sector": "Aluminum", "mfn": 0.0, "applied": 10.0},
        ],
    },
    "CN": {
        "average_mfn": 7.4,
        "average_applied": 7.4,
        "sector_tariffs": [
            {"sector": "Agricultural products", "mfn": 15.6, "applied": 15.6},
            {"sector": "Non-agricultural products", "mfn": 6.8, "applied": 6.8},
            {"sector": "Textiles and clothing", "mfn": 16.2, "applied": 16.2},
            {"sector": "US Soybeans", "mfn": 3.0, "applied": 25.0},
            {"sector": "US Automobiles", "mfn": 25.0, "applied": 40.0},
        ],
    },
}


def fallback_country_records() -> List[CountryTradeRecord]:
    """Fresh model instances for every static country."""
    return [
        CountryTradeRecord.model_validate({**row, "country_code": to_iso3(row["code"])})
        for row in FALLBACK_COUNTRIES
    ]


def fallback_global_stats() -> GlobalStats:
    return GlobalStats.model_validate(FALLBACK_GLOBAL_STATS)


def fallback_tariff_info(country_code: str) -> TariffInfo:
    pattern = TARIFF_PATTERNS.get((country_code or "").upper())
    return TariffInfo.model_validate(pattern) if pattern else TariffInfo()


def fallback_snapshot() -> TradeSnapshot:
    return TradeSnapshot(
        countries=fallback_country_records(),
        global_stats=fallback_global_stats(),
        is_real_data=False,
    )
