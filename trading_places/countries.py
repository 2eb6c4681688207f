"""Country code tables shared by the providers and the fallback data."""

from __future__ import annotations

from typing import Dict, List

# ISO 3166-1 alpha-2 to alpha-3
COUNTRY_MAPPINGS: Dict[str, str] = {
    "US": "USA",
    "CN": "CHN",
    "DE": "DEU",
    "JP": "JPN",
    "GB": "GBR",
    "IN": "IND",
    "BR": "BRA",
    "KR": "KOR",
    "CA": "CAN",
    "AU": "AUS",
    "MX": "MEX",
    "RU": "RUS",
    "SA": "SAU",
    "FR": "FRA",
    "IT": "ITA",
    "ES": "ESP",
    "ID": "IDN",
    "TR": "TUR",
}

REVERSE_COUNTRY_MAPPINGS: Dict[str, str] = {iso3: iso2 for iso2, iso3 in COUNTRY_MAPPINGS.items()}

# UN Comtrade reporter codes (M49 with Comtrade's own variants for FRA, IND, ITA, USA)
COMTRADE_REPORTER_CODES: Dict[str, str] = {
    "USA": "842",
    "CHN": "156",
    "DEU": "276",
    "JPN": "392",
    "GBR": "826",
    "IND": "699",
    "BRA": "76",
    "KOR": "410",
    "CAN": "124",
    "AUS": "36",
    "MEX": "484",
    "RUS": "643",
    "SAU": "682",
    "FRA": "251",
    "ITA": "381",
    "ESP": "724",
    "IDN": "360",
    "TUR": "792",
}

DASHBOARD_COUNTRIES: List[str] = list(COUNTRY_MAPPINGS.keys())


def to_iso3(code: str) -> str:
    key = (code or "").strip().upper()
    return COUNTRY_MAPPINGS.get(key, key)


def to_iso2(code: str) -> str:
    key = (code or "").strip().upper()
    return REVERSE_COUNTRY_MAPPINGS.get(key, key)


def comtrade_reporter_code(code: str) -> str:
    """Resolve an alpha-2/alpha-3/numeric code to a Comtrade reporter code."""
    key = (code or "").strip().upper()
    if key.isdigit():
        return key
    iso3 = to_iso3(key)
    return COMTRADE_REPORTER_CODES.get(iso3, iso3)
