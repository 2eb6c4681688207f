from __future__ import annotations

import math

import pytest

from trading_places.models import MetricRecord
from trading_places.services.metrics import (
    diversification_index,
    growth_rate,
    is_number,
    trade_balance,
    trade_intensity,
)


def test_trade_balance_and_intensity() -> None:
    assert trade_balance(100, 60) == 40
    assert trade_intensity(100, 60, 500) == pytest.approx(32.0)


@pytest.mark.parametrize("gdp", [0, -5, None, math.nan])
def test_trade_intensity_undefined_without_positive_gdp(gdp) -> None:
    assert trade_intensity(100, 60, gdp) is None


def test_metric_record_derives_balance_and_intensity() -> None:
    record = MetricRecord(country="Demo", country_code="DEM", year=2022, exports=100, imports=60, gdp=500)

    dumped = record.model_dump(by_alias=True)

    assert dumped["tradeBalance"] == 40
    assert dumped["tradeIntensity"] == pytest.approx(32.0)
    assert dumped["countryCode"] == "DEM"


def test_diversification_index_from_percentage_shares() -> None:
    assert diversification_index([50, 30, 20]) == pytest.approx(0.62)


def test_diversification_index_is_scale_free() -> None:
    assert diversification_index([500.0, 300.0, 200.0]) == pytest.approx(0.62)


def test_diversification_index_single_partner_is_zero() -> None:
    assert diversification_index([42.0]) == 0.0


def test_diversification_index_defaults_without_partners() -> None:
    assert diversification_index([]) == 0.5
    assert diversification_index([0, None, math.nan]) == 0.5


def test_growth_rate() -> None:
    assert growth_rate(110, 100) == pytest.approx(10.0)
    assert growth_rate(90, 100) == pytest.approx(-10.0)


@pytest.mark.parametrize("current,previous", [(100, None), (None, 100), (100, 0)])
def test_growth_rate_missing_comparison(current, previous) -> None:
    assert growth_rate(current, previous) is None


def test_is_number_rejects_bools_and_non_finite() -> None:
    assert is_number(1.5)
    assert not is_number(True)
    assert not is_number(math.inf)
    assert not is_number("12")
