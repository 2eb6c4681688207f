from __future__ import annotations

import unittest

from trading_places.models import MetricRecord, Observation
from trading_places.services.aggregation import (
    build_yearly_records,
    calculate_growth_rates,
    compute_country_trends,
    compute_global_trends,
    latest_complete_records,
    process_partner_records,
)
from trading_places.tests.utils import comtrade_partner_row

B = 1e9


def obs(code: str, year: int, value, indicator: str = "X", name: str = "") -> Observation:
    return Observation(country=name or code, country_code=code, year=year, indicator_id=indicator, value=value)


def record(code: str, year: int, exports: float, imports: float, gdp: float = 1000.0) -> MetricRecord:
    return MetricRecord(country=code, country_code=code, year=year, exports=exports, imports=imports, gdp=gdp)


class RecordAssemblyTests(unittest.TestCase):
    def test_country_year_without_gdp_is_dropped(self) -> None:
        series = {
            "exports": [obs("USA", 2022, 100 * B), obs("DEU", 2022, 50 * B)],
            "imports": [obs("USA", 2022, 60 * B), obs("DEU", 2022, 40 * B)],
            "gdp": [obs("DEU", 2022, 400 * B)],
        }

        yearly = build_yearly_records(series)

        self.assertEqual([r.country_code for r in yearly[2022]], ["DEU"])

    def test_values_are_scaled(self) -> None:
        series = {
            "exports": [obs("USA", 2022, 100 * B)],
            "imports": [obs("USA", 2022, 60 * B)],
            "gdp": [obs("USA", 2022, 500 * B)],
            "population": [obs("USA", 2022, 331.9e6)],
        }

        (rec,) = build_yearly_records(series)[2022]

        self.assertAlmostEqual(rec.exports, 100)
        self.assertAlmostEqual(rec.gdp, 500)
        self.assertAlmostEqual(rec.population, 331.9)
        self.assertAlmostEqual(rec.trade_intensity, 32.0)

    def test_null_values_do_not_count(self) -> None:
        series = {
            "exports": [obs("USA", 2022, 100 * B)],
            "imports": [obs("USA", 2022, 60 * B)],
            "gdp": [obs("USA", 2022, None)],
        }

        self.assertEqual(build_yearly_records(series), {})

    def test_latest_complete_year_is_selected(self) -> None:
        # 2023 has exports but no GDP yet; 2022 is the latest complete year.
        series = {
            "exports": [obs("USA", 2022, 100 * B), obs("USA", 2023, 120 * B)],
            "imports": [obs("USA", 2022, 60 * B), obs("USA", 2023, 70 * B)],
            "gdp": [obs("USA", 2022, 500 * B), obs("USA", 2023, None)],
        }

        (rec,) = latest_complete_records(series)

        self.assertEqual(rec.year, 2022)
        self.assertAlmostEqual(rec.exports, 100)

    def test_years_are_sorted(self) -> None:
        series = {
            field: [obs("USA", 2021, 1 * B), obs("USA", 2019, 1 * B), obs("USA", 2020, 1 * B)]
            for field in ("exports", "imports", "gdp")
        }

        self.assertEqual(list(build_yearly_records(series)), [2019, 2020, 2021])


class GrowthRateTests(unittest.TestCase):
    def test_growth_between_years(self) -> None:
        series = {
            "exports": [obs("USA", 2021, 100), obs("USA", 2022, 110)],
            "imports": [obs("USA", 2021, 200), obs("USA", 2022, 180)],
        }

        rates = calculate_growth_rates(series, 2022, 2021)["USA"]

        self.assertAlmostEqual(rates.export_growth, 10.0)
        self.assertAlmostEqual(rates.import_growth, -10.0)
        self.assertTrue(rates.has_data)

    def test_missing_prior_year_defaults_to_zero(self) -> None:
        series = {"exports": [obs("USA", 2022, 110)], "imports": [obs("USA", 2022, 90)]}

        rates = calculate_growth_rates(series, 2022, 2021)["USA"]

        self.assertEqual(rates.export_growth, 0)
        self.assertEqual(rates.import_growth, 0)
        self.assertFalse(rates.has_data)

    def test_country_without_current_year_is_omitted(self) -> None:
        series = {"exports": [obs("USA", 2021, 110)], "imports": []}

        self.assertEqual(calculate_growth_rates(series, 2022, 2021), {})


class PartnerRecordTests(unittest.TestCase):
    def test_partners_are_combined_and_ranked(self) -> None:
        payload = {
            "data": [
                comtrade_partner_row("World", "X", 1000 * B, partner_code="0"),
                comtrade_partner_row("China", "X", 150 * B),
                comtrade_partner_row("China", "M", 450 * B),
                comtrade_partner_row("Canada", "X", 300 * B, partner_code="124"),
                comtrade_partner_row("Canada", "M", 100 * B, partner_code="124"),
            ]
        }

        partners = process_partner_records(payload)

        self.assertEqual([p.country for p in partners], ["China", "Canada"])
        china = partners[0]
        self.assertAlmostEqual(china.trade_volume, 600)
        self.assertAlmostEqual(china.balance, -300)
        self.assertAlmostEqual(china.share, 60.0)

    def test_keeps_only_top_ten(self) -> None:
        payload = {
            "data": [comtrade_partner_row(f"P{i}", "X", (i + 1) * B, partner_code=str(i + 1)) for i in range(15)]
        }

        partners = process_partner_records(payload)

        self.assertEqual(len(partners), 10)
        self.assertEqual(partners[0].country, "P14")
        self.assertLess(sum(p.share for p in partners), 100)

    def test_empty_or_malformed_payload(self) -> None:
        self.assertEqual(process_partner_records({"data": []}), [])
        self.assertEqual(process_partner_records(None), [])
        self.assertEqual(process_partner_records({"error": "x"}), [])


class TrendTests(unittest.TestCase):
    def setUp(self) -> None:
        self.yearly = {
            2020: [record("USA", 2020, 100, 50), record("DEU", 2020, 80, 70)],
            2021: [record("USA", 2021, 120, 60), record("DEU", 2021, 90, 75)],
            2022: [record("USA", 2022, 150, 75)],
        }

    def test_country_trends(self) -> None:
        trends = compute_country_trends(self.yearly, ["US", "DEU", "JP"])

        us = trends["US"]
        self.assertEqual(us.years_with_data, 3)
        self.assertAlmostEqual(us.export_growth_total, 50.0)
        self.assertAlmostEqual(us.import_growth_total, 50.0)
        self.assertAlmostEqual(us.average_exports, 370 / 3)
        self.assertEqual([p.year for p in us.data], [2020, 2021, 2022])
        self.assertEqual(trends["DEU"].years_with_data, 2)
        self.assertNotIn("JP", trends)

    def test_global_trends(self) -> None:
        trends = compute_global_trends(self.yearly, 2020, 2022)

        self.assertEqual(trends.total_years, 3)
        self.assertAlmostEqual(trends.total_world_trade_by_year[2020], 300)
        self.assertEqual(trends.top_exporters_by_year[2021], ["USA", "DEU"])
        self.assertEqual(trends.year_range.start, 2020)


if __name__ == "__main__":
    unittest.main()
