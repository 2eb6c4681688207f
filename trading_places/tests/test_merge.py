from __future__ import annotations

import math
import unittest

from trading_places.fallback_data import fallback_country_records, fallback_global_stats
from trading_places.models import (
    GrowthRates,
    LiveCountryRecord,
    MetricRecord,
    PartnerRecord,
    TradeCategories,
)
from trading_places.services.merge import compute_global_stats, merge_country_record, positive_number


def us_fallback():
    return next(r for r in fallback_country_records() if r.code == "US")


def live_us(**metrics) -> LiveCountryRecord:
    values = dict(country="United States", country_code="USA", year=2022, exports=2000.0, imports=3000.0, gdp=25000.0)
    values.update(metrics)
    return LiveCountryRecord(code="US", country_code="USA", metrics=MetricRecord(**values))


class PositiveNumberTests(unittest.TestCase):
    def test_only_finite_positive_numbers_pass(self) -> None:
        self.assertEqual(positive_number(1691.2), 1691.2)
        for value in (0, -1.5, math.nan, math.inf, None, "12", True):
            with self.subTest(value=value):
                self.assertIsNone(positive_number(value))


class MergeCountryRecordTests(unittest.TestCase):
    def test_invalid_live_exports_keep_fallback(self) -> None:
        for bad in (0.0, math.nan, -12.0):
            with self.subTest(exports=bad):
                merged = merge_country_record(us_fallback(), live_us(exports=bad))

                self.assertEqual(merged.exports, 1691.2)
                self.assertEqual(merged.imports, 3000.0)

    def test_positive_live_values_override_and_balance_is_recomputed(self) -> None:
        merged = merge_country_record(us_fallback(), live_us())

        self.assertEqual(merged.exports, 2000.0)
        self.assertEqual(merged.trade_balance, -1000.0)
        self.assertAlmostEqual(merged.trade_intensity, 20.0)
        self.assertEqual(merged.year, 2022)
        self.assertTrue(merged.has_real_metrics)
        # No live population: the fallback stays.
        self.assertEqual(merged.population, 331.9)

    def test_growth_overrides_only_with_real_comparison(self) -> None:
        live = live_us()
        live.growth = GrowthRates(export_growth=-4.0, import_growth=0.0, has_data=True)
        merged = merge_country_record(us_fallback(), live)
        self.assertEqual(merged.export_growth, -4.0)
        self.assertEqual(merged.import_growth, 0.0)

        without = merge_country_record(us_fallback(), live_us())
        self.assertEqual(without.export_growth, 2.3)
        self.assertFalse(without.has_real_growth)

    def test_lists_override_only_when_non_empty(self) -> None:
        live = live_us()
        live.categories = TradeCategories(exports=["Aircraft"], imports=[])
        live.trading_partners = [PartnerRecord(country="Canada", trade_volume=700.0, balance=10.0, share=20.0)]
        live.diversification_index = 0.31

        merged = merge_country_record(us_fallback(), live)

        self.assertEqual(merged.top_exports, ["Aircraft"])
        self.assertEqual(merged.top_imports[0], "Electronics")
        self.assertEqual([p.country for p in merged.trading_partners], ["Canada"])
        self.assertEqual(merged.diversification_index, 0.31)
        self.assertTrue(merged.has_real_categories)
        self.assertTrue(merged.has_real_partners)

    def test_missing_live_record_returns_fallback_copy(self) -> None:
        fallback = us_fallback()
        merged = merge_country_record(fallback, None)

        self.assertEqual(merged, fallback)
        self.assertIsNot(merged, fallback)
        self.assertEqual(merged.diversification_index, 0.78)

    def test_fallback_is_not_mutated(self) -> None:
        fallback = us_fallback()
        merge_country_record(fallback, live_us())

        self.assertEqual(fallback.exports, 1691.2)
        self.assertFalse(fallback.has_real_metrics)


class GlobalStatsTests(unittest.TestCase):
    def test_recomputed_from_merged_countries(self) -> None:
        countries = fallback_country_records()
        stats = compute_global_stats(countries, fallback_global_stats())

        expected_total = sum(c.exports + c.imports for c in countries)
        self.assertAlmostEqual(stats.total_world_trade, expected_total)
        self.assertEqual(stats.top_trading_nations[:3], ["China", "United States", "Germany"])
        self.assertEqual(len(stats.top_trading_nations), 5)
        self.assertEqual(stats.fastest_growing, fallback_global_stats().fastest_growing)
        expected_growth = sum((c.export_growth + c.import_growth) / 2 for c in countries) / len(countries)
        self.assertAlmostEqual(stats.global_trade_growth, expected_growth)

    def test_empty_set_uses_fallback(self) -> None:
        fallback = fallback_global_stats()

        stats = compute_global_stats([], fallback)

        self.assertEqual(stats.total_world_trade, 28400.0)
        self.assertEqual(stats.top_trading_nations, fallback.top_trading_nations)
        self.assertEqual(stats.average_trade_intensity, 35.2)
        self.assertEqual(stats.global_trade_growth, 4.8)


if __name__ == "__main__":
    unittest.main()
