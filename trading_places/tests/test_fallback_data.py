from __future__ import annotations

import unittest

from trading_places.countries import COMTRADE_REPORTER_CODES, DASHBOARD_COUNTRIES, comtrade_reporter_code, to_iso2, to_iso3
from trading_places.fallback_data import fallback_country_records, fallback_snapshot, fallback_tariff_info


class FallbackDataTests(unittest.TestCase):
    def test_every_dashboard_country_has_a_record(self) -> None:
        records = fallback_country_records()

        self.assertEqual([r.code for r in records], DASHBOARD_COUNTRIES)
        for record in records:
            with self.subTest(code=record.code):
                self.assertEqual(record.country_code, to_iso3(record.code))
                self.assertEqual(len(record.top_exports), 5)
                self.assertEqual(len(record.trading_partners), 5)
                self.assertGreater(record.gdp, 0)

    def test_snapshot_is_a_fresh_copy(self) -> None:
        first = fallback_snapshot()
        first.countries[0].exports = 0

        self.assertEqual(fallback_snapshot().countries[0].exports, 1691.2)

    def test_tariff_patterns(self) -> None:
        self.assertEqual(fallback_tariff_info("cn").average_mfn, 7.4)
        self.assertEqual(fallback_tariff_info("US").sector_tariffs[3].applied, 25.0)
        self.assertEqual(fallback_tariff_info("FR").sector_tariffs, [])


class CountryCodeTests(unittest.TestCase):
    def test_code_conversions(self) -> None:
        self.assertEqual(to_iso3("us"), "USA")
        self.assertEqual(to_iso2("DEU"), "DE")
        self.assertEqual(to_iso3("NLD"), "NLD")

    def test_comtrade_reporter_codes(self) -> None:
        self.assertEqual(comtrade_reporter_code("US"), "842")
        self.assertEqual(comtrade_reporter_code("FRA"), "251")
        self.assertEqual(comtrade_reporter_code("842"), "842")
        self.assertEqual(set(COMTRADE_REPORTER_CODES), {to_iso3(c) for c in DASHBOARD_COUNTRIES})


if __name__ == "__main__":
    unittest.main()
