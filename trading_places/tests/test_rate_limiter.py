from __future__ import annotations

import unittest

from trading_places.services.rate_limiter import RateLimiter
from trading_places.tests.utils import FakeClock


class RateLimiterTests(unittest.TestCase):
    def test_window_allows_max_then_refuses_then_recovers(self) -> None:
        clock = FakeClock()
        limiter = RateLimiter(max_requests=3, window_seconds=1.0, clock=clock)

        self.assertEqual([limiter.can_make_request() for _ in range(3)], [True, True, True])
        self.assertFalse(limiter.can_make_request())

        clock.advance(1.5)
        self.assertTrue(limiter.can_make_request())

    def test_refused_check_does_not_consume_a_slot(self) -> None:
        clock = FakeClock()
        limiter = RateLimiter(max_requests=2, window_seconds=10, clock=clock)
        limiter.can_make_request()
        clock.advance(5)
        limiter.can_make_request()

        for _ in range(5):
            self.assertFalse(limiter.can_make_request())

        # Only the first request falls out of the window.
        clock.advance(5.5)
        self.assertTrue(limiter.can_make_request())
        self.assertFalse(limiter.can_make_request())

    def test_time_until_reset(self) -> None:
        clock = FakeClock()
        limiter = RateLimiter(max_requests=5, window_seconds=60, clock=clock)
        self.assertEqual(limiter.get_time_until_reset(), 0.0)

        limiter.can_make_request()
        clock.advance(20)

        self.assertAlmostEqual(limiter.get_time_until_reset(), 40.0)

    def test_remaining_and_reset(self) -> None:
        limiter = RateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())
        limiter.can_make_request()
        self.assertEqual(limiter.remaining, 2)

        limiter.reset()

        self.assertEqual(limiter.remaining, 3)

    def test_rejects_non_positive_budget(self) -> None:
        with self.assertRaises(ValueError):
            RateLimiter(max_requests=0)


if __name__ == "__main__":
    unittest.main()
