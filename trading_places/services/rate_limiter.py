from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque


class RateLimiter:
    """Sliding-window limiter for outbound provider calls.

    Only permitted requests are recorded; a refused check leaves the window
    untouched.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        self.max_requests = max_requests
        self.window_seconds = float(window_seconds)
        self._clock = clock
        self._requests: Deque[float] = deque()

    def _prune(self, now: float) -> None:
        cutoff = now - self.window_seconds
        while self._requests and self._requests[0] < cutoff:
            self._requests.popleft()

    def can_make_request(self) -> bool:
        now = self._clock()
        self._prune(now)

        if len(self._requests) >= self.max_requests:
            return False

        self._requests.append(now)
        return True

    def get_time_until_reset(self) -> float:
        """Seconds until the oldest tracked request leaves the window."""
        if not self._requests:
            return 0.0
        now = self._clock()
        return max(0.0, self.window_seconds - (now - self._requests[0]))

    @property
    def remaining(self) -> int:
        self._prune(self._clock())
        return self.max_requests - len(self._requests)

    def reset(self) -> None:
        self._requests.clear()
