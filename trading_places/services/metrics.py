"""Derived trade metrics. Pure functions, no I/O and no model imports."""

from __future__ import annotations

import math
from typing import Iterable, Optional

DEFAULT_DIVERSIFICATION_INDEX = 0.5


def is_number(value: object) -> bool:
    """True for finite ints/floats (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def trade_balance(exports: float, imports: float) -> float:
    return exports - imports


def trade_intensity(exports: float, imports: float, gdp: Optional[float]) -> Optional[float]:
    """(exports + imports) / gdp * 100, or None when gdp is missing or not positive."""
    if not is_number(gdp) or gdp <= 0:
        return None
    return (exports + imports) / gdp * 100


def growth_rate(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    """Percent change from ``previous`` to ``current``.

    Returns None when either side is missing or ``previous`` is zero; callers
    decide what a missing comparison means.
    """
    if not is_number(current) or not is_number(previous) or previous == 0:
        return None
    return (current - previous) / previous * 100


def diversification_index(volumes: Iterable[float]) -> float:
    """1 - HHI over the shares implied by ``volumes``, clamped to [0, 1].

    Volumes may be absolute trade values or percentage shares; they are
    normalised to fractions of their total first. No usable volume yields the
    0.5 placeholder.
    """
    values = [float(v) for v in volumes if is_number(v) and v > 0]
    total = sum(values)
    if not values or total <= 0:
        return DEFAULT_DIVERSIFICATION_INDEX

    hhi = sum((v / total) ** 2 for v in values)
    return max(0.0, min(1.0, 1 - hhi))
