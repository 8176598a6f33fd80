"""Moving averages, momentum and volatility over the newest-first trend window."""
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from hilo.core.labels import Category

MA_WINDOWS = (5, 10, 20)
RECENT = 5


def moving_average(trend: Sequence[int], n: int) -> Optional[float]:
    if len(trend) < n:
        return None
    return float(np.mean(trend[:n]))


def moving_averages(trend: Sequence[int]) -> tuple[Optional[float], Optional[float], Optional[float]]:
    return tuple(moving_average(trend, n) for n in MA_WINDOWS)


def momentum(trend: Sequence[int], n: int = RECENT) -> Optional[int]:
    """Newest minus oldest of the n most recent samples."""
    if len(trend) < n:
        return None
    return int(trend[0]) - int(trend[n-1])


def volatility_index(trend: Sequence[int]) -> float:
    if len(trend) < 2:
        return 0.0
    return float(np.mean(np.abs(np.diff(np.asarray(trend, dtype=float)))))


def spread(trend: Sequence[int], n: int = RECENT) -> Optional[float]:
    """Population standard deviation of the n most recent samples."""
    if len(trend) < n:
        return None
    return float(np.std(np.asarray(trend[:n], dtype=float)))


def weighted_average(trend: Sequence[int], n: int = RECENT) -> Optional[float]:
    # newest gets weight n, oldest weight 1
    recent = list(trend[:n])
    if not recent:
        return None
    weights = np.arange(len(recent), 0, -1, dtype=float)
    return float(np.dot(recent, weights) / weights.sum())


def alignment(mas) -> Optional[Category]:
    """High for ma5 > ma10 > ma20, Low for the reverse, else None."""
    if any(m is None for m in mas):
        return None
    short, mid, long_ = mas
    if short > mid > long_:
        return Category.HIGH
    if short < mid < long_:
        return Category.LOW
    return None


@dataclass
class TrendSnapshot:
    moving_averages: tuple = (None, None, None)
    momentum: Optional[int] = None
    volatility: float = 0.0
    spread: Optional[float] = None
    weighted: Optional[float] = None

    @property
    def aligned(self) -> Optional[Category]:
        return alignment(self.moving_averages)


def analyze(trend: Sequence[int]) -> TrendSnapshot:
    return TrendSnapshot(
        moving_averages=moving_averages(trend),
        momentum=momentum(trend),
        volatility=volatility_index(trend),
        spread=spread(trend),
        weighted=weighted_average(trend),
    )
