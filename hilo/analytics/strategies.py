"""Single-purpose strategies and the two combiners built from them.

Every strategy returns a Category. When a strategy lacks the data it needs it
answers with a random Category drawn from the injected RNG and logs it as a
degraded-confidence fallback.
"""
from collections import Counter
from dataclasses import dataclass, field
import random
from typing import Callable, Optional

from hilo.analytics.patterns import PatternMatch
from hilo.analytics.trend import TrendSnapshot
from hilo.core.labels import Category, classify, from_code, random_category
from hilo.core.log import get_logger

logger = get_logger(__name__)

SMART = "smart"
DEFENSIVE = "defensive"

CONTINUE_P = 0.8
MOMENTUM_THR = 2
SPREAD_THR = 3.0
VOLATILITY_THR = 2.5
TIEBREAK_VOL = 2.0
MAJORITY = 0.75


@dataclass
class Signals:
    window: str = ""                 # pattern window as 'H'/'L', newest first
    trend: list[int] = field(default_factory=list)
    snapshot: TrendSnapshot = field(default_factory=TrendSnapshot)
    top: Optional[PatternMatch] = None

    @property
    def last(self) -> Optional[Category]:
        if self.trend:
            return classify(self.trend[0])
        if self.window:
            return from_code(self.window[0])
        return None


def fallback(name: str, rng: random.Random) -> Category:
    c = random_category(rng)
    logger.info("degraded confidence, random default", strategy=name, prediction=c.value)
    return c


def pattern_break(s: Signals, rng: random.Random) -> Category:
    if s.top is not None and s.top.aligned(s.window):
        return s.top.continuation.opposite()
    return fallback("pattern_break", rng)


def trend_reversal(s: Signals, rng: random.Random) -> Category:
    m = s.snapshot.momentum
    if m is not None and abs(m) > MOMENTUM_THR:
        return Category.LOW if m > 0 else Category.HIGH
    return fallback("trend_reversal", rng)


def volatility(s: Signals, rng: random.Random) -> Category:
    last = s.last
    if last is None:
        return fallback("volatility", rng)
    if s.snapshot.volatility > VOLATILITY_THR:
        return last.opposite()
    return last


def ma_crossover(s: Signals, rng: random.Random) -> Category:
    c = s.snapshot.aligned
    if c is None:
        return fallback("ma_crossover", rng)
    return c


STRATEGIES: dict[str, Callable[[Signals, random.Random], Category]] = {
    "pattern_break": pattern_break,
    "trend_reversal": trend_reversal,
    "volatility": volatility,
    "ma_crossover": ma_crossover,
}


def _accelerating(trend: list[int], m: int) -> bool:
    # per-step rate of the last 3 samples against the last 5
    short = trend[0] - trend[2]
    return short * m > 0 and abs(short) / 2 > abs(m) / 4


def smart(s: Signals, rng: random.Random) -> Category:
    snap = s.snapshot
    if s.top is not None and s.top.aligned(s.window):
        if rng.random() < CONTINUE_P:
            return s.top.continuation
    m = snap.momentum
    if snap.spread is not None and snap.spread > SPREAD_THR:
        return Category.LOW if m > 0 else Category.HIGH
    if m is not None and abs(m) > MOMENTUM_THR:
        rising = m > 0
        if not _accelerating(s.trend, m):
            rising = not rising
        return Category.HIGH if rising else Category.LOW
    if snap.aligned is not None:
        return snap.aligned
    if snap.weighted is None:
        return fallback("smart", rng)
    return Category.HIGH if snap.weighted >= 5 else Category.LOW


def vote(s: Signals, rng: random.Random) -> dict[str, Category]:
    return {name: fn(s, rng) for name, fn in STRATEGIES.items()}


def defensive(s: Signals, rng: random.Random, votes: Optional[dict[str, Category]] = None) -> Category:
    votes = votes if votes is not None else vote(s, rng)
    winner, n = Counter(votes.values()).most_common(1)[0]
    if n / len(votes) >= MAJORITY:
        return winner
    last = s.last
    if last is None:
        return fallback("defensive", rng)
    if s.snapshot.volatility > TIEBREAK_VOL:
        return last
    return last.opposite()


def select_regime(loss_streak: int, threshold: int = 2) -> str:
    return DEFENSIVE if loss_streak >= threshold else SMART


COMBINERS = {SMART: smart, DEFENSIVE: defensive}
