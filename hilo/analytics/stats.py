"""Prediction statistics and the confidence score."""
from dataclasses import dataclass
from typing import Iterable, Optional

from hilo.analytics.patterns import PatternMatch, longest_run
from hilo.analytics.trend import alignment
from hilo.core.labels import Category

W_VOLATILITY = 0.4
W_PATTERN = 0.3
W_ALIGNMENT = 0.3


@dataclass
class PredictionStats:
    total: int = 0
    correct: int = 0
    accuracy: float = 0.0
    high_count: int = 0
    low_count: int = 0
    streak: int = 0
    high_wins: int = 0
    low_wins: int = 0
    total_wins: int = 0
    distribution: Optional[int] = None
    confidence: int = 0


def confidence_score(volatility: float, top: Optional[PatternMatch], mas) -> int:
    vol_score = max(0.0, 100 - volatility * 20)
    pattern_score = (1 / top.count) * 50 if top is not None and top.count > 0 else 100.0
    align_score = 100.0 if alignment(mas) is not None else 50.0
    score = vol_score * W_VOLATILITY + pattern_score * W_PATTERN + align_score * W_ALIGNMENT
    return int(min(max(round(score), 0), 100))


def calculate_stats(history: Iterable, total_predictions: Optional[int] = None,
                    volatility: float = 0.0, top: Optional[PatternMatch] = None,
                    mas=(None, None, None)) -> PredictionStats:
    """Stats over prediction records in emission order (oldest first)."""
    rows = list(history)
    resolved = [r for r in rows if r.resolved]
    pending = [r for r in rows if not r.resolved]
    wins = [r for r in resolved if r.correct]
    correct = len(wins)
    return PredictionStats(
        total=total_predictions if total_predictions is not None else len(rows),
        correct=correct,
        accuracy=(correct / len(resolved) * 100) if resolved else 0.0,
        high_count=sum(1 for r in pending if r.predicted is Category.HIGH),
        low_count=sum(1 for r in pending if r.predicted is Category.LOW),
        streak=longest_run(r.actual.code for r in resolved),
        high_wins=sum(1 for r in wins if r.predicted is Category.HIGH),
        low_wins=sum(1 for r in wins if r.predicted is Category.LOW),
        total_wins=correct,
        distribution=rows[-1].synthetic_value if rows else None,
        confidence=confidence_score(volatility, top, mas),
    )
