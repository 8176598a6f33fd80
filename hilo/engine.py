"""The prediction engine: one instance owns all rolling state for a session."""
import itertools
import random
from typing import Iterable, Optional, Union

from hilo.analytics.patterns import PatternMatch, find_patterns
from hilo.analytics.stats import PredictionStats, calculate_stats
from hilo.analytics.strategies import COMBINERS, DEFENSIVE, Signals, select_regime, vote
from hilo.analytics.synth import synthesize
from hilo.analytics.trend import TrendSnapshot, analyze
from hilo.core.errors import PendingPredictionError
from hilo.core.labels import Category, classify
from hilo.core.log import get_logger
from hilo.core.state import RollingState
from hilo.core.types import DUPLICATE, Duplicate, EngineMetrics, PredictionOutcome, PredictionRecord, utcnow

logger = get_logger(__name__)


def next_period_id(period_id: Optional[str]) -> Optional[str]:
    """'20240101042' -> '20240101043'; zero padding kept, non-numeric ids give None."""
    if not period_id or not period_id.isdigit():
        return None
    return str(int(period_id) + 1).zfill(len(period_id))


class PredictionEngine:
    def __init__(self, pattern_window: int = 30, trend_window: int = 20,
                 defensive_streak: int = 2, rng: Optional[random.Random] = None,
                 seed: Optional[int] = None):
        self.rng = rng if rng is not None else random.Random(seed)
        self.defensive_streak = defensive_streak
        self.state = RollingState(pattern_window, trend_window)
        self.metrics = EngineMetrics()
        self.history: list[PredictionRecord] = []
        self.last_period_id: Optional[str] = None
        self.matches: list[PatternMatch] = []
        self.snapshot = TrendSnapshot()
        self._ids = itertools.count(1)

    @property
    def pending(self) -> Optional[PredictionRecord]:
        if self.history and not self.history[-1].resolved:
            return self.history[-1]
        return None

    @property
    def top(self) -> Optional[PatternMatch]:
        return self.matches[0] if self.matches else None

    @property
    def regime(self) -> str:
        return select_regime(self.metrics.loss_streak, self.defensive_streak)

    def submit_observations(self, samples: Iterable[int],
                            newest_period_id: Optional[str] = None) -> Union[PredictionOutcome, Duplicate]:
        """Run one poll cycle over newest-first samples.

        Resolves the pending prediction against samples[0], then issues the
        next one. A repeated newest_period_id is a no-op returning DUPLICATE.
        """
        samples = [int(s) for s in samples]
        if newest_period_id is not None and newest_period_id == self.last_period_id:
            logger.debug("duplicate poll ignored", period_id=newest_period_id)
            return DUPLICATE
        if not samples:
            raise ValueError("at least one sample is required")
        self.last_period_id = newest_period_id

        if self.pending is not None:
            self._resolve(self.pending, samples[0])
        if self.metrics.loss_streak >= self.defensive_streak:
            self.reset_analysis()

        self.state.ingest(samples)
        self._analyze()

        regime = self.regime
        signals = self.signals()
        if regime == DEFENSIVE:
            votes = vote(signals, self.rng)
            logger.debug("defensive votes", **{k: v.value for k, v in votes.items()})
            predicted = COMBINERS[DEFENSIVE](signals, self.rng, votes)
        else:
            predicted = COMBINERS[regime](signals, self.rng)
        value = synthesize(predicted, signals.trend, self.metrics.loss_streak, self.rng,
                           defensive_streak=self.defensive_streak)
        record = self.create_prediction(predicted, value, next_period_id(newest_period_id), regime)
        logger.info("prediction issued", id=record.id, prediction=predicted.value,
                    value=value, period_id=record.period_id, regime=regime)
        return PredictionOutcome(predicted, value, record.period_id, regime, record.id)

    def create_prediction(self, predicted: Category, value: int,
                          period_id: Optional[str] = None, regime: str = "smart") -> PredictionRecord:
        if self.pending is not None:
            raise PendingPredictionError(f"prediction {self.pending.id} is still pending")
        record = PredictionRecord(id=next(self._ids), predicted=predicted, synthetic_value=value,
                                  period_id=period_id, regime=regime)
        self.history.append(record)
        self.metrics.total_predictions += 1
        return record

    def _resolve(self, record: PredictionRecord, sample: int):
        record.actual = classify(sample)
        record.actual_sample = sample
        record.resolved = True
        record.resolved_at = utcnow()
        if record.correct:
            self.metrics.loss_streak = 0
        else:
            self.metrics.loss_streak += 1
        logger.info("prediction resolved", id=record.id, correct=record.correct,
                    actual=record.actual.value, loss_streak=self.metrics.loss_streak)

    def reset_analysis(self):
        """Drop windows and derived analysis; the loss streak survives."""
        self.state.reset()
        self.matches = []
        self.snapshot = TrendSnapshot()
        self.metrics.volatility_index = 0.0
        self.metrics.moving_averages = (None, None, None)
        self.metrics.resets += 1
        logger.warning("analysis reset", loss_streak=self.metrics.loss_streak)

    def _analyze(self):
        self.matches = find_patterns(self.state.codes)
        self.snapshot = analyze(list(self.state.trend))
        self.metrics.volatility_index = self.snapshot.volatility
        self.metrics.moving_averages = self.snapshot.moving_averages

    def signals(self) -> Signals:
        return Signals(window=self.state.codes, trend=list(self.state.trend),
                       snapshot=self.snapshot, top=self.top)

    def get_statistics(self, history: Optional[Iterable[PredictionRecord]] = None) -> PredictionStats:
        rows = self.history if history is None else history
        return calculate_stats(rows, total_predictions=self.metrics.total_predictions,
                               volatility=self.metrics.volatility_index, top=self.top,
                               mas=self.metrics.moving_averages)
