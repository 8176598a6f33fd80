"""Engine records and results."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from hilo.core.labels import Category


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PredictionRecord:
    id: int
    predicted: Category
    synthetic_value: int
    period_id: Optional[str] = None
    regime: str = "smart"
    created_at: datetime = field(default_factory=utcnow)
    resolved: bool = False
    actual: Optional[Category] = None
    actual_sample: Optional[int] = None
    resolved_at: Optional[datetime] = None

    @property
    def correct(self) -> Optional[bool]:
        if not self.resolved:
            return None
        return self.predicted is self.actual


@dataclass
class EngineMetrics:
    loss_streak: int = 0
    total_predictions: int = 0
    volatility_index: float = 0.0
    moving_averages: tuple = (None, None, None)
    resets: int = 0


@dataclass(frozen=True)
class PredictionOutcome:
    predicted: Category
    synthetic_value: int
    period_id: Optional[str]
    regime: str
    record_id: int


class Duplicate:
    """Returned when the newest period id was already processed."""

    def __repr__(self):
        return "DUPLICATE"

    def __bool__(self):
        return False


DUPLICATE = Duplicate()
