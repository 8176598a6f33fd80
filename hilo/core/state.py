from collections import deque
from typing import Iterable

from hilo.core.labels import encode


class RollingState:
    """Bounded newest-first sample windows for pattern and trend analysis."""

    def __init__(self, pattern_size: int = 30, trend_size: int = 20):
        self.pattern = deque(maxlen=pattern_size)
        self.trend = deque(maxlen=trend_size)

    def ingest(self, samples: Iterable[int]):
        """Replace both windows with the newest samples (input is newest-first)."""
        samples = list(samples)
        self.pattern.clear()
        self.pattern.extend(samples[:self.pattern.maxlen])
        self.trend.clear()
        self.trend.extend(samples[:self.trend.maxlen])

    def reset(self):
        self.pattern.clear()
        self.trend.clear()

    @property
    def codes(self) -> str:
        return encode(self.pattern)
