import random
from typing import Sequence

import numpy as np

from hilo.core.labels import Category, RANGES

# narrower, mid-range values used while the engine is on a losing run
CONSERVATIVE = {Category.HIGH: (6, 8), Category.LOW: (1, 3)}


def synthesize(category: Category, trend: Sequence[int], loss_streak: int,
               rng: random.Random, defensive_streak: int = 2) -> int:
    """A plausible sample value for a predicted category (display only)."""
    lo, hi = RANGES[category]
    if loss_streak >= defensive_streak:
        return rng.randint(*CONSERVATIVE[category])
    if len(trend) >= 5:
        center = int(round(float(np.mean(trend[:5])))) + rng.randint(-1, 1)
        return min(max(center, lo), hi)
    return rng.randint(lo, hi)
