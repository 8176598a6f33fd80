import random
from hilo.analytics.synth import synthesize
from hilo.core.labels import Category

def test_conservative_range_when_losing():
    rng = random.Random(1)
    vals = {synthesize(Category.HIGH, [], 2, rng) for _ in range(200)}
    assert vals <= {6, 7, 8}
    vals = {synthesize(Category.LOW, [], 3, rng) for _ in range(200)}
    assert vals <= {1, 2, 3}

def test_centered_and_clamped():
    rng = random.Random(2)
    assert {synthesize(Category.HIGH, [9] * 5, 0, rng) for _ in range(100)} <= {8, 9}
    assert {synthesize(Category.LOW, [9] * 5, 0, rng) for _ in range(100)} == {4}

def test_full_range_without_trend():
    rng = random.Random(3)
    vals = {synthesize(Category.LOW, [1, 2], 0, rng) for _ in range(300)}
    assert vals == {0, 1, 2, 3, 4}
