from enum import Enum
import random


class Category(str, Enum):
    HIGH = "High"
    LOW = "Low"

    @property
    def code(self) -> str:
        return self.value[0]

    def opposite(self) -> "Category":
        return Category.LOW if self is Category.HIGH else Category.HIGH


# legal sample range per category, inclusive
RANGES = {Category.HIGH: (5, 9), Category.LOW: (0, 4)}


def classify(sample: int) -> Category:
    return Category.HIGH if sample >= 5 else Category.LOW


def from_code(c: str) -> Category:
    return Category.HIGH if c == "H" else Category.LOW


def encode(samples) -> str:
    """Samples -> 'H'/'L' string, same order."""
    return ''.join(classify(s).code for s in samples)


def random_category(rng: random.Random) -> Category:
    return rng.choice((Category.HIGH, Category.LOW))
