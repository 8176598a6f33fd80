from dataclasses import dataclass
from typing import Iterable, Optional

from hilo.core.labels import Category, from_code

MIN_LEN = 2
MAX_LEN = 5


@dataclass(frozen=True)
class PatternMatch:
    pattern: str  # 'H'/'L' codes, newest-first like the window
    count: int
    last_index: int  # start of the last match found scanning left to right

    @property
    def categories(self) -> list[Category]:
        return [from_code(c) for c in self.pattern]

    @property
    def continuation(self) -> Category:
        return from_code(self.pattern[-1])

    def aligned(self, window: str) -> bool:
        """True when the window opens with every category of the pattern but the last."""
        k = len(self.pattern) - 1
        return len(window) >= k and window[:k] == self.pattern[:k]


def occurrences(window: str, pattern: str) -> tuple[int, int]:
    """Overlapping occurrence count and start index of the last one (-1 if none)."""
    count, last, pos = 0, -1, 0
    while True:
        i = window.find(pattern, pos)
        if i < 0:
            break
        count += 1
        last = i
        pos = i + 1
    return count, last


def find_patterns(window: str) -> list[PatternMatch]:
    """Ranked repeating subsequences of length 2..5 in an 'H'/'L' window.

    Ranking: occurrence count descending, then the start index of the last
    match of the scan, highest first. Patterns seen once are dropped.
    """
    seen = {}
    for L in range(MIN_LEN, MAX_LEN + 1):
        if len(window) < L:
            break
        for i in range(len(window) - L + 1):
            p = window[i:i+L]
            if p in seen:
                continue
            count, last = occurrences(window, p)
            seen[p] = PatternMatch(p, count, last)
    out = [m for m in seen.values() if m.count > 1]
    # sort is stable, so equal keys keep discovery order
    out.sort(key=lambda m: (-m.count, -m.last_index))
    return out


def top_pattern(window: str) -> Optional[PatternMatch]:
    matches = find_patterns(window)
    return matches[0] if matches else None


def runs(labels: Iterable[str], k: int = 3):
    labels = list(labels)
    out = []
    if not labels:
        return out
    cur = labels[0]
    start = 0
    for i in range(1, len(labels)):
        if labels[i] == cur:
            continue
        # close segment
        seg_len = i - start
        if seg_len >= k:
            out.append((start, i-1, cur, seg_len))
        cur = labels[i]
        start = i
    # tail
    seg_len = len(labels) - start
    if seg_len >= k:
        out.append((start, len(labels)-1, cur, seg_len))
    return out


def longest_run(labels: Iterable[str]) -> int:
    found = runs(labels, k=1)
    return max((r[3] for r in found), default=0)
