# velotype/services/weakkeys.py
from collections import Counter
from typing import Dict, List, Optional, Tuple


class WeakKeys:
    """Per-key press and miss counts for the heatmap."""

    def __init__(self):
        self.total = Counter()
        self.errors = Counter()

    def note(self, ch: str, expected: Optional[str]):
        if not ch or ch.isspace():
            return
        key = ch.lower()
        self.total[key] += 1
        # typing past the end of a word is not a key miss
        if expected is not None and ch != expected:
            self.errors[key] += 1

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        return {k: {"total": n, "errors": self.errors.get(k, 0)} for k, n in self.total.items()}

    def ranked(self) -> List[Tuple[str, float, int, int]]:
        result = []
        for k, n in self.total.items():
            miss = self.errors.get(k, 0)
            result.append((k, miss / n, n - miss, miss))
        return sorted(result, key=lambda x: (-x[1], -(x[2] + x[3])))
