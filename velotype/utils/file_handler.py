import json
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from velotype.app.config import Difficulty
from velotype.app.state import TestResult
from velotype.services.word_stream import RandomSource, WordProvider

WORD_LISTS: Dict[Difficulty, Sequence[str]] = {
    Difficulty.EASY: (
        "the", "be", "of", "and", "a", "to", "in", "he", "have", "it", "that", "for",
        "they", "with", "as", "not", "on", "she", "at", "by", "this", "we", "you", "do",
        "but", "from", "or", "which", "one", "would", "all", "will", "there", "say",
        "who", "make", "when", "can", "more", "if", "no", "man", "out", "other", "so",
        "what", "time", "up", "go", "about", "than", "into", "could", "state", "only",
    ),
    Difficulty.MEDIUM: (
        "people", "year", "take", "them", "some", "want", "how", "know", "think", "now",
        "world", "between", "school", "still", "never", "number", "little", "point",
        "change", "while", "follow", "around", "place", "group", "problem", "system",
        "program", "question", "during", "work", "play", "government", "night", "house",
        "early", "public", "present", "order", "under", "without", "course", "become",
        "general", "interest", "develop", "another", "should", "through", "example",
    ),
    Difficulty.HARD: (
        "accommodate", "particular", "environment", "necessary", "throughout",
        "relationship", "significant", "opportunity", "understanding", "performance",
        "experience", "knowledge", "successful", "individual", "technology",
        "available", "management", "especially", "responsibility", "organization",
        "international", "independent", "professional", "consequence", "temperature",
        "equipment", "atmosphere", "philosophy", "strategy", "investigation",
    ),
    Difficulty.EXPERT: (
        "idiosyncrasy", "onomatopoeia", "conscientious", "quintessential",
        "juxtaposition", "ubiquitous", "surreptitious", "perpendicular",
        "entrepreneurship", "acquiescence", "phenomenological", "bureaucratization",
        "pharmaceutical", "synchronization", "infrastructure", "characteristically",
        "counterintuitive", "incomprehensible", "parallelization", "miscellaneous",
    ),
}


class BuiltinWordProvider(WordProvider):
    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or RandomSource()

    def fetch(self, count: int, difficulty: Difficulty) -> List[str]:
        pool = WORD_LISTS[Difficulty(difficulty)]
        return [pool[self.rng.random_index(len(pool))] for _ in range(count)]


class FileWordProvider(WordProvider):
    """Words drawn from a whitespace separated list on disk; difficulty is ignored."""

    def __init__(self, path, rng: Optional[RandomSource] = None):
        self.path = Path(path)
        self.rng = rng or RandomSource()
        self._words: Optional[List[str]] = None

    def words(self) -> List[str]:
        if self._words is None:
            self._words = self.path.read_text(encoding="utf-8").split()
            if not self._words:
                raise ValueError(f"No words in {self.path}")
        return self._words

    def fetch(self, count: int, difficulty: Difficulty) -> List[str]:
        pool = self.words()
        return [pool[self.rng.random_index(len(pool))] for _ in range(count)]


def load_text(path) -> str:
    """Read a custom text file, normalizing line endings."""
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()


# -------- export --------
def format_result_text(result: TestResult) -> str:
    c = result.char_counts
    bar = "=" * 30
    lines = [
        "VeloType Results",
        bar,
        f"WPM: {result.wpm}",
        f"Accuracy: {result.accuracy_pct}%",
        f"Raw WPM: {result.raw_wpm}",
        f"Consistency: {result.consistency_pct}%",
        f"Characters: {c.correct}/{c.incorrect}/{c.extra}/{c.missed}",
        f"Time: {result.elapsed_seconds:.1f}s",
        f"Test Type: {result.test_descriptor}",
    ]
    if result.source:
        lines.append(f"Source: {result.source}")
    lines.append(bar)
    return "\n".join(lines)


def export_result(result: TestResult, path) -> Path:
    p = Path(path)
    if p.parent and not p.parent.exists():
        os.makedirs(p.parent, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2)
    return p
