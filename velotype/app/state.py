from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class LetterState(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    EXTRA = "extra"
    MISSED = "missed"


class Phase(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass
class CharCounts:
    correct: int = 0
    incorrect: int = 0
    extra: int = 0
    missed: int = 0

    def __add__(self, other: "CharCounts") -> "CharCounts":
        return CharCounts(
            self.correct + other.correct,
            self.incorrect + other.incorrect,
            self.extra + other.extra,
            self.missed + other.missed,
        )

    def __sub__(self, other: "CharCounts") -> "CharCounts":
        return CharCounts(
            self.correct - other.correct,
            self.incorrect - other.incorrect,
            self.extra - other.extra,
            self.missed - other.missed,
        )

    @property
    def typed(self) -> int:
        """Characters actually typed: everything but missed."""
        return self.correct + self.incorrect + self.extra

    @property
    def errors(self) -> int:
        return self.incorrect + self.extra

    def total(self) -> int:
        return self.typed + self.missed

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class WordAttempt:
    target: str
    typed: str
    counts: CharCounts

    @property
    def keystrokes(self) -> int:
        # typed letters plus the delimiter
        return len(self.typed) + 1


@dataclass
class CaretPosition:
    word_index: int = 0
    letter_index: int = 0

    def as_tuple(self):
        return (self.word_index, self.letter_index)


@dataclass
class TestSession:
    start_time: float
    counts: CharCounts = field(default_factory=CharCounts)
    total_keystrokes: int = 0
    attempts: List[WordAttempt] = field(default_factory=list)
    wpm_history: List[float] = field(default_factory=list)
    raw_wpm_history: List[float] = field(default_factory=list)
    error_count_history: List[int] = field(default_factory=list)
    is_active: bool = True
    is_finished: bool = False
    elapsed: Optional[float] = None

    def elapsed_at(self, now: float) -> float:
        return max(0.0, now - self.start_time)


@dataclass(frozen=True)
class LiveStats:
    wpm: int
    accuracy: int
    progress: str


@dataclass
class TestResult:
    wpm: int
    raw_wpm: int
    accuracy_pct: int
    consistency_pct: int
    char_counts: CharCounts
    elapsed_seconds: float
    test_descriptor: str
    is_personal_best: bool
    wpm_history: List[float] = field(default_factory=list)
    raw_wpm_history: List[float] = field(default_factory=list)
    error_count_history: List[int] = field(default_factory=list)
    key_stats: Dict[str, Dict[str, int]] = field(default_factory=dict)
    source: str = ""

    def to_dict(self) -> dict:
        return {
            "wpm": self.wpm,
            "rawWpm": self.raw_wpm,
            "accuracyPct": self.accuracy_pct,
            "consistencyPct": self.consistency_pct,
            "charCounts": self.char_counts.as_dict(),
            "elapsedSeconds": self.elapsed_seconds,
            "testDescriptor": self.test_descriptor,
            "source": self.source,
            "isPersonalBest": self.is_personal_best,
            "wpmHistory": list(self.wpm_history),
            "rawWpmHistory": list(self.raw_wpm_history),
            "errorCountHistory": list(self.error_count_history),
            "keyStats": {k: dict(v) for k, v in self.key_stats.items()},
        }
