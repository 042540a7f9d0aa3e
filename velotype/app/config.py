# velotype/app/config.py
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Tuple
import json

from velotype.app.errors import ConfigurationError


class TestMode(str, Enum):
    TIME = "time"
    WORDS = "words"
    FIXED_TEXT = "fixed-text"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


@dataclass(frozen=True)
class TestConfiguration:
    mode: TestMode = TestMode.TIME
    mode_value: int = 15
    punctuation: bool = False
    numbers: bool = False
    difficulty: Difficulty = Difficulty.MEDIUM
    text: Tuple[str, ...] = ()
    source: str = ""

    def __post_init__(self):
        if self.mode in (TestMode.TIME, TestMode.WORDS):
            if int(self.mode_value) <= 0:
                raise ConfigurationError(
                    f"{self.mode.value} mode needs a positive value, got {self.mode_value}"
                )
        elif not self.text:
            raise ConfigurationError("fixed-text mode needs at least one word")

    @classmethod
    def from_text(cls, text: str, source: str = "custom", **kwargs) -> "TestConfiguration":
        words = tuple((text or "").split())
        if not words:
            raise ConfigurationError("Text is empty")
        return cls(mode=TestMode.FIXED_TEXT, mode_value=0, text=words, source=source, **kwargs)

    @property
    def is_timed(self) -> bool:
        return self.mode is TestMode.TIME

    def with_changes(self, **changes) -> "TestConfiguration":
        return replace(self, **changes)

    def descriptor(self) -> str:
        out = self.mode.value
        if self.mode in (TestMode.TIME, TestMode.WORDS):
            out += f" {self.mode_value}"
        if self.punctuation:
            out += " punctuation"
        if self.numbers:
            out += " numbers"
        if self.difficulty is not Difficulty.MEDIUM:
            out += f" {self.difficulty.value}"
        return out

    def personal_best_key(self) -> str:
        return f"pb-{self.mode.value}-{self.mode_value}"


# -------- loading --------
def config_from_dict(d: Dict[str, Any]) -> TestConfiguration:
    """
    Build a configuration from the settings-file shape:
    {"mode": "time", "mode_value": 30, "punctuation": true, ...}
    Fixed-text settings carry the words under "text" (string or list).
    """
    if "mode" not in d:
        raise ConfigurationError("Missing config key: mode")
    try:
        mode = TestMode(d["mode"])
        difficulty = Difficulty(d.get("difficulty", Difficulty.MEDIUM.value))
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    if mode is TestMode.FIXED_TEXT:
        text = d.get("text", "")
        if isinstance(text, (list, tuple)):
            text = " ".join(str(w) for w in text)
        return TestConfiguration.from_text(
            str(text),
            source=str(d.get("source", "custom")),
            punctuation=bool(d.get("punctuation", False)),
            numbers=bool(d.get("numbers", False)),
            difficulty=difficulty,
        )

    if "mode_value" not in d:
        raise ConfigurationError("Missing config key: mode_value")
    try:
        mode_value = int(d["mode_value"])
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Bad mode_value: {d['mode_value']!r}") from e
    return TestConfiguration(
        mode=mode,
        mode_value=mode_value,
        punctuation=bool(d.get("punctuation", False)),
        numbers=bool(d.get("numbers", False)),
        difficulty=difficulty,
    )


def load_config(path) -> TestConfiguration:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read config {p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config {p} must hold a JSON object")
    return config_from_dict(data)
