# velotype/services/word_stream.py
from __future__ import annotations
import logging
import random
from typing import List, Optional, Sequence

from velotype.app.config import Difficulty, TestConfiguration, TestMode

log = logging.getLogger(__name__)

PUNCTUATION_MARKS = (".", ",", "!", "?", ";", ":", "'", '"')
CAPITALIZE_BELOW = 0.15
PUNCTUATE_ABOVE = 0.7
NUMBER_RATIO = 0.1
NUMBER_LIMIT = 10000

MIN_TIME_WORDS = 200
TIME_WORDS_PER_SECOND = 5
GROW_MARGIN = 20
GROW_BATCH = 100


class RandomSource:
    """draw() in [0, 1) and random_index(n) in [0, n)."""

    def __init__(self, seed=None):
        self._rng = random.Random(seed)

    def draw(self) -> float:
        return self._rng.random()

    def random_index(self, n: int) -> int:
        return int(self.draw() * n)


class WordProvider:
    def fetch(self, count: int, difficulty: Difficulty) -> Sequence[str]:
        raise NotImplementedError


class WordStream:
    def __init__(self, words: Sequence[str] = (), growable: bool = False):
        self.words: List[str] = list(words)
        self.growable = growable

    def __len__(self):
        return len(self.words)

    def __getitem__(self, i):
        return self.words[i]

    def word_at(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.words):
            return self.words[index]
        return None

    def remaining(self, cursor: int) -> int:
        return max(0, len(self.words) - cursor)

    def is_exhausted(self, cursor: int) -> bool:
        return not self.growable and cursor >= len(self.words)


class WordStreamGenerator:
    def __init__(self, provider: WordProvider, rng: Optional[RandomSource] = None):
        self.provider = provider
        self.rng = rng or RandomSource()

    def generate(self, config: TestConfiguration) -> WordStream:
        if config.mode is TestMode.FIXED_TEXT:
            return WordStream(config.text, growable=False)

        if config.mode is TestMode.WORDS:
            count = config.mode_value
        else:
            count = max(MIN_TIME_WORDS, config.mode_value * TIME_WORDS_PER_SECOND)

        words = self._fetch(count, config.difficulty)
        if config.numbers:
            words = self.apply_numbers(words)
        if config.punctuation:
            words = self.apply_punctuation(words)
        log.debug("Generated %d words for %s", len(words), config.descriptor())
        return WordStream(words, growable=config.is_timed)

    def extend(self, stream: WordStream, config: TestConfiguration, n: int = GROW_BATCH) -> int:
        # the batch's last word gets the forced punctuation mark
        batch = self._fetch(n, config.difficulty)
        if config.punctuation:
            batch = self.apply_punctuation(batch)
        stream.words.extend(batch)
        log.debug("Stream grew by %d words to %d", len(batch), len(stream))
        return len(batch)

    def ensure_buffer(self, stream: WordStream, config: TestConfiguration, cursor: int) -> bool:
        if not stream.growable:
            return False
        if stream.remaining(cursor) > GROW_MARGIN:
            return False
        self.extend(stream, config)
        return True

    # -------- transforms --------
    def apply_punctuation(self, words: Sequence[str]) -> List[str]:
        out = []
        last = len(words) - 1
        for i, word in enumerate(words):
            # one draw decides both capitalization and the trailing mark
            draw = self.rng.draw()
            if draw < CAPITALIZE_BELOW:
                word = word[:1].upper() + word[1:]
            if draw > PUNCTUATE_ABOVE or i == last:
                word += PUNCTUATION_MARKS[self.rng.random_index(len(PUNCTUATION_MARKS))]
            out.append(word)
        return out

    def apply_numbers(self, words: Sequence[str]) -> List[str]:
        out = list(words)
        if not out:
            return out
        # positions may repeat, so fewer distinct words can change
        for _ in range(max(1, int(len(out) * NUMBER_RATIO))):
            pos = self.rng.random_index(len(out))
            out[pos] = str(self.rng.random_index(NUMBER_LIMIT))
        return out

    def _fetch(self, count: int, difficulty: Difficulty) -> List[str]:
        words = list(self.provider.fetch(count, difficulty))
        if len(words) < count:
            log.warning("Word provider returned %d of %d words", len(words), count)
        return words[:count]
