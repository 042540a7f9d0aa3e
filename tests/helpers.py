"""Deterministic word sources and typing helpers shared by the test modules."""

from velotype.services.word_stream import RandomSource, WordProvider


class ScriptedRandom(RandomSource):
    """Returns the scripted draws in order, then `fallback` forever."""

    def __init__(self, draws=(), fallback=0.5):
        super().__init__(0)
        self.draws = list(draws)
        self.fallback = fallback

    def draw(self) -> float:
        if self.draws:
            return self.draws.pop(0)
        return self.fallback


class ListProvider(WordProvider):
    """Cycles through a fixed word list, continuing where the last fetch stopped."""

    def __init__(self, words):
        self.words = list(words)
        self.offset = 0

    def fetch(self, count, difficulty):
        out = [self.words[(self.offset + i) % len(self.words)] for i in range(count)]
        self.offset += count
        return out


def type_text(controller, text):
    """Type `text` one character at a time, the way a browser input would report it."""
    for ch in text:
        controller.on_input(controller.buffer + ch)
