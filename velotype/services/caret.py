# velotype/services/caret.py
from velotype.app.config import TestConfiguration
from velotype.app.state import CaretPosition
from velotype.services.word_stream import WordStream, WordStreamGenerator


class CaretNavigator:
    def __init__(self, stream: WordStream, generator: WordStreamGenerator, config: TestConfiguration):
        self.stream = stream
        self.generator = generator
        self.config = config
        self.position = CaretPosition()

    @property
    def at_end(self) -> bool:
        return self.stream.is_exhausted(self.position.word_index)

    def advance(self):
        self.position.word_index += 1
        self.position.letter_index = 0
        self.generator.ensure_buffer(self.stream, self.config, self.position.word_index)

    def retreat(self, letter_index: int):
        if self.position.word_index <= 0:
            return
        self.position.word_index -= 1
        self.position.letter_index = letter_index

    def sync(self, buffer: str):
        self.position.letter_index = len(buffer)

    def backspace(self, tracker, ctrl: bool = False) -> bool:
        """
        Handle a backspace press before the host edits its buffer.
        Returns True when the press was consumed here.
        """
        if not tracker.buffer and self.position.word_index > 0:
            return tracker.undo() is not None
        if ctrl:
            tracker.clear_word()
            return True
        return False
