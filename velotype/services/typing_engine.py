# velotype/services/typing_engine.py
from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from velotype.app.state import CharCounts, LetterState, TestSession, WordAttempt
from velotype.services.word_stream import WordStream

log = logging.getLogger(__name__)

DELIMITER = " "


def classify(typed: str, target: str) -> List[LetterState]:
    """Per-position states over max(len(typed), len(target))."""
    out = []
    for i in range(max(len(typed), len(target))):
        if i < len(typed) and i < len(target):
            out.append(LetterState.CORRECT if typed[i] == target[i] else LetterState.INCORRECT)
        elif i >= len(target):
            out.append(LetterState.EXTRA)
        else:
            out.append(LetterState.MISSED)
    return out


def count_chars(typed: str, target: str) -> CharCounts:
    counts = CharCounts()
    for state in classify(typed, target):
        if state is LetterState.CORRECT:
            counts.correct += 1
        elif state is LetterState.INCORRECT:
            counts.incorrect += 1
        elif state is LetterState.EXTRA:
            counts.extra += 1
        else:
            counts.missed += 1
    return counts


class InputDiffTracker:
    """
    Compares the in-progress buffer with the active word and commits
    finished words into the session's cumulative counters.
    """

    def __init__(self, session: TestSession, stream: WordStream, navigator):
        self.session = session
        self.stream = stream
        self.navigator = navigator
        self.buffer = ""

    @property
    def word_index(self) -> int:
        return self.navigator.position.word_index

    @property
    def target(self) -> Optional[str]:
        return self.stream.word_at(self.word_index)

    # -------- live view of the active word --------
    def live_states(self) -> List[LetterState]:
        target = self.target
        if target is None or not self.buffer:
            return []
        # missed only applies once a word is committed
        return classify(self.buffer, target)[: len(self.buffer)]

    def live_counts(self) -> CharCounts:
        target = self.target
        if target is None or not self.buffer:
            return CharCounts()
        counts = count_chars(self.buffer, target)
        counts.missed = 0
        return counts

    # -------- input --------
    def on_buffer_change(self, buffer: str) -> List[Tuple[int, WordAttempt]]:
        """
        Apply a raw buffer mutation. Every complete segment before a
        delimiter is committed in order; the trailing remainder stays
        as the in-progress word. Returns the committed (index, attempt) pairs.
        """
        committed = []
        if DELIMITER in buffer:
            parts = buffer.split(DELIMITER)
            buffer = parts.pop()
            for part in parts:
                if not part:
                    continue
                index = self.word_index
                attempt = self.finalize(part)
                if attempt is None:
                    break
                committed.append((index, attempt))
                self.navigator.advance()
        self.buffer = buffer
        self.navigator.sync(buffer)
        return committed

    def finalize(self, typed: str) -> Optional[WordAttempt]:
        target = self.target
        if target is None:
            return None
        counts = count_chars(typed, target)
        attempt = WordAttempt(target, typed, counts)
        s = self.session
        s.counts = s.counts + counts
        # the delimiter counts as one correct character
        s.counts.correct += 1
        s.total_keystrokes += attempt.keystrokes
        s.attempts.append(attempt)
        self.buffer = ""
        log.debug("Finalized word %d %r -> %r: %s", self.word_index, target, typed, counts)
        return attempt

    def undo(self) -> Optional[WordAttempt]:
        if self.word_index <= 0 or not self.session.attempts:
            return None
        attempt = self.session.attempts.pop()
        s = self.session
        s.counts = s.counts - attempt.counts
        s.counts.correct -= 1
        s.total_keystrokes -= attempt.keystrokes
        self.navigator.retreat(len(attempt.typed))
        self.buffer = attempt.typed
        log.debug("Reopened word %d with %r", self.word_index, attempt.typed)
        return attempt

    def clear_word(self):
        self.buffer = ""
        self.navigator.sync(self.buffer)
