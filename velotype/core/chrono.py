# velotype/core/chrono.py
from __future__ import annotations
from typing import Callable, List, Optional

from PySide6.QtCore import QElapsedTimer, QObject, QTimer


class TickHandle:
    """A repeating callback registered with a scheduler."""

    def __init__(self, interval_ms: int, callback: Callable[[], None]):
        self.interval_ms = int(interval_ms)
        self.callback = callback
        self.active = True

    def cancel(self):
        self.active = False


class Scheduler:
    """Clock plus repeating ticks. All callbacks run on the caller's thread."""

    def now(self) -> float:
        raise NotImplementedError

    def every(self, interval_ms: int, callback: Callable[[], None]) -> TickHandle:
        raise NotImplementedError


# -------- Qt event loop --------
class _QtTickHandle(TickHandle):
    def __init__(self, interval_ms, callback, parent: QObject):
        super().__init__(interval_ms, callback)
        self._timer = QTimer(parent)
        self._timer.setInterval(self.interval_ms)
        self._timer.timeout.connect(self._fire)
        self._timer.start()

    def _fire(self):
        if self.active:
            self.callback()

    def cancel(self):
        super().cancel()
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.timeout.disconnect(self._fire)
        # detach from the scheduler so cancelled timers do not pile up
        self._timer.setParent(None)
        self._timer.deleteLater()
        self._timer = None


class QtScheduler(Scheduler):
    def __init__(self, parent: Optional[QObject] = None):
        self._owner = QObject(parent)
        self._t = QElapsedTimer()
        self._t.start()

    def now(self) -> float:
        return max(0.0, self._t.elapsed() / 1000.0)

    def every(self, interval_ms: int, callback: Callable[[], None]) -> TickHandle:
        return _QtTickHandle(interval_ms, callback, self._owner)


# -------- deterministic clock for tests and replays --------
class VirtualScheduler(Scheduler):
    """
    Virtual time in whole milliseconds. advance() fires every due tick in
    time order; ticks due at the same instant fire in registration order.
    """

    def __init__(self, start_ms: int = 0):
        self._now_ms = int(start_ms)
        self._entries: List[List] = []  # [next_due_ms, seq, handle]
        self._seq = 0

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def now(self) -> float:
        return self._now_ms / 1000.0

    def every(self, interval_ms: int, callback: Callable[[], None]) -> TickHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        handle = TickHandle(interval_ms, callback)
        self._entries.append([self._now_ms + handle.interval_ms, self._seq, handle])
        self._seq += 1
        return handle

    @property
    def handles(self) -> List[TickHandle]:
        return [e[2] for e in self._entries]

    def _next_due(self, until_ms: int) -> Optional[List]:
        due = [e for e in self._entries if e[2].active and e[0] <= until_ms]
        if not due:
            return None
        return min(due, key=lambda e: (e[0], e[1]))

    def advance_ms(self, ms: int):
        target = self._now_ms + int(ms)
        while True:
            entry = self._next_due(target)
            if entry is None:
                break
            self._now_ms = entry[0]
            entry[0] += entry[2].interval_ms
            entry[2].callback()
        self._entries = [e for e in self._entries if e[2].active]
        self._now_ms = target

    def advance(self, seconds: float):
        self.advance_ms(int(round(seconds * 1000)))
