# velotype/main.py
from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional

from PySide6.QtCore import QCoreApplication, QTimer

from velotype.app.config import Difficulty, TestConfiguration, TestMode
from velotype.core.chrono import QtScheduler
from velotype.services.test_controller import TestController
from velotype.services.word_stream import RandomSource, WordStreamGenerator
from velotype.utils.db_helper import DB_PATH, SqliteStore
from velotype.utils.file_handler import BuiltinWordProvider, load_text


def setup_logging(level=logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler("velotype.log", encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.error("Unhandled exception", exc_info=(exctype, value, tb))
        sys.exit(1)

    sys.excepthook = excepthook


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="velotype",
        description="Replay a perfect typist through the scoring engine and print the result record.",
    )
    p.add_argument("--mode", choices=[m.value for m in TestMode], default=TestMode.TIME.value)
    p.add_argument("--value", type=int, default=15, help="seconds (time) or word count (words)")
    p.add_argument("--punctuation", action="store_true")
    p.add_argument("--numbers", action="store_true")
    p.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=Difficulty.MEDIUM.value)
    p.add_argument("--text-file", help="text for fixed-text mode")
    p.add_argument("--cps", type=float, default=6.0, help="characters per second")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--db", default=DB_PATH, help="sqlite file for personal bests and history")
    p.add_argument("--verbose", action="store_true")
    return p


def config_from_args(args) -> TestConfiguration:
    common = dict(
        punctuation=args.punctuation,
        numbers=args.numbers,
        difficulty=Difficulty(args.difficulty),
    )
    if args.mode == TestMode.FIXED_TEXT.value:
        if not args.text_file:
            raise SystemExit("--text-file is required for fixed-text mode")
        return TestConfiguration.from_text(load_text(args.text_file), source=args.text_file, **common)
    return TestConfiguration(mode=TestMode(args.mode), mode_value=args.value, **common)


class Replayer:
    """Feeds the controller one correct character per timer tick."""

    def __init__(self, controller: TestController, cps: float):
        self.controller = controller
        self._timer = QTimer()
        self._timer.setInterval(max(1, int(1000 / cps)))
        self._timer.timeout.connect(self.step)
        controller.finished.connect(lambda _result: self._timer.stop())

    def start(self):
        self._timer.start()

    def next_char(self) -> Optional[str]:
        c = self.controller
        target = c.tracker.target if c.tracker else c.stream.word_at(0)
        if target is None:
            return None
        buf = c.buffer
        return target[len(buf)] if len(buf) < len(target) else " "

    def step(self):
        ch = self.next_char()
        if ch is None:
            self._timer.stop()
            return
        self.controller.on_input(self.controller.buffer + ch)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("VeloType")

    rng = RandomSource(args.seed)
    controller = TestController(
        config_from_args(args),
        QtScheduler(),
        generator=WordStreamGenerator(BuiltinWordProvider(rng), rng),
        store=SqliteStore(args.db),
    )

    def on_finished(result):
        print(json.dumps(result.to_dict(), indent=2))
        app.quit()

    controller.finished.connect(on_finished)
    replayer = Replayer(controller, args.cps)
    replayer.start()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
