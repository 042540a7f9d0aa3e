"""Tests for the replay entry point helpers."""

import pytest
from PySide6.QtCore import QCoreApplication

from velotype.app.config import Difficulty, TestMode as Mode
from velotype.app.state import Phase
from velotype.main import Replayer, build_parser, config_from_args


@pytest.fixture
def qapp():
    return QCoreApplication.instance() or QCoreApplication([])


class TestArgs:
    def test_defaults(self):
        config = config_from_args(build_parser().parse_args([]))
        assert config.mode is Mode.TIME
        assert config.mode_value == 15

    def test_words_with_options(self):
        args = build_parser().parse_args(
            ["--mode", "words", "--value", "25", "--punctuation", "--difficulty", "hard"]
        )
        config = config_from_args(args)
        assert config.descriptor() == "words 25 punctuation hard"
        assert config.difficulty is Difficulty.HARD

    def test_fixed_text_from_file(self, tmp_path):
        path = tmp_path / "quote.txt"
        path.write_text("stay hungry\nstay foolish\n", encoding="utf-8")
        args = build_parser().parse_args(["--mode", "fixed-text", "--text-file", str(path)])
        assert config_from_args(args).text == ("stay", "hungry", "stay", "foolish")

    def test_fixed_text_needs_file(self):
        args = build_parser().parse_args(["--mode", "fixed-text"])
        with pytest.raises(SystemExit):
            config_from_args(args)


class TestReplayer:
    def test_types_every_word_perfectly(self, qapp, make_controller, scheduler):
        c = make_controller()
        replayer = Replayer(c, cps=10)
        while c.phase is not Phase.FINISHED:
            replayer.step()
            scheduler.advance(0.1)
        assert c.result.char_counts.correct == 12
        assert c.result.accuracy_pct == 100
        assert replayer.next_char() is None
