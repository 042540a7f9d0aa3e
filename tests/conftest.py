import pytest

from velotype.app.config import TestConfiguration as Config, TestMode as Mode
from velotype.core.chrono import VirtualScheduler
from velotype.services.test_controller import TestController as Controller
from velotype.services.word_stream import WordStreamGenerator
from velotype.utils.db_helper import MemoryStore

from tests.helpers import ListProvider, ScriptedRandom


@pytest.fixture
def scheduler():
    return VirtualScheduler()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def make_controller(scheduler, store):
    def _make(mode=Mode.WORDS, value=3, words=("abc", "def", "ghi"), **kwargs):
        if mode is Mode.FIXED_TEXT:
            config = Config.from_text(" ".join(words), **kwargs)
        else:
            config = Config(mode=mode, mode_value=value, **kwargs)
        generator = WordStreamGenerator(ListProvider(words), ScriptedRandom())
        return Controller(config, scheduler, generator=generator, store=store)

    return _make
