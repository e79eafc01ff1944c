import pytest

from connect4game.debug import debug, DebugLevel
from connect4game.game.rules import GameEngine


@pytest.fixture(autouse=True)
def reset_debug():
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")


@pytest.fixture
def engine():
    return GameEngine()
