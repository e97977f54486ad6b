import pytest

from game_engine import GameEngine
from session_store import MemorySessionStore


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemorySessionStore(clock=clock)


@pytest.fixture
def engine(store):
    return GameEngine(store)


@pytest.fixture
def started_game(engine):
    game_id = engine.start()['game']
    engine.join(game_id)
    return game_id
