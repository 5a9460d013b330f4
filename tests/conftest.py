import numpy as np
import pytest

from countgame.config import Config
from countgame.credits import MILLIS_PER_DAY
from countgame.generator import ItemGenerator
from countgame.repository import InMemoryGameRepository
from countgame.scheduler import ManualScheduler
from countgame.session import SessionStateMachine


class TestConfig(Config):
    ARENA_WIDTH = 400.0
    ARENA_HEIGHT = 600.0
    ITEM_FOOTPRINT = 50.0
    BASE_ITEM_SIZE = 48.0
    VELOCITY_SCALE = 100.0
    DAILY_CREDIT_AMOUNT = 10
    GAME_COST = 1
    INITIAL_LIVES = 3
    COUNTDOWN_PERIOD_SEC = 1.0
    MOTION_PERIOD_SEC = 0.016


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture()
def config():
    return TestConfig


@pytest.fixture()
def clock():
    # Noon on day 20000 after the epoch
    return FakeClock(20000 * MILLIS_PER_DAY + MILLIS_PER_DAY // 2)


@pytest.fixture()
def generator(config):
    return ItemGenerator(rng=np.random.default_rng(1234), config=config)


@pytest.fixture()
def repository(config, clock):
    return InMemoryGameRepository(config=config, clock=clock)


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def machine(repository, generator, scheduler, config):
    state_machine = SessionStateMachine(repository, generator=generator, scheduler=scheduler, config=config)
    yield state_machine
    state_machine.close()
