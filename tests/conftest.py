"""Shared fixtures for the DinoBus test suite."""

import random

import pytest

from dinobus.core.events import EventBus
from dinobus.game.spawner import SpawnBatch, Spawner
from dinobus.game.tuning import DEFAULT_TUNING
from dinobus.game.world import World
from dinobus.storage.highscore import HighScoreStore

WIDTH = 800
HEIGHT = 400


class QuietSpawner(Spawner):
    """Spawner that never creates anything, so tests place entities by hand."""

    def spawn(self, tick, effective_speed, field_width, ground_line):
        return SpawnBatch()


class FakeFacts:
    """Stand-in fact source with a scripted reply."""

    def __init__(self, reply="Dinos had feathers!", error=None):
        self.reply = reply
        self.error = error
        self.calls = 0

    async def generate_fact(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def world(rng):
    return World(WIDTH, HEIGHT, spawner=QuietSpawner(DEFAULT_TUNING, rng), rng=rng)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def store(tmp_path):
    return HighScoreStore(tmp_path / "scores" / "highscore.json")


@pytest.fixture
def facts():
    return FakeFacts()
