"""Spawn timing and placement."""

import random

import pytest

from dinobus.game.entities import CollectibleKind, ObstacleKind
from dinobus.game.spawner import Spawner, spawn_interval
from dinobus.game.tuning import DEFAULT_TUNING

GROUND = 300.0


class FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def test_interval_at_start_speed():
    assert spawn_interval(120, 5.0) == 120
    assert spawn_interval(300, 5.0) == 300


def test_interval_shrinks_with_speed():
    assert spawn_interval(120, 8.0) == 75
    assert spawn_interval(120, 5.5) == 109


@pytest.mark.parametrize("speed", [600.0, 1e6, 1e12])
def test_interval_never_below_minimum(speed):
    assert spawn_interval(120, speed) == 1
    assert spawn_interval(120, speed, minimum=4) == 4


def test_interval_with_non_positive_speed():
    assert spawn_interval(120, 0.0) == 120


def test_obstacle_spawns_on_interval():
    spawner = Spawner(DEFAULT_TUNING, FixedRandom(0.9))

    assert spawner.spawn(119, 5.0, 800, GROUND).obstacles == []
    batch = spawner.spawn(120, 5.0, 800, GROUND)

    assert len(batch.obstacles) == 1
    rock = batch.obstacles[0]
    assert rock.kind is ObstacleKind.ROCK
    assert (rock.x, rock.y) == (800, GROUND - 40)
    assert (rock.width, rock.height) == (40, 40)


def test_low_roll_spawns_cone():
    spawner = Spawner(DEFAULT_TUNING, FixedRandom(0.5))
    batch = spawner.spawn(120, 5.0, 800, GROUND)
    assert batch.obstacles[0].kind is ObstacleKind.CONE


def test_pedestrian_spawn():
    spawner = Spawner(DEFAULT_TUNING, FixedRandom(0.1))
    batch = spawner.spawn(300, 5.0, 640, GROUND)

    person = batch.obstacles[0]
    assert person.is_pedestrian
    assert (person.width, person.height) == (30, 50)
    assert person.y == GROUND - 50


def test_shared_tick_spawns_both_obstacles():
    spawner = Spawner(DEFAULT_TUNING, FixedRandom(0.9))
    batch = spawner.spawn(600, 5.0, 800, GROUND)
    kinds = [o.kind for o in batch.obstacles]
    assert kinds == [ObstacleKind.ROCK, ObstacleKind.PEDESTRIAN]


def test_gem_interval_ignores_speed():
    spawner = Spawner(DEFAULT_TUNING, FixedRandom(0.9))
    assert spawner.spawn(180, 20.0, 800, GROUND).collectibles
    assert not spawner.spawn(90, 10.0, 800, GROUND).collectibles


@pytest.mark.parametrize("roll,offset", [(0.9, 120), (0.2, 40)])
def test_gem_height(roll, offset):
    spawner = Spawner(DEFAULT_TUNING, FixedRandom(roll))
    gem = spawner.spawn(180, 5.0, 800, GROUND).collectibles[0]
    assert gem.kind is CollectibleKind.GEM
    assert gem.y == GROUND - offset
    assert (gem.width, gem.height) == (40, 40)
