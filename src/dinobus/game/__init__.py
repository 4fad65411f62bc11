"""Simulation core: entities, spawning, physics and collisions."""

from dinobus.game.clock import SimulationClock
from dinobus.game.effects import Cue, StepResult
from dinobus.game.entities import (
    Collectible,
    CollectibleKind,
    Entity,
    Obstacle,
    ObstacleKind,
    Particle,
    Player,
)
from dinobus.game.geometry import overlaps
from dinobus.game.spawner import Spawner, spawn_interval
from dinobus.game.tuning import DEFAULT_TUNING, Tuning
from dinobus.game.world import World, WorldSnapshot

__all__ = [
    "SimulationClock",
    "Cue",
    "StepResult",
    "Collectible",
    "CollectibleKind",
    "Entity",
    "Obstacle",
    "ObstacleKind",
    "Particle",
    "Player",
    "overlaps",
    "Spawner",
    "spawn_interval",
    "DEFAULT_TUNING",
    "Tuning",
    "World",
    "WorldSnapshot",
]
