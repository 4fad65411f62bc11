"""Simulation constants.

All values are per tick and assume 60 ticks per second. Distances are in
pixels, durations in ticks.
"""

from dataclasses import dataclass
from typing import Tuple

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Tuning:
    """Physics, spawning and scoring constants for one game."""

    # Physics
    gravity: float = 0.6
    jump_velocity: float = -12.0
    ground_height: float = 100.0  # Distance of the ground line from the bottom edge

    # Scroll speed
    start_speed: float = 5.0
    speed_increment: float = 0.001
    transformed_speed_bonus: float = 3.0
    speed_reference: float = 5.0  # Spawn intervals are scaled by speed / reference

    # Spawning (ticks)
    obstacle_interval: int = 120
    pedestrian_interval: int = 300
    gem_interval: int = 180
    min_spawn_interval: int = 1

    # Sizes
    player_x: float = 50.0
    bus_width: float = 60.0
    bus_height: float = 40.0
    dino_width: float = 60.0
    dino_height: float = 60.0
    obstacle_size: float = 40.0
    pedestrian_width: float = 30.0
    pedestrian_height: float = 50.0
    gem_size: float = 40.0
    gem_low_offset: float = 40.0    # Gem top sits this far above the ground line
    gem_high_offset: float = 120.0  # Elevated gem, needs a jump

    # Collisions
    hit_padding: float = 10.0

    # Transformation
    transform_duration: int = 600
    transform_warning: int = 120  # Dino starts flashing below this many ticks

    # Scoring
    smash_reward: int = 5
    eat_reward: int = 50
    gem_reward: int = 10
    distance_reward: int = 1
    distance_every: int = 10

    # Particles
    particle_size: float = 4.0
    particle_spread: float = 10.0
    particle_decay: float = 0.05
    crash_particles: int = 8
    smash_particles: int = 10
    honk_particles: int = 5
    eat_particles: int = 10
    gem_particles: int = 15
    crash_color: Color = (255, 165, 0)
    smash_color: Color = (136, 136, 136)
    honk_color: Color = (255, 255, 255)
    eat_color: Color = (255, 0, 0)
    gem_color: Color = (0, 255, 255)


DEFAULT_TUNING = Tuning()
