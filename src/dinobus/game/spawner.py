"""Procedural spawning of obstacles, pedestrians and gems."""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional

from dinobus.game.entities import Collectible, CollectibleKind, Obstacle, ObstacleKind
from dinobus.game.tuning import DEFAULT_TUNING, Tuning

logger = logging.getLogger(__name__)


def spawn_interval(base: int, effective_speed: float, reference: float = 5.0, minimum: int = 1) -> int:
    """Speed-scaled spawn interval in ticks.

    ``floor(base / (effective_speed / reference))``, never below ``minimum``.
    Speed grows without bound, so the raw value eventually hits zero; the
    clamp keeps the modulo well defined.
    """
    minimum = max(1, minimum)
    if effective_speed <= 0:
        return max(minimum, base)
    return max(minimum, math.floor(base / (effective_speed / reference)))


@dataclass
class SpawnBatch:
    """New entities created during one tick."""

    obstacles: List[Obstacle] = field(default_factory=list)
    collectibles: List[Collectible] = field(default_factory=list)


class Spawner:
    """Decides each tick whether new entities enter at the right edge."""

    def __init__(self, tuning: Tuning = DEFAULT_TUNING, rng: Optional[random.Random] = None):
        self.tuning = tuning
        self._rng = rng or random.Random()

    def obstacle_interval(self, effective_speed: float) -> int:
        t = self.tuning
        return spawn_interval(t.obstacle_interval, effective_speed, t.speed_reference, t.min_spawn_interval)

    def pedestrian_interval(self, effective_speed: float) -> int:
        t = self.tuning
        return spawn_interval(t.pedestrian_interval, effective_speed, t.speed_reference, t.min_spawn_interval)

    def spawn(self, tick: int, effective_speed: float, field_width: float, ground_line: float) -> SpawnBatch:
        """Create whatever is due on this tick.

        Args:
            tick: Tick counter, already advanced for this tick
            effective_speed: Scroll speed including any transform bonus
            field_width: Visible width; new entities start at this x
            ground_line: Y of the ground surface

        Returns:
            SpawnBatch with the new obstacles and collectibles
        """
        t = self.tuning
        batch = SpawnBatch()

        if tick % self.obstacle_interval(effective_speed) == 0:
            kind = ObstacleKind.ROCK if self._rng.random() > 0.5 else ObstacleKind.CONE
            batch.obstacles.append(Obstacle(
                x=field_width,
                y=ground_line - t.obstacle_size,
                width=t.obstacle_size,
                height=t.obstacle_size,
                kind=kind,
            ))

        if tick % self.pedestrian_interval(effective_speed) == 0:
            batch.obstacles.append(Obstacle(
                x=field_width,
                y=ground_line - t.pedestrian_height,
                width=t.pedestrian_width,
                height=t.pedestrian_height,
                kind=ObstacleKind.PEDESTRIAN,
            ))

        if tick % max(1, t.gem_interval) == 0:
            elevated = self._rng.random() > 0.5
            offset = t.gem_high_offset if elevated else t.gem_low_offset
            batch.collectibles.append(Collectible(
                x=field_width,
                y=ground_line - offset,
                width=t.gem_size,
                height=t.gem_size,
                kind=CollectibleKind.GEM,
            ))

        if batch.obstacles or batch.collectibles:
            logger.debug(
                f"Tick {tick}: spawned {len(batch.obstacles)} obstacles, "
                f"{len(batch.collectibles)} gems at speed {effective_speed:.3f}"
            )

        return batch
