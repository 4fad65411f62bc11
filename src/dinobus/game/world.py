"""Physics and collision engine.

The world advances everything in the play field by one tick per call to
``step``. Collisions never end the run: the bus keeps driving, obstacles
break, and the player only gets visual and score feedback.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from dinobus.game.effects import Cue, StepResult
from dinobus.game.entities import Collectible, Color, Obstacle, Particle, Player
from dinobus.game.geometry import overlaps, right_edge
from dinobus.game.spawner import Spawner
from dinobus.game.tuning import DEFAULT_TUNING, Tuning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorldSnapshot:
    """Read-only copy of the world handed to the renderer after a tick."""

    player: Player
    obstacles: Tuple[Obstacle, ...]
    collectibles: Tuple[Collectible, ...]
    particles: Tuple[Particle, ...]
    tick: int
    speed: float
    effective_speed: float
    width: float
    height: float
    ground_line: float
    transform_warning: int


class World:
    """Owns the player and all dynamic entities of one session."""

    def __init__(
        self,
        width: float,
        height: float,
        tuning: Tuning = DEFAULT_TUNING,
        spawner: Optional[Spawner] = None,
        rng: Optional[random.Random] = None,
    ):
        self.tuning = tuning
        self.width = float(width)
        self.height = float(height)
        self._rng = rng or random.Random()
        self.spawner = spawner or Spawner(tuning, self._rng)

        self.player = self._new_player()
        self.obstacles: List[Obstacle] = []
        self.collectibles: List[Collectible] = []
        self.particles: List[Particle] = []
        self.tick = 0
        self.speed = tuning.start_speed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def ground_line(self) -> float:
        return self.height - self.tuning.ground_height

    @property
    def effective_speed(self) -> float:
        bonus = self.tuning.transformed_speed_bonus if self.player.transformed else 0.0
        return self.speed + bonus

    def _new_player(self) -> Player:
        t = self.tuning
        return Player(
            x=t.player_x,
            y=self.ground_line - t.bus_height,
            width=t.bus_width,
            height=t.bus_height,
            vy=0.0,
            grounded=True,
        )

    def reset(self) -> None:
        """Start over with a grounded bus and an empty field."""
        self.player = self._new_player()
        self.obstacles = []
        self.collectibles = []
        self.particles = []
        self.tick = 0
        self.speed = self.tuning.start_speed
        logger.debug("World reset")

    def resize(self, width: float, height: float) -> None:
        """Track a new viewport size, keeping the player above the ground."""
        self.width = float(width)
        self.height = float(height)
        if self.player.y > self.ground_line:
            self.player.y = self.ground_line - self.player.height
        logger.debug(f"World resized to {self.width:.0f}x{self.height:.0f}")

    # ------------------------------------------------------------------
    # Player control
    # ------------------------------------------------------------------

    def jump(self) -> bool:
        """Launch the player if grounded. Airborne requests are ignored."""
        player = self.player
        if not player.grounded:
            return False
        player.vy = self.tuning.jump_velocity
        player.grounded = False
        return True

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def step(self, jump_requested: bool = False) -> StepResult:
        """Advance the simulation by one tick."""
        t = self.tuning
        player = self.player
        cues: List[Cue] = []
        score = 0
        transform_started = False
        transform_ended = False

        if jump_requested and self.jump():
            cues.append(Cue.JUMP)

        # Vertical motion and ground contact
        player.vy += t.gravity
        player.y += player.vy
        rest_y = self.ground_line - player.height
        if player.y >= rest_y:
            player.y = rest_y
            player.vy = 0.0
            player.grounded = True
        else:
            player.grounded = False

        # Transformation countdown
        if player.transformed:
            player.transform_timer -= 1
            if player.transform_timer <= 0:
                self._revert_player()
                transform_ended = True

        self.tick += 1
        self.speed += t.speed_increment
        speed = self.effective_speed

        batch = self.spawner.spawn(self.tick, speed, self.width, self.ground_line)
        self.obstacles.extend(batch.obstacles)
        self.collectibles.extend(batch.collectibles)

        for entity in (*self.obstacles, *self.collectibles):
            entity.x -= speed
            if right_edge(entity) < 0:
                entity.mark_for_deletion()

        for obstacle in self.obstacles:
            if obstacle.marked_for_deletion or not overlaps(player, obstacle, t.hit_padding):
                continue
            score += self._resolve_obstacle(obstacle, cues)

        for gem in self.collectibles:
            if gem.marked_for_deletion or not overlaps(player, gem, t.hit_padding):
                continue
            gem.mark_for_deletion()
            score += t.gem_reward
            if not player.transformed:
                self._transform_player()
                transform_started = True
                cues.append(Cue.ROAR)
            else:
                cues.append(Cue.COLLECT)
            player.transform_timer = t.transform_duration
            self._burst(gem.x, gem.y, t.gem_color, t.gem_particles)

        for particle in self.particles:
            particle.x += particle.vx
            particle.y += particle.vy
            particle.life -= t.particle_decay
            if particle.life <= 0:
                particle.mark_for_deletion()

        self.obstacles = [o for o in self.obstacles if not o.marked_for_deletion]
        self.collectibles = [c for c in self.collectibles if not c.marked_for_deletion]
        self.particles = [p for p in self.particles if not p.marked_for_deletion]

        if self.tick % t.distance_every == 0:
            score += t.distance_reward

        return StepResult(
            cues=tuple(cues),
            score_delta=score,
            transform_started=transform_started,
            transform_ended=transform_ended,
        )

    def _resolve_obstacle(self, obstacle: Obstacle, cues: List[Cue]) -> int:
        """Apply the collision outcome for one obstacle; returns score gained."""
        t = self.tuning
        obstacle.mark_for_deletion()
        powered = self.player.transformed

        if obstacle.is_pedestrian:
            if powered:
                cues.append(Cue.EAT)
                self._burst(obstacle.x, obstacle.y, t.eat_color, t.eat_particles)
                return t.eat_reward
            cues.append(Cue.HONK)
            self._burst(obstacle.x, obstacle.y, t.honk_color, t.honk_particles)
            return 0

        cues.append(Cue.CRASH)
        if powered:
            self._burst(obstacle.x, obstacle.y, t.smash_color, t.smash_particles)
            return t.smash_reward
        self._burst(obstacle.x, obstacle.y, t.crash_color, t.crash_particles)
        return 0

    def _transform_player(self) -> None:
        t = self.tuning
        player = self.player
        player.transformed = True
        player.width = t.dino_width
        player.height = t.dino_height
        player.y -= t.dino_height - t.bus_height
        logger.debug(f"Transformed at tick {self.tick}")

    def _revert_player(self) -> None:
        t = self.tuning
        player = self.player
        player.transformed = False
        player.transform_timer = 0
        player.width = t.bus_width
        player.height = t.bus_height
        player.y = self.ground_line - t.bus_height
        logger.debug(f"Transformation ended at tick {self.tick}")

    def _burst(self, x: float, y: float, color: Color, count: int) -> None:
        t = self.tuning
        spread = t.particle_spread
        for _ in range(count):
            self.particles.append(Particle(
                x=x,
                y=y,
                width=t.particle_size,
                height=t.particle_size,
                vx=(self._rng.random() - 0.5) * spread,
                vy=(self._rng.random() - 0.5) * spread,
                color=color,
                life=1.0,
            ))

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> WorldSnapshot:
        """Copy the current state for drawing."""
        return WorldSnapshot(
            player=replace(self.player),
            obstacles=tuple(replace(o) for o in self.obstacles),
            collectibles=tuple(replace(c) for c in self.collectibles),
            particles=tuple(replace(p) for p in self.particles),
            tick=self.tick,
            speed=self.speed,
            effective_speed=self.effective_speed,
            width=self.width,
            height=self.height,
            ground_line=self.ground_line,
            transform_warning=self.tuning.transform_warning,
        )
