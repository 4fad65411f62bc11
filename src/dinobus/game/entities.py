"""Plain data records for everything that lives in the play field.

Coordinates are top-left, in pixels. Entities are mutable and owned by the
world; the renderer only ever sees copies inside a snapshot.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Color = Tuple[int, int, int]


class ObstacleKind(Enum):
    ROCK = "rock"
    CONE = "cone"
    PEDESTRIAN = "pedestrian"


class CollectibleKind(Enum):
    GEM = "gem"


@dataclass
class Entity:
    """Base record: position, size and the lazy-removal flag."""

    x: float
    y: float
    width: float
    height: float
    marked_for_deletion: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"{type(self).__name__} needs a positive size, got {self.width}x{self.height}")

    def mark_for_deletion(self) -> None:
        """Flag for removal at the end of the current tick (one-way)."""
        self.marked_for_deletion = True


@dataclass
class Player(Entity):
    """The bus, or the dinosaur while transformed."""

    vy: float = 0.0
    grounded: bool = True
    transformed: bool = False
    transform_timer: int = 0


@dataclass
class Obstacle(Entity):
    kind: ObstacleKind = ObstacleKind.ROCK

    @property
    def is_pedestrian(self) -> bool:
        return self.kind is ObstacleKind.PEDESTRIAN


@dataclass
class Collectible(Entity):
    kind: CollectibleKind = CollectibleKind.GEM


@dataclass
class Particle(Entity):
    """Cosmetic spark; ``life`` runs from 1.0 down to 0."""

    vx: float = 0.0
    vy: float = 0.0
    color: Color = (255, 255, 255)
    life: float = 1.0
