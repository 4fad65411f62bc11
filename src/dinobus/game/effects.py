"""Side effects produced by a simulation step.

The world never talks to audio or storage. It reports what happened and the
session controller decides who needs to hear about it.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple


class Cue(Enum):
    """One-shot sound cues."""

    JUMP = auto()
    COLLECT = auto()
    CRASH = auto()
    ROAR = auto()
    HONK = auto()
    EAT = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class StepResult:
    """Outcome of a single tick."""

    cues: Tuple[Cue, ...] = ()
    score_delta: int = 0
    transform_started: bool = False
    transform_ended: bool = False


EMPTY_STEP = StepResult()
