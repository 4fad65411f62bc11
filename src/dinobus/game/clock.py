"""Simulation clock: turns wall-clock frame time into whole ticks."""

import logging

logger = logging.getLogger(__name__)


class SimulationClock:
    """Decides how many simulation ticks to run for a rendered frame.

    Physics constants are per tick and assume ``tick_rate`` ticks per
    second. In fixed-timestep mode the clock accumulates frame time and
    releases whole ticks, so the game plays at the same pace on 30, 60 or
    144 Hz displays. With ``fixed_timestep=False`` every frame runs exactly
    one tick, which ties game speed to the display rate.
    """

    MAX_FRAME_TIME = 0.25  # Seconds; longer stalls (window drag, debugger) are dropped

    def __init__(self, tick_rate: int = 60, max_steps: int = 5, fixed_timestep: bool = True):
        if tick_rate <= 0:
            raise ValueError("tick_rate must be positive")
        self.tick_rate = tick_rate
        self.step = 1.0 / tick_rate
        self.max_steps = max(1, max_steps)
        self.fixed_timestep = fixed_timestep
        self._accumulator = 0.0

    def advance(self, delta_seconds: float) -> int:
        """Account for ``delta_seconds`` of wall time.

        Args:
            delta_seconds: Time since the previous frame

        Returns:
            Number of ticks to simulate this frame
        """
        if not self.fixed_timestep:
            return 1

        delta = min(max(0.0, delta_seconds), self.MAX_FRAME_TIME)
        self._accumulator += delta

        ticks = 0
        while self._accumulator >= self.step and ticks < self.max_steps:
            self._accumulator -= self.step
            ticks += 1

        if ticks == self.max_steps and self._accumulator >= self.step:
            # Falling behind: drop the backlog instead of spiralling
            logger.debug(f"Clock dropped {self._accumulator:.3f}s of backlog")
            self._accumulator = 0.0

        return ticks
