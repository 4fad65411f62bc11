"""Fixed-timestep accumulator."""

import pytest

from dinobus.game.clock import SimulationClock


def test_one_tick_per_step():
    clock = SimulationClock(tick_rate=60)
    assert clock.advance(1 / 60) == 1


def test_accumulates_partial_frames():
    clock = SimulationClock(tick_rate=60)
    # 144 Hz display: ticks come out on some frames only
    ticks = sum(clock.advance(1 / 144) for _ in range(144))
    assert ticks in (59, 60)


def test_slow_display_runs_several_ticks():
    clock = SimulationClock(tick_rate=60)
    assert clock.advance(1 / 30 + 1e-6) == 2


def test_long_stall_is_capped():
    clock = SimulationClock(tick_rate=60, max_steps=5)
    assert clock.advance(10.0) == 5
    # Backlog is gone, the next frame starts from scratch
    assert clock.advance(1 / 60) == 1


def test_negative_delta_counts_as_zero():
    clock = SimulationClock()
    assert clock.advance(-1.0) == 0


def test_coupled_mode_is_one_tick_per_frame():
    clock = SimulationClock(fixed_timestep=False)
    assert [clock.advance(d) for d in (0.0, 0.5, 1 / 144)] == [1, 1, 1]


def test_leftover_time_carries_to_next_frame():
    clock = SimulationClock(tick_rate=60)
    assert clock.advance(0.01) == 0
    assert clock.advance(0.01) == 1


def test_rejects_bad_tick_rate():
    with pytest.raises(ValueError):
        SimulationClock(tick_rate=0)
