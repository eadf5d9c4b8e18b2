"""Tests for FrameClock deltas, time scale, and fixed-step accumulation."""

import pytest
from tick_delay.clock import FrameClock, FrameTimes


def test_clock_initialization():
    """Clock starts at frame 0 with fixed_dt = 1 / fixed_tps."""
    clock = FrameClock(fixed_tps=50)
    assert clock.fixed_tps == 50
    assert clock.frame_number == 0
    assert clock.time_scale == 1.0
    assert abs(clock.fixed_dt - 0.02) < 1e-9


@pytest.mark.parametrize("kwargs", [{"fixed_tps": 0}, {"max_fixed_steps": 0}])
def test_clock_rejects_non_positive_settings(kwargs):
    with pytest.raises(ValueError):
        FrameClock(**kwargs)


def test_begin_frame_increments_frame_number():
    clock = FrameClock(fixed_tps=4)
    assert clock.begin_frame(0.25).frame_number == 1
    assert clock.begin_frame(0.25).frame_number == 2
    assert clock.frame_number == 2


def test_begin_frame_rejects_negative_delta():
    clock = FrameClock()
    with pytest.raises(ValueError):
        clock.begin_frame(-0.1)


def test_fixed_steps_accumulate_across_frames():
    """Frames shorter than a fixed step carry their time forward."""
    clock = FrameClock(fixed_tps=4)  # 0.25s steps
    steps = [clock.begin_frame(0.125).fixed_steps for _ in range(6)]
    assert steps == [0, 1, 0, 1, 0, 1]


def test_long_frame_runs_several_fixed_steps():
    clock = FrameClock(fixed_tps=4)
    times = clock.begin_frame(1.0)
    assert times.fixed_steps == 4


def test_fixed_steps_capped():
    """A stalled frame runs at most max_fixed_steps and drops the backlog."""
    clock = FrameClock(fixed_tps=4, max_fixed_steps=3)
    assert clock.begin_frame(10.0).fixed_steps == 3
    assert clock.begin_frame(0.125).fixed_steps == 0


def test_time_scale_scales_dt_and_fixed_steps():
    clock = FrameClock(fixed_tps=4)
    clock.time_scale = 0.5
    times = clock.begin_frame(1.0)
    assert times.dt == 0.5
    assert times.unscaled_dt == 1.0
    assert times.fixed_steps == 2
    assert clock.elapsed == 0.5
    assert clock.unscaled_elapsed == 1.0


def test_zero_time_scale_halts_fixed_phase():
    clock = FrameClock(fixed_tps=4)
    clock.time_scale = 0.0
    times = clock.begin_frame(1.0)
    assert times.dt == 0.0
    assert times.fixed_steps == 0
    assert clock.unscaled_elapsed == 1.0


def test_negative_time_scale_rejected():
    clock = FrameClock()
    with pytest.raises(ValueError):
        clock.time_scale = -1.0


def test_reset_resets_counters():
    """reset() zeroes frame number, elapsed time, and the accumulator."""
    clock = FrameClock(fixed_tps=4)
    clock.begin_frame(0.125)
    clock.begin_frame(0.5)
    clock.reset()
    assert clock.frame_number == 0
    assert clock.elapsed == 0.0
    assert clock.unscaled_elapsed == 0.0
    assert clock.begin_frame(0.125).fixed_steps == 0


def test_frame_times_frozen():
    times = FrameTimes(frame_number=1, dt=0.1, unscaled_dt=0.1, fixed_steps=0)
    with pytest.raises(AttributeError):
        times.dt = 0.2  # type: ignore[misc]
