"""FrameClock — per-frame deltas, time scale, and fixed-step accumulation."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FrameTimes:
    frame_number: int
    dt: float  # scaled by time_scale
    unscaled_dt: float
    fixed_steps: int


class FrameClock:
    def __init__(self, fixed_tps: int = 50, max_fixed_steps: int = 8) -> None:
        if fixed_tps <= 0:
            raise ValueError("fixed_tps must be positive")
        if max_fixed_steps <= 0:
            raise ValueError("max_fixed_steps must be positive")
        self._fixed_tps = fixed_tps
        self._fixed_dt = 1.0 / fixed_tps
        self._max_fixed_steps = max_fixed_steps
        self._time_scale = 1.0
        self._frame_number = 0
        self._elapsed = 0.0
        self._unscaled_elapsed = 0.0
        self._accumulated = 0.0

    @property
    def fixed_tps(self) -> int:
        return self._fixed_tps

    @property
    def fixed_dt(self) -> float:
        return self._fixed_dt

    @property
    def frame_number(self) -> int:
        return self._frame_number

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def unscaled_elapsed(self) -> float:
        return self._unscaled_elapsed

    @property
    def time_scale(self) -> float:
        return self._time_scale

    @time_scale.setter
    def time_scale(self, value: float) -> None:
        if value < 0:
            raise ValueError("time_scale must be >= 0")
        self._time_scale = value

    def begin_frame(self, unscaled_dt: float) -> FrameTimes:
        """Account for one rendered frame of ``unscaled_dt`` real seconds.

        Fixed steps accumulate scaled time, so a zero time scale halts the
        fixed-rate phase. Steps beyond ``max_fixed_steps`` are dropped.
        """
        if unscaled_dt < 0:
            raise ValueError("unscaled_dt must be >= 0")
        dt = unscaled_dt * self._time_scale
        self._frame_number += 1
        self._elapsed += dt
        self._unscaled_elapsed += unscaled_dt

        self._accumulated += dt
        steps = int(self._accumulated // self._fixed_dt)
        if steps > self._max_fixed_steps:
            steps = self._max_fixed_steps
            self._accumulated = 0.0
        else:
            self._accumulated -= steps * self._fixed_dt

        return FrameTimes(
            frame_number=self._frame_number,
            dt=dt,
            unscaled_dt=unscaled_dt,
            fixed_steps=steps,
        )

    def reset(self) -> None:
        self._frame_number = 0
        self._elapsed = 0.0
        self._unscaled_elapsed = 0.0
        self._accumulated = 0.0
