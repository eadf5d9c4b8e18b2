"""FrameLoop - reference host loop driving a DelayScheduler."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from tick_delay.clock import FrameClock, FrameTimes
from tick_delay.config import SchedulerConfig
from tick_delay.diagnostics import DiagnosticSink
from tick_delay.scheduler import DelayScheduler
from tick_delay.types import CallbackFailure, Phase, PhaseReport

FrameHook = Callable[[DelayScheduler, FrameTimes], None]


@dataclass(frozen=True)
class FrameReport:
    """Per-phase outcome of one frame."""

    times: FrameTimes
    fixed: PhaseReport
    variable: PhaseReport

    @property
    def invoked(self) -> int:
        return self.fixed.invoked + self.variable.invoked

    @property
    def failures(self) -> list[CallbackFailure]:
        return self.fixed.failures + self.variable.failures


class FrameLoop:
    """Runs the fixed-rate phase ``fixed_steps`` times per frame, then the
    variable-rate phase once, the way a game engine's Update/FixedUpdate
    pair does.
    """

    def __init__(
        self,
        config: SchedulerConfig | None = None,
        scheduler: DelayScheduler | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._config = config if config is not None else SchedulerConfig()
        self._destroy_on_reload = self._config.destroy_on_reload
        self._clock = FrameClock(self._config.fixed_tps, self._config.max_fixed_steps)
        self._scheduler = (
            scheduler if scheduler is not None else DelayScheduler(self._config, sink)
        )
        self._start_hooks: list[FrameHook] = []
        self._stop_hooks: list[FrameHook] = []
        self._stop_requested: bool = False
        self._last = FrameTimes(frame_number=0, dt=0.0, unscaled_dt=0.0, fixed_steps=0)

    @property
    def scheduler(self) -> DelayScheduler:
        return self._scheduler

    @property
    def clock(self) -> FrameClock:
        return self._clock

    @property
    def time_scale(self) -> float:
        return self._clock.time_scale

    @time_scale.setter
    def time_scale(self, value: float) -> None:
        self._clock.time_scale = value

    def on_start(self, hook: FrameHook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: FrameHook) -> None:
        self._stop_hooks.append(hook)

    def request_stop(self) -> None:
        self._stop_requested = True

    def frame(self, unscaled_dt: float) -> FrameReport:
        """Advance one frame of ``unscaled_dt`` real seconds.

        Every fixed step of the frame is merged into ``report.fixed``.
        """
        times = self._clock.begin_frame(unscaled_dt)
        self._last = times
        scheduler = self._scheduler
        fixed = PhaseReport(Phase.FIXED)
        for _ in range(times.fixed_steps):
            fixed.merge(scheduler.advance_phase(Phase.FIXED, self._clock.fixed_dt))
        variable = scheduler.advance_phase(Phase.VARIABLE, times.dt, times.unscaled_dt)
        return FrameReport(times=times, fixed=fixed, variable=variable)

    def run(self, n: int, dt: float) -> None:
        """Run ``n`` frames of ``dt`` seconds each, without pacing."""
        self._stop_requested = False
        self._fire(self._start_hooks)
        for _ in range(n):
            self.frame(dt)
            if self._stop_requested:
                break
        self._fire(self._stop_hooks)

    def run_forever(self, frame_rate: int = 60) -> None:
        """Run paced frames on wall-clock time until ``request_stop()``."""
        if frame_rate <= 0:
            raise ValueError("frame_rate must be positive")
        self._stop_requested = False
        self._fire(self._start_hooks)

        budget = 1.0 / frame_rate
        last = time.monotonic()
        while not self._stop_requested:
            start = time.monotonic()
            self.frame(start - last)
            last = start
            if self._stop_requested:
                break
            sleep_time = budget - (time.monotonic() - start)
            if sleep_time > 0:
                time.sleep(sleep_time)

        self._fire(self._stop_hooks)

    def reload(self) -> DelayScheduler:
        """Simulate a host-environment reload.

        With ``destroy_on_reload`` the scheduler is shut down and replaced,
        dropping its timers and queued callbacks; the replacement keeps the
        old scheduler's config and sink. Otherwise it survives.
        """
        if self._destroy_on_reload:
            old = self._scheduler
            old.shutdown()
            self._scheduler = DelayScheduler(old.config, old.sink)
        return self._scheduler

    def shutdown(self) -> None:
        self._scheduler.shutdown()

    def _fire(self, hooks: list[FrameHook]) -> None:
        for hook in hooks:
            hook(self._scheduler, self._last)
