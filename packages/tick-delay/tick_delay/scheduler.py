"""DelayScheduler — timers plus the two next-tick queues behind one object."""
from __future__ import annotations

from tick_delay.config import SchedulerConfig
from tick_delay.deferred import DeferredQueue
from tick_delay.diagnostics import DiagnosticSink, StderrSink, silent_sink
from tick_delay.registry import TimerRegistry
from tick_delay.types import (
    Callback,
    Phase,
    PhaseReport,
    Timer,
)


def default_sink(config: SchedulerConfig) -> DiagnosticSink:
    """Sink chosen by ``config.verbose``."""
    if config.verbose:
        return StderrSink(verbose=True)
    return silent_sink


class DelayScheduler:
    """Delayed and next-tick callbacks driven by a host frame loop.

    The host constructs one and passes it to whoever schedules work. Each
    frame it calls ``advance_phase(Phase.FIXED, dt)`` per fixed tick and
    ``advance_phase(Phase.VARIABLE, dt)`` once.
    """

    def __init__(
        self,
        config: SchedulerConfig | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self.config: SchedulerConfig = config if config is not None else SchedulerConfig()
        self._sink: DiagnosticSink = sink if sink is not None else default_sink(self.config)
        self._timers = TimerRegistry(self._sink)
        self._next_update = DeferredQueue(Phase.VARIABLE, self._sink)
        self._next_fixed_update = DeferredQueue(Phase.FIXED, self._sink)
        self._closed = False

    @property
    def timers(self) -> TimerRegistry:
        return self._timers

    @property
    def sink(self) -> DiagnosticSink:
        return self._sink

    @property
    def closed(self) -> bool:
        return self._closed

    def queue(self, phase: Phase) -> DeferredQueue:
        """Return the next-tick queue drained on ``phase``."""
        if phase is Phase.FIXED:
            return self._next_fixed_update
        return self._next_update

    # --- Caller API ---

    def start(
        self,
        callback: Callback,
        delay: float,
        repeat_count: int = 1,
        use_unscaled_time: bool = False,
    ) -> Timer:
        """Run ``callback`` after ``delay`` seconds, ``repeat_count`` times.

        Pass ``repeat_count=0`` to repeat until stopped. Returns the handle
        used to stop, restart, reset, pause, or resume the timer.
        """
        return self._timers.start(callback, delay, repeat_count, use_unscaled_time)

    def stop(self, timer: Timer | None) -> bool:
        return self._timers.stop(timer)

    def restart(self, timer: Timer | None) -> bool:
        return self._timers.restart(timer)

    def reset(self, timer: Timer) -> None:
        self._timers.reset(timer)

    def pause(self, timer: Timer) -> None:
        self._timers.pause(timer)

    def resume(self, timer: Timer) -> None:
        self._timers.resume(timer)

    def next_update(self, callback: Callback) -> None:
        """Run ``callback`` at the next variable-rate tick. Thread-safe.

        Raises SchedulerClosedError after ``shutdown()``.
        """
        self._next_update.enqueue(callback)

    def next_fixed_update(self, callback: Callback) -> None:
        """Run ``callback`` at the next fixed-rate tick. Thread-safe.

        Raises SchedulerClosedError after ``shutdown()``.
        """
        self._next_fixed_update.enqueue(callback)

    # --- Host API ---

    def advance_phase(
        self, phase: Phase, dt: float, unscaled_dt: float | None = None
    ) -> PhaseReport:
        if phase is Phase.FIXED:
            return self.drain_fixed()
        return self.advance_variable(dt, unscaled_dt)

    def advance_variable(
        self, dt: float, unscaled_dt: float | None = None
    ) -> PhaseReport:
        """Drain the variable-rate queue, then count timers down by ``dt``.

        Timers flagged ``use_unscaled_time`` use ``unscaled_dt`` when given.
        """
        report = self._next_update.drain()
        report.merge(self._timers.advance(dt, unscaled_dt))
        return report

    def drain_fixed(self) -> PhaseReport:
        return self._next_fixed_update.drain()

    def shutdown(self) -> None:
        """Stop all timers, drop queued callbacks, and refuse new work."""
        self._closed = True
        self._timers.close()
        self._next_update.close()
        self._next_fixed_update.close()
