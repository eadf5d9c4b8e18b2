"""TimerRegistry — countdown, firing, and membership of delayed callbacks."""
from __future__ import annotations

from tick_delay.diagnostics import DiagnosticSink, StderrSink, emit
from tick_delay.types import (
    Callback,
    Phase,
    PhaseReport,
    SchedulerClosedError,
    Timer,
    invoke,
)


class TimerRegistry:
    """Ordered collection of active timers, advanced once per variable phase.

    Not thread-safe: call it from the thread that drives the frame loop and
    marshal work from other threads through a DeferredQueue.
    """

    def __init__(self, sink: DiagnosticSink | None = None) -> None:
        self._timers: list[Timer] = []
        self._sink: DiagnosticSink = sink if sink is not None else StderrSink()
        self._pass = 0
        self._closed = False

    # --- Membership ---

    def start(
        self,
        callback: Callback,
        interval: float,
        repeat_count: int = 1,
        use_unscaled_time: bool = False,
    ) -> Timer:
        """Schedule ``callback`` after ``interval`` seconds.

        ``repeat_count=0`` repeats until stopped. No validation: an interval
        of zero or less fires on the next advance.
        """
        if self._closed:
            raise SchedulerClosedError("timer registry has been closed")
        timer = Timer(
            callback=callback,
            interval=interval,
            remaining=interval,
            repeat_count=repeat_count,
            use_unscaled_time=use_unscaled_time,
        )
        timer._registry = self
        self._insert(timer)
        return timer

    def stop(self, timer: Timer | None) -> bool:
        """Remove ``timer``. Returns False if nothing was removed."""
        if timer is None or timer.stopped or timer._registry is not self:
            return False
        return self._remove(timer)

    def restart(self, timer: Timer | None) -> bool:
        """Re-add a stopped timer with ``remaining`` reset to ``interval``.

        Active timers cannot be restarted; use ``reset()`` for those.
        """
        if timer is None or not timer.stopped or timer._registry is not self:
            return False
        if self._closed:
            return False
        timer.reset()
        timer.paused = False
        timer._stopped = False
        self._insert(timer)
        return True

    def reset(self, timer: Timer) -> None:
        timer.reset()

    def pause(self, timer: Timer) -> None:
        timer.pause()

    def resume(self, timer: Timer) -> None:
        timer.resume()

    def clear(self) -> None:
        """Stop every registered timer."""
        for timer in list(self._timers):
            self._remove(timer)

    def close(self) -> None:
        """Stop every timer and refuse new ones. Restart returns False."""
        self._closed = True
        self.clear()

    def _insert(self, timer: Timer) -> None:
        timer._admitted = self._pass
        self._timers.append(timer)

    def _remove(self, timer: Timer) -> bool:
        try:
            self._timers.remove(timer)
        except ValueError:
            return False
        timer._stopped = True
        return True

    # --- Queries ---

    def timers(self) -> list[Timer]:
        """Registered timers in insertion order."""
        return list(self._timers)

    def __len__(self) -> int:
        return len(self._timers)

    def __contains__(self, timer: object) -> bool:
        return any(t is timer for t in self._timers)

    # --- Advance ---

    def advance(self, dt: float, unscaled_dt: float | None = None) -> PhaseReport:
        """Count every active timer down and fire those that elapsed.

        Works on a snapshot taken at pass start, newest timer first. Timers
        stopped by a callback are skipped when reached; timers started or
        restarted by a callback wait for the next pass.
        """
        self._pass += 1
        current = self._pass
        report = PhaseReport(Phase.VARIABLE)

        for timer in reversed(self._timers[:]):
            if timer.stopped or timer._admitted == current:
                continue
            if timer.paused or timer.exhausted:
                continue

            if timer.use_unscaled_time and unscaled_dt is not None:
                timer.remaining -= unscaled_dt
            else:
                timer.remaining -= dt
            if timer.remaining > 0:
                continue

            timer._times_run += 1
            if timer.repeat_count == 0 or timer._times_run < timer.repeat_count:
                timer.remaining += timer.interval
            else:
                timer.remaining = 0
                timer._exhausted = True

            report.invoked += 1
            failure = invoke(timer.callback, "timer", timer)
            if failure is not None:
                # One bad firing ends the series.
                self._remove(timer)
                report.failures.append(failure)
                emit(self._sink, failure)

        return report
