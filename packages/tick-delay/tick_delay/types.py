"""Timer handle, phase tags, and callback results for tick-delay."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from tick_delay.registry import TimerRegistry

Callback = Callable[[], None]


class Phase(enum.Enum):
    """Periodic points in the host frame loop."""

    VARIABLE = "variable"  # once per rendered frame, delta varies
    FIXED = "fixed"  # fixed simulation cadence


class SchedulerClosedError(RuntimeError):
    """Raised when scheduling work on a scheduler that has been shut down."""


@dataclass(eq=False)
class Timer:
    """A delayed, possibly repeating callback tracked by a TimerRegistry.

    ``times_run`` counts callback invocations and is never reset, not even
    by ``restart()``. ``repeat_count == 0`` repeats until stopped.
    """

    callback: Callback
    interval: float
    remaining: float
    repeat_count: int = 1
    use_unscaled_time: bool = False
    paused: bool = False
    _times_run: int = field(default=0, init=False, repr=False)
    _stopped: bool = field(default=False, init=False, repr=False)
    _exhausted: bool = field(default=False, init=False, repr=False)
    _registry: TimerRegistry | None = field(default=None, init=False, repr=False)
    _admitted: int = field(default=0, init=False, repr=False)  # pass number at insertion

    @property
    def times_run(self) -> int:
        return self._times_run

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def exhausted(self) -> bool:
        """True once a finite timer has fired its last time."""
        return self._exhausted

    def stop(self) -> bool:
        """Remove from the registry. Only ``restart()`` brings it back."""
        if self._registry is None:
            return False
        return self._registry.stop(self)

    def restart(self) -> bool:
        """Re-add a stopped timer with a fresh countdown."""
        if self._registry is None:
            return False
        return self._registry.restart(self)

    def reset(self) -> None:
        self.remaining = self.interval
        self._exhausted = False

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False


@dataclass(frozen=True)
class CallbackFailure:
    """A callback raised during invocation. Never propagated to the host."""

    context: str
    error: Exception
    timer: Timer | None = None


@dataclass
class PhaseReport:
    """Outcome of one advance or drain pass."""

    phase: Phase
    invoked: int = 0
    failures: list[CallbackFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def merge(self, other: PhaseReport) -> None:
        self.invoked += other.invoked
        self.failures.extend(other.failures)


def invoke(
    callback: Callback, context: str, timer: Timer | None = None
) -> CallbackFailure | None:
    """Run ``callback``; return None on success or the captured failure."""
    try:
        callback()
    except Exception as exc:
        return CallbackFailure(context=context, error=exc, timer=timer)
    return None
