"""tick-delay - Delayed, repeating, and next-tick callbacks for a frame loop."""
from __future__ import annotations

from tick_delay.clock import FrameClock, FrameTimes
from tick_delay.config import SchedulerConfig
from tick_delay.deferred import DeferredQueue
from tick_delay.diagnostics import (
    CollectingSink,
    DiagnosticSink,
    StderrSink,
    silent_sink,
)
from tick_delay.loop import FrameLoop, FrameReport
from tick_delay.registry import TimerRegistry
from tick_delay.scheduler import DelayScheduler
from tick_delay.types import (
    CallbackFailure,
    Phase,
    PhaseReport,
    SchedulerClosedError,
    Timer,
    invoke,
)

__all__ = [
    "CallbackFailure",
    "CollectingSink",
    "DeferredQueue",
    "DelayScheduler",
    "DiagnosticSink",
    "FrameClock",
    "FrameLoop",
    "FrameReport",
    "FrameTimes",
    "Phase",
    "PhaseReport",
    "SchedulerClosedError",
    "SchedulerConfig",
    "StderrSink",
    "Timer",
    "TimerRegistry",
    "invoke",
    "silent_sink",
]
