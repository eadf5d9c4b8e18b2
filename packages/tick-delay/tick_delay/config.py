"""Scheduler configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchedulerConfig:
    """Immutable configuration for a scheduler and its host loop.

    Attributes:
        destroy_on_reload: Recreate the scheduler on ``FrameLoop.reload()``
            instead of keeping it (and its timers) alive. Read once, when the
            loop is built.
        verbose: Default sink prints tracebacks for callback failures when
            True; failures are discarded when False.
        fixed_tps: Fixed-rate phase ticks per second of scaled time.
        max_fixed_steps: Cap on fixed-rate ticks run in a single frame.
    """

    destroy_on_reload: bool = False
    verbose: bool = True
    fixed_tps: int = 50
    max_fixed_steps: int = 8
