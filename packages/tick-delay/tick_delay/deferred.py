"""DeferredQueue — one-shot callback mailbox drained once per phase tick."""
from __future__ import annotations

import threading

from tick_delay.diagnostics import DiagnosticSink, StderrSink, emit
from tick_delay.types import (
    Callback,
    Phase,
    PhaseReport,
    SchedulerClosedError,
    invoke,
)


class DeferredQueue:
    """FIFO of callbacks to run on the next drain of ``phase``.

    ``enqueue`` may be called from any thread. ``drain`` belongs to the
    thread that drives the frame loop.
    """

    def __init__(self, phase: Phase, sink: DiagnosticSink | None = None) -> None:
        self.phase = phase
        self._sink: DiagnosticSink = sink if sink is not None else StderrSink()
        self._lock = threading.Lock()
        self._pending: list[Callback] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def enqueue(self, callback: Callback) -> None:
        """Raises SchedulerClosedError once the queue has been closed."""
        with self._lock:
            if self._closed:
                raise SchedulerClosedError(
                    f"next {self.phase.value} tick queue has been closed"
                )
            self._pending.append(callback)

    def pending(self) -> int:
        """Return the number of callbacks waiting for the next drain."""
        with self._lock:
            return len(self._pending)

    def clear(self) -> None:
        with self._lock:
            self._pending = []

    def close(self) -> None:
        """Drop pending callbacks and refuse new ones, atomically."""
        with self._lock:
            self._closed = True
            self._pending = []

    def drain(self) -> PhaseReport:
        """Invoke everything enqueued before this call, in enqueue order.

        Callbacks enqueued while draining run on the next drain. A raising
        callback is reported and the rest of the batch still runs.
        """
        with self._lock:
            batch = self._pending
            self._pending = []

        report = PhaseReport(self.phase)
        context = f"next {self.phase.value} tick"
        for callback in batch:
            report.invoked += 1
            failure = invoke(callback, context)
            if failure is not None:
                report.failures.append(failure)
                emit(self._sink, failure)
        return report
