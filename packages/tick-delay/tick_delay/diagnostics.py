"""Diagnostic sinks for callback failures."""
from __future__ import annotations

import sys
import traceback
from typing import Callable

from tick_delay.types import CallbackFailure

DiagnosticSink = Callable[[CallbackFailure], None]


class StderrSink:
    """Print one line per failure to stderr, plus the traceback if verbose."""

    def __init__(self, verbose: bool = True) -> None:
        self.verbose = verbose

    def __call__(self, failure: CallbackFailure) -> None:
        print(
            f"tick-delay: {failure.context} callback error: {failure.error!r}",
            file=sys.stderr,
        )
        if self.verbose:
            traceback.print_exception(
                type(failure.error),
                failure.error,
                failure.error.__traceback__,
                file=sys.stderr,
            )


class CollectingSink:
    """Keep every reported failure in ``failures``."""

    def __init__(self) -> None:
        self.failures: list[CallbackFailure] = []

    def __call__(self, failure: CallbackFailure) -> None:
        self.failures.append(failure)

    def clear(self) -> None:
        self.failures.clear()


def silent_sink(failure: CallbackFailure) -> None:
    pass


def emit(sink: DiagnosticSink, failure: CallbackFailure) -> None:
    """Hand ``failure`` to ``sink``. A raising sink is printed and swallowed."""
    try:
        sink(failure)
    except Exception:
        print(
            f"tick-delay: diagnostic sink error: {sys.exc_info()[1]}",
            file=sys.stderr,
        )
