"""Termination signals -> process-wide cancellation flag."""

import signal
from typing import Optional

from logging_utils import log_event


TERM_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGTERM", "SIGQUIT", "SIGINT")
    if hasattr(signal, name)
)


class TerminationFlag:
    """
    One-way boolean, set from a signal handler and read by the quake loop.

    set() is a single attribute store and takes no lock, so it is safe to
    call from a handler that interrupts the reading thread.
    """

    def __init__(self) -> None:
        self.cancelled = False

    def set(self) -> None:
        self.cancelled = True

    def is_set(self) -> bool:
        return self.cancelled


class SignalRegistrationError(Exception):
    """Raised when a termination handler cannot be installed."""

    def __init__(self, signum: int, message: str) -> None:
        self.signum = signum
        super().__init__(message)


def register_termination_flag(flag: Optional[TerminationFlag] = None) -> TerminationFlag:
    """Install handlers so any termination signal sets `flag`. The flag is never cleared."""
    if flag is None:
        flag = TerminationFlag()

    def _on_signal(signum, frame):
        flag.cancelled = True

    for sig in TERM_SIGNALS:
        try:
            signal.signal(sig, _on_signal)
        except (ValueError, OSError) as e:
            name = signal.Signals(sig).name
            raise SignalRegistrationError(sig, f"Cannot handle {name}: {e}") from e

    log_event("DEBUG", "Signals", "Termination handlers installed",
              signals=",".join(signal.Signals(s).name for s in TERM_SIGNALS))
    return flag
