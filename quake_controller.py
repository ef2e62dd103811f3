"""
mousequake - Quake Controller
Drives a trajectory on a fixed cadence until cancelled.

One tick = one displacement from the trajectory, one relative move, one wait.
The wait is split into short slices so a termination signal is noticed
quickly even with a long interval.
"""

import time
from dataclasses import dataclass
from typing import Callable

from logging_utils import log_event
from termination import TerminationFlag
from trajectory import Trajectory


SIGNAL_CHECK_INTERVAL_S = 0.5


@dataclass(frozen=True)
class QuakeOutcome:
    """Summary of a finished (cancelled) run"""
    ticks: int
    elapsed_s: float
    net_dx: float     # Sum of all deltas handed to the mouse
    net_dy: float


class QuakeController:
    """
    Owns the tick loop.

    `mouse` is any object with move_relative(dx, dy) that raises
    InjectionError on failure. The trajectory is only touched from the
    thread calling run(), so no locking is needed.
    """

    def __init__(self, mouse, poll_interval: float = SIGNAL_CHECK_INTERVAL_S,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.mouse = mouse
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

        self._ticks = 0
        self._net_dx = 0.0
        self._net_dy = 0.0
        self._started_at = 0.0

    def run(self, trajectory: Trajectory, interval: float, cancel_flag: TerminationFlag) -> QuakeOutcome:
        """Quake until cancel_flag is set. InjectionError from the mouse propagates unchanged."""
        if interval <= 0:
            raise ValueError("interval must be positive")

        self._ticks = 0
        self._net_dx = 0.0
        self._net_dy = 0.0
        self._started_at = self._clock()
        log_event("INFO", "Quaker", "Started",
                  trajectory=type(trajectory).__name__, interval_s=interval)

        try:
            while not cancel_flag.is_set():
                delta = trajectory.next_displacement()
                self.mouse.move_relative(delta.dx, delta.dy)
                self._ticks += 1
                self._net_dx += delta.dx
                self._net_dy += delta.dy
                log_event("DEBUG", "Quaker", "Tick", n=self._ticks,
                          dx=f"{delta.dx:.3f}", dy=f"{delta.dy:.3f}")

                self._wait(interval, cancel_flag)
        except Exception as e:
            log_event("ERROR", "Quaker", "Aborted", error=e)
            self._log_summary()
            raise

        outcome = self._log_summary()
        log_event("INFO", "Quaker", "Cancelled")
        return outcome

    def _wait(self, interval: float, cancel_flag: TerminationFlag) -> None:
        """Sleep up to `interval` in slices of at most poll_interval, stopping early once cancelled."""
        deadline = self._clock() + interval
        while not cancel_flag.is_set():
            remaining = deadline - self._clock()
            if remaining <= 0:
                return
            self._sleep(min(self.poll_interval, remaining))

    def _log_summary(self) -> QuakeOutcome:
        outcome = QuakeOutcome(
            ticks=self._ticks,
            elapsed_s=self._clock() - self._started_at,
            net_dx=self._net_dx,
            net_dy=self._net_dy,
        )
        log_event("INFO", "Quaker", "Session summary",
                  ticks=outcome.ticks,
                  elapsed_s=f"{outcome.elapsed_s:.1f}",
                  net_dx=f"{outcome.net_dx:.3f}",
                  net_dy=f"{outcome.net_dy:.3f}")
        return outcome
