"""
Clock source used by time-based claim checks.
"""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Callable

__all__ = ["Clock", "FixedClock", "wall_clock_epoch"]


def wall_clock_epoch() -> int:
    """Current UTC time as whole epoch seconds."""
    return int(time.time())


class Clock:
    """Yields the current epoch and the skew-adjusted comparison boundaries.

    *get_current_time* is any zero-argument callable returning epoch
    seconds; it defaults to the wall clock.
    """

    def __init__(self, get_current_time: Callable[[], int] | None = None) -> None:
        self._get_current_time = get_current_time or wall_clock_epoch

    def now(self) -> int:
        return int(self._get_current_time())

    def expiration_epoch(self, clock_skew: timedelta = timedelta(0)) -> int:
        """``now + skew``; a token whose ``exp`` is at or before this is expired."""
        return self.now() + int(clock_skew.total_seconds())

    def not_before_epoch(self, clock_skew: timedelta = timedelta(0)) -> int:
        """``now - skew``; a token whose ``nbf`` is after this is not yet valid."""
        return self.now() - int(clock_skew.total_seconds())


class FixedClock(Clock):
    """A clock frozen at *epoch*."""

    def __init__(self, epoch: int) -> None:
        self.epoch = int(epoch)
        super().__init__(lambda: self.epoch)

    def __repr__(self) -> str:
        return f"FixedClock({self.epoch})"
