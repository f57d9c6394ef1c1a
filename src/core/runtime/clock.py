"""
clock.py
--------
Monotonic time sources used for wall-clock timers.
"""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Monotonic seconds, not necessarily zero-based."""

    @abstractmethod
    def now(self) -> float:
        pass


class SystemClock(Clock):
    """High resolution platform clock."""

    def now(self) -> float:
        return time.perf_counter()


class ManualClock(Clock):
    """Clock driven by hand. Used for replays and tests."""

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, value: float):
        """Jump to an absolute time. Going backwards is not allowed."""
        if value < self._now:
            raise ValueError(f"ManualClock cannot go backwards ({value} < {self._now})")
        self._now = float(value)

    def advance(self, dt: float):
        """Move forward by dt seconds."""
        self.set(self._now + dt)
