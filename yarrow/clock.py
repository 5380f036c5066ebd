"""
Clock sources for the yarrow engine.

The reseed policy and the shuffle utility both read wall-clock time. The
clock is injected so both can be driven deterministically:

- SystemClock: real time from time.time_ns()
- FixedClock: always reports the same instant
- ManualClock: starts at a given instant, advanced explicitly or by a fixed
  step on every read

Usage:
    from yarrow.clock import ManualClock

    clock = ManualClock.from_seconds(1_000)
    clock.advance(seconds=61)
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

from .errors import ClockUnavailableError

NANOS_PER_SECOND = 1_000_000_000


@runtime_checkable
class Clock(Protocol):
    """Anything that reports time since the Unix epoch."""

    def now_ns(self) -> int:
        ...

    def now_seconds(self) -> int:
        ...


class SystemClock:
    """Wall clock backed by time.time_ns()."""

    def now_ns(self) -> int:
        """
        Read nanoseconds since the Unix epoch.

        Raises:
            ClockUnavailableError: If the OS clock cannot be read or reports
                a time before the epoch.
        """
        try:
            value = time.time_ns()
        except OSError as exc:
            raise ClockUnavailableError(f"system clock read failed: {exc}") from exc
        if value < 0:
            raise ClockUnavailableError(f"system clock reports a pre-epoch time: {value}ns")
        return value

    def now_seconds(self) -> int:
        return self.now_ns() // NANOS_PER_SECOND


class FixedClock:
    """Clock frozen at one instant."""

    def __init__(self, ns: int = 0):
        if ns < 0:
            raise ValueError(f"clock value must be >=0, got {ns}")
        self._ns = ns

    @classmethod
    def from_seconds(cls, seconds: int) -> "FixedClock":
        return cls(seconds * NANOS_PER_SECOND)

    def now_ns(self) -> int:
        return self._ns

    def now_seconds(self) -> int:
        return self._ns // NANOS_PER_SECOND


class ManualClock:
    """
    Clock advanced by hand.

    Args:
        start_ns: Initial reading in nanoseconds since the epoch.
        step_ns: Amount added after every now_ns() read (0 keeps the clock
            still until advance() or set() is called).
    """

    def __init__(self, start_ns: int = 0, step_ns: int = 0):
        if start_ns < 0:
            raise ValueError(f"start_ns must be >=0, got {start_ns}")
        if step_ns < 0:
            raise ValueError(f"step_ns must be >=0, got {step_ns}")
        self._ns = start_ns
        self._step_ns = step_ns
        self.reads = 0

    @classmethod
    def from_seconds(cls, seconds: int, step_ns: int = 0) -> "ManualClock":
        return cls(seconds * NANOS_PER_SECOND, step_ns=step_ns)

    def now_ns(self) -> int:
        value = self._ns
        self._ns += self._step_ns
        self.reads += 1
        return value

    def now_seconds(self) -> int:
        return self.now_ns() // NANOS_PER_SECOND

    def advance(self, seconds: int = 0, ns: int = 0) -> None:
        # Moving backwards is allowed through set(); advance() only goes forward.
        delta = seconds * NANOS_PER_SECOND + ns
        if delta < 0:
            raise ValueError(f"advance() cannot move the clock backwards ({delta}ns)")
        self._ns += delta

    def set(self, seconds: int = 0, ns: int = 0) -> None:
        value = seconds * NANOS_PER_SECOND + ns
        if value < 0:
            raise ValueError(f"clock value must be >=0, got {value}ns")
        self._ns = value


class BrokenClock:
    """Clock whose every read fails, for exercising environment-fault paths."""

    def __init__(self, reason: str = "clock source unavailable"):
        self.reason = reason

    def now_ns(self) -> int:
        raise ClockUnavailableError(self.reason)

    def now_seconds(self) -> int:
        raise ClockUnavailableError(self.reason)


def default_clock() -> Clock:
    return SystemClock()
