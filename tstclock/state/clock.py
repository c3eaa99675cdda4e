"""Time sources behind live readings and tick scheduling.

A :class:`~tstclock.instance.TamrielClock` reads ``now()`` whenever a getter
is called without a timestamp, and the tick scheduler reads ``monotonic()``
to decide which periodic callbacks are due. Swapping in a
:class:`FrozenClock` pins both, so midnight rollovers and update ticks can be
stepped through by hand:

    clock = FrozenClock(1400129138.5)  # ten seconds before in-game midnight
    tst = TamrielClock(clock=clock)
    tst.get_time().hour    # 23
    clock.advance(10)
    tst.get_time().hour    # 0, and the cached date is now stale
"""

import time as _time
from typing import Protocol


class Clock(Protocol):
    """Where an instance gets the current moment from."""

    def now(self) -> float:
        """UNIX timestamp that live readings convert."""
        ...

    def monotonic(self) -> float:
        """Seconds on a steady counter, used for scheduler due times."""
        ...


class SystemClock:
    """The real clock.

    Live readings use whole UTC seconds, the same resolution the game client
    hands out, so a live reading equals the reading for an explicit
    timestamp taken in the same second.
    """

    def now(self) -> float:
        return int(_time.time())

    def monotonic(self) -> float:
        return _time.monotonic()


class FrozenClock:
    """A clock that only moves when told to.

    Attributes:
        timestamp: Value returned by ``now()``.
        monotonic_seconds: Value returned by ``monotonic()``.
    """

    def __init__(self, timestamp: float, monotonic: float = 0.0) -> None:
        self.timestamp = timestamp
        self.monotonic_seconds = monotonic

    def now(self) -> float:
        return self.timestamp

    def monotonic(self) -> float:
        return self.monotonic_seconds

    def advance(self, seconds: float) -> None:
        """Let real time pass, moving live readings and scheduler due times together."""
        self.timestamp += seconds
        self.monotonic_seconds += seconds


_default_clock: Clock = SystemClock()


def get_clock() -> Clock:
    """Get the clock new instances and schedulers fall back to."""
    return _default_clock


def set_clock(clock: Clock) -> None:
    """Replace the fallback clock.

    Instances created before the call keep the clock they were built with.

    Args:
        clock: Time source for instances created from now on.
    """
    global _default_clock
    _default_clock = clock


def reset_clock() -> None:
    """Go back to the real system clock."""
    global _default_clock
    _default_clock = SystemClock()
