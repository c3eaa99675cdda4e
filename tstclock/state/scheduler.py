"""Periodic-callback providers for clock instances.

A clock instance never runs its own timer. It asks a :class:`Scheduler`
to call it back every ``interval_ms`` under a string handle and cancels the
handle again once nobody listens. Hosts with their own event loop can adapt
that loop to the protocol; :class:`TickScheduler` is a single-threaded
implementation that fires due callbacks whenever the host calls ``tick()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from tstclock.exceptions import ConfigurationError
from tstclock.state.clock import Clock
from tstclock.state.clock import get_clock

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Protocol for periodic-callback providers."""

    def schedule_periodic(
        self, handle: str, interval_ms: float, callback: Callable[[], None]
    ) -> None:
        """Call ``callback`` every ``interval_ms`` until the handle is cancelled."""
        ...

    def cancel_periodic(self, handle: str) -> None:
        """Stop calling the callback registered under ``handle``."""
        ...


@dataclass
class _PeriodicTask:
    interval_ms: float
    callback: Callable[[], None]
    next_due_ms: float


class TickScheduler:
    """Scheduler that runs due callbacks when ``tick()`` is called.

    Due times are measured on the monotonic time of a :class:`Clock`, so a
    :class:`~tstclock.state.clock.FrozenClock` makes it fully deterministic.
    A callback runs at most once per tick; a late tick does not replay the
    intervals it missed.

    Example:
        clock = FrozenClock(1700000000.0)
        scheduler = TickScheduler(clock)
        scheduler.schedule_periodic("demo", 200, on_update)
        clock.advance(0.2)
        scheduler.tick()  # calls on_update once
    """

    def __init__(self, clock: Clock | None = None) -> None:
        """Initialize an empty scheduler.

        Args:
            clock: Time source for due times. Defaults to the global clock
                when the scheduler is created.
        """
        self._clock = clock if clock is not None else get_clock()
        self._tasks: dict[str, _PeriodicTask] = {}

    def _now_ms(self) -> float:
        return self._clock.monotonic() * 1000

    @property
    def handles(self) -> list[str]:
        """Handles with an active periodic callback."""
        return list(self._tasks)

    def is_scheduled(self, handle: str) -> bool:
        """Check whether a handle has an active periodic callback."""
        return handle in self._tasks

    def schedule_periodic(
        self, handle: str, interval_ms: float, callback: Callable[[], None]
    ) -> None:
        """Register or replace the periodic callback for a handle.

        Raises:
            ConfigurationError: If the interval is not positive.
        """
        if interval_ms <= 0:
            raise ConfigurationError("interval_ms", f"Interval must be positive, got {interval_ms}")
        if handle in self._tasks:
            logger.debug("Replacing periodic callback for %s", handle)
        self._tasks[handle] = _PeriodicTask(
            interval_ms=interval_ms,
            callback=callback,
            next_due_ms=self._now_ms() + interval_ms,
        )
        logger.debug("Scheduled %s every %s ms", handle, interval_ms)

    def cancel_periodic(self, handle: str) -> None:
        """Cancel a handle; unknown handles are ignored."""
        if self._tasks.pop(handle, None) is not None:
            logger.debug("Cancelled %s", handle)

    def tick(self) -> int:
        """Run every callback that is due.

        Callbacks may schedule or cancel handles while the tick is running;
        a handle cancelled earlier in the same tick is skipped.

        Returns:
            Number of callbacks that ran.
        """
        now_ms = self._now_ms()
        fired = 0
        for handle, task in list(self._tasks.items()):
            if self._tasks.get(handle) is not task or task.next_due_ms > now_ms:
                continue
            task.next_due_ms = now_ms + task.interval_ms
            task.callback()
            fired += 1
        return fired


# Default global scheduler instance
_default_scheduler: Scheduler = TickScheduler()


def get_scheduler() -> Scheduler:
    """Get the current default scheduler."""
    return _default_scheduler


def set_scheduler(scheduler: Scheduler) -> None:
    """Set the default scheduler used by new clock instances.

    Args:
        scheduler: Scheduler to use as default.
    """
    global _default_scheduler
    _default_scheduler = scheduler


def reset_scheduler() -> None:
    """Reset the default scheduler to a fresh TickScheduler."""
    global _default_scheduler
    _default_scheduler = TickScheduler()
