"""Clock instances: cached lore time, date and moon with subscriber dispatch.

A :class:`TamrielClock` keeps the last computed snapshots, decides when the
date has to be recomputed and notifies its subscribers on every scheduler
tick. Use :func:`get_default_clock` for the shared process-wide instance or
:func:`new_clock` for an independent instance with its own intervals.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from typing import Any

from tstclock.calculation import compute_clock
from tstclock.calculation import compute_date
from tstclock.calculation import compute_moon
from tstclock.calculation import is_day_rollover
from tstclock.constants import CONSTANTS
from tstclock.constants import MOON_HANDLE_SUFFIX
from tstclock.constants import CalendarConstants
from tstclock.models import ClockSnapshot
from tstclock.models import DateSnapshot
from tstclock.models import MoonSnapshot
from tstclock.registry import MOON_KINDS
from tstclock.registry import UPDATE_KINDS
from tstclock.registry import PeriodicDriver
from tstclock.registry import SubscriptionKind
from tstclock.registry import SubscriptionRegistry
from tstclock.state.clock import Clock
from tstclock.state.clock import get_clock
from tstclock.state.config import DEFAULT_CONFIG
from tstclock.state.config import ClockConfig
from tstclock.state.scheduler import Scheduler
from tstclock.state.scheduler import get_scheduler
from tstclock.utils import parse_timestamp

logger = logging.getLogger(__name__)

# Keeps scheduler handles of coexisting instances apart
_instance_ids = itertools.count(1)

TimeCallback = Callable[[ClockSnapshot], None]
DateCallback = Callable[[DateSnapshot], None]
MoonCallback = Callable[[MoonSnapshot], None]
CombinedCallback = Callable[[ClockSnapshot, DateSnapshot], None]


class TamrielClock:
    """
    Tamriel Standard Time for the current moment or any UNIX timestamp.

    Calling a getter without a timestamp reads the instance's time source and
    refreshes the cache. Calling it with a timestamp is a pure calculation
    that leaves the cache and the date rollover flag untouched.

    Attributes:
        config: Update intervals and scheduler handle prefix.
        constants: Calendar table used for every calculation.
        handle: Scheduler handle of the time/date driver.
        moon_handle: Scheduler handle of the moon driver.
    """

    def __init__(
        self,
        config: ClockConfig = DEFAULT_CONFIG,
        *,
        clock: Clock | None = None,
        scheduler: Scheduler | None = None,
        constants: CalendarConstants = CONSTANTS,
    ) -> None:
        """Initialize an instance with an empty cache.

        Args:
            config: Update intervals and handle prefix.
            clock: Time source. Defaults to the global clock when the
                instance is created.
            scheduler: Periodic-callback provider. Defaults to the global
                scheduler when the instance is created.
            constants: Calendar table.
        """
        self.config = config
        self.constants = constants
        self._clock = clock if clock is not None else get_clock()
        self._scheduler = scheduler if scheduler is not None else get_scheduler()

        self.handle = f"{config.event_handle}-{next(_instance_ids)}"
        self.moon_handle = f"{self.handle}{MOON_HANDLE_SUFFIX}"

        self._time: ClockSnapshot | None = None
        self._date: DateSnapshot | None = None
        self._moon: MoonSnapshot | None = None
        self._last_hour: int | None = None
        self._date_needs_update = True

        self.registry = SubscriptionRegistry(
            self._scheduler,
            PeriodicDriver(self.handle, config.update_interval_ms, self._on_update, UPDATE_KINDS),
            PeriodicDriver(
                self.moon_handle, config.moon_update_interval_ms, self._on_moon_update, MOON_KINDS
            ),
        )

    def __repr__(self) -> str:
        return (
            f"TamrielClock(handle={self.handle!r}, "
            f"update_interval_ms={self.update_interval_ms}, "
            f"moon_update_interval_ms={self.moon_update_interval_ms})"
        )

    @property
    def update_interval_ms(self) -> float:
        """Delay between two time/date updates."""
        return self.config.update_interval_ms

    @property
    def moon_update_interval_ms(self) -> float:
        """Delay between two moon updates."""
        return self.config.moon_update_interval_ms

    @property
    def date_needs_update(self) -> bool:
        """True once in-game midnight passed since the live date was computed."""
        return self._date_needs_update

    @property
    def time(self) -> ClockSnapshot | None:
        """Last computed live time, None before the first update."""
        return self._time

    @property
    def date(self) -> DateSnapshot | None:
        """Last computed live date, None before the first update."""
        return self._date

    @property
    def moon(self) -> MoonSnapshot | None:
        """Last computed live moon, None before the first update."""
        return self._moon

    def _now(self) -> float:
        return self._clock.now()

    # -------------------------------------------------------------------------
    # Cache updates
    # -------------------------------------------------------------------------

    def _update_time(self, timestamp: float) -> ClockSnapshot:
        """Refresh the live time and flag the date once midnight is crossed."""
        self._time = compute_clock(timestamp, self.constants)
        if is_day_rollover(self._last_hour, self._time.hour):
            self._date_needs_update = True
        self._last_hour = self._time.hour
        return self._time

    def _update_date(self, timestamp: float) -> DateSnapshot:
        """Refresh the live date if it went stale."""
        if self._date_needs_update or self._date is None:
            self._date = compute_date(timestamp, self.constants)
            self._date_needs_update = False
            logger.debug("%s: date recomputed as %s", self.handle, self._date.formatted)
        return self._date

    def _update(self) -> tuple[ClockSnapshot, DateSnapshot]:
        """Refresh the live time, and the live date if it went stale."""
        timestamp = self._now()
        return self._update_time(timestamp), self._update_date(timestamp)

    def _update_moon(self) -> MoonSnapshot:
        self._moon = compute_moon(self._now(), self.constants)
        return self._moon

    def _on_update(self) -> None:
        """Tick handler of the time/date driver."""
        time, date = self._update()

        for callback in self.registry.callbacks(SubscriptionKind.COMBINED):
            callback(time, date)
        for callback in self.registry.callbacks(SubscriptionKind.TIME):
            callback(time)
        for callback in self.registry.callbacks(SubscriptionKind.DATE):
            callback(date)

    def _on_moon_update(self) -> None:
        """Tick handler of the moon driver."""
        moon = self._update_moon()
        for callback in self.registry.callbacks(SubscriptionKind.MOON):
            callback(moon)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_time(self, timestamp: Any = None) -> ClockSnapshot:
        """Get the lore time.

        Args:
            timestamp: Optional UNIX timestamp in seconds (10 digits). Without
                it, the current time is calculated and cached.

        Returns:
            The time snapshot.

        Raises:
            InvalidTimestampError: If the timestamp is not a 10 digit number.
        """
        if timestamp is not None:
            return compute_clock(parse_timestamp(timestamp), self.constants)
        return self._update_time(self._now())

    def get_date(self, timestamp: Any = None) -> DateSnapshot:
        """Get the lore date.

        Without a timestamp the cached date is returned unless in-game
        midnight has passed since it was computed.

        Args:
            timestamp: Optional UNIX timestamp in seconds (10 digits).

        Returns:
            The date snapshot.

        Raises:
            InvalidTimestampError: If the timestamp is not a 10 digit number.
        """
        if timestamp is not None:
            return compute_date(parse_timestamp(timestamp), self.constants)
        return self._update()[1]

    def get_moon(self, timestamp: Any = None) -> MoonSnapshot:
        """Get the lore moon.

        Args:
            timestamp: Optional UNIX timestamp in seconds (10 digits). Without
                it, the current moon is calculated and cached.

        Returns:
            The moon snapshot.

        Raises:
            InvalidTimestampError: If the timestamp is not a 10 digit number.
        """
        if timestamp is not None:
            return compute_moon(parse_timestamp(timestamp), self.constants)
        return self._update_moon()

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, kind: SubscriptionKind, key: str, callback: Callable[..., Any]) -> None:
        """Register a callback for one kind of update.

        Moon subscribers are called once right away with the current moon,
        since the moon driver may not tick for hours. If that first call
        raises, the subscription is dropped again before the error propagates.

        Raises:
            InvalidSubscriberKeyError: If the key is None or blank.
            MissingCallbackError: If the callback is missing.
            DuplicateSubscriberError: If the key already subscribes to this kind.
        """
        self.registry.register(kind, key, callback)
        if kind is SubscriptionKind.MOON:
            try:
                callback(self._update_moon())
            except Exception:
                self.registry.unregister(kind, key)
                raise

    def unsubscribe(self, kind: SubscriptionKind, key: str) -> None:
        """Cancel a subscription for one kind of update.

        Raises:
            InvalidSubscriberKeyError: If the key is None or blank.
            SubscriberNotFoundError: If the key does not subscribe to this kind.
        """
        self.registry.unregister(kind, key)

    def register(self, key: str, callback: CombinedCallback) -> None:
        """Subscribe to combined time and date updates, ``callback(time, date)``."""
        self.subscribe(SubscriptionKind.COMBINED, key, callback)

    def cancel_subscription(self, key: str) -> None:
        """Cancel a combined time and date subscription."""
        self.unsubscribe(SubscriptionKind.COMBINED, key)

    def register_for_time(self, key: str, callback: TimeCallback) -> None:
        """Subscribe to time updates, ``callback(time)``."""
        self.subscribe(SubscriptionKind.TIME, key, callback)

    def cancel_subscription_for_time(self, key: str) -> None:
        """Cancel a time subscription."""
        self.unsubscribe(SubscriptionKind.TIME, key)

    def register_for_date(self, key: str, callback: DateCallback) -> None:
        """Subscribe to date updates, ``callback(date)``."""
        self.subscribe(SubscriptionKind.DATE, key, callback)

    def cancel_subscription_for_date(self, key: str) -> None:
        """Cancel a date subscription."""
        self.unsubscribe(SubscriptionKind.DATE, key)

    def register_for_moon(self, key: str, callback: MoonCallback) -> None:
        """Subscribe to moon updates, ``callback(moon)``."""
        self.subscribe(SubscriptionKind.MOON, key, callback)

    def cancel_subscription_for_moon(self, key: str) -> None:
        """Cancel a moon subscription."""
        self.unsubscribe(SubscriptionKind.MOON, key)


# Shared instance, created on first use
_default_instance: TamrielClock | None = None


def get_default_clock() -> TamrielClock:
    """Get the shared process-wide clock instance.

    Returns:
        The instance, created with the default configuration on first call.
    """
    global _default_instance
    if _default_instance is None:
        _default_instance = TamrielClock()
        logger.debug("Created default clock %s", _default_instance.handle)
    return _default_instance


def new_clock(
    update_interval_ms: float | None = None,
    moon_update_interval_ms: float | None = None,
    *,
    clock: Clock | None = None,
    scheduler: Scheduler | None = None,
) -> TamrielClock:
    """Create an independent clock instance with custom update intervals.

    Short intervals mean more recalculations; keep them as long as the
    subscribers allow.

    Args:
        update_interval_ms: Delay between two time/date updates; None keeps 200 ms.
        moon_update_interval_ms: Delay between two moon updates; None keeps 10 hours.
        clock: Time source for the instance.
        scheduler: Periodic-callback provider for the instance.

    Returns:
        A new instance sharing nothing but the calendar constants.

    Raises:
        ConfigurationError: If an interval is not a positive number.
    """
    config = DEFAULT_CONFIG.with_intervals(update_interval_ms, moon_update_interval_ms)
    return TamrielClock(config, clock=clock, scheduler=scheduler)


def reset_default_clock() -> None:
    """Drop the shared instance so the next call creates a fresh one."""
    global _default_instance
    _default_instance = None
