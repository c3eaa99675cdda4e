"""Subscription registry driving periodic clock updates.

Subscribers are kept in four independent mappings from key to callback,
one per :class:`SubscriptionKind`. The combined, time and date mappings
share the update driver; the moon mapping has its own, much slower driver.
A driver is scheduled when the first subscriber of its group arrives and
cancelled when the last one leaves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from tstclock.exceptions import DuplicateSubscriberError
from tstclock.exceptions import InvalidSubscriberKeyError
from tstclock.exceptions import MissingCallbackError
from tstclock.exceptions import SubscriberNotFoundError
from tstclock.state.scheduler import Scheduler
from tstclock.utils import is_not_blank

logger = logging.getLogger(__name__)


class SubscriptionKind(Enum):
    """Kinds of updates a subscriber can listen to."""

    COMBINED = "combined"
    TIME = "time"
    DATE = "date"
    MOON = "moon"


#: Kinds served by the time/date update driver
UPDATE_KINDS: tuple[SubscriptionKind, ...] = (
    SubscriptionKind.COMBINED,
    SubscriptionKind.TIME,
    SubscriptionKind.DATE,
)

#: Kinds served by the moon update driver
MOON_KINDS: tuple[SubscriptionKind, ...] = (SubscriptionKind.MOON,)


@dataclass(frozen=True)
class PeriodicDriver:
    """A periodic callback registered with the scheduler for a group of kinds.

    Attributes:
        handle: Scheduler handle.
        interval_ms: Delay between two calls.
        callback: Function recomputing values and notifying subscribers.
        kinds: Subscription kinds whose subscribers keep the driver alive.
    """

    handle: str
    interval_ms: float
    callback: Callable[[], None]
    kinds: tuple[SubscriptionKind, ...]


class SubscriptionRegistry:
    """Keyed subscriber callbacks per kind, with scheduler start/stop.

    Example:
        >>> registry = SubscriptionRegistry(scheduler, update_driver, moon_driver)
        >>> registry.register(SubscriptionKind.TIME, "my-addon", print)
        >>> registry.unregister(SubscriptionKind.TIME, "my-addon")
    """

    def __init__(
        self,
        scheduler: Scheduler,
        update_driver: PeriodicDriver,
        moon_driver: PeriodicDriver,
    ) -> None:
        """Initialize empty mappings.

        Args:
            scheduler: Periodic-callback provider.
            update_driver: Driver for combined, time and date subscribers.
            moon_driver: Driver for moon subscribers.
        """
        self._scheduler = scheduler
        self._drivers = (update_driver, moon_driver)
        self._subscribers: dict[SubscriptionKind, dict[str, Callable[..., Any]]] = {
            kind: {} for kind in SubscriptionKind
        }

    def __len__(self) -> int:
        """Return the number of subscriptions across all kinds."""
        return sum(len(mapping) for mapping in self._subscribers.values())

    def __contains__(self, item: tuple[SubscriptionKind, str]) -> bool:
        """Check whether a ``(kind, key)`` pair is subscribed."""
        kind, key = item
        return key in self._subscribers[kind]

    def driver_for(self, kind: SubscriptionKind) -> PeriodicDriver:
        """Get the driver serving a subscription kind."""
        for driver in self._drivers:
            if kind in driver.kinds:
                return driver
        raise KeyError(kind)

    def count(self, kind: SubscriptionKind) -> int:
        """Number of subscribers of one kind."""
        return len(self._subscribers[kind])

    def callbacks(self, kind: SubscriptionKind) -> list[Callable[..., Any]]:
        """Snapshot of the callbacks of one kind, safe to iterate while they run."""
        return list(self._subscribers[kind].values())

    def _group_is_empty(self, driver: PeriodicDriver) -> bool:
        return all(not self._subscribers[kind] for kind in driver.kinds)

    def register(self, kind: SubscriptionKind, key: str, callback: Callable[..., Any]) -> None:
        """Add a subscriber and start its driver if it is the first of the group.

        Args:
            kind: Kind of updates to receive.
            key: Subscriber ID, unique within the kind. Keep it to cancel later.
            callback: Function called with the updated snapshot(s).

        Raises:
            InvalidSubscriberKeyError: If the key is None or blank.
            MissingCallbackError: If the callback is missing or not callable.
            DuplicateSubscriberError: If the key already subscribes to this kind.
        """
        if not is_not_blank(key):
            raise InvalidSubscriberKeyError(kind.value, key)
        if callback is None or not callable(callback):
            raise MissingCallbackError(kind.value, key)
        mapping = self._subscribers[kind]
        if key in mapping:
            raise DuplicateSubscriberError(kind.value, key)

        driver = self.driver_for(kind)
        start_driver = self._group_is_empty(driver)
        mapping[key] = callback
        logger.debug("%s subscribed to %s updates", key, kind.value)

        if start_driver:
            self._scheduler.schedule_periodic(driver.handle, driver.interval_ms, driver.callback)

    def unregister(self, kind: SubscriptionKind, key: str) -> None:
        """Remove a subscriber and stop its driver if the group is now empty.

        Args:
            kind: Kind of updates the subscriber receives.
            key: Subscriber ID used when registering.

        Raises:
            InvalidSubscriberKeyError: If the key is None or blank.
            SubscriberNotFoundError: If the key does not subscribe to this kind.
        """
        if not is_not_blank(key):
            raise InvalidSubscriberKeyError(kind.value, key)
        mapping = self._subscribers[kind]
        if key not in mapping:
            raise SubscriberNotFoundError(kind.value, key)

        del mapping[key]
        logger.debug("%s cancelled %s updates", key, kind.value)

        driver = self.driver_for(kind)
        if self._group_is_empty(driver):
            self._scheduler.cancel_periodic(driver.handle)
