"""Shared test fixtures for tstclock tests."""

from collections.abc import Callable
from collections.abc import Generator

import pytest

from tstclock.instance import TamrielClock
from tstclock.instance import reset_default_clock
from tstclock.state.clock import FrozenClock
from tstclock.state.clock import reset_clock
from tstclock.state.scheduler import TickScheduler
from tstclock.state.scheduler import reset_scheduler

DAY = 20955
CLOCK_EPOCH = 1398033648.5
DATE_EPOCH = 1394617983.724
MOON_EPOCH = 1436153095
MOON_CYCLE = 628650

# Ten real seconds before in-game midnight, 23:59:xx
BEFORE_MIDNIGHT = CLOCK_EPOCH + 100 * DAY - 10


class RecordingScheduler(TickScheduler):
    """TickScheduler that remembers every schedule and cancel call."""

    def __init__(self, clock: FrozenClock) -> None:
        super().__init__(clock)
        self.scheduled: list[tuple[str, float]] = []
        self.cancelled: list[str] = []

    def schedule_periodic(
        self, handle: str, interval_ms: float, callback: Callable[[], None]
    ) -> None:
        self.scheduled.append((handle, interval_ms))
        super().schedule_periodic(handle, interval_ms, callback)

    def cancel_periodic(self, handle: str) -> None:
        self.cancelled.append(handle)
        super().cancel_periodic(handle)


@pytest.fixture
def frozen_clock() -> FrozenClock:
    """A time source frozen just before in-game midnight."""
    return FrozenClock(BEFORE_MIDNIGHT, monotonic=0.0)


@pytest.fixture
def scheduler(frozen_clock: FrozenClock) -> RecordingScheduler:
    """A recording tick scheduler driven by the frozen clock."""
    return RecordingScheduler(frozen_clock)


@pytest.fixture
def tst_clock(frozen_clock: FrozenClock, scheduler: RecordingScheduler) -> TamrielClock:
    """A clock instance wired to the frozen clock and recording scheduler."""
    return TamrielClock(clock=frozen_clock, scheduler=scheduler)


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """Reset the global clock, scheduler and default instance after each test."""
    yield
    reset_clock()
    reset_scheduler()
    reset_default_clock()
