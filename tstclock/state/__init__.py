"""Injectable collaborators of a clock instance: time source, scheduler, config."""

from tstclock.state.clock import Clock
from tstclock.state.clock import FrozenClock
from tstclock.state.clock import SystemClock
from tstclock.state.clock import get_clock
from tstclock.state.clock import reset_clock
from tstclock.state.clock import set_clock
from tstclock.state.config import DEFAULT_CONFIG
from tstclock.state.config import ClockConfig
from tstclock.state.scheduler import Scheduler
from tstclock.state.scheduler import TickScheduler
from tstclock.state.scheduler import get_scheduler
from tstclock.state.scheduler import reset_scheduler
from tstclock.state.scheduler import set_scheduler

__all__ = [
    "DEFAULT_CONFIG",
    "Clock",
    "ClockConfig",
    "FrozenClock",
    "Scheduler",
    "SystemClock",
    "TickScheduler",
    "get_clock",
    "get_scheduler",
    "reset_clock",
    "reset_scheduler",
    "set_clock",
    "set_scheduler",
]
