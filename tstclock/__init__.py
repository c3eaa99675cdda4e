"""tstclock: Tamriel Standard Time, date and moon phase from UNIX timestamps."""

from importlib.metadata import version

from tstclock.calculation import compute_clock
from tstclock.calculation import compute_date
from tstclock.calculation import compute_moon
from tstclock.constants import CONSTANTS
from tstclock.constants import CalendarConstants
from tstclock.exceptions import ConfigurationError
from tstclock.exceptions import ConstantMutationError
from tstclock.exceptions import DuplicateSubscriberError
from tstclock.exceptions import InvalidSubscriberKeyError
from tstclock.exceptions import InvalidTimestampError
from tstclock.exceptions import MissingCallbackError
from tstclock.exceptions import SubscriberNotFoundError
from tstclock.exceptions import SubscriptionError
from tstclock.exceptions import TSTClockError
from tstclock.instance import TamrielClock
from tstclock.instance import get_default_clock
from tstclock.instance import new_clock
from tstclock.models import ClockSnapshot
from tstclock.models import DateSnapshot
from tstclock.models import MoonSnapshot
from tstclock.registry import SubscriptionKind

__version__ = version("tstclock")

__all__ = [
    "CONSTANTS",
    "CalendarConstants",
    "ClockSnapshot",
    "ConfigurationError",
    "ConstantMutationError",
    "DateSnapshot",
    "DuplicateSubscriberError",
    "InvalidSubscriberKeyError",
    "InvalidTimestampError",
    "MissingCallbackError",
    "MoonSnapshot",
    "SubscriberNotFoundError",
    "SubscriptionError",
    "SubscriptionKind",
    "TSTClockError",
    "TamrielClock",
    "compute_clock",
    "compute_date",
    "compute_moon",
    "get_default_clock",
    "new_clock",
]
