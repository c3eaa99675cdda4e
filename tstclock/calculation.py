"""Pure conversions from a UNIX timestamp to Tamriel Standard Time.

Every function here is deterministic and free of side effects: the same
timestamp and constant table always give the same snapshot. Caching and
change detection live in :mod:`tstclock.instance`.

Example:
    >>> compute_clock(CONSTANTS.time.clock_epoch + 100 * CONSTANTS.time.day_length_seconds)
    ClockSnapshot(hour=0, minute=0, second=0)
"""

import math

from tstclock.constants import CONSTANTS
from tstclock.constants import DAYS_PER_WEEK
from tstclock.constants import PHASE_FULL
from tstclock.constants import PHASE_WAXING_GIBBOUS
from tstclock.constants import CalendarConstants
from tstclock.constants import MoonConstants
from tstclock.models import ClockSnapshot
from tstclock.models import DateSnapshot
from tstclock.models import MoonSnapshot


def compute_clock(timestamp: float, constants: CalendarConstants = CONSTANTS) -> ClockSnapshot:
    """Calculate the in-game time of day.

    Args:
        timestamp: UNIX timestamp in seconds; any finite value, including
            values before the epoch.
        constants: Calendar table to use.

    Returns:
        The hour, minute and second of the in-game day.
    """
    day_length = constants.time.day_length_seconds
    seconds_since_midnight = (timestamp - constants.time.clock_epoch) % day_length
    if seconds_since_midnight >= day_length:
        # float modulo of a tiny negative value rounds up to the divisor
        seconds_since_midnight = 0.0
    hours = 24 * seconds_since_midnight / day_length

    hour = math.floor(hours)
    minutes = (hours - hour) * 60
    minute = math.floor(minutes)
    seconds = (minutes - minute) * 60
    second = math.floor(seconds)

    return ClockSnapshot(hour=hour, minute=minute, second=second)


def is_day_rollover(previous_hour: int | None, hour: int) -> bool:
    """Check whether a new clock reading crossed in-game midnight.

    Args:
        previous_hour: Hour of the previous reading, None if there was none.
        hour: Hour of the new reading.

    Returns:
        True if the new reading is in hour 0 and the previous one was not.
    """
    return hour == 0 and previous_hour != 0


def compute_date(timestamp: float, constants: CalendarConstants = CONSTANTS) -> DateSnapshot:
    """Calculate the in-game calendar date.

    Args:
        timestamp: UNIX timestamp in seconds.
        constants: Calendar table to use.

    Returns:
        The era, year, month, day and 1-based weekday.
    """
    date = constants.date
    days_past = math.floor((timestamp - date.date_epoch) / constants.time.day_length_seconds)
    weekday = (days_past + date.start_weekday) % DAYS_PER_WEEK + 1

    years_past = days_past // date.year_length_days
    days_past -= years_past * date.year_length_days

    month = 1
    for month_length in date.month_lengths:
        if days_past < month_length:
            break
        days_past -= month_length
        month += 1

    return DateSnapshot(
        era=date.start_era,
        year=date.start_year + years_past,
        month=month,
        day=days_past + 1,
        weekday=weekday,
    )


def phase_name_for(phase_fraction: float, moon: MoonConstants = CONSTANTS.moon) -> str:
    """Name the moon phase containing a position in the cycle.

    Positions at or past the last end fraction are clamped to the last
    named phase.

    Args:
        phase_fraction: Position within the cycle, in [0, 1).
        moon: Moon constants to use.

    Returns:
        The phase name.
    """
    for phase in moon.phases:
        if phase_fraction < phase.end_fraction:
            return phase.name
    return moon.phases[-1].name


def seconds_until_full_moon(phase_fraction: float, moon: MoonConstants = CONSTANTS.moon) -> float:
    """Calculate the seconds until the moon is full again.

    Returns 0 while the moon is in its full phase.

    Args:
        phase_fraction: Position within the cycle, in [0, 1).
        moon: Moon constants to use.

    Returns:
        Seconds in [0, cycle length).
    """
    full_start = moon.phase(PHASE_WAXING_GIBBOUS).end_fraction
    full_end = moon.phase(PHASE_FULL).end_fraction
    cycle = moon.phase_length_seconds

    if phase_fraction <= full_start:
        return (full_start - phase_fraction) * cycle
    if phase_fraction < full_end:
        return 0.0
    return (full_start - phase_fraction) * cycle + cycle


def illuminated_fraction_for(phase_fraction: float) -> float:
    """Lit share of the moon: rises linearly to 1 at mid-cycle, then falls."""
    if phase_fraction > 0.5:
        return 1 - (phase_fraction - 0.5) * 2
    return phase_fraction * 2


def compute_moon(timestamp: float, constants: CalendarConstants = CONSTANTS) -> MoonSnapshot:
    """Calculate the moon phase.

    Args:
        timestamp: UNIX timestamp in seconds.
        constants: Calendar table to use.

    Returns:
        The moon snapshot for that moment.
    """
    moon = constants.moon
    seconds_since_new_moon = (timestamp - moon.moon_epoch) % moon.phase_length_seconds
    phase_fraction = seconds_since_new_moon / moon.phase_length_seconds
    if phase_fraction >= 1.0:
        phase_fraction = 0.0

    fraction_within_phase = phase_fraction % moon.fraction_per_phase
    seconds_to_full_moon = seconds_until_full_moon(phase_fraction, moon)

    return MoonSnapshot(
        phase_fraction=phase_fraction,
        phase_name=phase_name_for(phase_fraction, moon),
        is_waxing=phase_fraction <= moon.phase(PHASE_WAXING_GIBBOUS).end_fraction,
        fraction_within_phase=fraction_within_phase,
        seconds_to_next_phase=fraction_within_phase * moon.single_phase_length_seconds,
        days_to_next_phase=fraction_within_phase * moon.single_phase_length_days,
        seconds_to_full_moon=seconds_to_full_moon,
        days_to_full_moon=seconds_to_full_moon / constants.time.day_length_seconds,
        illuminated_fraction=illuminated_fraction_for(phase_fraction),
    )
