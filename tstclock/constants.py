"""Centralized constants for tstclock.

This module consolidates the update interval defaults and the read-only
calendar table that every clock, date and moon calculation depends on.
The calendar table is shared by all clock instances; assigning to any of
its attributes raises :class:`~tstclock.exceptions.ConstantMutationError`.
"""

import math
from dataclasses import dataclass
from typing import Any
from typing import ClassVar

from tstclock.exceptions import ConfigurationError
from tstclock.exceptions import ConstantMutationError

# =============================================================================
# Update Interval Configuration
# =============================================================================

#: Default delay between two time/date updates in milliseconds
DEFAULT_UPDATE_INTERVAL_MS: float = 200

#: Default delay between two moon updates in milliseconds (10 hours)
DEFAULT_MOON_UPDATE_INTERVAL_MS: float = 36_000_000

#: Default scheduler handle prefix for clock instances
DEFAULT_EVENT_HANDLE: str = "LibClockTST"

#: Suffix appended to an instance handle for its moon driver
MOON_HANDLE_SUFFIX: str = "-Moon"

# =============================================================================
# Timestamp Validation
# =============================================================================

#: Number of decimal digits an explicit UNIX timestamp must have
TIMESTAMP_DIGITS: int = 10

#: Days in an in-game week
DAYS_PER_WEEK: int = 7


# =============================================================================
# Calendar Table
# =============================================================================


class _ReadOnly:
    """Mixin sealing a dataclass instance once it has been initialized."""

    _sealed: ClassVar[bool] = False

    def __post_init__(self) -> None:
        self._validate()
        object.__setattr__(self, "_sealed", True)

    def _validate(self) -> None:
        """Check the invariants of the freshly built table."""

    def __setattr__(self, name: str, value: Any) -> None:
        if self._sealed:
            raise ConstantMutationError(name, value)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        raise ConstantMutationError(name)


@dataclass
class TimeConstants(_ReadOnly):
    """Constant information to calculate the Tamriel Standard Time.

    Attributes:
        day_length_seconds: Real seconds in one in-game day.
        night_length_seconds: Real seconds of in-game night.
        hour_length_seconds: Real seconds in one in-game hour.
        clock_epoch: UNIX time of in-game midnight on day zero.
    """

    day_length_seconds: float
    night_length_seconds: float
    hour_length_seconds: float
    clock_epoch: float

    def _validate(self) -> None:
        if self.day_length_seconds <= 0:
            raise ConfigurationError("day_length_seconds", "Day length must be positive")
        if not math.isclose(self.hour_length_seconds * 24, self.day_length_seconds):
            raise ConfigurationError(
                "hour_length_seconds", "Hour length must be a 24th of the day length"
            )


@dataclass
class DateConstants(_ReadOnly):
    """Constant information to calculate the Tamriel Standard Time date.

    Attributes:
        date_epoch: UNIX time of the first day of ``start_year``.
        start_era: Era the world is in.
        start_year: Year counted from ``date_epoch``.
        start_weekday: Weekday offset of ``date_epoch`` (0-based).
        month_lengths: Days in each of the twelve months.
        year_length_days: Days in one in-game year.
    """

    date_epoch: float
    start_era: int
    start_year: int
    start_weekday: int
    month_lengths: tuple[int, ...]
    year_length_days: int

    def _validate(self) -> None:
        if len(self.month_lengths) != 12 or any(days <= 0 for days in self.month_lengths):
            raise ConfigurationError("month_lengths", "Expected twelve positive month lengths")
        if sum(self.month_lengths) != self.year_length_days:
            raise ConfigurationError(
                "year_length_days",
                f"Year length {self.year_length_days} does not match "
                f"the sum of month lengths {sum(self.month_lengths)}",
            )
        if not 0 <= self.start_weekday < DAYS_PER_WEEK:
            raise ConfigurationError("start_weekday", "Weekday offset must be within 0..6")


@dataclass
class MoonPhase(_ReadOnly):
    """A named moon phase ending at a fraction of the synodic cycle."""

    name: str
    end_fraction: float


@dataclass
class MoonConstants(_ReadOnly):
    """Constant information to calculate the moon position.

    Attributes:
        moon_epoch: UNIX time of a new-moon instant.
        phase_length_days: In-game days in one synodic cycle.
        phase_length_seconds: Real seconds in one synodic cycle.
        single_phase_length_days: In-game days in one of the eight phases.
        single_phase_length_seconds: Real seconds in one of the eight phases.
        fraction_per_phase: Share of the cycle taken by a single phase.
        phases: The eight phases in cycle order with their end fractions.
    """

    moon_epoch: float
    phase_length_days: float
    phase_length_seconds: float
    single_phase_length_days: float
    single_phase_length_seconds: float
    fraction_per_phase: float
    phases: tuple[MoonPhase, ...]

    def _validate(self) -> None:
        if len(self.phases) != 8:
            raise ConfigurationError("phases", f"Expected 8 moon phases, got {len(self.phases)}")
        ends = [phase.end_fraction for phase in self.phases]
        if any(a >= b for a, b in zip(ends, ends[1:])) or not 0 < ends[0] or ends[-1] >= 1.0:
            raise ConfigurationError(
                "phases", "Phase end fractions must strictly increase within (0, 1)"
            )
        if not math.isclose(self.single_phase_length_seconds * 8, self.phase_length_seconds):
            raise ConfigurationError(
                "single_phase_length_seconds", "A single phase must be an eighth of the cycle"
            )

    def phase(self, name: str) -> MoonPhase:
        """Look up a phase by name.

        Raises:
            KeyError: If no phase has that name.
        """
        for phase in self.phases:
            if phase.name == name:
                return phase
        raise KeyError(name)


@dataclass
class CalendarConstants(_ReadOnly):
    """All constants needed for time, date and moon calculations."""

    time: TimeConstants
    date: DateConstants
    moon: MoonConstants

    def _validate(self) -> None:
        expected = self.moon.phase_length_days * self.time.day_length_seconds
        if not math.isclose(self.moon.phase_length_seconds, expected):
            raise ConfigurationError(
                "phase_length_seconds",
                f"Moon cycle of {self.moon.phase_length_seconds}s does not match "
                f"{self.moon.phase_length_days} days of {self.time.day_length_seconds}s",
            )


#: Phase names in cycle order
PHASE_NEW = "new"
PHASE_WAXING_CRESCENT = "waxingCrescent"
PHASE_FIRST_QUARTER = "firstQuarter"
PHASE_WAXING_GIBBOUS = "waxingGibbous"
PHASE_FULL = "full"
PHASE_WANING_GIBBOUS = "waningGibbous"
PHASE_THIRD_QUARTER = "thirdQuarter"
PHASE_WANING_CRESCENT = "waningCrescent"

CONSTANTS = CalendarConstants(
    time=TimeConstants(
        day_length_seconds=20955,  # 5.82 real hours
        night_length_seconds=7200,
        hour_length_seconds=873.125,
        # Synced in-game noon 1398044126 minus half a day
        clock_epoch=1398033648.5,
    ),
    date=DateConstants(
        # Release day 04.04.2014 (1396569600) moved back to midnight and to 1.1.2E582
        date_epoch=1394617983.724,
        start_era=2,
        start_year=582,
        # Release was a Friday (5), 93 days after the epoch: (4 - 93) % 7
        start_weekday=2,
        month_lengths=(31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
        year_length_days=365,
    ),
    moon=MoonConstants(
        # Full moon start 1435838770 from esoclock.uesp.net shifted by half a cycle
        moon_epoch=1436153095,
        phase_length_days=30,
        phase_length_seconds=628650,
        single_phase_length_days=3.75,
        single_phase_length_seconds=78581.25,
        fraction_per_phase=0.125,
        phases=(
            MoonPhase(PHASE_NEW, 0.06),
            MoonPhase(PHASE_WAXING_CRESCENT, 0.185),
            MoonPhase(PHASE_FIRST_QUARTER, 0.31),
            MoonPhase(PHASE_WAXING_GIBBOUS, 0.435),
            MoonPhase(PHASE_FULL, 0.56),
            MoonPhase(PHASE_WANING_GIBBOUS, 0.685),
            MoonPhase(PHASE_THIRD_QUARTER, 0.81),
            MoonPhase(PHASE_WANING_CRESCENT, 0.935),
        ),
    ),
)
