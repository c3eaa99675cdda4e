"""Snapshot types returned by the clock, date and moon calculations."""

from dataclasses import asdict
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ClockSnapshot:
    """In-game time of day.

    Attributes:
        hour: Hour of the day, 0-23.
        minute: Minute of the hour, 0-59.
        second: Second of the minute, 0-59.
    """

    hour: int
    minute: int
    second: int

    @property
    def formatted(self) -> str:
        """Time as ``HH:MM:SS``."""
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DateSnapshot:
    """In-game calendar date.

    Attributes:
        era: Era number.
        year: Year within the era.
        month: Month of the year, 1-12.
        day: Day of the month, starting at 1.
        weekday: Day of the week, 1-7.
    """

    era: int
    year: int
    month: int
    day: int
    weekday: int

    @property
    def formatted(self) -> str:
        """Date as ``D.M.<era>E<year>``, e.g. ``4.4.2E582``."""
        return f"{self.day}.{self.month}.{self.era}E{self.year}"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MoonSnapshot:
    """
    Position of the moon within its synodic cycle.

    Attributes:
        phase_fraction: Share of the cycle passed since the last new moon, in [0, 1).
        phase_name: Name of the current phase.
        is_waxing: True until the moon reaches its full phase.
        fraction_within_phase: ``phase_fraction`` modulo the share of a single phase.
        seconds_to_next_phase: Real seconds derived from ``fraction_within_phase``.
        days_to_next_phase: In-game days derived from ``fraction_within_phase``.
        seconds_to_full_moon: Real seconds until the full phase starts, 0 while full.
        days_to_full_moon: ``seconds_to_full_moon`` in in-game days.
        illuminated_fraction: Lit share of the moon, 0 at new and 1 at full.
    """

    phase_fraction: float
    phase_name: str
    is_waxing: bool
    fraction_within_phase: float
    seconds_to_next_phase: float
    days_to_next_phase: float
    seconds_to_full_moon: float
    days_to_full_moon: float
    illuminated_fraction: float

    @property
    def percent_str(self) -> str:
        """Human-readable illumination percentage."""
        return f"{self.illuminated_fraction * 100:.1f}%"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
