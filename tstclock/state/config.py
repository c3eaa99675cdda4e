"""Per-instance configuration for clock instances."""

from dataclasses import dataclass
from dataclasses import replace

from tstclock.constants import DEFAULT_EVENT_HANDLE
from tstclock.constants import DEFAULT_MOON_UPDATE_INTERVAL_MS
from tstclock.constants import DEFAULT_UPDATE_INTERVAL_MS
from tstclock.exceptions import ConfigurationError
from tstclock.utils import is_not_blank


@dataclass(frozen=True)
class ClockConfig:
    """Update intervals and scheduler handle of a clock instance.

    Short intervals make subscribers see changes sooner at the cost of more
    recalculations; the moon changes slowly enough for hours between updates.

    Attributes:
        update_interval_ms: Delay between two time/date updates.
        moon_update_interval_ms: Delay between two moon updates.
        event_handle: Prefix for the handles registered with the scheduler.
    """

    update_interval_ms: float = DEFAULT_UPDATE_INTERVAL_MS
    moon_update_interval_ms: float = DEFAULT_MOON_UPDATE_INTERVAL_MS
    event_handle: str = DEFAULT_EVENT_HANDLE

    def __post_init__(self) -> None:
        """Validate intervals and handle."""
        for name in ("update_interval_ms", "moon_update_interval_ms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int | float) or value <= 0:
                raise ConfigurationError(name, f"{name} must be a positive number, got {value!r}")
        if not is_not_blank(self.event_handle):
            raise ConfigurationError("event_handle", "event_handle must not be blank")

    def with_intervals(
        self,
        update_interval_ms: float | None = None,
        moon_update_interval_ms: float | None = None,
    ) -> "ClockConfig":
        """Return a copy with the given intervals; None keeps the current value."""
        return replace(
            self,
            update_interval_ms=(
                update_interval_ms if update_interval_ms is not None else self.update_interval_ms
            ),
            moon_update_interval_ms=(
                moon_update_interval_ms
                if moon_update_interval_ms is not None
                else self.moon_update_interval_ms
            ),
        )


DEFAULT_CONFIG = ClockConfig()
