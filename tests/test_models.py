"""Tests for the snapshot data models."""

import dataclasses

import pytest

from tstclock.models import ClockSnapshot
from tstclock.models import DateSnapshot
from tstclock.models import MoonSnapshot


def _moon(illuminated_fraction: float = 0.51) -> MoonSnapshot:
    return MoonSnapshot(
        phase_fraction=0.255,
        phase_name="firstQuarter",
        is_waxing=True,
        fraction_within_phase=0.005,
        seconds_to_next_phase=392.9,
        days_to_next_phase=0.019,
        seconds_to_full_moon=113094.75,
        days_to_full_moon=5.4,
        illuminated_fraction=illuminated_fraction,
    )


class TestClockSnapshot:
    """Tests for ClockSnapshot."""

    def test_formatted_pads_fields(self) -> None:
        """Test the time is formatted as HH:MM:SS."""
        assert ClockSnapshot(1, 5, 9).formatted == "01:05:09"

    def test_to_dict(self) -> None:
        """Test conversion to a plain dictionary."""
        assert ClockSnapshot(23, 59, 0).to_dict() == {"hour": 23, "minute": 59, "second": 0}

    def test_frozen(self) -> None:
        """Test snapshots cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            ClockSnapshot(0, 0, 0).hour = 1  # type: ignore[misc]


class TestDateSnapshot:
    """Tests for DateSnapshot."""

    def test_formatted(self) -> None:
        """Test the date is formatted as day.month.eraEyear."""
        assert DateSnapshot(era=2, year=582, month=4, day=4, weekday=5).formatted == "4.4.2E582"

    def test_to_dict_field_order(self) -> None:
        """Test the dictionary keeps the era, year, month, day, weekday order."""
        assert list(DateSnapshot(2, 582, 4, 4, 5).to_dict()) == [
            "era",
            "year",
            "month",
            "day",
            "weekday",
        ]

    def test_equality(self) -> None:
        """Test snapshots compare by value."""
        assert DateSnapshot(2, 582, 1, 1, 3) == DateSnapshot(2, 582, 1, 1, 3)


class TestMoonSnapshot:
    """Tests for MoonSnapshot."""

    def test_percent_str(self) -> None:
        """Test the illumination percentage string."""
        assert _moon(0.51).percent_str == "51.0%"
        assert _moon(1.0).percent_str == "100.0%"

    def test_to_dict(self) -> None:
        """Test conversion to a plain dictionary."""
        data = _moon().to_dict()
        assert data["phase_name"] == "firstQuarter"
        assert data["is_waxing"] is True
        assert len(data) == 9
