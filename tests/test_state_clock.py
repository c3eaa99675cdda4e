"""Tests for the time sources behind live readings and update ticks."""

import time
from unittest.mock import Mock
from unittest.mock import patch

from tests.conftest import BEFORE_MIDNIGHT
from tests.conftest import CLOCK_EPOCH
from tests.conftest import DAY
from tstclock.instance import TamrielClock
from tstclock.state.clock import FrozenClock
from tstclock.state.clock import SystemClock
from tstclock.state.clock import get_clock
from tstclock.state.clock import reset_clock
from tstclock.state.clock import set_clock
from tstclock.state.scheduler import TickScheduler


class TestSystemClock:
    """Tests for SystemClock."""

    def test_now_is_whole_seconds(self) -> None:
        """Test live readings use the current time truncated to seconds."""
        before = int(time.time())
        result = SystemClock().now()
        assert isinstance(result, int)
        assert before <= result <= time.time()

    def test_live_reading_matches_explicit_timestamp(self) -> None:
        """Test a live reading equals the reading for the same whole second."""
        with patch("tstclock.state.clock._time") as fake_time:
            fake_time.time.return_value = 1579645663.9
            tst = TamrielClock(clock=SystemClock())
            assert tst.get_moon() == tst.get_moon(1579645663)


class TestFrozenClock:
    """Tests for FrozenClock driving an instance."""

    def test_live_time_follows_advance(self) -> None:
        """Test advancing across midnight moves the live time to hour 0."""
        clock = FrozenClock(BEFORE_MIDNIGHT)
        tst = TamrielClock(clock=clock)
        assert tst.get_time().hour == 23
        clock.advance(10)
        assert tst.get_time().formatted == "00:00:00"
        assert tst.date_needs_update

    def test_advance_makes_scheduler_ticks_due(self) -> None:
        """Test advancing also moves the steady counter the scheduler reads."""
        clock = FrozenClock(BEFORE_MIDNIGHT, monotonic=50.0)
        scheduler = TickScheduler(clock)
        callback = Mock()
        scheduler.schedule_periodic("demo", 1000, callback)
        assert scheduler.tick() == 0
        clock.advance(1.0)
        assert clock.monotonic() == 51.0
        assert scheduler.tick() == 1
        callback.assert_called_once_with()


class TestGlobalClock:
    """Tests for global clock functions."""

    def test_default_clock_is_system_clock(self) -> None:
        """Test the fallback clock is the system clock."""
        reset_clock()
        assert isinstance(get_clock(), SystemClock)

    def test_reset_clock(self) -> None:
        """Test resetting drops a frozen fallback clock."""
        set_clock(FrozenClock(CLOCK_EPOCH))
        reset_clock()
        assert isinstance(get_clock(), SystemClock)

    def test_instance_created_after_set_clock_uses_it(self) -> None:
        """Test an instance built without a clock reads the fallback clock."""
        set_clock(FrozenClock(CLOCK_EPOCH + 10 * DAY))
        assert TamrielClock().get_time().formatted == "00:00:00"

    def test_instance_keeps_clock_it_was_created_with(self) -> None:
        """Test set_clock does not affect instances that already exist."""
        set_clock(FrozenClock(CLOCK_EPOCH + 10 * DAY))
        tst = TamrielClock()
        set_clock(FrozenClock(CLOCK_EPOCH + 10 * DAY + DAY / 2))
        assert tst.get_time().formatted == "00:00:00"
        assert TamrielClock().get_time().formatted == "12:00:00"
