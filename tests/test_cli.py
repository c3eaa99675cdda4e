"""Tests for the slash-command adapter and the tstclock script."""

from unittest.mock import Mock

import pytest
from rich.console import Console

from tstclock.cli import INVALID_TIMESTAMP_MESSAGE
from tstclock.cli import Command
from tstclock.cli import handle_command
from tstclock.cli import main
from tstclock.cli import parse_command
from tstclock.cli import render_snapshot
from tstclock.cli import run_command
from tstclock.instance import TamrielClock
from tstclock.models import ClockSnapshot
from tstclock.models import DateSnapshot
from tstclock.models import MoonSnapshot


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=120)


class TestParseCommand:
    """Tests for parse_command."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("", Command("time")),
            ("   ", Command("time")),
            ("time", Command("time")),
            ("DATE", Command("date")),
            ("Moon 1579645663", Command("moon", 1579645663)),
            ("  time   1398044126  ", Command("time", 1398044126)),
            ("help", Command("help")),
            ("weather", Command("help")),
            ("weather 1579645663", Command("help")),
            ("weather 12", Command("help")),
            ("time 1579645663 extra", Command("help")),
            ("help 1579645663", Command("help")),
            ("time 12345", Command("invalid")),
            ("date 15796456630", Command("invalid")),
            ("moon abcdefghij", Command("invalid")),
        ],
    )
    def test_parse(self, text: str, expected: Command) -> None:
        """Test tokens map to commands, unknown input maps to help."""
        assert parse_command(text) == expected


class TestRunCommand:
    """Tests for running commands against a clock instance."""

    def test_help(self, console: Console) -> None:
        """Test help prints the usage text with literal placeholders."""
        assert handle_command("help", console=console) is None
        output = console.export_text()
        assert "Tamriel Standard Time help menu" in output
        assert "/tst moon [timestamp]" in output

    def test_invalid_timestamp_computes_nothing(self, console: Console) -> None:
        """Test an invalid timestamp prints an error without touching the clock."""
        clock = Mock(spec=TamrielClock)
        assert handle_command("date 42", clock=clock, console=console) is None
        assert INVALID_TIMESTAMP_MESSAGE in console.export_text()
        clock.get_time.assert_not_called()
        clock.get_date.assert_not_called()
        clock.get_moon.assert_not_called()

    def test_no_arguments_prints_current_time(
        self, tst_clock: TamrielClock, console: Console
    ) -> None:
        """Test an empty command prints the live time."""
        snapshot = handle_command("", clock=tst_clock, console=console)
        assert isinstance(snapshot, ClockSnapshot)
        assert snapshot.hour == 23
        assert tst_clock.time == snapshot

    def test_time_at_timestamp(self, tst_clock: TamrielClock, console: Console) -> None:
        """Test the time at an explicit timestamp."""
        snapshot = handle_command("time 1398044126", clock=tst_clock, console=console)
        assert snapshot == ClockSnapshot(12, 0, 0)
        assert "12:00:00" in console.export_text()

    def test_date_at_timestamp(self, tst_clock: TamrielClock, console: Console) -> None:
        """Test the date at an explicit timestamp."""
        snapshot = handle_command("date 1396566799", clock=tst_clock, console=console)
        assert snapshot == DateSnapshot(2, 582, 4, 4, 5)
        assert "4.4.2E582" in console.export_text()

    def test_moon_at_timestamp(self, tst_clock: TamrielClock, console: Console) -> None:
        """Test the moon at an explicit timestamp."""
        snapshot = handle_command("moon 1579645663", clock=tst_clock, console=console)
        assert isinstance(snapshot, MoonSnapshot)
        assert "firstQuarter" in console.export_text()
        assert tst_clock.moon is None

    def test_live_moon(self, tst_clock: TamrielClock, console: Console) -> None:
        """Test the current moon updates the instance cache."""
        snapshot = run_command(Command("moon"), clock=tst_clock, console=console)
        assert tst_clock.moon is snapshot


class TestRenderSnapshot:
    """Tests for render_snapshot."""

    def test_one_row_per_field(self) -> None:
        """Test every snapshot field becomes a table row."""
        table = render_snapshot(DateSnapshot(2, 582, 4, 4, 5))
        assert table.row_count == 5
        assert table.title == "Tamriel Standard Date 4.4.2E582"

    def test_moon_title(self, tst_clock: TamrielClock) -> None:
        """Test moon tables carry a plain title."""
        table = render_snapshot(tst_clock.get_moon(1579645663))
        assert table.title == "Tamriel Moon"
        assert table.row_count == 9


class TestMain:
    """Tests for the tstclock script."""

    def test_date(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test printing a date exits with 0."""
        assert main(["date", "1396566799"]) == 0
        assert "4.4.2E582" in capsys.readouterr().out

    def test_invalid_timestamp(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test an invalid timestamp exits with 1."""
        assert main(["moon", "12"]) == 1
        assert "10 digit" in capsys.readouterr().out

    def test_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test unknown commands print help and exit with 0."""
        assert main(["weather"]) == 0
        assert "help menu" in capsys.readouterr().out
