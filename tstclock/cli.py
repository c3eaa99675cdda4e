"""Command adapter for the ``/tst`` slash command and the ``tstclock`` script.

The command takes up to two whitespace separated, case-insensitive tokens::

    tst                 current time
    tst time [ts]       time now or at a 10 digit UNIX timestamp
    tst date [ts]       date now or at the timestamp
    tst moon [ts]       moon phase now or at the timestamp
    tst help            usage

Anything else prints the usage text. A second token that is not a 10 digit
number prints an error and calculates nothing.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import NamedTuple

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from tstclock.instance import TamrielClock
from tstclock.instance import get_default_clock
from tstclock.models import ClockSnapshot
from tstclock.models import DateSnapshot
from tstclock.models import MoonSnapshot
from tstclock.utils import is_timestamp_string

logger = logging.getLogger(__name__)

Snapshot = ClockSnapshot | DateSnapshot | MoonSnapshot

#: Environment variable holding the log level of the ``tstclock`` script
LOG_LEVEL_ENV_VAR = "TSTCLOCK_LOG_LEVEL"

COMMAND_TIME = "time"
COMMAND_DATE = "date"
COMMAND_MOON = "moon"
COMMAND_HELP = "help"
COMMAND_INVALID = "invalid"

QUERY_COMMANDS = (COMMAND_TIME, COMMAND_DATE, COMMAND_MOON)

# Brand color of the help header
GOLD = "#FFD700"

USAGE = f"Welcome to the [{GOLD}]LibClock[/] - Tamriel Standard Time help menu\n" + escape(
    "To show the current time, write:\n"
    "\t/tst time\n"
    "To show a specific time at a given UNIX timestamp in seconds, write:\n"
    "\t/tst time [timestamp]\n"
    "To show the current date, write:\n"
    "\t/tst date\n"
    "To show a specific date at a given UNIX timestamp in seconds, write:\n"
    "\t/tst date [timestamp]\n"
    "To show the current moon phase, write:\n"
    "\t/tst moon\n"
    "To show a specific moon phase at a given UNIX timestamp in seconds, write:\n"
    "\t/tst moon [timestamp]\n"
)

INVALID_TIMESTAMP_MESSAGE = "Please give only a 10 digit long timestamp as your second argument!"

TITLES: dict[type, str] = {
    ClockSnapshot: "Tamriel Standard Time",
    DateSnapshot: "Tamriel Standard Date",
    MoonSnapshot: "Tamriel Moon",
}


class Command(NamedTuple):
    """A parsed command.

    Attributes:
        name: One of time, date, moon, help or invalid.
        timestamp: Explicit UNIX timestamp, None for the current time.
    """

    name: str
    timestamp: int | None = None


def parse_command(text: str) -> Command:
    """Turn the typed command string into a :class:`Command`.

    Args:
        text: Everything typed after the command name.

    Returns:
        The parsed command; unknown input maps to help.
    """
    tokens = [token.lower() for token in text.split()]
    if not tokens:
        return Command(COMMAND_TIME)
    if len(tokens) > 2 or tokens[0] not in QUERY_COMMANDS:
        return Command(COMMAND_HELP)
    if len(tokens) == 2:
        if not is_timestamp_string(tokens[1]):
            return Command(COMMAND_INVALID)
        return Command(tokens[0], int(tokens[1]))
    return Command(tokens[0])


def _format_value(value: object) -> str:
    if isinstance(value, float):
        return f"{value:.4f}"
    return str(value)


def render_snapshot(snapshot: Snapshot) -> Table:
    """Render a snapshot as a two-column table."""
    title = TITLES[type(snapshot)]
    if isinstance(snapshot, ClockSnapshot | DateSnapshot):
        title = f"{title} {snapshot.formatted}"
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in snapshot.to_dict().items():
        table.add_row(name, _format_value(value))
    return table


def run_command(
    command: Command,
    clock: TamrielClock | None = None,
    console: Console | None = None,
) -> Snapshot | None:
    """Execute a parsed command and print its result.

    Args:
        command: The parsed command.
        clock: Clock instance to query. Defaults to the shared instance.
        console: Console to print to. Defaults to a new stdout console.

    Returns:
        The printed snapshot, or None for help and invalid input.
    """
    console = console or Console()
    if command.name == COMMAND_HELP:
        console.print(USAGE)
        return None
    if command.name == COMMAND_INVALID:
        console.print(f"[red]{INVALID_TIMESTAMP_MESSAGE}[/red]")
        return None

    clock = clock or get_default_clock()
    snapshot: Snapshot
    if command.name == COMMAND_TIME:
        snapshot = clock.get_time(command.timestamp)
    elif command.name == COMMAND_DATE:
        snapshot = clock.get_date(command.timestamp)
    else:
        snapshot = clock.get_moon(command.timestamp)

    logger.debug("%s at %s: %s", command.name, command.timestamp or "now", snapshot)
    console.print(render_snapshot(snapshot))
    return snapshot


def handle_command(
    text: str,
    clock: TamrielClock | None = None,
    console: Console | None = None,
) -> Snapshot | None:
    """Parse and execute a slash-command string.

    Args:
        text: Everything typed after the command name.
        clock: Clock instance to query. Defaults to the shared instance.
        console: Console to print to.

    Returns:
        The printed snapshot, or None for help and invalid input.
    """
    return run_command(parse_command(text), clock=clock, console=console)


def configure_logging(level_name: str | None = None) -> None:
    """Send log records to stderr through rich.

    Args:
        level_name: Level name such as ``DEBUG``. Defaults to the
            ``TSTCLOCK_LOG_LEVEL`` environment variable, then ``WARNING``.
    """
    level_name = (level_name or os.environ.get(LOG_LEVEL_ENV_VAR) or "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``tstclock`` script.

    Args:
        argv: Command tokens. Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: 1 after an invalid timestamp, 0 otherwise.
    """
    configure_logging()
    args = sys.argv[1:] if argv is None else argv
    command = parse_command(" ".join(args))
    run_command(command)
    return 1 if command.name == COMMAND_INVALID else 0
