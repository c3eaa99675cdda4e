"""Shared validation helpers for tstclock.

This module consolidates the input checks used by the clock instance,
the subscription registry and the command adapter so that all of them
accept and reject the same values.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from tstclock.constants import TIMESTAMP_DIGITS
from tstclock.exceptions import InvalidTimestampError

logger = logging.getLogger(__name__)

_TIMESTAMP_PATTERN = re.compile(rf"\d{{{TIMESTAMP_DIGITS}}}")


def is_not_blank(value: Any) -> bool:
    """Check that a value is present and not only whitespace.

    Args:
        value: Any object; non-strings are checked by their ``str()``.

    Returns:
        False for None, the empty string and whitespace, True otherwise.
    """
    return value is not None and str(value).strip() != ""


def is_timestamp_string(text: str) -> bool:
    """Check that a command argument is exactly a 10 digit number."""
    return _TIMESTAMP_PATTERN.fullmatch(text) is not None


def parse_timestamp(value: Any) -> float:
    """Convert an explicit timestamp argument to a number.

    Whole-second values come back as ``int``; fractional values keep their
    fraction so calculations at exact epoch multiples stay exact.

    Args:
        value: An int, float or numeric string.

    Returns:
        The numeric timestamp.

    Raises:
        InvalidTimestampError: If the value is not numeric or does not have
            10 digits once rounded down to whole seconds.
    """
    if isinstance(value, bool):
        raise InvalidTimestampError(value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as e:
        logger.debug("Could not parse timestamp %r: %s", value, e)
        raise InvalidTimestampError(value) from e

    if not math.isfinite(number) or not is_timestamp_string(str(math.floor(number))):
        raise InvalidTimestampError(value)

    if isinstance(value, int):
        return value
    return int(number) if number.is_integer() else number
