"""Time-of-day arithmetic on ``HH:MM`` strings.

All functions here are total: malformed input is logged and replaced by a
documented default instead of raising, so a schedule can always be rendered.
"""

import logging
import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
DEFAULT_DURATION_MINUTES = 120

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: object) -> int | None:
    """
    Parse a ``H:MM`` or ``HH:MM`` string into minutes since midnight.

    Returns:
        Minutes since midnight, or None if the value is not a valid time of day
    """
    if not isinstance(value, str):
        return None
    match = _TIME_RE.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def format_time(minutes: int) -> str:
    """Format minutes since midnight as zero-padded ``HH:MM`` (wrapping past midnight)."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalise_time(value: object) -> str | None:
    """Return ``value`` zero-padded to ``HH:MM``, or None if it is not a valid time."""
    minutes = parse_time(value)
    if minutes is None:
        return None
    return format_time(minutes)


def duration_minutes(start: str, end: str, default: int = DEFAULT_DURATION_MINUTES) -> int:
    """
    Minutes between two times of day.

    An end time earlier than the start time is treated as crossing midnight:
    ``duration_minutes("23:30", "00:15") == 45``.

    Args:
        start: Start time (``HH:MM``)
        end: End time (``HH:MM``)
        default: Returned when either value is malformed

    Returns:
        Duration in minutes
    """
    start_minutes = parse_time(start)
    end_minutes = parse_time(end)
    if start_minutes is None or end_minutes is None:
        logger.warning(
            f"Cannot compute duration from {start!r} to {end!r}, using {default} minutes"
        )
        return default

    if end_minutes < start_minutes:
        end_minutes += MINUTES_PER_DAY
    return end_minutes - start_minutes


def add_minutes(start: str, minutes: int) -> str:
    """
    Add a number of minutes to a time of day, wrapping at midnight.

    Used to derive an end time from a start time and a film's running time:
    ``add_minutes("23:30", 45) == "00:15"``.

    A malformed start time is returned unchanged.
    """
    start_minutes = parse_time(start)
    if start_minutes is None or not isinstance(minutes, int):
        logger.warning(f"Cannot add {minutes!r} minutes to {start!r}, keeping start time")
        return start
    return format_time(start_minutes + minutes)


def festival_today(timezone_name: str) -> date:
    """Today's calendar date in the festival's timezone."""
    return datetime.now(ZoneInfo(timezone_name)).date()
