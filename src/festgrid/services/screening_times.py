"""Start/end time resolution for a single screening slot.

Film records accumulated over several schema migrations: some slots carry
dedicated ``startTimeN`` / ``endTimeN`` fields, others only a screening date
value that may embed a time of day. The more explicit field always wins.

Start time:
    1. Dedicated start time, if it is a valid ``H:MM`` / ``HH:MM``
    2. Time of day embedded in the screening date value
    3. DEFAULT_START_TIME

End time:
    1. Dedicated end time, if valid
    2. Start time + film duration (DEFAULT_DURATION_MINUTES when unknown)
"""

import logging
import re
from datetime import date, datetime, tzinfo

from festgrid.utils.dates import parse_screening_value, to_local
from festgrid.utils.timecalc import DEFAULT_DURATION_MINUTES, add_minutes, normalise_time

logger = logging.getLogger(__name__)

DEFAULT_START_TIME = "19:00"

_LEADING_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})")


def time_from_screening_value(value: object, tz: tzinfo | None = None) -> str | None:
    """
    Extract the ``HH:MM`` time of day embedded in a screening date value.

    Strings containing ``T`` are inspected directly so no timezone conversion
    can shift the time. Aware datetimes are read in ``tz``; naive datetimes
    as written. Date-only values carry no time of day.

    Returns:
        ``HH:MM`` or None if the value has no usable time component
    """
    if isinstance(value, str) and "T" in value:
        match = _LEADING_TIME_RE.match(value.split("T", 1)[1])
        if match:
            time_str = normalise_time(f"{match.group(1)}:{match.group(2)}")
            if time_str:
                return time_str
        logger.warning(f"No readable time in screening date {value!r}")
        return None

    if not isinstance(value, (datetime, date)):
        value = parse_screening_value(value)

    if isinstance(value, datetime):
        local = to_local(value, tz)
        return f"{local.hour:02d}:{local.minute:02d}"

    return None


def resolve_start_time(
    dedicated: str | None,
    screening_value: object,
    tz: tzinfo | None = None,
    default: str = DEFAULT_START_TIME,
) -> str:
    """Resolve a slot's start time through the dedicated field → screening date → default chain."""
    if isinstance(dedicated, str) and dedicated.strip():
        start_time = normalise_time(dedicated)
        if start_time:
            return start_time
        logger.warning(f"Invalid start time {dedicated!r}, falling back to screening date")

    start_time = time_from_screening_value(screening_value, tz)
    if start_time:
        logger.debug(f"Start time {start_time} taken from screening date {screening_value!r}")
        return start_time

    logger.debug(f"No start time available, using default {default}")
    return default


def resolve_end_time(
    dedicated: str | None,
    start_time: str,
    duration: int | None,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> str:
    """Resolve a slot's end time from the dedicated field, or start time plus duration."""
    if isinstance(dedicated, str) and dedicated.strip():
        end_time = normalise_time(dedicated)
        if end_time:
            return end_time
        logger.warning(f"Invalid end time {dedicated!r}, calculating from duration")

    end_time = add_minutes(start_time, duration or default_duration)
    logger.debug(f"End time {end_time} calculated from {start_time} + {duration or default_duration}m")
    return end_time


def resolve_screening_times(
    start_field: str | None,
    end_field: str | None,
    screening_value: object,
    duration: int | None,
    tz: tzinfo | None = None,
    default_start: str = DEFAULT_START_TIME,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> tuple[str, str]:
    """
    Resolve ``(start_time, end_time)`` for one screening slot.

    Args:
        start_field: Dedicated start time field (``startTimeN``)
        end_field: Dedicated end time field (``endTimeN``)
        screening_value: Screening date value, possibly carrying a time of day
        duration: Film running time in minutes
        tz: Festival timezone used to read aware timestamps
        default_start: Start time when nothing else is available
        default_duration: Running time when the film has none

    Returns:
        Tuple of zero-padded ``HH:MM`` strings
    """
    start_time = resolve_start_time(start_field, screening_value, tz, default_start)
    end_time = resolve_end_time(end_field, start_time, duration, default_duration)
    return start_time, end_time
