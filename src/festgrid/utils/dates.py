"""Parsing of screening date values stored in film documents."""

import logging
import re
from collections.abc import Mapping
from datetime import date, datetime, timezone, tzinfo

logger = logging.getLogger(__name__)

# "2025-09-26", "2025-09-26T20:15", "2025-09-26T20:15:00.000Z", "2025-09-26 20:15"
_DATE_TIME_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ](\d{1,2}):(\d{2}))?")


def parse_screening_value(value: object) -> datetime | date | None:
    """
    Convert a stored screening date value into a date or datetime.

    Strings are read literally: the calendar date and the ``T``-separated
    time of day are taken as written and any zone suffix is ignored, so a
    value saved from a local date-time input never drifts across a day
    boundary. Timestamp objects (``datetime`` and subclasses) are kept as-is,
    and ``{"seconds": ...}`` mappings exported from the document store become
    UTC datetimes.

    Returns:
        A naive datetime when a time of day was written, a date when only
        the day was written, an aware datetime for timestamps, or None when
        the value is absent or unreadable
    """
    if value is None or value == "":
        return None

    if isinstance(value, (datetime, date)):
        return value

    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        logger.warning(f"Unreadable timestamp mapping: {value!r}")
        return None

    if isinstance(value, str):
        match = _DATE_TIME_RE.match(value)
        if match:
            year, month, day, hour, minute = match.groups()
            try:
                if hour is None:
                    return date(int(year), int(month), int(day))
                return datetime(int(year), int(month), int(day), int(hour), int(minute))
            except ValueError:
                pass
        logger.warning(f"Unreadable screening date string: {value!r}")
        return None

    logger.warning(f"Unsupported screening date type {type(value).__name__}: {value!r}")
    return None


def to_local(value: datetime, tz: tzinfo | None) -> datetime:
    """Convert an aware datetime to ``tz``; naive datetimes are already local."""
    if value.tzinfo is None or tz is None:
        return value
    return value.astimezone(tz)


def calendar_date(value: datetime | date, tz: tzinfo | None) -> date:
    """Local calendar day of a screening date value."""
    if isinstance(value, datetime):
        return to_local(value, tz).date()
    return value
