"""Venue normalization to the festival's canonical venue codes."""

import logging
from enum import Enum

from rapidfuzz import fuzz, process

from festgrid.utils.text import compact_key

logger = logging.getLogger(__name__)


class VenueCode(str, Enum):
    """Canonical festival venues."""

    STAGE_ZONE = "stage-zone"
    EXPO_ZONE = "expo-zone"
    MARKET = "market"
    MAJOR_THEATRE = "major-theatre"
    MAJOR_IMAX = "major-imax"
    ANUSARN = "anusarn"


DEFAULT_VENUE = VenueCode.STAGE_ZONE

# Keys are compact_key() forms, so "stageZone", "stage-zone" and "Stage Zone"
# all land on the same entry.
VENUE_ALIASES: dict[str, VenueCode] = {
    # Canonical codes (and the camelCase codes stored by older records)
    "stagezone": VenueCode.STAGE_ZONE,
    "expozone": VenueCode.EXPO_ZONE,
    "market": VenueCode.MARKET,
    "majortheatre": VenueCode.MAJOR_THEATRE,
    "majorimax": VenueCode.MAJOR_IMAX,
    "anusarn": VenueCode.ANUSARN,
    # Legacy display names
    "majortheatre7": VenueCode.MAJOR_THEATRE,
    "majorchiangmai": VenueCode.MAJOR_THEATRE,
    "imaxmajorchiangmai": VenueCode.MAJOR_IMAX,
    "imax": VenueCode.MAJOR_IMAX,
    "asiatrip": VenueCode.ANUSARN,
    # Off-site locations mapped to the closest festival venue
    "railwaypark": VenueCode.STAGE_ZONE,
    "sfmaya": VenueCode.EXPO_ZONE,
}

FUZZY_THRESHOLD = 85  # Minimum similarity score for misspelled venue names
MIN_FUZZY_KEY_LENGTH = 5  # Shorter keys score high against short aliases like "imax"


def normalise_venue(
    raw: str | VenueCode | None,
    default: VenueCode = DEFAULT_VENUE,
    fuzzy_threshold: int = FUZZY_THRESHOLD,
) -> VenueCode:
    """
    Map any venue identifier to a canonical VenueCode.

    Matching stages:
    1. Already a VenueCode
    2. Exact match of the compacted name against the alias table
    3. Fuzzy match against the alias table (catches misspellings of
       names at least MIN_FUZZY_KEY_LENGTH characters long)
    4. ``default``

    Idempotent: ``normalise_venue(normalise_venue(x)) == normalise_venue(x)``.

    Args:
        raw: Venue code, display name or free text from an upstream record
        default: Venue used when nothing matches
        fuzzy_threshold: Minimum rapidfuzz ratio for stage 3

    Returns:
        Canonical venue code
    """
    if isinstance(raw, VenueCode):
        return raw

    if not isinstance(raw, str) or not raw.strip():
        logger.debug(f"No venue given, using {default.value}")
        return default

    key = compact_key(raw)
    if not key:
        logger.warning(f"Unusable venue {raw!r}, using {default.value}")
        return default

    venue = VENUE_ALIASES.get(key)
    if venue:
        return venue

    if len(key) < MIN_FUZZY_KEY_LENGTH:
        logger.warning(f"Unknown venue {raw!r}, using {default.value}")
        return default

    match = process.extractOne(
        key, VENUE_ALIASES.keys(), scorer=fuzz.ratio, score_cutoff=fuzzy_threshold
    )
    if match:
        alias, score, _ = match
        venue = VENUE_ALIASES[alias]
        logger.info(f"Fuzzy venue match: {score:.1f}% - {raw!r} -> {venue.value}")
        return venue

    logger.warning(f"Unknown venue {raw!r}, using {default.value}")
    return default
