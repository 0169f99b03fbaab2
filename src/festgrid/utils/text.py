"""Text normalization utilities for identifier matching."""

import re


def compact_key(text: str) -> str:
    """
    Reduce an identifier to a lowercase alphanumeric key.

    Collapses the spelling variants that upstream records use for the same
    name, so camelCase codes, kebab-case codes and display names compare equal:
    - "stageZone", "stage-zone", "Stage Zone", "STAGE_ZONE" → "stagezone"
    - "Major Theatre 7" → "majortheatre7"

    Args:
        text: Raw identifier

    Returns:
        Lowercase key containing only letters and digits
    """
    # Lowercase first so the character class below stays simple
    text = text.strip().lower()

    # Drop everything that is not a letter or digit (spaces, dashes, underscores, dots)
    return re.sub(r"[^a-z0-9]", "", text)
