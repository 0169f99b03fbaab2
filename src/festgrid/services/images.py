"""Cover and logo image selection for films."""

import logging
from collections.abc import Sequence

logger = logging.getLogger(__name__)


def _gallery_entry(gallery: Sequence[str] | None, index: int | None) -> str | None:
    """Bounds-checked gallery lookup; blank entries count as missing."""
    if not gallery or index is None or isinstance(index, bool):
        return None
    if not 0 <= index < len(gallery):
        logger.debug(f"Gallery index {index} out of range for {len(gallery)} images")
        return None
    url = gallery[index]
    if isinstance(url, str) and url.strip():
        return url
    return None


def resolve_cover(
    gallery: Sequence[str] | None,
    cover_index: int | None,
    poster_url: str | None,
) -> str | None:
    """
    Pick the representative image for a film.

    Priority:
    1. ``gallery[cover_index]``, when the index is set and still in range
       (the gallery may have shrunk since the index was recorded)
    2. ``poster_url``
    3. ``gallery[0]``
    4. None
    """
    cover = _gallery_entry(gallery, cover_index)
    if cover:
        return cover

    if isinstance(poster_url, str) and poster_url.strip():
        return poster_url

    return _gallery_entry(gallery, 0)


def resolve_logo(gallery: Sequence[str] | None, logo_index: int | None) -> str | None:
    """Logo image from the gallery; no fallback, a missing logo is simply None."""
    return _gallery_entry(gallery, logo_index)
