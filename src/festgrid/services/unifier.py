"""Merging of activities and film screenings into one ordered day schedule."""

import logging
from collections.abc import Iterable
from datetime import date

from festgrid.schemas.activity import Activity
from festgrid.schemas.film import FilmRecord
from festgrid.schemas.schedule import ScheduleItem
from festgrid.services.activity_adapter import adapt_activity
from festgrid.services.images import resolve_cover, resolve_logo
from festgrid.services.options import ScheduleOptions
from festgrid.services.screenings import ScreeningRecord, extract_screenings

logger = logging.getLogger(__name__)


def screening_item_id(film_id: str, slot_number: int) -> str:
    return f"{film_id}_screening_{slot_number}"


def screening_to_item(screening: ScreeningRecord, options: ScheduleOptions | None = None) -> ScheduleItem:
    """Convert a ScreeningRecord into a film ScheduleItem, resolving its images."""
    options = options or ScheduleOptions()
    film = screening.film

    return ScheduleItem(
        id=screening_item_id(screening.film_id, screening.slot_number),
        title=screening.film_title,
        type="film",
        category="screening",
        date=screening.screening_date,
        start_time=screening.start_time,
        end_time=screening.end_time,
        venue=screening.venue,
        duration=film.duration or options.default_duration,
        description=film.synopsis,
        image=resolve_cover(
            screening.gallery_urls, screening.gallery_cover_index, screening.poster_url
        ),
        logo=resolve_logo(screening.gallery_urls, screening.gallery_logo_index),
        director=film.director,
        country=film.country,
        cast=film.cast or None,
        genres=film.genres or None,
        rating=film.rating,
        featured=film.featured,
    )


def schedule_sort_key(item: ScheduleItem) -> tuple[str, str, str, str]:
    """
    Ordering key: start time, then venue, then title.

    Plain string comparison is chronological because times are fixed-width
    ``HH:MM``. The id is a last tie-break so equal keys never depend on
    input order.
    """
    return (item.start_time, item.venue.value, item.title, item.id)


def build_schedule(
    activities: Iterable[Activity],
    films: Iterable[FilmRecord],
    target_date: date,
    options: ScheduleOptions | None = None,
) -> list[ScheduleItem]:
    """
    Build the ordered schedule for one day.

    Args:
        activities: Activities fetched for ``target_date``
        films: All published films
        target_date: Day being scheduled
        options: Build options (defaults when omitted)

    Returns:
        Schedule items without duplicate ids, sorted by schedule_sort_key
    """
    options = options or ScheduleOptions()

    activity_items: list[ScheduleItem] = []
    for activity in activities:
        if activity.event_date != target_date:
            logger.debug(f"Skipping activity {activity.id!r} dated {activity.event_date}")
            continue
        activity_items.append(adapt_activity(activity, options))

    film_items: list[ScheduleItem] = []
    film_count = 0
    for film in films:
        film_count += 1
        try:
            screenings = extract_screenings(film, target_date, options)
            film_items.extend(screening_to_item(s, options) for s in screenings)
        except Exception as e:
            logger.error(f"Error processing film '{film.title}' ({film.id}): {e}", exc_info=True)

    items = sorted(activity_items + film_items, key=schedule_sort_key)

    unique_items: list[ScheduleItem] = []
    seen_ids: set[str] = set()
    for item in items:
        if item.id in seen_ids:
            logger.warning(f"Dropping duplicate schedule item {item.id!r}")
            continue
        seen_ids.add(item.id)
        unique_items.append(item)

    logger.info(
        f"Built schedule for {target_date}: {len(unique_items)} items "
        f"({len(activity_items)} activities, {len(film_items)} screenings from {film_count} films)"
    )
    return unique_items
