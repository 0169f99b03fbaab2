"""Extraction of concrete screenings from film records."""

import logging
from dataclasses import dataclass
from datetime import date

from festgrid.schemas.film import FilmRecord, ScreeningSlot
from festgrid.services.options import ScheduleOptions
from festgrid.services.screening_times import resolve_end_time, resolve_screening_times
from festgrid.services.venues import VenueCode
from festgrid.utils.dates import calendar_date
from festgrid.utils.timecalc import normalise_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScreeningRecord:
    """
    One concrete occurrence of a film on a given day.

    Intermediate value: produced by extract_screenings and converted straight
    into a ScheduleItem. Image fields are copied from the film so the cover
    can be resolved at conversion time.
    """

    film: FilmRecord
    slot_number: int
    screening_date: date
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    venue: VenueCode
    synthesized: bool = False

    @property
    def film_id(self) -> str:
        return self.film.id

    @property
    def film_title(self) -> str:
        return self.film.title

    @property
    def gallery_urls(self) -> list[str]:
        return self.film.gallery_urls

    @property
    def gallery_cover_index(self) -> int | None:
        return self.film.gallery_cover_index

    @property
    def gallery_logo_index(self) -> int | None:
        return self.film.gallery_logo_index

    @property
    def poster_url(self) -> str | None:
        return self.film.poster_url


def extract_screenings(
    film: FilmRecord,
    target_date: date,
    options: ScheduleOptions | None = None,
) -> list[ScreeningRecord]:
    """
    List the screenings of ``film`` that fall on ``target_date``.

    Each slot whose screening date is on ``target_date`` yields one record,
    in slot order. When no slot matches and the film has no screening dates
    at all, a single placeholder record is synthesized for ``target_date``
    (unless ``options.fallback_synthesis`` is off) so the film does not
    vanish from the grid. A film whose dates are all on other days yields
    nothing.

    Args:
        film: Normalized film record
        target_date: Day being scheduled
        options: Build options (defaults when omitted)

    Returns:
        Screening records ordered by slot number
    """
    options = options or ScheduleOptions()
    screenings: list[ScreeningRecord] = []

    for slot in sorted(film.slots, key=lambda s: s.number):
        if slot.screening_date is None:
            continue

        slot_date = calendar_date(slot.screening_date, options.timezone)
        if slot_date != target_date:
            logger.debug(
                f"'{film.title}' screening {slot.number} is on {slot_date}, not {target_date}"
            )
            continue

        start_time, end_time = resolve_screening_times(
            slot.start_time,
            slot.end_time,
            slot.screening_date,
            film.duration,
            tz=options.timezone,
            default_start=options.default_start_time,
            default_duration=options.default_duration,
        )
        screenings.append(
            ScreeningRecord(
                film=film,
                slot_number=slot.number,
                screening_date=slot_date,
                start_time=start_time,
                end_time=end_time,
                venue=options.venue(slot.venue or film.venue),
            )
        )

    if screenings:
        return screenings

    if film.has_screening_dates:
        logger.debug(f"'{film.title}' has screening dates but none on {target_date}")
        return []

    if not options.fallback_synthesis:
        logger.debug(f"'{film.title}' has no screening dates, fallback synthesis disabled")
        return []

    screening = _synthesize_screening(film, target_date, options)
    logger.info(
        f"'{film.title}' has no screening dates, placing it at "
        f"{screening.start_time}-{screening.end_time} on {target_date}"
    )
    return [screening]


def _synthesize_screening(
    film: FilmRecord,
    target_date: date,
    options: ScheduleOptions,
) -> ScreeningRecord:
    """Placeholder screening built from whatever dedicated time fields the slots carry."""
    start_time = _first_valid_time(film.slots, "start_time") or options.default_start_time
    end_time = _first_valid_time(film.slots, "end_time") or resolve_end_time(
        None, start_time, film.duration, options.default_duration
    )
    venue = next((slot.venue for slot in film.slots if slot.venue), film.venue)

    return ScreeningRecord(
        film=film,
        slot_number=1,
        screening_date=target_date,
        start_time=start_time,
        end_time=end_time,
        venue=options.venue(venue),
        synthesized=True,
    )


def _first_valid_time(slots: list[ScreeningSlot], field_name: str) -> str | None:
    for slot in sorted(slots, key=lambda s: s.number):
        value = normalise_time(getattr(slot, field_name))
        if value:
            return value
    return None
