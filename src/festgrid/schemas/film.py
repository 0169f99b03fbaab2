"""Pydantic schemas for film records."""

import logging
from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from festgrid.utils.dates import parse_screening_value

logger = logging.getLogger(__name__)

FILM_STATUSES = ("draft", "published", "archived")
LEGACY_ACCEPTED_STATUS = "ตอบรับ / Accepted"


class ScreeningSlot(BaseModel):
    """One of the (up to two) screening sub-records embedded in a film."""

    model_config = ConfigDict(frozen=True)

    number: Literal[1, 2]
    screening_date: datetime | date | None = None
    start_time: str | None = None
    end_time: str | None = None
    venue: str | None = None

    # True when the source document carried any date value for this slot,
    # even one that could not be read.
    date_given: bool = False

    @model_validator(mode="before")
    @classmethod
    def mark_date_given(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("screening_date") and "date_given" not in data:
            return {**data, "date_given": True}
        return data

    @field_validator("screening_date", mode="before")
    @classmethod
    def parse_screening_date(cls, v: Any) -> datetime | date | None:
        return parse_screening_value(v)


class FilmRecord(BaseModel):
    """
    Film in the single internal shape used by the schedule engine.

    Built once per raw document by ``from_document``, which absorbs the
    differences between the legacy and current film schemas.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    director: str | None = None
    synopsis: str | None = None
    country: str | None = None
    rating: str | None = None
    cast: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    featured: bool = False
    duration: int | None = None  # Shared by every slot

    venue: str | None = None
    slots: list[ScreeningSlot] = Field(default_factory=list, max_length=2)

    # Image fields
    gallery_urls: list[str] = Field(default_factory=list)
    gallery_cover_index: int | None = None
    gallery_logo_index: int | None = None
    poster_url: str | None = None

    status: str = "draft"
    publication_status: str = "public"

    @property
    def has_screening_dates(self) -> bool:
        return any(slot.date_given for slot in self.slots)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "FilmRecord":
        """
        Normalize a raw film document of any schema generation.

        Args:
            doc_id: Document id
            data: Raw document fields

        Returns:
            FilmRecord

        Raises:
            pydantic.ValidationError: if the document cannot be represented at all
        """
        venue = _first_text(data.get("venue"), data.get("theatre"))

        return cls(
            id=doc_id,
            title=_first_text(data.get("titleEn"), data.get("title")) or "Untitled",
            director=_first_text(data.get("director")),
            synopsis=_first_text(data.get("synopsis")),
            country=_extract_country(data),
            rating=_first_text(data.get("rating")),
            cast=_extract_cast(data),
            genres=_extract_genres(data),
            featured=bool(data.get("featured", False)),
            duration=_extract_duration(data),
            venue=venue,
            slots=_extract_slots(data, venue),
            gallery_urls=_extract_gallery(data),
            gallery_cover_index=_optional_int(data.get("galleryCoverIndex")),
            gallery_logo_index=_optional_int(data.get("galleryLogoIndex")),
            poster_url=_first_text(data.get("posterUrl")),
            status=_extract_status(data),
            publication_status=_first_text(data.get("publicationStatus")) or "public",
        )


def _first_text(*values: Any) -> str | None:
    """First value that is a non-blank string."""
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _extract_duration(data: dict[str, Any]) -> int | None:
    for key in ("duration", "length", "Length"):
        value = _optional_int(data.get(key))
        if value and value > 0:
            return value
    return None


def _extract_genres(data: dict[str, Any]) -> list[str]:
    genres = data.get("genres")
    if isinstance(genres, list):
        return [g for g in genres if isinstance(g, str) and g.strip()]
    genre = _first_text(data.get("genre"))
    return [genre] if genre else []


def _extract_country(data: dict[str, Any]) -> str | None:
    countries = data.get("countries")
    if isinstance(countries, list) and countries:
        return _first_text(countries[0])
    return _first_text(data.get("country"))


def _extract_cast(data: dict[str, Any]) -> list[str]:
    cast = data.get("cast")
    if isinstance(cast, list):
        names = []
        for member in cast:
            name = member.get("name") if isinstance(member, dict) else member
            if isinstance(name, str) and name.strip():
                names.append(name.strip())
        return names

    main_actors = _first_text(data.get("mainActors"))
    if main_actors:
        return [actor.strip() for actor in main_actors.split(",") if actor.strip()]
    return []


def _extract_status(data: dict[str, Any]) -> str:
    status = data.get("status")
    if status in FILM_STATUSES:
        return status

    publication_status = data.get("publicationStatus")
    if publication_status in FILM_STATUSES:
        return publication_status
    if publication_status == "public":
        return "published"

    if status == LEGACY_ACCEPTED_STATUS:
        return "published"
    return "draft"


def _extract_slots(data: dict[str, Any], venue: str | None) -> list[ScreeningSlot]:
    """
    Build the film's screening slots.

    Legacy ``screeningDateN`` fields win when either is set. Otherwise the
    current ``screenings`` array supplies the dates, with any legacy
    ``startTimeN`` / ``endTimeN`` fields as the slots' dedicated times.
    Without either, legacy times alone give undated slots.
    """
    if data.get("screeningDate1") or data.get("screeningDate2"):
        return _legacy_slots(data, venue)

    screenings = data.get("screenings")
    if isinstance(screenings, list) and screenings:
        return _array_slots(data, screenings, venue)
    if screenings is not None and not isinstance(screenings, list):
        logger.warning(f"Ignoring non-list screenings value {screenings!r}")

    return _legacy_slots(data, venue)


def _legacy_slots(data: dict[str, Any], venue: str | None) -> list[ScreeningSlot]:
    slots = []
    for number in (1, 2):
        raw_date = data.get(f"screeningDate{number}")
        start_time = _first_text(data.get(f"startTime{number}"))
        end_time = _first_text(data.get(f"endTime{number}"))
        if not raw_date and not start_time and not end_time:
            continue
        slots.append(
            ScreeningSlot(
                number=number,
                screening_date=raw_date,
                start_time=start_time,
                end_time=end_time,
                venue=venue,
                date_given=bool(raw_date),
            )
        )
    return slots


def _array_slots(
    data: dict[str, Any],
    screenings: list[Any],
    venue: str | None,
) -> list[ScreeningSlot]:
    slots = []
    for number, screening in zip((1, 2), screenings):
        if not isinstance(screening, dict):
            logger.warning(f"Ignoring malformed screening entry {screening!r}")
            continue
        raw_date = screening.get("date")
        slots.append(
            ScreeningSlot(
                number=number,
                screening_date=raw_date,
                start_time=_first_text(data.get(f"startTime{number}"), screening.get("time")),
                end_time=_first_text(data.get(f"endTime{number}")),
                venue=_first_text(screening.get("venue")) or venue,
                date_given=bool(raw_date),
            )
        )
    if len(screenings) > 2:
        logger.warning(f"Film has {len(screenings)} screenings, only the first two are scheduled")
    return slots


def _extract_gallery(data: dict[str, Any]) -> list[str]:
    """Gallery URLs, keeping blank placeholders in position so stored indices stay valid."""
    gallery = data.get("galleryUrls")
    if gallery is None:
        return []
    if not isinstance(gallery, (list, tuple)):
        logger.warning(f"Ignoring non-list galleryUrls value {gallery!r}")
        return []
    return [url if isinstance(url, str) else "" for url in gallery]
