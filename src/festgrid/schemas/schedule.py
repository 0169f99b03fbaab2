"""Pydantic schemas for the unified festival schedule."""

from datetime import date, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from festgrid.schemas.activity import Speaker
from festgrid.services.venues import VenueCode

ScheduleCategory = Literal["screening", "workshop", "networking", "ceremony", "panel", "special"]


class ScheduleItem(BaseModel):
    """One timeline entry in a day's schedule, either a film screening or an activity."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    type: Literal["film", "activity"]
    category: ScheduleCategory
    date: date
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    venue: VenueCode
    duration: int  # Minutes
    description: str | None = None
    image: str | None = None

    # Film fields
    logo: str | None = None
    director: str | None = None
    country: str | None = None
    cast: list[str] | None = None
    genres: list[str] | None = None
    rating: str | None = None
    featured: bool | None = None

    # Activity fields
    speakers: list[Speaker] | None = None
    organizers: list[str] | None = None
    tags: list[str] | None = None
    max_participants: int | None = None
    registration_required: bool | None = None
    registered_participants: int | None = None
    views: int | None = None
    status: str | None = None
    is_public: bool | None = None


class RefreshState(str, Enum):
    """Lifecycle of a live schedule."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class ScheduleSnapshot(BaseModel):
    """
    What a consumer of the live schedule sees at one moment.

    The item list survives an ERROR state so a transient fetch failure does
    not blank out the display.
    """

    model_config = ConfigDict(frozen=True)

    target_date: date | None = None
    state: RefreshState = RefreshState.IDLE
    items: list[ScheduleItem] = Field(default_factory=list)
    error: str | None = None
    last_updated: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_loading(self) -> bool:
        return self.state is RefreshState.LOADING


class ScheduleResponse(BaseModel):
    """Response for the schedule endpoint."""

    date: date
    items: list[ScheduleItem]
    total_items: int
    total_films: int
    total_activities: int
