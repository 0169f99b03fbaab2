"""Pydantic schemas for festival activities."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Speaker(BaseModel):
    """Speaker or host listed on an activity."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    role: str = ""
    bio: str | None = None


class Activity(BaseModel):
    """
    Standalone festival activity (workshop, panel, ceremony, ...).

    Field names follow the stored camelCase document keys through aliases;
    snake_case names are accepted as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: str
    name: str
    tags: list[str] = Field(default_factory=list)
    event_date: date
    event_end_date: date | None = None
    start_time: str = ""
    end_time: str = ""
    venue_name: str = ""

    short_description: str | None = None
    image: str | None = None
    organizers: list[str] = Field(default_factory=list)
    speakers: list[Speaker] = Field(default_factory=list)

    max_participants: int | None = None
    need_submission: bool = False
    registered_participants: int | None = None
    views: int | None = None

    status: str = "draft"
    is_public: bool = False

    @field_validator("event_date", "event_end_date", mode="before")
    @classmethod
    def date_part(cls, v: Any) -> Any:
        """Accept full ISO date-time strings by keeping only the date part."""
        if isinstance(v, str) and len(v) > 10 and v[10] in "T ":
            return v[:10]
        return v

    @field_validator("tags", "organizers", mode="before")
    @classmethod
    def drop_blank_strings(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [item for item in v if isinstance(item, str) and item.strip()]
        return v

    @field_validator("start_time", "end_time", "venue_name", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "Activity":
        """
        Build an Activity from a raw stored document.

        Raises:
            pydantic.ValidationError: if required fields are missing or malformed
        """
        return cls.model_validate({**data, "id": doc_id})
