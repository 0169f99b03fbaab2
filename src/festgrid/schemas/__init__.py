"""Pydantic schemas for stored documents and schedule output."""

from festgrid.schemas.activity import Activity, Speaker
from festgrid.schemas.film import FilmRecord, ScreeningSlot
from festgrid.schemas.schedule import (
    RefreshState,
    ScheduleItem,
    ScheduleResponse,
    ScheduleSnapshot,
)

__all__ = [
    "Activity",
    "Speaker",
    "FilmRecord",
    "ScreeningSlot",
    "RefreshState",
    "ScheduleItem",
    "ScheduleResponse",
    "ScheduleSnapshot",
]
