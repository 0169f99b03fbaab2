"""Schedule API endpoints."""

import asyncio
import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from festgrid.schemas import ScheduleResponse, ScheduleSnapshot
from festgrid.services.options import ScheduleOptions
from festgrid.services.refresh import RefreshCoordinator
from festgrid.services.unifier import build_schedule
from festgrid.stores import BaseDataStore, SQLDataStore

logger = logging.getLogger(__name__)
router = APIRouter()


def get_store(request: Request) -> BaseDataStore:
    """Dependency providing the application's data store."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = SQLDataStore()
        request.app.state.store = store
    return store


def get_coordinator(request: Request) -> RefreshCoordinator:
    """Dependency providing the live schedule coordinator."""
    coordinator = getattr(request.app.state, "coordinator", None)
    if coordinator is None:
        raise HTTPException(status_code=503, detail="Live schedule is not running")
    return coordinator


@router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule(
    date_param: date = Query(..., alias="date", description="Festival day (YYYY-MM-DD)"),
    store: BaseDataStore = Depends(get_store),
) -> ScheduleResponse:
    """
    Build the schedule for one day straight from the store.

    Films and activities are merged and ordered by start time, venue and title.
    """
    activities, films = await asyncio.gather(
        store.list_activities(date_param),
        store.list_films(),
    )
    items = build_schedule(activities, films, date_param, ScheduleOptions.from_settings())

    total_films = sum(1 for item in items if item.type == "film")
    return ScheduleResponse(
        date=date_param,
        items=items,
        total_items=len(items),
        total_films=total_films,
        total_activities=len(items) - total_films,
    )


@router.get("/schedule/live", response_model=ScheduleSnapshot)
async def get_live_schedule(
    coordinator: RefreshCoordinator = Depends(get_coordinator),
) -> ScheduleSnapshot:
    """Current live schedule, including loading and error state."""
    return coordinator.snapshot


@router.put("/schedule/live", response_model=ScheduleSnapshot)
async def set_live_schedule_date(
    date_param: date = Query(..., alias="date", description="Festival day (YYYY-MM-DD)"),
    coordinator: RefreshCoordinator = Depends(get_coordinator),
) -> ScheduleSnapshot:
    """Point the live schedule at another day."""
    return await coordinator.set_target_date(date_param)


@router.post("/schedule/live/refresh", response_model=ScheduleSnapshot)
async def refresh_live_schedule(
    coordinator: RefreshCoordinator = Depends(get_coordinator),
) -> ScheduleSnapshot:
    """Rebuild the live schedule now."""
    logger.info("Manual live schedule refresh requested")
    return await coordinator.force_refresh()
