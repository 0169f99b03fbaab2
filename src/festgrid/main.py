"""FastAPI application entry point."""

import asyncio
import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from festgrid.api.routes import health, schedule
from festgrid.config import settings
from festgrid.services.options import ScheduleOptions
from festgrid.services.refresh import RefreshCoordinator
from festgrid.stores import SQLDataStore
from festgrid.tasks.refresh_job import register_refresh_jobs
from festgrid.utils.timecalc import festival_today

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one store and one live schedule for the current festival day
    store = SQLDataStore()
    coordinator = RefreshCoordinator(store, ScheduleOptions.from_settings())
    app.state.store = store
    app.state.coordinator = coordinator

    scheduler = AsyncIOScheduler()
    register_refresh_jobs(scheduler, coordinator)
    scheduler.start()
    logger.info("Scheduler started")

    # Build the first schedule in the background so startup is not blocked on the database
    initial_load = asyncio.create_task(
        coordinator.set_target_date(festival_today(settings.festival_timezone))
    )
    logger.info("Initial schedule build triggered in background")

    yield

    # Shutdown: stop the jobs, then release the live schedule's subscriptions
    scheduler.shutdown(wait=False)
    coordinator.close()
    if not initial_load.done():
        initial_load.cancel()
    logger.info("Scheduler shut down")


# Create FastAPI app
app = FastAPI(
    title="Festgrid API",
    description="Unified daily schedule of festival screenings and activities",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:5174",
    ],  # Frontend development server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(schedule.router, prefix="/api", tags=["schedule"])
