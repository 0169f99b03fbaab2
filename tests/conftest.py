"""Shared test fixtures."""

import pytest
from fastapi import FastAPI

from festgrid.api.routes import health, schedule


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app without the APScheduler lifespan, for API tests."""
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(schedule.router, prefix="/api")
    return app
