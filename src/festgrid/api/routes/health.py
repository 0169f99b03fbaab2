"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Status message, plus the live schedule state when the app runs one
    """
    body = {"status": "ok"}
    coordinator = getattr(request.app.state, "coordinator", None)
    if coordinator is not None:
        body["schedule"] = coordinator.state.value
    return body
