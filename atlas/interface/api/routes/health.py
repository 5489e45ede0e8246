"""Liveness route."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from atlas.config import Settings

API_VERSION = "0.1.0"

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str
    service: str
    version: str
    git_sha: str
    environment: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is up.

    Public: the authentication middleware skips this path. No dependency is
    probed, so a database outage does not fail the check.
    """
    return HealthResponse(
        status="healthy",
        service="atlas-api",
        version=API_VERSION,
        git_sha=settings.git_sha,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc),
    )
