"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from shelf.config import Settings
from shelf.domain.service import EmailService

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness plus the settings operators most often need to confirm."""

    status: str
    timestamp: datetime
    version: str
    environment: str
    git_sha: str
    invitation_email: bool
    retention_days: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    email_service: FromDishka[EmailService],
) -> HealthResponse:
    """Report that the API is up.

    ``invitation_email`` is false when SMTP is unconfigured; invitations
    are still created, only the email is skipped.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
        environment=settings.environment,
        git_sha=settings.git_sha,
        invitation_email=email_service.validate_email_config(),
        retention_days=settings.library.retention_days,
    )
