"""Purge media use case."""

import logfire
from pydantic import BaseModel

from shelf.domain.service import PurgeService


class PurgeMediaRequest(BaseModel):
    """Sweep trigger."""

    user_id: str | None = None  # Caller, None when run by the scheduler


class PurgeMediaResponse(BaseModel):
    """Sweep result."""

    purged_count: int


class PurgeMediaUseCase:
    """Use case for running one purge sweep."""

    def __init__(self, purge_service: PurgeService) -> None:
        """Initialize purge media use case.

        Args:
            purge_service: Purge sweeper domain service
        """
        self.purge_service = purge_service

    async def execute(self, request: PurgeMediaRequest) -> PurgeMediaResponse:
        """Execute one sweep."""
        with logfire.span("purge_media.execute", triggered_by=request.user_id):
            purged = await self.purge_service.sweep()
            return PurgeMediaResponse(purged_count=purged)
