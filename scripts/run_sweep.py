#!/usr/bin/env python3
"""Purge media whose retention window has passed.

Meant to be run on a schedule (cron, platform scheduler). Each run is one
sweep in its own request scope. Pages commit as they finish, so a run
that dies part-way keeps what it already purged.
"""

import asyncio
import sys

import logfire

from shelf.application.usecase.media import PurgeMediaRequest, PurgeMediaUseCase
from shelf.config import Settings
from shelf.util.di.container import create_container
from shelf.util.logging import setup_logging
from shelf.util.observability import configure_logfire


async def sweep() -> int:
    """Run one sweep and return the number of purged media."""
    container = create_container(with_fastapi=False)
    try:
        async with container() as request_container:
            use_case = await request_container.get(PurgeMediaUseCase)
            response = await use_case.execute(PurgeMediaRequest())
        return response.purged_count
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        purged = asyncio.run(sweep())
        logfire.info("Scheduled sweep finished", purged_count=purged)
        return 0

    except Exception as e:
        logfire.error(
            "Scheduled sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
