#!/usr/bin/env python3
"""Start the Shelf API, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from shelf.config import Settings
from shelf.util.logging import setup_logging
from shelf.util.observability import configure_logfire


def main() -> int:
    """Configure logging, then serve the app with uvicorn."""
    settings = Settings()

    # Logfire first so startup errors are captured
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting Shelf API",
            environment=settings.environment,
            port=settings.port,
        )
        uvicorn.run(
            "shelf.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
