"""Stdlib logging setup.

Domain and application code log through logfire; this only shapes the
plain loggers used by uvicorn and third-party clients.
"""

import logging
import sys

from shelf.config import Settings

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "asyncpg", "sqlalchemy.engine")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the API and the sweep script.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Access lines duplicate the FastAPI spans in production
    if settings.is_production:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger("shelf").setLevel(level)
    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
