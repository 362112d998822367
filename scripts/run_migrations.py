#!/usr/bin/env python3
"""Upgrade the Shelf database schema to the latest revision."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from shelf.config import Settings
from shelf.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Apply migrations up to ``revision``.

    Failures are logged and re-raised so a deploy never starts the API on
    a half-migrated schema.
    """
    settings = Settings()
    configure_logfire(settings)

    try:
        with logfire.span("run_migrations", revision=revision):
            command.upgrade(Config("alembic.ini"), revision)
        logfire.info("Database migrations completed", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            revision=revision,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
