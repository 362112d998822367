"""FastAPI application."""

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shelf.config import Settings
from shelf.interface.api.routes import (
    auth,
    collections,
    health,
    invitations,
    media,
    tags,
)
from shelf.interface.error import register_error_handlers
from shelf.util.di.container import create_container
from shelf.util.observability import instrument_fastapi, instrument_httpx


def cors_origins(settings: Settings) -> list[str]:
    """Origins allowed to call the API with credentials.

    The frontend sends the session cookie, so origins must be explicit.
    """
    origins = [settings.api.frontend_url]
    if not settings.is_production:
        origins.append("http://localhost:3000")
    return sorted(set(origins))


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create the FastAPI application.

    Logfire should be configured first; start_app.py does this.

    Args:
        container: DI container; the production container when omitted
    """
    settings = Settings()

    # GitHub and blob storage calls
    instrument_httpx()

    app_instance = FastAPI(
        title="Shelf API",
        description="Invitation-only library of EPUB and PDF media",
        version="0.1.0",
    )
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_dishka(container or create_container(), app_instance)
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(invitations.router)
    # GET /invite/{token} lives outside the /invitations prefix
    app_instance.include_router(invitations.invite_router)
    app_instance.include_router(media.router)
    app_instance.include_router(collections.router)
    app_instance.include_router(tags.router)

    return app_instance


# uvicorn entry point; start_app.py configures Logfire before import
app = create_app()
