"""Logfire setup and instrumentation.

Services log through ``logfire`` directly:

    logfire.info("Invitation consumed", invitation_id=str(invitation.id))

    with logfire.span("purge_service.sweep", cutoff=cutoff.isoformat()):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from shelf.config import Settings


def should_send(settings: Settings) -> bool:
    """Whether spans leave the process.

    An explicit ``OBSERVABILITY__SEND_TO_LOGFIRE`` wins; otherwise sending
    follows the presence of ``OBSERVABILITY__LOGFIRE_TOKEN``.
    """
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is imported.

    Args:
        settings: Application settings
    """
    send = should_send(settings)
    logfire.configure(
        service_name="shelf-api",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request.

    Headers are never captured: the session and handoff tokens travel
    in cookies.
    """

    def request_attributes(request, attributes):
        result = {**attributes, "method": request.method, "path": request.url.path}
        if request.client:
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries, tagging them with the current span."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace outbound calls to GitHub and the blob store."""
    logfire.instrument_httpx()
