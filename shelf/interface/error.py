"""Mapping of domain errors onto HTTP responses.

Every handled error is rendered as ``{"error": <kind>, "detail": <message>}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shelf.domain.error import (
    AccessDeniedError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first: MediaDeletedError is both NotFound and InvalidState
ERROR_STATUS: list[tuple[type[DomainError], int, str]] = [
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED, "unauthorized"),
    (AccessDeniedError, status.HTTP_403_FORBIDDEN, "access_denied"),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, "forbidden"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (ConflictError, status.HTTP_409_CONFLICT, "conflict"),
    (InvalidStateError, status.HTTP_409_CONFLICT, "invalid_state"),
    (ValidationError, status.HTTP_400_BAD_REQUEST, "validation_error"),
]


def classify(exc: DomainError) -> tuple[int, str]:
    """Return the HTTP status and error kind for a domain error."""
    for error_type, status_code, kind in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code, kind
    return status.HTTP_400_BAD_REQUEST, "domain_error"


def register_error_handlers(app: FastAPI) -> None:
    """Register the domain and catch-all handlers on the app."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code, kind = classify(exc)
        logger.info(f"{kind} on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status_code, content={"error": kind, "detail": str(exc)}
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        # Never leak internals
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal_error",
                "detail": "An unexpected error occurred",
            },
        )
