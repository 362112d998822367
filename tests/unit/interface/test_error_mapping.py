"""Unit tests for the domain error to HTTP status mapping."""

import pytest

from shelf.domain.error import (
    AccessDeniedError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidStateError,
    MediaDeletedError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from shelf.interface.error import classify


@pytest.mark.parametrize(
    "error, expected",
    [
        (UnauthorizedError("no session"), (401, "unauthorized")),
        (AccessDeniedError("a@x.com"), (403, "access_denied")),
        (ForbiddenError("Media", "1", "2"), (403, "forbidden")),
        (NotFoundError("Media", "1"), (404, "not_found")),
        (MediaDeletedError("1"), (404, "not_found")),
        (ConflictError("taken"), (409, "conflict")),
        (InvalidStateError("not deleted"), (409, "invalid_state")),
        (ValidationError("bad"), (400, "validation_error")),
        (DomainError("other"), (400, "domain_error")),
    ],
)
def test_classify(error, expected):
    """Each domain error kind has a stable status and name."""
    assert classify(error) == expected
