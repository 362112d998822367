"""Domain layer errors.

Every error here is an expected, recoverable condition. The API layer maps
each kind to a stable HTTP status.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class UnauthorizedError(DomainError):
    """Raised when no valid session is present."""

    pass


class AccessDeniedError(DomainError):
    """Raised when the access gate refuses a sign-in."""

    def __init__(self, email: str | None):
        self.email = email
        super().__init__(f"No usable invitation for {email or 'unknown email'}")


class ForbiddenError(DomainError):
    """Raised when a user acts on a resource they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not allowed to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidStateError(DomainError):
    """Raised when an operation does not apply to the resource's current state."""

    def __init__(self, message: str):
        super().__init__(message)


class MediaDeletedError(NotFoundError, InvalidStateError):
    """Raised when deleting media that is already in the trash.

    Reported to callers as not found, since soft-deleted media is hidden
    from every default view.
    """

    def __init__(self, media_id: str):
        NotFoundError.__init__(self, "Media", media_id)


class ConflictError(DomainError):
    """Raised when a write collides with an existing resource."""

    def __init__(self, message: str):
        super().__init__(message)
