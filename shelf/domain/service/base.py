"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the business rules that span several entities or
    need a repository or an external collaborator.
    """

    pass
