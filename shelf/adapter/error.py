"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External identity provider error."""

    pass


class DeliveryError(AdapterError):
    """Email delivery error."""

    pass


class StorageError(AdapterError):
    """Blob storage error."""

    pass
