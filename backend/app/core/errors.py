"""Domain exceptions raised by services and translated by routers."""


class QualityError(Exception):
    """Base class for all domain errors."""


class ValidationFailedError(QualityError, ValueError):
    """Missing or malformed input, detected before any mutation."""


class NotFoundError(QualityError, LookupError):
    """A referenced part, task or notification is absent or not accessible."""

    def __init__(self, resource: str, key: object = None):
        self.resource = resource
        self.key = key
        message = f"{resource} not found"
        if key is not None:
            message = f"{resource} '{key}' not found"
        super().__init__(message)


class StorageError(QualityError):
    """Persistence failure inside a unit of work; the unit was rolled back."""


class RealtimeDeliveryError(QualityError):
    """Realtime publish failed. Never surfaced to API callers."""
