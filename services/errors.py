"""
services.errors - Exceptions raised by the service layer.

The API layer maps these onto HTTP status codes; the import engine
maps them onto per-entry outcomes.
"""


class ServiceError(Exception):
    """Base class for service-layer failures."""
    pass


class NotFoundError(ServiceError):
    """A referenced user or book does not exist."""

    def __init__(self, kind: str, key):
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class ConflictError(ServiceError):
    """The write would duplicate a row the store allows only once."""
    pass


class ValidationError(ServiceError):
    """The supplied values break a domain rule (e.g. rating out of range)."""
    pass
