"""Shared exceptions for service layer operations.

Services raise these; routers translate them into HTTP responses.
"""


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthorizedError(ServiceError):
    """Raised when credentials are missing or wrong."""


class ForbiddenError(ServiceError):
    """Raised when the caller is authenticated but does not own the resource."""


class NotFoundError(ServiceError):
    """Raised when the requested resource does not exist."""


class ConflictError(ServiceError):
    """Raised when a write would violate a uniqueness constraint."""
