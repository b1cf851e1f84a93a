"""Portal error taxonomy.

Services raise these; ``main.py`` maps each class to an HTTP status so
routers never build error responses by hand.
"""
from fastapi import status


class PortalError(Exception):
    """Base class for every error the portal surfaces to a caller."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    """Bad or missing input. Raised before anything is persisted."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class AuthError(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(PortalError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransitionError(PortalError):
    """The record is not in the status the transition expects (terminal or raced)."""

    status_code = status.HTTP_409_CONFLICT


class PersistenceError(PortalError):
    """The store was unreachable or rejected the write."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class ExternalServiceError(PortalError):
    """The completion model failed or returned output that does not fit the schema."""

    status_code = status.HTTP_502_BAD_GATEWAY
