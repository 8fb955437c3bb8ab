"""
Service-level errors translated into the `{"error": ...}` envelope by the
exception handlers registered in app.main.
"""

from fastapi import status


class ServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """A required field is missing or the payload has the wrong shape."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(ServiceError):
    """The database or messaging gateway rejected a call."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def upstream_error(exc: Exception) -> UpstreamError:
    """Wrap a gateway exception, keeping its message verbatim."""
    return UpstreamError(getattr(exc, "message", None) or str(exc))
