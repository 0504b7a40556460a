"""
Application exceptions.

Services raise these; the handlers registered in ``bootcamp_api.main`` turn
them into ``{"success": false, "message": ...}`` responses.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(AppError):
    """Missing, malformed or expired session."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized, no token"


class ForbiddenError(AppError):
    """Authenticated, but not allowed to perform the action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access forbidden: You do not have the required role"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class BadRequestError(AppError):
    """Malformed input or a violated entity invariant."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(BadRequestError):
    """Duplicate unique key (username, email, bootcamp name, review pair)."""

    default_message = "Duplicate field value entered"


class UpstreamError(AppError):
    """An external collaborator (email, geocoder, file mover) failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Upstream service failure"
