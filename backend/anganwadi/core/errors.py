"""Error types raised by the services and how they are rendered over HTTP.

Services raise the specific subclasses; routes decide which ones the caller
may see. ``UpstreamError`` and ``PersistenceError`` never leave a route with
their own message: routes log them and answer with a fixed generic one.
"""

from anganwadi.core.logging import logger
from fastapi import Request, status
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppError):
    """Missing or incorrect admin credential."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    """No program record with the requested id."""

    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(AppError):
    """The image host rejected or failed a request."""


class PersistenceError(AppError):
    """The database failed a read or write."""


class LoginError(AppError):
    """Rejected admin login; rendered as ``{success: false, message}``."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an :class:`AppError` that escaped a route or dependency."""

    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        # NOTE: internal detail stays in the logs
        logger.opt(exception=exc).error(
            "Unhandled {} on {} {}", type(exc).__name__, request.method, request.url.path
        )
        return JSONResponse(
            status_code=exc.status_code, content={"error": "Something went wrong"}
        )

    if isinstance(exc, LoginError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message},
        )

    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
