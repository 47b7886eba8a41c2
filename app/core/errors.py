"""
HTTP-facing application errors.

Route handlers raise these; the exception handler registered in app.main
turns them into JSON bodies of the form {"message": "..."} with the
error's status code. Messages are stable and generic, details go to the logs.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotAuthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class StorageUnavailable(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Database not configured"


class DeletionFailed(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Failed to delete account"


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"


class UpstreamFailed(AppError):
    """The generative AI backend could not produce a usable result."""

    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Generation failed"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError as {"message": ...}."""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
