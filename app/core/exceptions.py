"""HTTP-facing exceptions rendered as plain-text bodies."""

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse


class AppException(HTTPException):
    """Base class for errors the API reports with a plain-text message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal Server Error"

    def __init__(self, detail: str | None = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class InvalidInputException(AppException):
    """Malformed ISRC, artist name or request parameters (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad Request"


class NotFoundException(AppException):
    """Nothing matched in the catalog or the database (404)."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not Found"


async def app_exception_handler(request: Request, exc: AppException) -> PlainTextResponse:
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    return PlainTextResponse(
        InvalidInputException.default_detail,
        status_code=status.HTTP_400_BAD_REQUEST,
    )
