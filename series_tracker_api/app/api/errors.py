"""
Exception handlers translating errors into HTTP responses.

This is the only place that knows which status code each error kind
maps to.  Every error response has the body ``{"message": "..."}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import (
    InvalidInputError,
    SeriesNotFoundError,
    SeriesTrackerError,
    StorageError,
)
from ..schemas.series import ErrorResponse

logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (SeriesNotFoundError, status.HTTP_404_NOT_FOUND),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
        headers=headers,
    )


def status_code_for(exc: SeriesTrackerError) -> int:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def describe_validation_error(exc: RequestValidationError) -> str:
    """Summarise the first validation problem in one sentence."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = tuple(first.get("loc", ()))
    if location and location[0] == "path":
        return f"Invalid id: {first.get('input')}"
    if first.get("type") == "json_invalid":
        return "Malformed JSON body"
    field = ".".join(str(part) for part in location[1:]) or "body"
    return f"Invalid request body ({field}): {first.get('msg')}"


async def handle_tracker_error(request: Request, exc: SeriesTrackerError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(status_code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, describe_validation_error(exc))


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


async def convert_unexpected_errors(request: Request, call_next):
    """Turn unhandled exceptions into the generic 500 body.

    Registered as the innermost middleware so the response still passes
    through CORS and the access log on its way out.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return await handle_unexpected_error(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SeriesTrackerError, handle_tracker_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
