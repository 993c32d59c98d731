"""Exception handlers shaping error responses."""
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.logger import get_logger

LOGGER = get_logger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path"}


def format_validation_errors(errors: list[dict]) -> str:
    """Render pydantic errors as ``field: message`` pairs joined by ``; ``."""

    parts: list[str] = []
    for error in errors:
        location = [
            str(item)
            for item in error.get("loc", ())
            if item not in _LOCATION_PREFIXES
        ]
        message = str(error.get("msg", "Invalid value"))
        message = message.removeprefix("Value error, ")
        parts.append(f"{'.'.join(location)}: {message}" if location else message)
    return "; ".join(parts)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = list(exc.errors())
    message = format_validation_errors(errors)
    LOGGER.info("Rejected request payload: %s", message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": f"Validation error: {message}",
            "errors": [
                {"loc": [str(item) for item in error.get("loc", ())], "msg": error.get("msg")}
                for error in errors
            ],
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
