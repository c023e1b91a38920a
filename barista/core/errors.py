"""Exception types and FastAPI exception handlers."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("barista.errors")


class HttpError(Exception):
    """Error carrying the HTTP status code it should be rendered with."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class BadRequestError(HttpError):
    def __init__(self, message: str = "Invalid request parameters.") -> None:
        super().__init__(400, message)


class NotFoundError(HttpError):
    def __init__(self, message: str = "Resource not found.") -> None:
        super().__init__(404, message)


async def http_error_handler(request: Request, exc: HttpError) -> JSONResponse:
    """Render an :class:`HttpError` using the storefront's error envelope."""

    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": {"message": exc.message}},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    """Return a generic JSON error response while logging the exception."""

    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "Something unexpected happened. Please try again later.",
        },
    )
