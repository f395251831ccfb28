"""Global exception handlers that return consistent JSON error envelopes.

Register these with the FastAPI application via ``app.add_exception_handler``.
All responses follow the ``ErrorResponse`` schema from ``src.schemas.common``.
The ``/health`` 503 path does not go through here; it returns an empty body.
"""

import logging
import traceback

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from src.schemas.common import ErrorCode, ErrorResponse

logger = logging.getLogger(__name__)

# Map HTTP status codes to stable error code strings used in the response envelope.
_STATUS_TO_CODE: dict[int, str] = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    500: "INTERNAL_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


def _code_for_status(status_code: int) -> str:
    """Return the error code string for *status_code*, falling back to ``HTTP_{code}``."""
    return _STATUS_TO_CODE.get(status_code, f"HTTP_{status_code}")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Convert ``HTTPException`` (including router 404/405) to the standard error envelope.

    The ``exc.detail`` string becomes ``error.message``; the HTTP status code is
    translated to a stable ``error.code`` string (e.g. 404 → ``NOT_FOUND``).
    Response headers carried by the exception (such as ``Allow`` on 405) are
    forwarded to the client.
    """
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    body = ErrorResponse(
        error=ErrorCode(
            code=_code_for_status(exc.status_code),
            message=detail,
        )
    )
    headers = dict(exc.headers) if exc.headers else None
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for any exception not matched by a more specific handler.

    Logs the full traceback at ERROR level, but returns only a generic
    ``INTERNAL_ERROR`` message to the client.
    """
    logger.error(
        "Unhandled %s on %s %s\n%s",
        type(exc).__name__,
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    body = ErrorResponse(
        error=ErrorCode(
            code="INTERNAL_ERROR",
            message="An internal server error occurred",
        )
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )
