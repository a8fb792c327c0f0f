"""
Centralized error types and their HTTP mapping.

Services raise these; main.py registers handlers so routes stay thin and every
error body has the same shape: {"error": "<message>"}.
"""
from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_BAD_REQUEST = 400
STATUS_UNAUTHORIZED = 401
STATUS_FORBIDDEN = 403
STATUS_NOT_FOUND = 404
STATUS_INTERNAL_ERROR = 500

MSG_UNAUTHORIZED = "Unauthorized"
MSG_FORBIDDEN = "Forbidden. Admin access required."


class InvalidPattern(ValueError):
    """Recurring pattern cannot be evaluated (bad day_of_week, week_of_month or interval_weeks)."""


class PersistenceError(RuntimeError):
    """A read the rest of the run depends on failed. Aborts the run with a 500."""


class Unauthorized(Exception):
    """Missing/invalid cron secret or missing user identity."""

    def __init__(self, message: str = MSG_UNAUTHORIZED):
        super().__init__(message)


class Forbidden(Exception):
    def __init__(self, message: str = MSG_FORBIDDEN):
        super().__init__(message)


class NotFound(Exception):
    pass


# ---------------------------------------------------------------------------
# Error rules: (exception type, status_code). First match wins.
# Add new rules here instead of scattering checks in routes.
# ---------------------------------------------------------------------------

ERROR_RULES: list[tuple[type[Exception], int]] = [
    (Unauthorized, STATUS_UNAUTHORIZED),
    (Forbidden, STATUS_FORBIDDEN),
    (NotFound, STATUS_NOT_FOUND),
    (InvalidPattern, STATUS_BAD_REQUEST),
    (PersistenceError, STATUS_INTERNAL_ERROR),
]


def error_response(exc: Exception) -> JSONResponse:
    """Map a known exception to a JSON error response; unknown types become 500."""
    for exc_type, status_code in ERROR_RULES:
        if isinstance(exc, exc_type):
            return JSONResponse(status_code=status_code, content={"error": str(exc)})
    return JSONResponse(status_code=STATUS_INTERNAL_ERROR, content={"error": str(exc) or "Internal server error"})


async def handle_app_error(request: Request, exc: Exception) -> JSONResponse:
    return error_response(exc)
