"""
Mapping of core errors onto HTTP responses.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    AlreadyPaid,
    AppointmentNotFound,
    AuthorizationFailed,
    ClinicCoreError,
    InvalidRequest,
    LastAdminViolation,
    ServiceNotFound,
    StorageError,
    UserNotFound,
)

STATUS_CODES = {
    InvalidRequest: 400,
    ServiceNotFound: 404,
    AppointmentNotFound: 404,
    UserNotFound: 404,
    AlreadyPaid: 409,
    LastAdminViolation: 409,
    AuthorizationFailed: 502,
    StorageError: 503,
}


def status_for(exc: ClinicCoreError) -> int:
    """Resolve the HTTP status for a core error."""
    for exc_type, status in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return status
    return 500


def register_error_handlers(app: FastAPI) -> None:
    """Install the core error handler on ``app``."""

    @app.exception_handler(ClinicCoreError)
    async def handle_core_error(request: Request, exc: ClinicCoreError):
        return JSONResponse(
            status_code=status_for(exc),
            content={"error": exc.code, "message": exc.message},
        )
