"""Error Handlers — global exception handlers for the user registry API.

Invariants:
    - UserServiceError → ErrorResponse envelope with its own status
    - RequestValidationError → 422 envelope listing every unparseable location
    - Exception (catch-all) → 500 envelope, never leaks internal details
    - Every error body carries a fresh responseHeader

Design Decisions:
    - Three-layer handler: domain (UserServiceError), parsing (Pydantic), catch-all (Exception)
    - Type errors are 422, field-rule violations are 400 (raised by the service),
      so clients can tell "not JSON of the right shape" from "invalid user"
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.envelope import build_response_header
from app.core.errors import UnprocessableEntityError, UserServiceError
from app.schemas.envelope import ErrorResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_service_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _envelope(error: ErrorResponse, http_status: int) -> JSONResponse:
    return JSONResponse(
        status_code=http_status,
        content=error.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def _register_service_error_handler(app: FastAPI) -> None:
    """Register user-service error handler (fatal errors reach it from routes)."""

    @app.exception_handler(UserServiceError)
    async def service_error_handler(request: Request, exc: UserServiceError):
        if exc.http_status >= 500:
            logger.critical(
                f"UserServiceError: {exc.message}",
                extra={
                    "error_code": exc.code,
                    "error_category": exc.category.value,
                    "severity": exc.severity.value,
                    "path": request.url.path,
                },
            )
            return _envelope(
                ErrorResponse(
                    response_header=build_response_header(),
                    code=str(exc.http_status),
                    message=GENERIC_ERROR_MESSAGE,
                ),
                exc.http_status,
            )
        logger.warning(
            f"UserServiceError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return _envelope(exc.to_response(), exc.http_status)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic parsing error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle bodies and paths that do not parse as the declared types."""
        logger.warning(
            f"Unprocessable request on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "method": request.method},
        )
        error = UnprocessableEntityError(_describe_validation_errors(exc))
        return _envelope(error.to_response(), error.http_status)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return _envelope(
            ErrorResponse(
                response_header=build_response_header(),
                code="500",
                message=GENERIC_ERROR_MESSAGE,
            ),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """One "location: message" entry per parsing error, joined with "; "."""
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
