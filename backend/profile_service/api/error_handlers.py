"""Error Responder — the single boundary that turns failures into error envelopes.

Invariants:
    - HttpError → its (http_status, code, message) verbatim
    - RequestValidationError (malformed JSON) → 400 VALIDATION_ERROR with field details
    - Starlette HTTPException (unknown route, wrong method) → envelope with matching code
    - RateLimitExceeded → 429 RATE_LIMITED
    - Exception (catch-all) → 500 INTERNAL_SERVER_ERROR; message suppressed in production
    - Every error is logged with method, path, code and message before responding
    - Responders never raise

Design Decisions:
    - error_response() is shared by the exception handlers and by routes that
      receive Err(...) from an operation: one envelope, one log line format
    - Severity picks the log level: warning for client errors, error + traceback for 5xx
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from profile_service.core.errors import (
    ErrorSeverity, HttpError, NotFoundError, RateLimitError, ValidationError,
)
from profile_service.core.validate_input import to_violations

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong"


def error_response(request: Request, error: HttpError) -> JSONResponse:
    """Log a classified error and render its envelope."""
    log = logger.warning if error.severity == ErrorSeverity.WARNING else logger.error
    log(
        f"{request.method} {request.url.path} failed: {error.message}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": error.http_status,
            "error_code": error.code,
        },
    )
    return JSONResponse(
        status_code=error.http_status, content=error.to_response(),
    )


def unhandled_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Wrap an unclassified exception as a generic 500."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
            "error_code": "INTERNAL_SERVER_ERROR",
        },
    )
    settings = getattr(request.app.state, "settings", None)
    production = settings is None or settings.is_production
    error = HttpError(GENERIC_ERROR_MESSAGE if production else (str(exc) or GENERIC_ERROR_MESSAGE))
    return JSONResponse(status_code=500, content=error.to_response())


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_framework_error_handlers(app)
    _register_generic_error_handler(app)


def _register_http_error_handler(app: FastAPI) -> None:
    """Register taxonomy error handler (errors raised rather than returned)."""

    @app.exception_handler(HttpError)
    async def http_error_handler(request: Request, exc: HttpError):
        return error_response(request, exc)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register handler for bodies FastAPI could not parse."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        return error_response(
            request, ValidationError.from_violations(to_violations(exc.errors())),
        )


def _register_framework_error_handlers(app: FastAPI) -> None:
    """Register routing and rate-limit error handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == 404:
            error = NotFoundError(f"Route {request.url.path} not found")
        elif exc.status_code == 405:
            error = HttpError("Method not allowed", 405, "METHOD_NOT_ALLOWED")
        else:
            error = HttpError(str(exc.detail), exc.status_code, "HTTP_ERROR")
        return error_response(request, error)

    # must stay sync: SlowAPIMiddleware calls it without awaiting
    @app.exception_handler(RateLimitExceeded)
    def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        return error_response(request, RateLimitError())


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        return unhandled_error_response(request, exc)
