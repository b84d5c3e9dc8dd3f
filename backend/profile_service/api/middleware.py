"""HTTP Middleware — request logging, last-resort error capture and secure headers.

Invariants:
    - Every request is logged once with method, path, status, duration and client
    - Log level follows status: info < 400, warning 4xx, error 5xx
    - An exception escaping the app is answered with the generic 500 envelope here,
      so it never reaches the server as an unhandled error
    - Secure headers are set on every response, error responses included
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from profile_service.api.error_handlers import unhandled_error_response

logger = logging.getLogger("profile_service.access")

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "X-XSS-Protection": "0",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request and converts escaped exceptions to 500s."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            response = unhandled_error_response(request, exc)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        status_code = response.status_code
        if status_code >= 500:
            log = logger.error
        elif status_code >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            f"{request.method} {request.url.path} {status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": duration_ms,
                "client": request.client.host if request.client else None,
            },
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds restrictive default headers to every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        for header_name, header_value in SECURE_HEADERS.items():
            response.headers[header_name] = header_value
        return response
