"""
Faculty Reporting Portal - HTTP Middleware

RequestLoggingMiddleware   request id + one log line per request
SecurityHeadersMiddleware  fixed hardening headers
RequestSizeLimitMiddleware 413 on oversized declared bodies
"""

import time
from typing import Callable, Dict, FrozenSet
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response, JSONResponse
from starlette.types import ASGIApp

from faculty_portal.core.logging_config import (
    logger,
    set_request_id,
    set_user_id,
    generate_request_id,
)


QUIET_PATHS: FrozenSet[str] = frozenset({
    "/",
    "/health",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
})
QUIET_PREFIXES = ("/uploads/", "/api/v1/health/")

SLOW_REQUEST_MS = 1000

SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def should_skip_logging(path: str) -> bool:
    """Probes, docs and static profile images are not logged"""
    return path in QUIET_PATHS or path.startswith(QUIET_PREFIXES)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Binds a request id (incoming X-Request-ID or a fresh one) to the
    logging context, logs the outcome and echoes the id back with
    X-Response-Time. Context is cleared when the request ends.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)

        method, path = request.method, request.url.path
        quiet = should_skip_logging(path)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"{method} {path} raised {type(exc).__name__}",
                exc_info=True,
                extra={
                    "event_type": "http_request_error",
                    "http_method": method,
                    "http_path": path,
                    "duration_ms": (time.perf_counter() - started) * 1000,
                }
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"

        if not quiet:
            client_ip = request.client.host if request.client else "unknown"
            logger.log_request(method, path, response.status_code, elapsed_ms, client_ip=client_ip)
            if elapsed_ms > SLOW_REQUEST_MS:
                logger.warning(
                    f"Slow request: {method} {path} took {elapsed_ms:.0f}ms",
                    extra={"event_type": "slow_request", "http_path": path, "duration_ms": elapsed_ms}
                )

        set_request_id("")
        set_user_id(None)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Rejects a request whose Content-Length is above max_size before the
    body is read. Profile images have their own smaller cap in
    ProfileService.
    """

    def __init__(self, app: ASGIApp, max_size: int = 10 * 1024 * 1024):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_size:
            logger.warning(
                f"Rejected {request.url.path}: body of {declared} bytes",
                extra={"event_type": "request_too_large", "max_size": self.max_size}
            )
            limit_mb = self.max_size // (1024 * 1024)
            return JSONResponse(
                status_code=413,
                content={
                    "detail": f"Request body too large. Maximum size is {limit_mb}MB",
                    "error": {
                        "code": "REQUEST_TOO_LARGE",
                        "message": f"Request body too large. Maximum size is {limit_mb}MB",
                        "details": {"max_bytes": self.max_size},
                    },
                }
            )

        return await call_next(request)


__all__ = [
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "RequestSizeLimitMiddleware",
    "should_skip_logging",
]
