"""
Rate Limiting for the Faculty Reporting Portal
==============================================
slowapi limiter with in-memory storage by default.

Only the credential endpoints carry an explicit limit:
- /auth/login
- /auth/register

Set RATE_LIMIT_ENABLED=false to switch limiting off (the test suite does).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from faculty_portal.core.config import settings
from faculty_portal.core.logging_config import logger


def get_client_identifier(request: Request) -> str:
    """Authenticated user id when known, otherwise the client address"""
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """429 with the same body shape as every other error"""
    logger.warning(
        f"[RateLimit] Exceeded for {get_client_identifier(request)}: {exc.detail}",
        extra={"event_type": "rate_limit", "http_path": request.url.path}
    )

    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please slow down.",
            "error": {
                "code": "RATE_LIMIT_EXCEEDED",
                "message": "Too many requests. Please slow down.",
                "details": {"limit": str(exc.detail)},
            },
        },
        headers={"Retry-After": "60"},
    )


def auth_rate_limit():
    """Limit applied to login and registration"""
    return limiter.limit(settings.AUTH_RATE_LIMIT, key_func=get_remote_address)
