from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from faculty_portal import __version__
from faculty_portal.core.config import settings
from faculty_portal.core.database import init_db, close_db
from faculty_portal.core.exceptions import PortalError, StorageError, ValidationError, error_response
from faculty_portal.core.logging_config import logger
from faculty_portal.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from faculty_portal.core.rate_limiter import limiter, rate_limit_exceeded_handler
from faculty_portal.core.storage_errors import translate_storage_error
from faculty_portal.api.v1.router import api_router


async def validate_critical_config():
    """Refuse to start without a usable secret; warn about risky settings"""
    errors = []
    warnings = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")

    if not settings.JWT_SECRET_KEY:
        errors.append("JWT_SECRET_KEY is not set")

    if settings.ENVIRONMENT == "production":
        if settings.JWT_SECRET_KEY == "CHANGE_ME":
            errors.append("JWT_SECRET_KEY is using default value")
        if settings.DATABASE_URL.startswith("sqlite"):
            warnings.append("Running production on SQLite")
    elif settings.JWT_SECRET_KEY == "CHANGE_ME":
        warnings.append("JWT_SECRET_KEY is using default value")

    if not settings.RATE_LIMIT_ENABLED:
        warnings.append("Rate limiting disabled")

    if errors:
        for err in errors:
            logger.critical(f"[Startup] CRITICAL: {err}")
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    for warn in warnings:
        logger.warning(f"[Startup] WARNING: {warn}")

    logger.info("[Startup] Critical configuration validated")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info(f"Starting {settings.APP_NAME} {__version__} ({settings.ENVIRONMENT}, API {settings.API_VERSION})")

    await validate_critical_config()

    Path(settings.UPLOAD_DIR, "profiles").mkdir(parents=True, exist_ok=True)

    await init_db()
    logger.info("[Startup] Database tables ready")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    description="Lecture reporting, ratings and complaints for faculty staff and students",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# Add rate limiter state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Middleware order matters - last added runs first
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*", "X-Request-ID", "X-Response-Time"],
)


# Exception handlers
@app.exception_handler(PortalError)
async def portal_exception_handler(request: Request, exc: PortalError):
    if exc.status_code >= 500:
        logger.error(f"[{exc.code}] {exc.message} on {request.method} {request.url.path}")
    include_details = settings.DEBUG or not isinstance(exc, StorageError)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc, include_details=include_details)
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or None
    error = ValidationError(first.get("msg", "Invalid request"), field=field)
    body = error_response(error)
    body["error"]["details"]["errors"] = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in errors
    ]
    return JSONResponse(status_code=400, content=body)


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    error = translate_storage_error(exc, context=f"{request.method} {request.url.path}")
    logger.error(f"[Storage] {type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=error.status_code,
        content=error_response(error, include_details=settings.DEBUG)
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}", exc_info=True)
    error = PortalError("Internal server error", details={"detail": str(exc)} if settings.DEBUG else None)
    return JSONResponse(status_code=500, content=error_response(error))


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": __version__,
        "environment": settings.ENVIRONMENT
    }


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")

# Uploaded profile images
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "faculty_portal.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )
