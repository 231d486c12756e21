"""PreviewGuard — safe live previews of LLM-generated React components.

Main FastAPI application with lifespan management, CORS, and global error handling.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from previewguard.config import get_settings
from previewguard.api.router import api_router
from previewguard.errors import SanitizationError


def configure_logging() -> None:
    """Configure structured logging from settings."""
    settings = get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    # ── Startup ──
    # The sanitizer prompt is loaded lazily by the first request that needs it
    logger.info(
        "app_started",
        debug=settings.DEBUG,
        model=settings.SANITIZER_MODEL,
        max_attempts=settings.MAX_SANITIZE_ATTEMPTS,
        admin_key_required=bool(settings.ADMIN_API_KEY),
    )

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="PreviewGuard",
    description=(
        "Sanitizes and validates LLM-generated React components "
        "before they are rendered in a sandboxed live preview."
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Middleware ──

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global Exception Handlers ──

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


@app.exception_handler(SanitizationError)
async def sanitization_error_handler(request: Request, exc: SanitizationError):
    """Sanitization failed: do not render. Debug info is logged, not returned."""
    logger.warning(
        "sanitization_failed",
        path=request.url.path,
        reason=exc.reason.value,
        attempts=exc.attempts,
        details=exc.details,
        debug_info=exc.debug_info,
    )
    return JSONResponse(status_code=422, content=exc.to_dict())


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "message": str(exc)},
    )


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


# ── Root endpoint ──

@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "PreviewGuard",
        "version": "1.0.0",
        "description": "Sanitization and validation pipeline for live React previews",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
