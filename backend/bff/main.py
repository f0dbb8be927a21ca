"""
Indicators BFF - FastAPI Application

Main entry point for the backend-for-frontend API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bff.core.config import get_settings
from bff.core.logging import setup_logging
from bff.api.v1 import router as api_v1_router
from bff.services.base import PipelineStage

settings = get_settings()
setup_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    if settings.indicators_base_url:
        logger.info(f"Upstream: {settings.indicators_base_url}")
    else:
        logger.warning("INDICATORS_BASE_URL is not set - analyze requests will fail")
    if not settings.auth_enabled:
        if settings.bff_allow_anonymous:
            logger.warning("BFF_TOKEN is not set - running without auth (BFF_ALLOW_ANONYMOUS)")
        else:
            logger.warning("BFF_TOKEN is not set and BFF_ALLOW_ANONYMOUS is off - analyze requests will fail")

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Indicators BFF API

    ## Pipeline
    - **Normalize**: instrument, timeframes (D1 is read as H4), count
    - **Presets**: named indicator configs, shallow-merged with overrides
    - **Ensure**: upstream computes indicators and returns cache keys
    - **Series**: one timeframe's series is fetched (H1 preferred)
    - **Notes**: rule-based commentary from the latest values

    ## Errors
    Every failure is `{ok: false, step, error}` where `step` names the stage.
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["content-type", "x-bff-token"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    """Nothing reaches the transport layer without an envelope."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"ok": False, "step": PipelineStage.UNKNOWN.value, "error": str(exc)},
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Indicators BFF API",
        "docs": "/docs",
        "analyze": "/api/v1/analyze",
        "health": "/health",
    }
