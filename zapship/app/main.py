"""
FastAPI Application Entry Point.

This is the main application file for the Zap Shift Backend.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from zapship.app.core.config import settings
from zapship.app.api.v1.router import router as api_v1_router
from zapship.app.core.observability import ObservabilityMiddleware, configure_logging
from zapship.app.core.redis_client import close_redis, get_redis, ping_redis
from zapship.app.db.session import database
from zapship.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)

# Import models to ensure they are registered with Base
from zapship.app.models.user import User
from zapship.app.models.rider import Rider
from zapship.app.models.parcel import Parcel
from zapship.app.models.payment import Payment
from zapship.app.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    1. Creates database tables on startup.
    2. Releases the connection pool and Redis connections on shutdown.
    """
    configure_logging(settings.log_level)
    await database.create_all()
    logger.info("%s started", settings.app_name)
    yield
    await close_redis()
    await database.dispose()
    logger.info("%s stopped", settings.app_name)


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
    description="Parcel delivery marketplace backend",
    lifespan=lifespan,
)

app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/health", tags=["Health"])
async def health_check(redis=Depends(get_redis)):
    """
    Health check endpoint.

    Returns:
        dict: Status and application information
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.api_version,
        "redis": "connected" if await ping_redis(redis) else "unavailable",
    }


app.include_router(api_v1_router, prefix=settings.api_prefix)


@app.get("/", tags=["Root"], response_class=PlainTextResponse)
async def root():
    return "Zap Shift running ....!"
