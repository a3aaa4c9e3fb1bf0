"""FastAPI application entry point for Smooth Booking."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1.router import router as api_v1_router
from app.config import get_settings
from app.database import engine
from app.services.errors import BookingError, NotFoundError, PersistenceError, ValidationError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - startup and shutdown events."""
    # Startup
    logger.info("Starting Smooth Booking API...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Database: {settings.async_database_url.split('@')[-1]}")  # Hide credentials

    # Test database connection
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            logger.info("Database connection successful")
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database connection failed: {e}")

    yield

    # Shutdown
    logger.info("Shutting down Smooth Booking API...")
    await engine.dispose()


# Create FastAPI app
app = FastAPI(
    title="Smooth Booking API",
    description="Locations, staff, business hours, appointments and daily calendars",
    version="0.1.0",
    lifespan=lifespan,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)


def _error_status(exc: BookingError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, PersistenceError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    """Map domain errors to JSON responses."""
    return JSONResponse(status_code=_error_status(exc), content=exc.to_dict())


# Include routers
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": "Smooth Booking API",
        "version": "0.1.0",
        "description": "Booking domain service",
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """Global health check."""
    return {"status": "ok"}
