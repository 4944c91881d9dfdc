"""
Main FastAPI application for the AirSense API.

This module contains the FastAPI application instance, the error handlers
that map the AirSense error taxonomy onto JSON responses, and the root
endpoint.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from airsense.config import settings
from airsense.database import DATA_SOURCE_ERRORS, engine
from airsense.dependencies.rate_limit import limiter
from airsense.errors import AirSenseError, InternalError
from airsense.routers import (
    dictionary_router,
    historical_router,
    municipalities_router,
    pollutants_router,
    stations_router,
    status_router,
)
from airsense.utils.logging_config import setup_logging, get_logger

# Import all models to ensure SQLAlchemy relationships are properly configured
import airsense.models  # noqa: F401

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info("AirSense API - Application starting up")
    logger.info(f"Environment: {'Development' if settings.DEBUG else 'Production'}")
    logger.info(f"Database: {settings.SQLALCHEMY_DATABASE_URI.split('://')[0]}")
    logger.info(f"Year range: {settings.YEAR_MIN}-{settings.YEAR_MAX}")
    logger.info("=" * 60)

    yield

    await engine.dispose()
    logger.info("=" * 60)
    logger.info("AirSense API - Application shutting down")
    logger.info("=" * 60)


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Historical air-quality data for the municipalities of Valle del Cauca",
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def _endpoint_name(request: Request) -> str:
    """
    Path template of the matched route, including the API prefix.

    Depending on the framework version the scope holds either the mounted
    route or the one declared on the router, which lacks the prefix.
    """
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if path is None:
        return request.url.path
    if not path.startswith(settings.API_PREFIX):
        path = settings.API_PREFIX + path
    return path


@app.exception_handler(AirSenseError)
async def airsense_exception_handler(request: Request, exc: AirSenseError):
    """Render validation, not-found, unauthorized and internal errors."""
    if isinstance(exc, InternalError):
        logger.error(f"Error en {exc.endpoint}: {exc.reason}")
    return JSONResponse(status_code=exc.status_code, content=exc.body)


async def database_exception_handler(request: Request, exc: Exception):
    """
    Handle data-source failures.

    Covers SQLAlchemy errors and the OSError a driver raises when it
    cannot reach the server.

    The client gets a generic message naming the endpoint; the reason is
    only logged.
    """
    error = InternalError(_endpoint_name(request), reason=str(exc))
    logger.error(f"Error en {error.endpoint}: {error.reason}")
    return JSONResponse(status_code=error.status_code, content=error.body)


for error_class in DATA_SOURCE_ERRORS:
    app.add_exception_handler(error_class, database_exception_handler)


# Set up CORS
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )


@app.get("/")
@limiter.limit(settings.rate_limit)
async def root(request: Request):
    """
    Root endpoint returning API information.
    """
    return {
        "message": "Welcome to the AirSense API",
        "version": settings.VERSION,
        "years": [settings.YEAR_MIN, settings.YEAR_MAX],
        "docs": "/docs",
        "redoc": "/redoc"
    }


# Include routers
app.include_router(municipalities_router, prefix=settings.API_PREFIX)
app.include_router(stations_router, prefix=settings.API_PREFIX)
app.include_router(pollutants_router, prefix=settings.API_PREFIX)
app.include_router(historical_router, prefix=settings.API_PREFIX)
app.include_router(dictionary_router, prefix=settings.API_PREFIX)
app.include_router(status_router, prefix=settings.API_PREFIX)
