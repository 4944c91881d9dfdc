"""
Status router.

This module contains the keep-alive health probe used by the hosting cron
job and a lightweight status endpoint.
"""

import secrets

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.config import settings
from airsense.database import DATA_SOURCE_ERRORS, get_db, ping
from airsense.dependencies.rate_limit import limiter
from airsense.errors import InternalError, UnauthorizedError
from airsense.schemas.status import HealthResponse
from airsense.utils.cache import cache
from airsense.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(
    tags=["status"],
    responses={
        401: {"description": "Unauthorized"},
    },
)


async def verify_health_secret(secret: str = Query("", description="Shared health-check secret")) -> None:
    """
    Check the shared secret before touching the database.

    An unconfigured secret rejects every request.
    """
    expected = settings.HEALTH_CHECK_SECRET
    if not expected or not secrets.compare_digest(secret.encode(), expected.encode()):
        logger.warning("Health check attempted with an invalid secret")
        raise UnauthorizedError()


@router.get("/health", response_model=HealthResponse)
@limiter.limit("60/minute")
async def health_check(
    request: Request,
    _: None = Depends(verify_health_secret),
    db: AsyncSession = Depends(get_db),
):
    """
    Keep-alive probe.

    Requires `?secret=`; runs `SELECT 1` against the database.

    Rate limit: 60 requests per minute
    """
    try:
        await ping(db)
    except DATA_SOURCE_ERRORS as e:
        raise InternalError(f"{settings.API_PREFIX}/health", reason=str(e)) from e

    logger.info("Database keep-alive check succeeded")
    return {"status": "ok", "message": "Database pinged successfully."}


@router.get("/status")
@limiter.limit("60/minute")
async def get_status(request: Request):
    """
    Get API status without touching the database.

    Rate limit: 60 requests per minute
    """
    return {"status": "ok", "cache": cache.health_check()}
