"""
Municipality router.

This module contains the endpoints behind the municipality selector and the
available-years selector.
"""

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.config import settings
from airsense.crud.municipality import municipality as municipality_crud
from airsense.database import get_db
from airsense.dependencies.rate_limit import limiter
from airsense.dependencies.validation import valid_municipality_id
from airsense.errors import NotFoundError
from airsense.schemas.municipality import AvailableYearsResponse, MunicipalityResponse
from airsense.utils.cache import MUNICIPALITIES_KEY, cache
from airsense.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(
    tags=["Municipalities"],
    responses={
        400: {"description": "Invalid municipality id"},
        404: {"description": "No data for the municipality"},
    },
)


@router.get("/municipios", response_model=List[MunicipalityResponse])
@limiter.limit(settings.rate_limit)
async def list_municipalities(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    Get every municipality, alphabetically by name.

    Served from the reference-data cache when Redis is available.
    """
    return await cache.get_or_load(
        MUNICIPALITIES_KEY, lambda: municipality_crud.get_all_ordered(db)
    )


@router.get("/anios/{id_municipio}", response_model=AvailableYearsResponse)
@limiter.limit(settings.rate_limit)
async def list_available_years(
    request: Request,
    municipality_id: int = Depends(valid_municipality_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the years with air-quality measurements in a municipality.

    Returns 404 when the municipality has no measurements at all.
    """
    result = await municipality_crud.get_available_years(db, municipality_id=municipality_id)
    if result is None:
        logger.info(f"No measurement years for municipality {municipality_id}")
        raise NotFoundError("No existen registros de calidad del aire para este municipio.")
    return result
