"""
Pollutant router.

This module contains the endpoint behind the pollutant selector.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.config import settings
from airsense.crud.pollutant import pollutant as pollutant_crud
from airsense.database import get_db
from airsense.dependencies.rate_limit import limiter
from airsense.dependencies.validation import valid_station_id, valid_year
from airsense.errors import NotFoundError
from airsense.schemas.pollutant import PollutantsResponse

router = APIRouter(
    prefix="/contaminantes",
    tags=["Pollutants"],
    responses={
        400: {"description": "Invalid station id or year"},
        404: {"description": "Nothing measured"},
    },
)


@router.get("/{id_estacion}/{anio}", response_model=PollutantsResponse)
@limiter.limit(settings.rate_limit)
async def list_pollutants(
    request: Request,
    station_id: int = Depends(valid_station_id),
    year: int = Depends(valid_year),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the pollutants measured at a station during a year.

    Each pollutant lists its exposure durations with the exposure id the
    historical endpoint expects.
    """
    pollutants = await pollutant_crud.get_by_station_and_year(
        db, station_id=station_id, year=year
    )
    if not pollutants:
        raise NotFoundError(
            f"No hay datos de contaminantes para esta estación en el año {year}.",
            suggestion="Verifique que la estación estuviera operativa en ese año",
        )

    return {
        "estacion_id": station_id,
        "anio_consultado": year,
        "total_contaminantes": len(pollutants),
        "contaminantes": pollutants,
    }
