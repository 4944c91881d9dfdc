"""
Station router.

This module contains the endpoints that place stations on the map, with or
without a year filter.
"""

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.config import settings
from airsense.crud.station import station as station_crud
from airsense.database import get_db
from airsense.dependencies.rate_limit import limiter
from airsense.dependencies.validation import valid_municipality_id, valid_year
from airsense.errors import NotFoundError
from airsense.schemas.station import StationLocationResponse, StationsByYearResponse

router = APIRouter(
    prefix="/estaciones",
    tags=["Stations"],
    responses={
        400: {"description": "Invalid municipality id or year"},
        404: {"description": "No operative stations"},
    },
)


@router.get("/{id_municipio}", response_model=List[StationLocationResponse])
@limiter.limit(settings.rate_limit)
async def list_stations(
    request: Request,
    municipality_id: int = Depends(valid_municipality_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the stations of a municipality at their latest known location.

    A municipality without stations returns an empty list.
    """
    return await station_crud.get_by_municipality(db, municipality_id=municipality_id)


@router.get("/{id_municipio}/{anio}", response_model=StationsByYearResponse)
@limiter.limit(settings.rate_limit)
async def list_stations_by_year(
    request: Request,
    municipality_id: int = Depends(valid_municipality_id),
    year: int = Depends(valid_year),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the stations of a municipality that measured something in a year.

    Each station is placed where it stood that year. An empty result is a
    404 so the viewer can suggest another year.
    """
    stations = await station_crud.get_by_municipality_and_year(
        db, municipality_id=municipality_id, year=year
    )
    if not stations:
        raise NotFoundError(
            f"No hay estaciones con datos de calidad del aire para este municipio en el año {year}.",
            suggestion="Intente con otro año disponible",
        )

    return {
        "municipio_id": municipality_id,
        "anio_consultado": year,
        "total_estaciones": len(stations),
        "estaciones": stations,
    }
