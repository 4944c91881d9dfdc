"""
Historical data router.

This module contains the endpoint that feeds the statistics panel.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.config import settings
from airsense.crud.historical import historical as historical_crud
from airsense.database import get_db
from airsense.dependencies.rate_limit import limiter
from airsense.dependencies.validation import HistoricalQuery, valid_historical_query
from airsense.errors import NotFoundError
from airsense.schemas.historical import HistoricalDataResponse

router = APIRouter(
    tags=["Historical Data"],
    responses={
        400: {"description": "Missing or invalid parameters"},
        404: {"description": "No data for the combination"},
    },
)


@router.get("/datos", response_model=HistoricalDataResponse)
@limiter.limit(settings.rate_limit)
async def get_historical_data(
    request: Request,
    query: HistoricalQuery = Depends(valid_historical_query),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the yearly statistics of a pollutant exposure at a station.

    Example: `/api/datos?estacion=8986&anio=2015&exposicion=4`

    The response includes the air-quality classification and, when the WHO
    defines them for the exposure duration, the WHO limits.
    """
    data = await historical_crud.get_with_classification(
        db,
        station_id=query.station_id,
        year=query.year,
        exposure_id=query.exposure_id,
    )
    if data is None:
        raise NotFoundError(
            "No se encontraron datos para la combinación especificada",
            suggestion=(
                "Verifique que existan mediciones para este contaminante "
                "en la estación y año seleccionados"
            ),
            parametros_consultados={
                "estacion": query.station_id,
                "anio": query.year,
                "exposicion": query.exposure_id,
            },
        )
    return data
