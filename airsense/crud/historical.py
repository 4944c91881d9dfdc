"""
Historical data queries.

This module fetches the yearly statistics of one (station, year, exposure)
triple and attaches the derived air-quality classification.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload

from airsense.crud.base import CRUDBase
from airsense.models.historical_datum import HistoricalDatum
from airsense.models.pollutant import Exposure
from airsense.utils.classification import classify


class CRUDHistoricalDatum(CRUDBase[HistoricalDatum]):
    """
    Queries for the HistoricalDatum model.
    """

    async def get_datum(
        self, db: AsyncSession, *, station_id: int, year: int, exposure_id: int
    ) -> Optional[HistoricalDatum]:
        """
        Get the datum of a (station, year, exposure) triple.

        The station and the exposure with its pollutant are loaded eagerly.

        Returns:
            HistoricalDatum instance or None if that combination was never measured
        """
        result = await db.execute(
            select(HistoricalDatum)
            .options(
                joinedload(HistoricalDatum.station),
                joinedload(HistoricalDatum.exposure).joinedload(Exposure.pollutant),
            )
            .where(
                HistoricalDatum.station_id == station_id,
                HistoricalDatum.year == year,
                HistoricalDatum.exposure_id == exposure_id,
            )
        )
        return result.scalars().first()

    async def get_with_classification(
        self, db: AsyncSession, *, station_id: int, year: int, exposure_id: int
    ) -> Optional[dict]:
        """
        Get the full historical payload for the statistics panel.

        Args:
            db: Database session
            station_id: Station ID
            year: Queried year
            exposure_id: Exposure ID

        Returns:
            Dict shaped like HistoricalDataResponse, or None if no data
        """
        datum = await self.get_datum(
            db, station_id=station_id, year=year, exposure_id=exposure_id
        )
        if datum is None:
            return None
        return build_historical_payload(datum)


def build_historical_payload(datum: HistoricalDatum) -> dict:
    """
    Compose statistics, pollutant metadata and classification of a datum.

    Pure function of the stored row, so repeated calls give identical output.
    """
    exposure = datum.exposure
    pollutant = exposure.pollutant

    return {
        "estacion": {
            "id_estacion": datum.station.id,
            "nombre_estacion": datum.station.name,
        },
        "anio": datum.year,
        "contaminante": {
            "simbolo": pollutant.symbol,
            "nombre": pollutant.name,
            "unidades": pollutant.units,
            "tiempo_exposicion": {
                "id": exposure.id,
                "texto": exposure.label,
                "horas": exposure.hours,
            },
        },
        "estadisticas": {
            "promedio": datum.mean,
            "maximo": datum.maximum,
            "minimo": datum.minimum,
            "mediana": datum.median,
            "percentil_98": datum.percentile_98,
            "fecha_hora_maximo": datum.max_timestamp,
        },
        "excedencias": {
            "limite_actual": exposure.regulatory_limit,
            "excedencias_limite_actual": datum.exceedances,
            "porcentaje_excedencias": datum.exceedance_percentage,
            "dias_excedencias": datum.exceedance_days,
        },
        "calidad_datos": {
            "representatividad_temporal": datum.temporal_representativeness,
        },
        "clasificacion": classify(
            pollutant.symbol,
            exposure.hours,
            mean=datum.mean,
            maximum=datum.maximum,
            regulatory_limit=exposure.regulatory_limit,
        ),
    }


historical = CRUDHistoricalDatum(HistoricalDatum)
