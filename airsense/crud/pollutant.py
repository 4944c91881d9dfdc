"""
Pollutant queries.

This module lists the pollutant exposures measured at a station in a year,
grouped by pollutant for the pollutant selector.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from airsense.crud.base import CRUDBase
from airsense.models.historical_datum import HistoricalDatum
from airsense.models.pollutant import Exposure, Pollutant


class CRUDPollutant(CRUDBase[Pollutant]):
    """
    Queries for the Pollutant and Exposure models.
    """

    async def get_by_station_and_year(
        self, db: AsyncSession, *, station_id: int, year: int
    ) -> List[dict]:
        """
        Get the pollutants measured at a station during a year.

        Args:
            db: Database session
            station_id: Station ID
            year: Queried year

        Returns:
            List of pollutant dicts, each with its tiempos_exposicion sub-list
            ordered by duration; empty if nothing was measured
        """
        result = await db.execute(
            select(
                Pollutant.id.label("id_contaminante"),
                Pollutant.symbol.label("simbolo"),
                Pollutant.name.label("nombre"),
                Pollutant.units.label("unidades"),
                Exposure.id.label("id_exposicion"),
                Exposure.label.label("tiempo_texto"),
                Exposure.hours.label("tiempo_horas"),
            )
            .join(Exposure, Exposure.pollutant_id == Pollutant.id)
            .join(HistoricalDatum, HistoricalDatum.exposure_id == Exposure.id)
            .where(
                HistoricalDatum.station_id == station_id,
                HistoricalDatum.year == year,
            )
            .order_by(Pollutant.symbol, Exposure.hours)
        )

        grouped = {}
        for row in result.mappings().all():
            pollutant = grouped.setdefault(row["id_contaminante"], {
                "id_contaminante": row["id_contaminante"],
                "simbolo": row["simbolo"],
                "nombre": row["nombre"],
                "unidades": row["unidades"],
                "tiempos_exposicion": [],
            })
            pollutant["tiempos_exposicion"].append({
                "id_exposicion": row["id_exposicion"],
                "tiempo_texto": row["tiempo_texto"],
                "tiempo_horas": row["tiempo_horas"],
            })
        return list(grouped.values())


pollutant = CRUDPollutant(Pollutant)
