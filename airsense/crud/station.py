"""
Station queries.

Two location rules coexist:

- The municipality listing places each station at its latest known
  location, whatever the year.
- The year-scoped listing places each station at the most recent location
  recorded up to the queried year, and keeps only stations that measured
  something that year.
"""

from typing import List

from sqlalchemy import and_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from airsense.crud.base import CRUDBase
from airsense.models.historical_datum import HistoricalDatum
from airsense.models.location import StationLocation
from airsense.models.station import Station


def _station_columns():
    return (
        Station.id.label("id_estacion"),
        Station.name.label("nombre_estacion"),
        Station.station_type.label("tipo_estacion"),
        StationLocation.id.label("id_ubicacion"),
        StationLocation.latitude.label("latitud"),
        StationLocation.longitude.label("longitud"),
        StationLocation.year.label("anio"),
    )


class CRUDStation(CRUDBase[Station]):
    """
    Queries for the Station model.
    """

    async def get_by_municipality(
        self, db: AsyncSession, *, municipality_id: int
    ) -> List[dict]:
        """
        Get the stations of a municipality at their latest location.

        Args:
            db: Database session
            municipality_id: Municipality ID

        Returns:
            List of station dicts ordered by name; empty if none
        """
        latest = (
            select(
                StationLocation.station_id.label("station_id"),
                func.max(StationLocation.year).label("location_year"),
            )
            .group_by(StationLocation.station_id)
            .subquery()
        )

        result = await db.execute(
            select(*_station_columns())
            .join(StationLocation, StationLocation.station_id == Station.id)
            .join(
                latest,
                and_(
                    latest.c.station_id == StationLocation.station_id,
                    latest.c.location_year == StationLocation.year,
                ),
            )
            .where(Station.municipality_id == municipality_id)
            .order_by(Station.name)
        )
        return [dict(row) for row in result.mappings().all()]

    async def get_by_municipality_and_year(
        self, db: AsyncSession, *, municipality_id: int, year: int
    ) -> List[dict]:
        """
        Get the stations of a municipality operative in a year.

        Each station is placed at the most recent location with a year lower
        than or equal to the queried one. Stations without measurements that
        year are left out.

        Args:
            db: Database session
            municipality_id: Municipality ID
            year: Queried year

        Returns:
            List of station dicts ordered by name; empty if none
        """
        effective = (
            select(
                StationLocation.station_id.label("station_id"),
                func.max(StationLocation.year).label("location_year"),
            )
            .where(StationLocation.year <= year)
            .group_by(StationLocation.station_id)
            .subquery()
        )
        measured = (
            select(HistoricalDatum.station_id)
            .where(HistoricalDatum.year == year)
        )

        result = await db.execute(
            select(*_station_columns())
            .join(StationLocation, StationLocation.station_id == Station.id)
            .join(
                effective,
                and_(
                    effective.c.station_id == StationLocation.station_id,
                    effective.c.location_year == StationLocation.year,
                ),
            )
            .where(
                Station.municipality_id == municipality_id,
                Station.id.in_(measured),
            )
            .order_by(Station.name)
        )
        return [dict(row) for row in result.mappings().all()]


station = CRUDStation(Station)
