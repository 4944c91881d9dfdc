"""
Municipality queries.

This module contains the lookups behind the municipality list and the
available-years selector.
"""

from typing import List, Optional

from sqlalchemy import distinct
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from airsense.crud.base import CRUDBase
from airsense.models.historical_datum import HistoricalDatum
from airsense.models.municipality import Municipality
from airsense.models.station import Station


class CRUDMunicipality(CRUDBase[Municipality]):
    """
    Queries for the Municipality model.
    """

    async def get_all_ordered(self, db: AsyncSession) -> List[dict]:
        """
        Get every municipality, alphabetically by name.

        Args:
            db: Database session

        Returns:
            List of dicts with id_municipio, nombre_municipio, latitud, longitud
        """
        result = await db.execute(
            select(
                Municipality.id.label("id_municipio"),
                Municipality.name.label("nombre_municipio"),
                Municipality.latitude.label("latitud"),
                Municipality.longitude.label("longitud"),
            ).order_by(Municipality.name)
        )
        return [dict(row) for row in result.mappings().all()]

    async def get_available_years(
        self, db: AsyncSession, *, municipality_id: int
    ) -> Optional[dict]:
        """
        Get the years with at least one measurement in a municipality.

        Args:
            db: Database session
            municipality_id: Municipality ID

        Returns:
            Dict with municipio (name) and anios_disponibles (ascending), or
            None if the municipality is unknown or has no measurements
        """
        municipality = await self.get(db, id=municipality_id)
        if municipality is None:
            return None

        result = await db.execute(
            select(distinct(HistoricalDatum.year))
            .join(Station, Station.id == HistoricalDatum.station_id)
            .where(Station.municipality_id == municipality_id)
            .order_by(HistoricalDatum.year)
        )
        years = list(result.scalars().all())
        if not years:
            return None

        return {"municipio": municipality.name, "anios_disponibles": years}


municipality = CRUDMunicipality(Municipality)
