"""
Station schemas.

A station is always returned together with one resolved location: the
latest one for the municipality listing, or the one in effect for the
queried year in the year-scoped listing.
"""

from typing import List, Optional

from pydantic import Field

from airsense.schemas.base import BaseSchema


class StationLocationResponse(BaseSchema):
    """Station with its resolved location."""
    id_estacion: int
    nombre_estacion: str
    tipo_estacion: Optional[str] = None
    id_ubicacion: int
    latitud: float = Field(..., ge=-90, le=90)
    longitud: float = Field(..., ge=-180, le=180)
    anio: int = Field(..., description="Year of the location record")


class StationsByYearResponse(BaseSchema):
    """Stations operative in a municipality during a year."""
    municipio_id: int
    anio_consultado: int
    total_estaciones: int
    estaciones: List[StationLocationResponse]
