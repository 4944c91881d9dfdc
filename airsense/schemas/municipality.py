"""Municipality schemas."""

from typing import List, Optional

from airsense.schemas.base import BaseSchema


class MunicipalityResponse(BaseSchema):
    """Municipality with the coordinates of its map marker."""
    id_municipio: int
    nombre_municipio: str
    latitud: Optional[float] = None
    longitud: Optional[float] = None


class AvailableYearsResponse(BaseSchema):
    """Years with at least one measurement in a municipality."""
    municipio: str
    anios_disponibles: List[int]
