"""Pollutant and exposure schemas."""

from typing import List

from airsense.schemas.base import BaseSchema


class ExposureOption(BaseSchema):
    """One exposure duration of a pollutant; ``id_exposicion`` is what gets filtered on."""
    id_exposicion: int
    tiempo_texto: str
    tiempo_horas: int


class PollutantOption(BaseSchema):
    """Pollutant with the exposure durations measured at a station in a year."""
    id_contaminante: int
    simbolo: str
    nombre: str
    unidades: str
    tiempos_exposicion: List[ExposureOption]


class PollutantsResponse(BaseSchema):
    """Pollutants measured at a station during a year."""
    estacion_id: int
    anio_consultado: int
    total_contaminantes: int
    contaminantes: List[PollutantOption]
