"""
Historical data schemas.

The historical response combines the stored yearly statistics with the
derived classification; nothing in it is persisted by this service.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from airsense.schemas.base import BaseSchema


class WhoLimits(BaseSchema):
    """WHO thresholds for an exposure duration."""
    tiempo_horas: int
    buena: float = Field(..., description="WHO air quality guideline level")
    regular: float = Field(..., description="WHO interim target")
    fuente: str


class Classification(BaseSchema):
    """Qualitative air-quality level derived from the statistics."""
    nivel: str
    color: str
    descripcion: str
    limites_oms: Optional[WhoLimits] = None


class ExposureInfo(BaseSchema):
    id: int
    texto: str
    horas: int


class PollutantInfo(BaseSchema):
    simbolo: str
    nombre: str
    unidades: str
    tiempo_exposicion: ExposureInfo


class StationInfo(BaseSchema):
    id_estacion: int
    nombre_estacion: str


class Statistics(BaseSchema):
    promedio: Optional[float] = None
    maximo: Optional[float] = None
    minimo: Optional[float] = None
    mediana: Optional[float] = None
    percentil_98: Optional[float] = None
    fecha_hora_maximo: Optional[datetime] = None


class Exceedances(BaseSchema):
    limite_actual: Optional[float] = None
    excedencias_limite_actual: Optional[int] = None
    porcentaje_excedencias: Optional[float] = None
    dias_excedencias: Optional[int] = None


class DataQuality(BaseSchema):
    representatividad_temporal: Optional[float] = Field(
        None, description="Percentage of the year covered by valid measurements"
    )


class HistoricalDataResponse(BaseSchema):
    """Full historical datum for a (station, year, exposure) triple."""
    estacion: StationInfo
    anio: int
    contaminante: PollutantInfo
    estadisticas: Statistics
    excedencias: Exceedances
    calidad_datos: DataQuality
    clasificacion: Classification
