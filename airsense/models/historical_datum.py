"""
Historical datum database model.

Yearly aggregate statistics for one (station, exposure) pair. Rows exist only
for combinations that were actually measured.
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from airsense.models.base import BaseModel


class HistoricalDatum(BaseModel):
    """Annual statistics of a pollutant exposure at a station."""

    __tablename__ = "datos_historicos"

    id = Column("id_dato", Integer, primary_key=True)
    station_id = Column(
        "id_estacion",
        Integer,
        ForeignKey("estaciones.id_estacion"),
        nullable=False,
    )
    exposure_id = Column(
        "id_exposicion",
        Integer,
        ForeignKey("tiempos_exposicion.id_exposicion"),
        nullable=False,
    )
    year = Column("anio", Integer, nullable=False)

    mean = Column("promedio", Float, nullable=True)
    maximum = Column("maximo", Float, nullable=True)
    minimum = Column("minimo", Float, nullable=True)
    median = Column("mediana", Float, nullable=True)
    percentile_98 = Column("percentil_98", Float, nullable=True)
    max_timestamp = Column("fecha_hora_maximo", DateTime, nullable=True)

    exceedances = Column("excedencias_limite_actual", Integer, nullable=True)
    exceedance_percentage = Column("porcentaje_excedencias", Float, nullable=True)
    exceedance_days = Column("dias_excedencias", Integer, nullable=True)
    temporal_representativeness = Column("representatividad_temporal", Float, nullable=True)

    station = relationship("Station", back_populates="historical_data")
    exposure = relationship("Exposure")

    __table_args__ = (
        UniqueConstraint("id_estacion", "id_exposicion", "anio", name="uq_dato_estacion_exposicion_anio"),
        Index("idx_dato_estacion_anio", "id_estacion", "anio"),
    )

    def __repr__(self):
        return (
            f"<HistoricalDatum(station_id={self.station_id}, "
            f"exposure_id={self.exposure_id}, year={self.year})>"
        )
