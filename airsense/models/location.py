"""
Station location database model.

Stations have been relocated over time, so each (station, year) pair has its
own coordinates. Records are immutable history.
"""

from sqlalchemy import Column, Float, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from airsense.models.base import BaseModel


class StationLocation(BaseModel):
    """Coordinates of a station valid as of a given year."""

    __tablename__ = "ubicaciones_estaciones"

    id = Column("id_ubicacion", Integer, primary_key=True)
    station_id = Column(
        "id_estacion",
        Integer,
        ForeignKey("estaciones.id_estacion"),
        nullable=False,
    )
    year = Column("anio", Integer, nullable=False)
    latitude = Column("latitud", Float, nullable=False)
    longitude = Column("longitud", Float, nullable=False)

    station = relationship("Station", back_populates="locations")

    __table_args__ = (
        UniqueConstraint("id_estacion", "anio", name="uq_ubicacion_estacion_anio"),
        Index("idx_ubicacion_estacion_anio", "id_estacion", "anio"),
    )

    def __repr__(self):
        return f"<StationLocation(station_id={self.station_id}, year={self.year})>"
