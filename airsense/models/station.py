"""
Monitoring station database model.

This module contains the Station model representing the air-quality
monitoring stations of the regional network.
"""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from airsense.models.base import BaseModel


class Station(BaseModel):
    """
    Air-quality monitoring station.

    A station belongs to exactly one municipality. Its position is not stored
    here: stations move over the years, so coordinates live in
    ``StationLocation`` records keyed by year.
    """

    __tablename__ = "estaciones"

    id = Column("id_estacion", Integer, primary_key=True)
    name = Column("nombre_estacion", String(200), nullable=False, index=True)
    municipality_id = Column(
        "id_municipio",
        Integer,
        ForeignKey("municipios.id_municipio"),
        nullable=False,
        index=True,
    )
    station_type = Column("tipo_estacion", String(100), nullable=True)

    municipality = relationship("Municipality", back_populates="stations")
    locations = relationship(
        "StationLocation",
        back_populates="station",
        order_by="StationLocation.year",
    )
    historical_data = relationship("HistoricalDatum", back_populates="station")

    def __repr__(self):
        return f"<Station(id={self.id}, name='{self.name}')>"
