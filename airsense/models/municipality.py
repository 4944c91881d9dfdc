"""
Municipality database model.

Municipalities of Valle del Cauca; static reference data.
"""

from sqlalchemy import Column, Float, Integer, String
from sqlalchemy.orm import relationship

from airsense.models.base import BaseModel


class Municipality(BaseModel):
    """Municipality with the coordinates used for its map marker."""

    __tablename__ = "municipios"

    id = Column("id_municipio", Integer, primary_key=True)
    name = Column("nombre_municipio", String(150), nullable=False, index=True)
    latitude = Column("latitud", Float, nullable=True)
    longitude = Column("longitud", Float, nullable=True)

    stations = relationship("Station", back_populates="municipality")

    def __repr__(self):
        return f"<Municipality(id={self.id}, name='{self.name}')>"
