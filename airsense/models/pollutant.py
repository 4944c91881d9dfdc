"""
Pollutant and exposure-time database models.

A pollutant is measured over one or more exposure durations (1h, 8h, 24h,
annual). Each (pollutant, duration) pair has its own globally unique
exposure id, which is what the viewer filters on.
"""

from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from airsense.models.base import BaseModel


class Pollutant(BaseModel):
    """Measured pollutant (PM2.5, PM10, O3...)."""

    __tablename__ = "contaminantes"

    id = Column("id_contaminante", Integer, primary_key=True)
    symbol = Column("simbolo", String(20), nullable=False, unique=True)
    name = Column("nombre", String(150), nullable=False)
    units = Column("unidades", String(30), nullable=False)

    exposures = relationship(
        "Exposure",
        back_populates="pollutant",
        order_by="Exposure.hours",
    )

    def __repr__(self):
        return f"<Pollutant(id={self.id}, symbol='{self.symbol}')>"


class Exposure(BaseModel):
    """
    Exposure duration of a pollutant.

    ``regulatory_limit`` is the current national maximum permissible level for
    this duration, when one is defined.
    """

    __tablename__ = "tiempos_exposicion"

    id = Column("id_exposicion", Integer, primary_key=True)
    pollutant_id = Column(
        "id_contaminante",
        Integer,
        ForeignKey("contaminantes.id_contaminante"),
        nullable=False,
        index=True,
    )
    hours = Column("tiempo_horas", Integer, nullable=False)
    label = Column("tiempo_texto", String(50), nullable=False)
    regulatory_limit = Column("limite_actual", Float, nullable=True)

    pollutant = relationship("Pollutant", back_populates="exposures")

    def __repr__(self):
        return f"<Exposure(id={self.id}, pollutant_id={self.pollutant_id}, hours={self.hours})>"
