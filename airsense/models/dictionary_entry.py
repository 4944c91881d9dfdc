"""
Pollutant dictionary database model.

Static reference text shown in the dictionary side panel.
"""

from sqlalchemy import Column, Integer, String, Text

from airsense.models.base import BaseModel


class DictionaryEntry(BaseModel):
    """What a pollutant is, what causes it and what it does to health."""

    __tablename__ = "diccionario_contaminantes"

    id = Column("id_diccionario", Integer, primary_key=True)
    symbol = Column("simbolo", String(20), nullable=False)
    name = Column("nombre", String(150), nullable=False)
    color_hex = Column("color_hex", String(9), nullable=False, default="#9E9E9E")
    what_is_it = Column("que_es", Text, nullable=False)
    causes = Column("causas", Text, nullable=False)
    consequences = Column("consecuencias", Text, nullable=False)

    def __repr__(self):
        return f"<DictionaryEntry(symbol='{self.symbol}')>"
