"""Pollutant dictionary schemas."""

from airsense.schemas.base import BaseSchema


class DictionaryEntryResponse(BaseSchema):
    simbolo: str
    nombre: str
    color_hex: str
    que_es: str
    causas: str
    consecuencias: str
