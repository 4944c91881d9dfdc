# Database models package

from airsense.models.base import BaseModel
from airsense.models.municipality import Municipality
from airsense.models.station import Station
from airsense.models.location import StationLocation
from airsense.models.pollutant import Pollutant, Exposure
from airsense.models.historical_datum import HistoricalDatum
from airsense.models.dictionary_entry import DictionaryEntry

__all__ = [
    "BaseModel",
    "Municipality",
    "Station",
    "StationLocation",
    "Pollutant",
    "Exposure",
    "HistoricalDatum",
    "DictionaryEntry",
]

# Configure all mappers after all models are imported
# This resolves bidirectional relationships defined with string references
from sqlalchemy.orm import configure_mappers
configure_mappers()
