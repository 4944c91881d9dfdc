# Query operations package

from airsense.crud.base import CRUDBase
from airsense.crud.municipality import CRUDMunicipality, municipality
from airsense.crud.station import CRUDStation, station
from airsense.crud.pollutant import CRUDPollutant, pollutant
from airsense.crud.historical import CRUDHistoricalDatum, historical
from airsense.crud.dictionary import CRUDDictionary, dictionary

__all__ = [
    "CRUDBase",
    "CRUDMunicipality", "municipality",
    "CRUDStation", "station",
    "CRUDPollutant", "pollutant",
    "CRUDHistoricalDatum", "historical",
    "CRUDDictionary", "dictionary",
]
