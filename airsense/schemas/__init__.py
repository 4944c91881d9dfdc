# Pydantic schemas package

from airsense.schemas.base import BaseSchema
from airsense.schemas.municipality import MunicipalityResponse, AvailableYearsResponse
from airsense.schemas.station import StationLocationResponse, StationsByYearResponse
from airsense.schemas.pollutant import ExposureOption, PollutantOption, PollutantsResponse
from airsense.schemas.historical import (
    WhoLimits, Classification, ExposureInfo, PollutantInfo, StationInfo,
    Statistics, Exceedances, DataQuality, HistoricalDataResponse,
)
from airsense.schemas.dictionary import DictionaryEntryResponse
from airsense.schemas.status import HealthResponse

__all__ = [
    "BaseSchema",
    "MunicipalityResponse", "AvailableYearsResponse",
    "StationLocationResponse", "StationsByYearResponse",
    "ExposureOption", "PollutantOption", "PollutantsResponse",
    "WhoLimits", "Classification", "ExposureInfo", "PollutantInfo", "StationInfo",
    "Statistics", "Exceedances", "DataQuality", "HistoricalDataResponse",
    "DictionaryEntryResponse",
    "HealthResponse",
]
