# API routers package

from airsense.routers.municipalities import router as municipalities_router
from airsense.routers.stations import router as stations_router
from airsense.routers.pollutants import router as pollutants_router
from airsense.routers.historical import router as historical_router
from airsense.routers.dictionary import router as dictionary_router
from airsense.routers.status import router as status_router

__all__ = [
    "municipalities_router",
    "stations_router",
    "pollutants_router",
    "historical_router",
    "dictionary_router",
    "status_router",
]
