"""
Viewer state.

The whole viewer is described by one immutable ``ViewerState``. Transitions
return new instances; nothing here is mutated in place.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from airsense.config import settings
from airsense.schemas.dictionary import DictionaryEntryResponse
from airsense.schemas.historical import HistoricalDataResponse
from airsense.utils.classification import DEFAULT_COLOR


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Level(str, Enum):
    """Cascade levels, upstream first."""
    MUNICIPALITY = "municipality"
    YEAR = "year"
    STATION = "station"
    EXPOSURE = "exposure"


LEVELS = (Level.MUNICIPALITY, Level.YEAR, Level.STATION, Level.EXPOSURE)


class SelectorStatus(str, Enum):
    LOCKED = "locked"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"


class PanelMode(str, Enum):
    ONBOARDING = "onboarding"
    LOADING = "loading"
    DATA = "data"
    ERROR = "error"


class Option(FrozenModel):
    value: int
    label: str
    data: Dict[str, Any] = {}


class SelectorState(FrozenModel):
    status: SelectorStatus = SelectorStatus.LOCKED
    placeholder: str
    options: Tuple[Option, ...] = ()
    value: Optional[int] = None

    @property
    def disabled(self) -> bool:
        return self.status != SelectorStatus.READY

    def has_option(self, value: int) -> bool:
        return any(option.value == value for option in self.options)


# Placeholders of each selector while its upstream selection is missing
LOCKED_PLACEHOLDERS = {
    Level.MUNICIPALITY: "Cargando municipios...",
    Level.YEAR: "-- Primero selecciona municipio --",
    Level.STATION: "-- Primero selecciona año --",
    Level.EXPOSURE: "-- Primero selecciona estación --",
}

READY_PLACEHOLDERS = {
    Level.MUNICIPALITY: "-- Todos los Municipios --",
    Level.YEAR: "-- Selecciona año --",
    Level.STATION: "-- Selecciona estación --",
    Level.EXPOSURE: "-- Selecciona contaminante --",
}


def locked_selector(level: Level) -> SelectorState:
    return SelectorState(placeholder=LOCKED_PLACEHOLDERS[level])


class MunicipalityMarker(FrozenModel):
    id: int
    name: str
    latitude: float
    longitude: float


class StationMarker(FrozenModel):
    """
    Station pin on the map.

    ``interactive`` markers drive the station selector when clicked; the
    others only show their popup.
    """
    id: int
    name: str
    station_type: Optional[str] = None
    latitude: float
    longitude: float
    location_year: int
    color: str = DEFAULT_COLOR
    highlighted: bool = False
    interactive: bool = False
    popup_open: bool = False
    z_index: int = 0


class MapState(FrozenModel):
    center: Tuple[float, float] = settings.VIEWER_DEFAULT_CENTER
    zoom: float = settings.VIEWER_DEFAULT_ZOOM
    municipality_markers: Tuple[MunicipalityMarker, ...] = ()
    station_markers: Tuple[StationMarker, ...] = ()
    query_year: Optional[int] = None
    auto_selected: bool = False

    def station_marker(self, station_id: int) -> Optional[StationMarker]:
        for marker in self.station_markers:
            if marker.id == station_id:
                return marker
        return None

    @property
    def colored_markers(self) -> Tuple[StationMarker, ...]:
        return tuple(m for m in self.station_markers if m.color != DEFAULT_COLOR)


class PanelState(FrozenModel):
    mode: PanelMode = PanelMode.ONBOARDING
    data: Optional[HistoricalDataResponse] = None
    error: Optional[str] = None


class Generations(FrozenModel):
    """
    Per-level request generations.

    A change at one level bumps it and every level downstream; a response is
    applied only if the generation it was requested under is still current.
    """
    municipality: int = 0
    year: int = 0
    station: int = 0
    exposure: int = 0

    def of(self, level: Level) -> int:
        return getattr(self, level.value)

    def bump(self, level: Level) -> "Generations":
        downstream = LEVELS[LEVELS.index(level):]
        return self.model_copy(update={lvl.value: self.of(lvl) + 1 for lvl in downstream})


class ViewerState(FrozenModel):
    municipality: SelectorState = locked_selector(Level.MUNICIPALITY)
    year: SelectorState = locked_selector(Level.YEAR)
    station: SelectorState = locked_selector(Level.STATION)
    exposure: SelectorState = locked_selector(Level.EXPOSURE)
    map: MapState = MapState()
    panel: PanelState = PanelState()
    status_message: Optional[str] = None
    generations: Generations = Generations()
    dictionary: Tuple[DictionaryEntryResponse, ...] = ()
    dictionary_error: Optional[str] = None

    def selector(self, level: Level) -> SelectorState:
        return getattr(self, level.value)

    @property
    def selections(self) -> Dict[Level, Optional[int]]:
        return {level: self.selector(level).value for level in LEVELS}

    @property
    def filters_active(self) -> bool:
        """Whether the "clear filters" button is enabled."""
        return any(value is not None for value in self.selections.values())
