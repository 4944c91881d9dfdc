"""
Filter cascade transitions.

Pure functions ``ViewerState -> ViewerState`` for every user action and every
network completion of the viewer. The controller sequences them; these
functions never perform I/O.

Marker coloring: every station marker is gray except, at most, the selected
station once a historical datum has been loaded for it.
"""

from typing import Iterable, List, Optional

from airsense.config import settings
from airsense.schemas.dictionary import DictionaryEntryResponse
from airsense.schemas.historical import HistoricalDataResponse
from airsense.schemas.municipality import AvailableYearsResponse, MunicipalityResponse
from airsense.schemas.pollutant import PollutantsResponse
from airsense.schemas.station import StationLocationResponse
from airsense.utils.classification import DEFAULT_COLOR
from airsense.viewer.state import (
    LEVELS,
    READY_PLACEHOLDERS,
    Level,
    MapState,
    MunicipalityMarker,
    Option,
    PanelMode,
    PanelState,
    SelectorState,
    SelectorStatus,
    StationMarker,
    ViewerState,
    locked_selector,
)

HIGHLIGHT_Z_INDEX = 1000
STATIONS_ZOOM = 13
SELECTED_STATION_ZOOM = 14

DEFAULT_VIEW_MESSAGE = "Vista general del Valle del Cauca"


def initial_state() -> ViewerState:
    return ViewerState()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _reset_downstream(state: ViewerState, level: Level) -> ViewerState:
    """
    Lock every selector below ``level`` and return the panel to onboarding.

    Station markers stay on the map, back to gray and unhighlighted when the
    station level is among the reset ones.
    """
    downstream = LEVELS[LEVELS.index(level) + 1:]
    update = {lvl.value: locked_selector(lvl) for lvl in downstream}
    update["panel"] = PanelState()
    new_state = state.model_copy(update=update)
    if Level.STATION in downstream:
        new_state = _with_markers(new_state, _unhighlighted(new_state.map.station_markers))
    else:
        new_state = _with_markers(new_state, _gray(new_state.map.station_markers))
    return new_state


def _gray(markers: Iterable[StationMarker]) -> List[StationMarker]:
    return [m.model_copy(update={"color": DEFAULT_COLOR}) for m in markers]


def _unhighlighted(markers: Iterable[StationMarker]) -> List[StationMarker]:
    return [
        m.model_copy(update={
            "color": DEFAULT_COLOR,
            "highlighted": False,
            "popup_open": False,
            "z_index": 0,
        })
        for m in markers
    ]


def _with_markers(state: ViewerState, markers: Iterable[StationMarker], **map_update) -> ViewerState:
    new_map = state.map.model_copy(update={"station_markers": tuple(markers), **map_update})
    return state.model_copy(update={"map": new_map})


def _default_view(state: ViewerState) -> MapState:
    return state.map.model_copy(update={
        "center": settings.VIEWER_DEFAULT_CENTER,
        "zoom": settings.VIEWER_DEFAULT_ZOOM,
        "station_markers": (),
        "query_year": None,
        "auto_selected": False,
    })


def _with_selector(state: ViewerState, level: Level, **update) -> ViewerState:
    selector = state.selector(level).model_copy(update=update)
    return state.model_copy(update={level.value: selector})


def _bump(state: ViewerState, level: Level) -> ViewerState:
    return state.model_copy(update={"generations": state.generations.bump(level)})


def set_status(state: ViewerState, message: Optional[str]) -> ViewerState:
    return state.model_copy(update={"status_message": message})


def selector_error(state: ViewerState, level: Level, message: str) -> ViewerState:
    """Show an error inside a selector and disable it."""
    return _with_selector(
        state, level,
        status=SelectorStatus.ERROR,
        placeholder=f"⚠️ {message}",
        options=(),
        value=None,
    )


# ---------------------------------------------------------------------------
# Municipalities
# ---------------------------------------------------------------------------

def municipalities_loading(state: ViewerState) -> ViewerState:
    state = _with_selector(
        state, Level.MUNICIPALITY,
        status=SelectorStatus.LOADING,
        placeholder="Cargando municipios...",
    )
    return set_status(state, "Cargando municipios...")


def municipalities_loaded(state: ViewerState, municipalities: List[MunicipalityResponse]) -> ViewerState:
    if not municipalities:
        state = selector_error(state, Level.MUNICIPALITY, "No se encontraron municipios")
        return set_status(state, "❌ No se encontraron municipios")

    options = tuple(Option(value=m.id_municipio, label=m.nombre_municipio) for m in municipalities)
    markers = tuple(
        MunicipalityMarker(
            id=m.id_municipio,
            name=m.nombre_municipio,
            latitude=m.latitud,
            longitude=m.longitud,
        )
        for m in municipalities
        if m.latitud is not None and m.longitud is not None
    )
    state = _with_selector(
        state, Level.MUNICIPALITY,
        status=SelectorStatus.READY,
        placeholder=READY_PLACEHOLDERS[Level.MUNICIPALITY],
        options=options,
    )
    state = state.model_copy(update={
        "map": state.map.model_copy(update={"municipality_markers": markers}),
    })
    return set_status(state, "Municipios cargados")


# ---------------------------------------------------------------------------
# Municipality selection
# ---------------------------------------------------------------------------

def select_municipality(state: ViewerState, municipality_id: Optional[int]) -> ViewerState:
    """
    Select (or clear) the municipality.

    Year, station and exposure are locked, every station marker is removed
    and all in-flight requests become stale.
    """
    state = _bump(state, Level.MUNICIPALITY)
    state = _with_selector(state, Level.MUNICIPALITY, value=municipality_id)
    state = _reset_downstream(state, Level.MUNICIPALITY)
    state = state.model_copy(update={"map": _default_view(state)})

    if municipality_id is None:
        return set_status(state, DEFAULT_VIEW_MESSAGE)

    state = _with_selector(
        state, Level.YEAR,
        status=SelectorStatus.LOADING,
        placeholder="Cargando años...",
    )
    return set_status(state, "Cargando años disponibles...")


def years_loaded(state: ViewerState, response: AvailableYearsResponse) -> ViewerState:
    years = response.anios_disponibles
    if not years:
        state = _with_selector(
            state, Level.YEAR,
            status=SelectorStatus.EMPTY,
            placeholder="Sin años disponibles",
            options=(),
        )
        return set_status(state, "No hay datos para este municipio")

    state = _with_selector(
        state, Level.YEAR,
        status=SelectorStatus.READY,
        placeholder=READY_PLACEHOLDERS[Level.YEAR],
        options=tuple(Option(value=year, label=str(year)) for year in years),
    )
    return set_status(state, f"{len(years)} años disponibles para {response.municipio}.")


# ---------------------------------------------------------------------------
# Stations
# ---------------------------------------------------------------------------

def stations_loaded(
    state: ViewerState,
    stations: List[StationLocationResponse],
    year: Optional[int] = None,
) -> ViewerState:
    """
    Place station markers on the map.

    Without a year the markers are informational only. With a year they are
    interactive, the station selector is filled, and a single station is
    flagged for automatic selection.
    """
    interactive = year is not None

    if not stations:
        state = state.model_copy(update={"map": _default_view(state)})
        if interactive:
            state = _with_selector(
                state, Level.STATION,
                status=SelectorStatus.EMPTY,
                placeholder="Sin estaciones operativas",
                options=(),
            )
        return set_status(state, "⚠️ No hay estaciones para mostrar")

    markers = tuple(
        StationMarker(
            id=s.id_estacion,
            name=s.nombre_estacion,
            station_type=s.tipo_estacion,
            latitude=s.latitud,
            longitude=s.longitud,
            location_year=s.anio,
            interactive=interactive,
        )
        for s in stations
    )
    first = stations[0]
    state = _with_markers(
        state, markers,
        center=(first.latitud, first.longitud),
        zoom=STATIONS_ZOOM,
        query_year=year,
        auto_selected=interactive and len(stations) == 1,
    )

    if not interactive:
        return set_status(state, f"{len(stations)} estaciones encontradas.")

    state = _with_selector(
        state, Level.STATION,
        status=SelectorStatus.READY,
        placeholder=READY_PLACEHOLDERS[Level.STATION],
        options=tuple(Option(value=s.id_estacion, label=s.nombre_estacion) for s in stations),
        value=None,
    )
    return set_status(state, f"{len(stations)} estaciones operativas en {year}.")


def select_year(state: ViewerState, year: Optional[int]) -> ViewerState:
    """
    Select (or clear) the year.

    Station and exposure are locked; markers already on the map stay until
    the new station list arrives.
    """
    state = _bump(state, Level.YEAR)
    state = _with_selector(state, Level.YEAR, value=year)
    state = _reset_downstream(state, Level.YEAR)

    if year is None:
        return set_status(state, "Cargando estaciones...")

    state = _with_selector(
        state, Level.STATION,
        status=SelectorStatus.LOADING,
        placeholder="Cargando estaciones...",
    )
    return set_status(state, f"Cargando estaciones operativas en {year}...")


# ---------------------------------------------------------------------------
# Station selection
# ---------------------------------------------------------------------------

def select_station(state: ViewerState, station_id: Optional[int]) -> ViewerState:
    """
    Select (or clear) the station.

    The chosen marker is raised above the others, its popup opened and the
    map recentered on it; every marker returns to gray. Stations missing from
    the selector options are ignored.
    """
    if station_id is not None and not state.station.has_option(station_id):
        return state

    state = _bump(state, Level.STATION)
    state = _with_selector(state, Level.STATION, value=station_id)
    state = _reset_downstream(state, Level.STATION)

    if station_id is None:
        return _with_markers(state, _unhighlighted(state.map.station_markers))

    markers = []
    center = state.map.center
    for marker in state.map.station_markers:
        selected = marker.id == station_id
        markers.append(marker.model_copy(update={
            "color": DEFAULT_COLOR,
            "highlighted": selected,
            "popup_open": selected,
            "z_index": HIGHLIGHT_Z_INDEX if selected else 0,
        }))
        if selected:
            center = (marker.latitude, marker.longitude)

    state = _with_markers(state, markers, center=center, zoom=SELECTED_STATION_ZOOM)
    state = _with_selector(
        state, Level.EXPOSURE,
        status=SelectorStatus.LOADING,
        placeholder="Cargando contaminantes...",
    )
    return set_status(state, "Cargando contaminantes disponibles...")


def pollutants_loaded(state: ViewerState, response: PollutantsResponse) -> ViewerState:
    options = tuple(
        Option(
            value=exposure.id_exposicion,
            label=f"{pollutant.simbolo} - {exposure.tiempo_texto}",
            data={"simbolo": pollutant.simbolo, "tiempo_horas": exposure.tiempo_horas},
        )
        for pollutant in response.contaminantes
        for exposure in pollutant.tiempos_exposicion
    )
    if not options:
        state = _with_selector(
            state, Level.EXPOSURE,
            status=SelectorStatus.EMPTY,
            placeholder="Sin contaminantes medidos",
            options=(),
        )
        return set_status(state, "No hay contaminantes medidos en este período")

    state = _with_selector(
        state, Level.EXPOSURE,
        status=SelectorStatus.READY,
        placeholder=READY_PLACEHOLDERS[Level.EXPOSURE],
        options=options,
    )
    return set_status(state, f"{response.total_contaminantes} contaminantes disponibles.")


# ---------------------------------------------------------------------------
# Exposure selection
# ---------------------------------------------------------------------------

def select_exposure(state: ViewerState, exposure_id: Optional[int]) -> ViewerState:
    """
    Select (or clear) the pollutant exposure.

    Clearing it returns the panel to onboarding and the selected marker to gray.
    """
    state = _bump(state, Level.EXPOSURE)
    state = _with_selector(state, Level.EXPOSURE, value=exposure_id)
    state = _with_markers(state, _gray(state.map.station_markers))

    if exposure_id is None:
        return state.model_copy(update={"panel": PanelState()})

    state = state.model_copy(update={"panel": PanelState(mode=PanelMode.LOADING)})
    return set_status(state, "📊 Cargando datos del contaminante...")


def historical_loaded(state: ViewerState, data: HistoricalDataResponse) -> ViewerState:
    """Color the selected station by its classification and fill the panel."""
    selected = state.station.value
    markers = [
        m.model_copy(update={
            "color": data.clasificacion.color if m.id == selected else DEFAULT_COLOR,
        })
        for m in state.map.station_markers
    ]
    state = _with_markers(state, markers)
    state = state.model_copy(update={"panel": PanelState(mode=PanelMode.DATA, data=data)})
    return set_status(state, "✅ Datos cargados correctamente")


def historical_failed(state: ViewerState, message: str) -> ViewerState:
    """Show the error in the panel; markers are left untouched."""
    state = state.model_copy(update={"panel": PanelState(mode=PanelMode.ERROR, error=message)})
    return set_status(state, f"❌ {message}")


# ---------------------------------------------------------------------------
# Clear filters
# ---------------------------------------------------------------------------

def clear_filters(state: ViewerState) -> ViewerState:
    """
    Reset every selection, remove the station markers and return to the
    regional view. No-op when no filter is active.
    """
    if not state.filters_active:
        return state

    state = _bump(state, Level.MUNICIPALITY)
    state = _with_selector(state, Level.MUNICIPALITY, value=None)
    state = _reset_downstream(state, Level.MUNICIPALITY)
    state = state.model_copy(update={"map": _default_view(state)})
    return set_status(state, "✨ Filtros limpiados - Vista general")


# ---------------------------------------------------------------------------
# Fetch failures
# ---------------------------------------------------------------------------

def municipalities_failed(state: ViewerState, message: str) -> ViewerState:
    state = selector_error(state, Level.MUNICIPALITY, "Error al cargar municipios")
    return set_status(state, f"❌ {message}")


def years_failed(state: ViewerState, message: str) -> ViewerState:
    state = selector_error(state, Level.YEAR, message)
    return set_status(state, f"❌ {message}")


def stations_failed(state: ViewerState, message: str, year: Optional[int] = None) -> ViewerState:
    """Markers already on the map are kept."""
    if year is not None:
        state = selector_error(state, Level.STATION, message)
    return set_status(state, f"❌ {message}")


def pollutants_failed(state: ViewerState, message: str) -> ViewerState:
    """Only the exposure selector degrades; station markers are kept."""
    state = selector_error(state, Level.EXPOSURE, message)
    return set_status(state, f"❌ {message}")


# ---------------------------------------------------------------------------
# Dictionary
# ---------------------------------------------------------------------------

def dictionary_loaded(state: ViewerState, entries: List[DictionaryEntryResponse]) -> ViewerState:
    return state.model_copy(update={"dictionary": tuple(entries), "dictionary_error": None})


def dictionary_failed(state: ViewerState, message: str) -> ViewerState:
    return state.model_copy(update={"dictionary": (), "dictionary_error": message})
