"""
Filter cascade controller.

Owns the current ``ViewerState``, runs the fetch behind every selection and
applies its result through the pure transitions. Each fetch remembers the
generation of the level its result belongs to; if that level changed while
the request was in flight the result is dropped.
"""

import asyncio
from typing import Callable, List, Optional

from airsense.config import settings
from airsense.utils.logging_config import get_logger
from airsense.viewer import transitions as t
from airsense.viewer.client import AirSenseClient, ApiError, ConnectionProblem, NoData
from airsense.viewer.state import Level, ViewerState

logger = get_logger(__name__)

CONNECTION_MESSAGE = "Problema de conexión con el servidor. Intente nuevamente."

Observer = Callable[[ViewerState], None]


def error_message(error: ApiError, not_found: Optional[str] = None) -> str:
    """User-facing text for a failed fetch."""
    if isinstance(error, ConnectionProblem):
        return CONNECTION_MESSAGE
    if isinstance(error, NoData) and not_found:
        return not_found
    return error.message


class FilterCascadeController:
    """
    Drives the municipality -> year -> station -> exposure cascade.

    Args:
        client: API client used for every fetch
        auto_select_delay: Seconds to wait before selecting the only station
            of a year; defaults to ``VIEWER_AUTO_SELECT_DELAY``
        state: Initial state, mostly for tests
    """

    def __init__(
        self,
        client: AirSenseClient,
        auto_select_delay: Optional[float] = None,
        state: Optional[ViewerState] = None,
    ):
        self.client = client
        self.auto_select_delay = (
            settings.VIEWER_AUTO_SELECT_DELAY if auto_select_delay is None else auto_select_delay
        )
        self._state = state or t.initial_state()
        self._observers: List[Observer] = []

    @property
    def state(self) -> ViewerState:
        return self._state

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer`` for state changes; returns the unsubscribe function."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _commit(self, new_state: ViewerState) -> None:
        if new_state is self._state:
            return
        self._state = new_state
        for observer in list(self._observers):
            observer(new_state)

    def _is_current(self, level: Level, generation: int) -> bool:
        current = self._state.generations.of(level) == generation
        if not current:
            logger.debug(f"Discarding stale {level.value} response (generation {generation})")
        return current

    # ------------------------------------------------------------------
    # Municipalities
    # ------------------------------------------------------------------

    async def load_municipalities(self) -> None:
        self._commit(t.municipalities_loading(self._state))
        try:
            municipalities = await self.client.get_municipalities()
        except ApiError as e:
            logger.error(f"Error loading municipalities: {e.message}")
            self._commit(t.municipalities_failed(self._state, error_message(e)))
            return
        self._commit(t.municipalities_loaded(self._state, municipalities))

    async def select_municipality(self, municipality_id: Optional[int]) -> None:
        """Selector change or municipality marker click."""
        if municipality_id is not None and not self._state.municipality.has_option(municipality_id):
            logger.warning(f"Ignoring unknown municipality {municipality_id}")
            return

        logger.info(f"Municipality selected: {municipality_id}")
        self._commit(t.select_municipality(self._state, municipality_id))
        if municipality_id is None:
            return

        generations = self._state.generations
        await asyncio.gather(
            self._load_years(municipality_id, generations.municipality),
            self._load_stations(municipality_id, None, generations.year),
        )

    async def _load_years(self, municipality_id: int, generation: int) -> None:
        try:
            response = await self.client.get_available_years(municipality_id)
        except ApiError as e:
            if self._is_current(Level.MUNICIPALITY, generation):
                message = error_message(e, not_found="No hay datos para este municipio")
                self._commit(t.years_failed(self._state, message))
            return
        if self._is_current(Level.MUNICIPALITY, generation):
            self._commit(t.years_loaded(self._state, response))

    async def _load_stations(self, municipality_id: int, year: Optional[int], generation: int) -> None:
        try:
            if year is None:
                stations = await self.client.get_stations(municipality_id)
            else:
                stations = (await self.client.get_stations_by_year(municipality_id, year)).estaciones
        except ApiError as e:
            if self._is_current(Level.YEAR, generation):
                not_found = f"No hay estaciones con datos para el año {year}" if year else None
                self._commit(t.stations_failed(self._state, error_message(e, not_found), year))
            return

        if not self._is_current(Level.YEAR, generation):
            return
        self._commit(t.stations_loaded(self._state, stations, year))

        if self._state.map.auto_selected:
            await self._auto_select(stations[0].id_estacion, self._state.generations.station)

    async def _auto_select(self, station_id: int, generation: int) -> None:
        # Any station change in the meantime, including clearing it, wins.
        await asyncio.sleep(self.auto_select_delay)
        if not self._is_current(Level.STATION, generation):
            return
        logger.info(f"Auto-selecting the only station operative: {station_id}")
        await self.on_station_selected(station_id)

    # ------------------------------------------------------------------
    # Year
    # ------------------------------------------------------------------

    async def select_year(self, year: Optional[int]) -> None:
        municipality_id = self._state.municipality.value
        if municipality_id is None:
            return
        if year is not None and not self._state.year.has_option(year):
            logger.warning(f"Ignoring year {year}: not available for municipality {municipality_id}")
            return

        logger.info(f"Year selected: {year}")
        self._commit(t.select_year(self._state, year))
        await self._load_stations(municipality_id, year, self._state.generations.year)

    # ------------------------------------------------------------------
    # Station
    # ------------------------------------------------------------------

    async def on_station_selected(self, station_id: Optional[int]) -> None:
        """Single entry point for station selector changes and marker clicks."""
        new_state = t.select_station(self._state, station_id)
        if new_state is self._state:
            logger.debug(f"Ignoring selection of station {station_id}")
            return

        logger.info(f"Station selected: {station_id}")
        self._commit(new_state)
        if station_id is None:
            return

        year = self._state.year.value
        generation = self._state.generations.station
        try:
            response = await self.client.get_pollutants(station_id, year)
        except ApiError as e:
            if self._is_current(Level.STATION, generation):
                not_found = f"No hay contaminantes medidos en esta estación durante {year}"
                self._commit(t.pollutants_failed(self._state, error_message(e, not_found)))
            return
        if self._is_current(Level.STATION, generation):
            self._commit(t.pollutants_loaded(self._state, response))

    async def on_marker_clicked(self, station_id: int) -> None:
        """Markers only drive the selection once a year is chosen."""
        marker = self._state.map.station_marker(station_id)
        if marker is None or not marker.interactive:
            return
        await self.on_station_selected(station_id)

    # ------------------------------------------------------------------
    # Exposure
    # ------------------------------------------------------------------

    async def select_exposure(self, exposure_id: Optional[int]) -> None:
        station_id = self._state.station.value
        year = self._state.year.value
        if station_id is None or year is None:
            return
        if exposure_id is not None and not self._state.exposure.has_option(exposure_id):
            logger.warning(f"Ignoring exposure {exposure_id}: not measured at station {station_id}")
            return

        logger.info(f"Exposure selected: {exposure_id}")
        self._commit(t.select_exposure(self._state, exposure_id))
        if exposure_id is None:
            return

        generation = self._state.generations.exposure
        try:
            data = await self.client.get_historical_data(station_id, year, exposure_id)
        except ApiError as e:
            if self._is_current(Level.EXPOSURE, generation):
                self._commit(t.historical_failed(self._state, error_message(e)))
            return
        if self._is_current(Level.EXPOSURE, generation):
            self._commit(t.historical_loaded(self._state, data))

    async def reload(self) -> None:
        """Retry the historical fetch from the error panel."""
        await self.select_exposure(self._state.exposure.value)

    # ------------------------------------------------------------------
    # Clear / dictionary
    # ------------------------------------------------------------------

    def clear_filters(self) -> None:
        self._commit(t.clear_filters(self._state))

    async def load_dictionary(self) -> None:
        try:
            entries = await self.client.get_dictionary()
        except ApiError as e:
            logger.error(f"Error loading dictionary: {e.message}")
            self._commit(t.dictionary_failed(self._state, error_message(e)))
            return
        self._commit(t.dictionary_loaded(self._state, entries))
