"""
HTTP client for the AirSense API.

One coroutine per endpoint; responses are parsed into the same Pydantic
schemas the API serializes with. Failures are mapped onto three error kinds
the viewer reacts to differently.
"""

from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from airsense.config import settings
from airsense.schemas.dictionary import DictionaryEntryResponse
from airsense.schemas.historical import HistoricalDataResponse
from airsense.schemas.municipality import AvailableYearsResponse, MunicipalityResponse
from airsense.schemas.pollutant import PollutantsResponse
from airsense.schemas.station import StationLocationResponse, StationsByYearResponse
from airsense.utils.logging_config import get_logger

logger = get_logger(__name__)

_municipalities = TypeAdapter(List[MunicipalityResponse])
_stations = TypeAdapter(List[StationLocationResponse])
_dictionary = TypeAdapter(List[DictionaryEntryResponse])


class ApiError(Exception):
    """Base class of every client-side API failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class RequestRejected(ApiError):
    """The API rejected the parameters (400)."""


class NoData(ApiError):
    """Well-formed query without matching data (404)."""

    def __init__(self, message: str, suggestion: Optional[str] = None, body: Any = None):
        super().__init__(message, status_code=404, body=body)
        self.suggestion = suggestion


class ConnectionProblem(ApiError):
    """Server error, transport failure or unreadable payload."""


class AirSenseClient:
    """
    Async client for the AirSense API.

    Args:
        base_url: API root including the prefix, e.g. ``http://localhost:8000/api``
        timeout: Request timeout in seconds
        transport: Optional httpx transport (``httpx.ASGITransport`` in tests)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.VIEWER_API_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.VIEWER_REQUEST_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "AirSenseClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise ConnectionProblem("Problema de conexión con el servidor") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code == 400:
            message = body.get("error") if isinstance(body, dict) else None
            raise RequestRejected(message or "Parámetros inválidos", status_code=400, body=body)

        if response.status_code == 404:
            if isinstance(body, dict):
                raise NoData(body.get("mensaje") or "Sin datos", body.get("sugerencia"), body=body)
            raise NoData("Sin datos", body=body)

        if response.is_error:
            logger.warning(f"{path} returned HTTP {response.status_code}")
            message = body.get("error") if isinstance(body, dict) else None
            raise ConnectionProblem(
                message or f"Error HTTP {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        if body is None:
            raise ConnectionProblem("Respuesta inválida del servidor", status_code=response.status_code)
        return body

    @staticmethod
    def _parse(adapter_or_model, payload: Any):
        try:
            if isinstance(adapter_or_model, TypeAdapter):
                return adapter_or_model.validate_python(payload)
            return adapter_or_model.model_validate(payload)
        except PydanticValidationError as e:
            logger.error(f"Unexpected payload shape: {e}")
            raise ConnectionProblem("Respuesta inválida del servidor", body=payload) from e

    async def get_municipalities(self) -> List[MunicipalityResponse]:
        return self._parse(_municipalities, await self._get("/municipios"))

    async def get_available_years(self, municipality_id: int) -> AvailableYearsResponse:
        return self._parse(AvailableYearsResponse, await self._get(f"/anios/{municipality_id}"))

    async def get_stations(self, municipality_id: int) -> List[StationLocationResponse]:
        """Stations of a municipality at their latest known location."""
        return self._parse(_stations, await self._get(f"/estaciones/{municipality_id}"))

    async def get_stations_by_year(self, municipality_id: int, year: int) -> StationsByYearResponse:
        payload = await self._get(f"/estaciones/{municipality_id}/{year}")
        return self._parse(StationsByYearResponse, payload)

    async def get_pollutants(self, station_id: int, year: int) -> PollutantsResponse:
        return self._parse(PollutantsResponse, await self._get(f"/contaminantes/{station_id}/{year}"))

    async def get_historical_data(self, station_id: int, year: int, exposure_id: int) -> HistoricalDataResponse:
        params = {"estacion": station_id, "anio": year, "exposicion": exposure_id}
        return self._parse(HistoricalDataResponse, await self._get("/datos", params=params))

    async def get_dictionary(self) -> List[DictionaryEntryResponse]:
        return self._parse(_dictionary, await self._get("/diccionario"))
