"""
Tests for the viewer API client.
"""

import httpx
import pytest

from airsense.dependencies.validation import MUNICIPALITY_ID_ERROR
from airsense.viewer.client import AirSenseClient, ConnectionProblem, NoData, RequestRejected

from tests.conftest import CALI_ID


async def test_client_parses_responses(api_client):
    municipalities = await api_client.get_municipalities()
    assert [m.nombre_municipio for m in municipalities][:2] == ["Buga", "Cali"]

    years = await api_client.get_available_years(CALI_ID)
    assert years.anios_disponibles == [2018, 2019, 2020]

    stations = await api_client.get_stations_by_year(CALI_ID, 2018)
    assert stations.total_estaciones == 2

    data = await api_client.get_historical_data(101, 2018, 10)
    assert data.clasificacion.nivel == "Buena"
    assert data.estadisticas.fecha_hora_maximo.year == 2018

    entries = await api_client.get_dictionary()
    assert [e.simbolo for e in entries] == ["PM2.5", "O3"]


async def test_client_request_rejected(api_client):
    with pytest.raises(RequestRejected) as exc_info:
        await api_client.get_available_years(0)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == MUNICIPALITY_ID_ERROR


async def test_client_no_data(api_client):
    with pytest.raises(NoData) as exc_info:
        await api_client.get_stations_by_year(CALI_ID, 2017)
    assert exc_info.value.status_code == 404
    assert exc_info.value.suggestion == "Intente con otro año disponible"


async def test_client_server_error():
    def handler(request):
        return httpx.Response(500, json={"error": "Error interno del servidor al procesar /api/municipios"})

    async with AirSenseClient("http://testserver/api", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ConnectionProblem) as exc_info:
            await client.get_municipalities()
    assert exc_info.value.status_code == 500


async def test_client_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with AirSenseClient("http://testserver/api", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ConnectionProblem):
            await client.get_dictionary()


async def test_client_malformed_payload():
    def handler(request):
        return httpx.Response(200, json={"unexpected": True})

    async with AirSenseClient("http://testserver/api", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ConnectionProblem):
            await client.get_municipalities()


async def test_client_builds_query_string():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(404, json={"mensaje": "Sin datos"})

    async with AirSenseClient("http://testserver/api", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(NoData):
            await client.get_historical_data(8986, 2015, 4)

    assert seen[0].path == "/api/datos"
    assert dict(seen[0].params) == {"estacion": "8986", "anio": "2015", "exposicion": "4"}
