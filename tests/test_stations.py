"""
Tests for the station endpoints.

This module checks both location rules: latest location overall for the
municipality listing and most recent location up to the year for the
year-scoped listing.
"""

from airsense.dependencies.validation import MUNICIPALITY_ID_ERROR, year_error

from tests.conftest import BUGA_ID, CALI_ID


def test_stations_latest_location(client):
    """Test every station of a municipality appears at its latest location."""
    response = client.get(f"/api/estaciones/{CALI_ID}")
    assert response.status_code == 200
    stations = {s["id_estacion"]: s for s in response.json()}
    assert set(stations) == {101, 102, 103}

    univalle = stations[101]
    assert univalle["anio"] == 2019
    assert univalle["latitud"] == 3.38
    assert univalle["longitud"] == -76.54
    assert univalle["tipo_estacion"] == "Fija"


def test_stations_ordered_by_name(client):
    response = client.get(f"/api/estaciones/{CALI_ID}")
    names = [s["nombre_estacion"] for s in response.json()]
    assert names == sorted(names)


def test_stations_empty_municipality(client):
    """Test a municipality without stations returns an empty list."""
    response = client.get(f"/api/estaciones/{BUGA_ID}")
    assert response.status_code == 200
    assert response.json() == []


def test_stations_by_year(client):
    """Test only stations with measurements that year are returned."""
    response = client.get(f"/api/estaciones/{CALI_ID}/2018")
    assert response.status_code == 200
    data = response.json()
    assert data["municipio_id"] == CALI_ID
    assert data["anio_consultado"] == 2018
    assert data["total_estaciones"] == 2
    assert [s["nombre_estacion"] for s in data["estaciones"]] == [
        "Estación Compartir",
        "Estación Univalle",
    ]


def test_stations_by_year_location_as_of_year(client):
    """Test a station that moved later is placed where it stood that year."""
    response = client.get(f"/api/estaciones/{CALI_ID}/2018")
    univalle = next(s for s in response.json()["estaciones"] if s["id_estacion"] == 101)
    assert univalle["anio"] == 2015
    assert univalle["latitud"] == 3.37

    response = client.get(f"/api/estaciones/{CALI_ID}/2019")
    univalle = next(s for s in response.json()["estaciones"] if s["id_estacion"] == 101)
    assert univalle["anio"] == 2019
    assert univalle["latitud"] == 3.38


def test_stations_by_year_without_data(client):
    """Test a valid year without measurements is a 404 with a suggestion."""
    response = client.get(f"/api/estaciones/{CALI_ID}/2017")
    assert response.status_code == 404
    data = response.json()
    assert "2017" in data["mensaje"]
    assert data["sugerencia"] == "Intente con otro año disponible"


def test_stations_by_year_out_of_range(client):
    """Test years outside 2011-2023 are rejected."""
    for year in ("2010", "2024", "abc"):
        response = client.get(f"/api/estaciones/{CALI_ID}/{year}")
        assert response.status_code == 400, year
        assert response.json() == {"error": year_error()}


def test_stations_by_year_range_bounds(client):
    """Test both ends of the year range are accepted."""
    for year in (2011, 2023):
        response = client.get(f"/api/estaciones/{CALI_ID}/{year}")
        assert response.status_code == 404


def test_stations_by_year_invalid_municipality(client):
    response = client.get("/api/estaciones/0/2018")
    assert response.status_code == 400
    assert response.json() == {"error": MUNICIPALITY_ID_ERROR}
