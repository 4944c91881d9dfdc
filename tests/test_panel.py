"""
Tests for the side panel rendering.
"""

from datetime import datetime

from airsense.schemas.historical import Classification, HistoricalDataResponse
from airsense.viewer.panel import (
    format_date,
    info_box,
    quality_text,
    render_data,
    render_panel,
    station_popup,
)
from airsense.viewer.state import PanelMode, PanelState, StationMarker


def make_data(**classification):
    values = {"nivel": "Regular", "color": "#FF9800", "descripcion": "Calidad <moderada>"}
    values.update(classification)
    return HistoricalDataResponse.model_validate({
        "estacion": {"id_estacion": 101, "nombre_estacion": "Estación Univalle"},
        "anio": 2018,
        "contaminante": {
            "simbolo": "PM10", "nombre": "Material particulado", "unidades": "µg/m³",
            "tiempo_exposicion": {"id": 12, "texto": "24 horas", "horas": 24},
        },
        "estadisticas": {
            "promedio": 48.0, "maximo": 90.0, "minimo": 5.5, "mediana": 47.0,
            "percentil_98": 85.123, "fecha_hora_maximo": "2018-03-15T14:05:00",
        },
        "excedencias": {
            "limite_actual": 75.0, "excedencias_limite_actual": 4,
            "porcentaje_excedencias": 1.1, "dias_excedencias": 4,
        },
        "calidad_datos": {"representatividad_temporal": 91.25},
        "clasificacion": values,
    })


def test_quality_text():
    assert quality_text(Classification(nivel="Buena", color="#4CAF50", descripcion="")) == (
        "Calidad del aire: Buena 🟢"
    )
    assert quality_text(Classification(nivel="Regular", color="#FF9800", descripcion="")) == (
        "Calidad del aire: Moderada 🟠"
    )
    assert quality_text(Classification(nivel="Mala", color="#F44336", descripcion="")) == (
        "Calidad del aire: Mala 🔴"
    )
    assert quality_text(Classification(nivel="Sin definir", color="#9E9E9E", descripcion="")) == (
        "Sin definir"
    )
    assert quality_text(None) == "Sin datos ⚪"


def test_format_date():
    assert format_date(datetime(2018, 3, 15, 14, 5)) == "15 de marzo de 2018, 14:05"
    assert format_date(datetime(2021, 12, 1, 0, 0)) == "1 de diciembre de 2021, 00:00"
    assert format_date(None) == "No disponible"


def test_render_data():
    html = render_data(make_data())
    assert "PM10" in html
    assert "Calidad del aire: Moderada 🟠" in html
    assert "48.00" in html
    assert "85.12" in html
    assert "91.2%" in html
    assert "15 de marzo de 2018, 14:05" in html
    assert "background: #FF9800" in html
    assert "Calidad &lt;moderada&gt;" in html
    assert "Límites según OMS" not in html


def test_render_data_with_who_limits():
    limits = {"tiempo_horas": 24, "buena": 45.0, "regular": 50.0, "fuente": "OMS - Guías de calidad del aire 2021"}
    html = render_data(make_data(limites_oms=limits))
    assert "Límites según OMS (24h)" in html
    assert "Buena ≤ <strong>45</strong>" in html
    assert "Fuente: OMS - Guías de calidad del aire 2021" in html


def test_render_panel_modes():
    assert "Cómo usar la aplicación" in render_panel(PanelState())
    assert "2011-2023" in render_panel(PanelState())
    assert "Cargando" in render_panel(PanelState(mode=PanelMode.LOADING))

    error = render_panel(PanelState(mode=PanelMode.ERROR, error="Sin conexión"))
    assert "Error al cargar datos" in error
    assert "Sin conexión" in error
    assert 'data-action="reload"' in error

    assert "PM10" in render_panel(PanelState(mode=PanelMode.DATA, data=make_data()))


def test_station_popup():
    marker = StationMarker(
        id=101, name="Estación <Univalle>", station_type="Fija",
        latitude=3.37, longitude=-76.53, location_year=2015,
    )
    html = station_popup(marker)
    assert "Estación &lt;Univalle&gt;" in html
    assert "3.3700°" in html
    assert "-76.5300°" in html
    assert "Centrar aquí" not in html
    assert "Centrar aquí" in station_popup(marker, 2018)


def test_info_box():
    assert "# Estaciones:</b> 3" in info_box(3)
    assert "seleccionada automáticamente" in info_box(1, auto_selected=True)
