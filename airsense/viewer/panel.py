"""
Side panel rendering.

HTML fragments for the onboarding instructions, the loading and error states
and the statistics/interpretation view of a historical datum.
"""

from datetime import datetime
from html import escape
from typing import Optional

from airsense.config import settings
from airsense.schemas.historical import Classification, HistoricalDataResponse
from airsense.viewer.state import PanelMode, PanelState, StationMarker

MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

NOT_AVAILABLE = "No disponible"


def quality_text(classification: Optional[Classification]) -> str:
    """Headline shown under the pollutant symbol."""
    if classification is None:
        return "Sin datos ⚪"
    level = (classification.nivel or "").lower()
    if "buena" in level:
        return "Calidad del aire: Buena 🟢"
    if "regular" in level:
        return "Calidad del aire: Moderada 🟠"
    if "mala" in level:
        return "Calidad del aire: Mala 🔴"
    return classification.nivel or "Sin definir ⚪"


def format_date(value: Optional[datetime]) -> str:
    """Format a timestamp as e.g. ``15 de marzo de 2018, 14:00``."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value.day} de {MONTHS[value.month - 1]} de {value.year}, {value:%H:%M}"


def format_number(value: Optional[float], decimals: int = 2) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{decimals}f}"


def render_onboarding() -> str:
    steps = (
        "📍 Selecciona un <b>municipio</b> del Valle del Cauca",
        "🎯 Haz <b>clic en una estación</b> de monitoreo",
        "🧪 Escoge un <b>contaminante</b> atmosférico",
        "📊 Consulta <b>datos y límites OMS</b>",
    )
    years = settings.YEAR_MAX - settings.YEAR_MIN + 1
    items = "".join(
        f'<div class="paso"><div class="paso__numero">PASO {number}</div>'
        f'<div class="paso__texto">{text}</div></div>'
        for number, text in enumerate(steps, start=1)
    )
    return (
        '<div class="panel-instrucciones">'
        "<h2>Cómo usar la aplicación 🌍</h2>"
        f"<p>Explora {years} años de datos históricos ({settings.YEAR_MIN}-{settings.YEAR_MAX}) "
        "de calidad del aire en el Valle del Cauca</p>"
        f"{items}</div>"
    )


def render_loading() -> str:
    return '<div class="panel-cargando">📊 Cargando datos del contaminante...</div>'


def render_error(message: str) -> str:
    """Error state with a reload button that retries the last query."""
    return (
        '<div class="panel-error">'
        '<div class="panel-error__icono">⚠️</div>'
        "<h3>Error al cargar datos</h3>"
        f"<p>{escape(message)}</p>"
        '<button type="button" data-action="reload">🔄 Recargar</button>'
        "</div>"
    )


def render_data(data: HistoricalDataResponse) -> str:
    pollutant = data.contaminante
    stats = data.estadisticas
    exceedances = data.excedencias
    classification = data.clasificacion
    units = escape(pollutant.unidades)

    who = ""
    if classification.limites_oms is not None:
        limits = classification.limites_oms
        who = (
            '<div class="info-limites">'
            f"<p><strong>🌍 Límites según OMS ({limits.tiempo_horas}h)</strong></p>"
            f"<p>Buena ≤ <strong>{limits.buena:g}</strong> {units}<br>"
            f"Regular ≤ <strong>{limits.regular:g}</strong> {units}</p>"
            f'<p class="nota-fuente"><em>Fuente: {escape(limits.fuente)}</em></p>'
            "</div>"
        )

    days = exceedances.dias_excedencias if exceedances.dias_excedencias is not None else NOT_AVAILABLE
    count = (
        exceedances.excedencias_limite_actual
        if exceedances.excedencias_limite_actual is not None
        else NOT_AVAILABLE
    )

    return (
        '<div class="informacion-contaminante">'
        f'<div class="info-hero" style="background: {classification.color};">'
        f"<h2>{escape(pollutant.simbolo)}</h2>"
        f"<p><strong>{escape(pollutant.tiempo_exposicion.texto)}</strong></p>"
        f"<p>{quality_text(classification)}</p>"
        "</div>"
        '<div class="info-estadisticas">'
        "<h3>📊 Estadísticas principales</h3>"
        f"<p>Promedio: <strong>{format_number(stats.promedio)}</strong> {units}</p>"
        f"<p>Máximo: <strong>{format_number(stats.maximo)}</strong> {units}</p>"
        f"<p>Mínimo: <strong>{format_number(stats.minimo)}</strong> {units}</p>"
        f"<p>Días con excedencias: <strong>{days}</strong></p>"
        f"{who}"
        f'<div class="info-pico"><strong>📅 Fecha del pico máximo:</strong><br>'
        f"{format_date(stats.fecha_hora_maximo)}</div>"
        '<details class="info-detalles"><summary>🔍 Ver detalles técnicos</summary>'
        f"<p><strong>Mediana:</strong> {format_number(stats.mediana)} {units}</p>"
        f"<p><strong>Percentil 98:</strong> {format_number(stats.percentil_98)} {units}</p>"
        f"<p><strong>Excedencias del límite actual:</strong> {count}</p>"
        f"<p><strong>% de excedencias:</strong> {format_number(exceedances.porcentaje_excedencias)}%</p>"
        "<p><strong>Representatividad temporal:</strong> "
        f"{format_number(data.calidad_datos.representatividad_temporal, 1)}%</p>"
        "</details></div>"
        '<div class="info-interpretacion"><h4>💡 Interpretación</h4>'
        f"<p>{escape(classification.descripcion)}</p></div>"
        "</div>"
    )


def render_panel(panel: PanelState) -> str:
    """Render whichever view the panel is in."""
    if panel.mode == PanelMode.LOADING:
        return render_loading()
    if panel.mode == PanelMode.ERROR:
        return render_error(panel.error or "Error desconocido")
    if panel.mode == PanelMode.DATA and panel.data is not None:
        return render_data(panel.data)
    return render_onboarding()


def station_popup(marker: StationMarker, year: Optional[int] = None) -> str:
    """Popup of a station marker; the "center here" button only exists once a year is chosen."""
    station_type = ""
    if marker.station_type:
        station_type = f'<span class="popup__tipo">📍 {escape(marker.station_type)}</span>'
    center = ""
    if year is not None:
        center = f'<button type="button" data-station="{marker.id}">🎯 Centrar aquí</button>'
    return (
        '<div class="popup-estacion">'
        f"<strong>{escape(marker.name)}</strong>"
        f"{station_type}"
        f"<div>Latitud: <strong>{marker.latitude:.4f}°</strong></div>"
        f"<div>Longitud: <strong>{marker.longitude:.4f}°</strong></div>"
        f"{center}"
        "</div>"
    )


def info_box(station_count: int, auto_selected: bool = False) -> str:
    html = f"<b># Estaciones:</b> {station_count}"
    if auto_selected:
        html += "<br><small>✅ Estación seleccionada automáticamente</small>"
    return f'<div class="mapa__cuadro-info">{html}</div>'
