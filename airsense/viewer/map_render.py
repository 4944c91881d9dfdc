"""Folium rendering of the viewer map."""

from typing import Optional, Tuple

import folium

from airsense.utils.classification import DEFAULT_COLOR
from airsense.viewer.panel import info_box, station_popup
from airsense.viewer.state import MapState, StationMarker

LIGHT_TILES = "OpenStreetMap"
DARK_TILES = "CartoDB dark_matter"

PIN_WIDTH = 25
PIN_RATIO = 1.64
HIGHLIGHT_SCALE = 1.4

MUNICIPALITY_COLOR = "#2a5d67"

PIN_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 25 41" width="{width}" height="{height}">'
    '<path fill="{color}" stroke="#fff" stroke-width="2" '
    'd="M12.5 0C5.6 0 0 5.6 0 12.5c0 8.4 12.5 28.5 12.5 28.5S25 20.9 25 12.5C25 5.6 19.4 0 12.5 0z"/>'
    '<circle cx="12.5" cy="12.5" r="6" fill="#fff" opacity="0.9"/>'
    "</svg>"
)


def pin_size(highlighted: bool = False) -> Tuple[int, int]:
    scale = HIGHLIGHT_SCALE if highlighted else 1
    return round(PIN_WIDTH * scale), round(PIN_WIDTH * PIN_RATIO * scale)


def pin_icon(color: Optional[str], highlighted: bool = False) -> folium.DivIcon:
    """Pin-shaped icon filled with ``color``; highlighted pins are drawn larger."""
    width, height = pin_size(highlighted)
    return folium.DivIcon(
        html=PIN_SVG.format(color=color or DEFAULT_COLOR, width=width, height=height),
        icon_size=(width, height),
        icon_anchor=(width // 2, height),
        class_name="marcador-resaltado" if highlighted else "marcador-normal",
    )


def station_marker(marker: StationMarker, year: Optional[int] = None) -> folium.Marker:
    return folium.Marker(
        location=[marker.latitude, marker.longitude],
        icon=pin_icon(marker.color, marker.highlighted),
        popup=folium.Popup(station_popup(marker, year), max_width=240, show=marker.popup_open),
        tooltip=marker.name,
        z_index_offset=marker.z_index,
    )


def build_map(map_state: MapState, dark: bool = False) -> folium.Map:
    """
    Build a folium map for ``map_state``.

    Args:
        map_state: Map part of the viewer state
        dark: Use dark base tiles

    Returns:
        folium.Map: The map, ready to be saved or embedded
    """
    m = folium.Map(
        location=list(map_state.center),
        zoom_start=map_state.zoom,
        tiles=DARK_TILES if dark else LIGHT_TILES,
    )

    for municipality in map_state.municipality_markers:
        folium.CircleMarker(
            location=[municipality.latitude, municipality.longitude],
            radius=6,
            color=MUNICIPALITY_COLOR,
            fill=True,
            fill_opacity=0.7,
            tooltip=municipality.name,
        ).add_to(m)

    for marker in map_state.station_markers:
        station_marker(marker, map_state.query_year).add_to(m)

    if map_state.station_markers:
        box = info_box(len(map_state.station_markers), map_state.auto_selected)
        m.get_root().html.add_child(folium.Element(
            f'<div style="position: fixed; bottom: 20px; right: 20px; z-index: 9999; '
            f'background: white; padding: 6px 10px; border-radius: 6px;">{box}</div>'
        ))

    return m


def render_html(map_state: MapState, dark: bool = False) -> str:
    """Standalone HTML document of the map."""
    return build_map(map_state, dark).get_root().render()
