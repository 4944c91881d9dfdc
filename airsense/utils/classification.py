"""
Air-quality classification for historical statistics.

This module classifies the yearly statistics of a pollutant exposure against
reference thresholds:
- WHO Global Air Quality Guidelines (2021): the guideline level (AQG) bounds
  "Buena" and the closest interim target bounds "Regular".
- National regulation (Resolución 2254 de 2017) as fallback when the WHO
  defines no guideline for the exposure duration.

References:
- WHO (2021): WHO global air quality guidelines. Particulate matter (PM2.5
  and PM10), ozone, nitrogen dioxide, sulfur dioxide and carbon monoxide.
- MinAmbiente (2017): Resolución 2254, norma de calidad del aire ambiente.
"""

from typing import Dict, Optional, Tuple

ANNUAL_HOURS = 8760

WHO_SOURCE = "OMS - Guías de calidad del aire 2021"

# (normalized symbol, exposure hours) -> (AQG level, interim target)
# Units are µg/m³ except CO, which the network reports in mg/m³.
WHO_LIMITS: Dict[Tuple[str, int], Tuple[float, float]] = {
    ("PM25", 24): (15.0, 25.0),
    ("PM25", ANNUAL_HOURS): (5.0, 10.0),
    ("PM10", 24): (45.0, 50.0),
    ("PM10", ANNUAL_HOURS): (15.0, 20.0),
    ("O3", 8): (100.0, 120.0),
    ("NO2", 24): (25.0, 50.0),
    ("NO2", ANNUAL_HOURS): (10.0, 20.0),
    ("SO2", 24): (40.0, 50.0),
    ("CO", 24): (4.0, 7.0),
}

LEVEL_GOOD = "Buena"
LEVEL_MODERATE = "Regular"
LEVEL_POOR = "Mala"
LEVEL_UNDEFINED = "Sin definir"

DEFAULT_COLOR = "#9E9E9E"

LEVEL_COLORS = {
    LEVEL_GOOD: "#4CAF50",
    LEVEL_MODERATE: "#FF9800",
    LEVEL_POOR: "#F44336",
    LEVEL_UNDEFINED: DEFAULT_COLOR,
}

WHO_DESCRIPTIONS = {
    LEVEL_GOOD: (
        "El promedio anual se encuentra dentro del nivel guía de la OMS. "
        "La calidad del aire representa un riesgo bajo para la salud."
    ),
    LEVEL_MODERATE: (
        "El promedio supera el nivel guía de la OMS pero se mantiene dentro de la "
        "meta intermedia. Los grupos sensibles deberían reducir la exposición prolongada."
    ),
    LEVEL_POOR: (
        "El promedio supera la meta intermedia de la OMS. La exposición sostenida "
        "puede afectar la salud de toda la población, en especial niños, adultos "
        "mayores y personas con enfermedades respiratorias."
    ),
}

REGULATORY_DESCRIPTIONS = {
    LEVEL_GOOD: (
        "Ningún valor del año superó el límite máximo permisible de la norma nacional."
    ),
    LEVEL_MODERATE: (
        "El promedio cumple la norma nacional, pero hubo picos por encima del "
        "límite máximo permisible."
    ),
    LEVEL_POOR: (
        "El promedio del año supera el límite máximo permisible de la norma nacional."
    ),
}

UNDEFINED_DESCRIPTION = (
    "No hay límites de referencia definidos para este contaminante y tiempo de exposición."
)


def normalize_symbol(symbol: str) -> str:
    """
    Normalize a pollutant symbol for threshold lookups.

    Example:
        >>> normalize_symbol("PM2.5")
        "PM25"
    """
    return "".join(ch for ch in symbol.upper() if ch.isalnum())


def get_who_limits(symbol: str, hours: int) -> Optional[Dict]:
    """
    Get the WHO thresholds defined for a pollutant exposure.

    Args:
        symbol: Pollutant symbol as stored (e.g. "PM2.5")
        hours: Exposure duration in hours (8760 for annual)

    Returns:
        Dict with tiempo_horas, buena, regular and fuente, or None when the
        WHO defines no guideline for that duration
    """
    limits = WHO_LIMITS.get((normalize_symbol(symbol), hours))
    if limits is None:
        return None
    good, moderate = limits
    return {
        "tiempo_horas": hours,
        "buena": good,
        "regular": moderate,
        "fuente": WHO_SOURCE,
    }


def classify(
    symbol: str,
    hours: int,
    mean: Optional[float],
    maximum: Optional[float],
    regulatory_limit: Optional[float] = None,
) -> Dict:
    """
    Classify the statistics of one (station, year, exposure).

    With WHO limits the mean is compared against the guideline and the
    interim target. Without them, the regulatory limit is used: a maximum
    within the limit is "Buena", a mean within the limit is "Regular".

    Args:
        symbol: Pollutant symbol
        hours: Exposure duration in hours
        mean: Yearly mean of the exposure
        maximum: Yearly maximum of the exposure
        regulatory_limit: National maximum permissible level, if any

    Returns:
        Dict with nivel, color, descripcion and limites_oms
    """
    who_limits = get_who_limits(symbol, hours)

    if who_limits is not None and mean is not None:
        if mean <= who_limits["buena"]:
            level = LEVEL_GOOD
        elif mean <= who_limits["regular"]:
            level = LEVEL_MODERATE
        else:
            level = LEVEL_POOR
        return _build(level, WHO_DESCRIPTIONS[level], who_limits)

    if regulatory_limit is not None and mean is not None:
        if maximum is not None and maximum <= regulatory_limit:
            level = LEVEL_GOOD
        elif mean <= regulatory_limit:
            level = LEVEL_MODERATE
        else:
            level = LEVEL_POOR
        return _build(level, REGULATORY_DESCRIPTIONS[level], who_limits)

    return _build(LEVEL_UNDEFINED, UNDEFINED_DESCRIPTION, who_limits)


def _build(level: str, description: str, who_limits: Optional[Dict]) -> Dict:
    return {
        "nivel": level,
        "color": LEVEL_COLORS[level],
        "descripcion": description,
        "limites_oms": who_limits,
    }
