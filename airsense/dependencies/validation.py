"""
Request parameter validation dependencies.

Every parameterized endpoint declares these dependencies before ``get_db``.
FastAPI resolves dependencies in declaration order, so a malformed id or an
out-of-range year fails with 400 before a session is opened.

Integers are parsed leniently from the leading digits ("12abc" is 12,
"abc" is invalid), the way the public API has always accepted them.
"""

import re
from typing import NamedTuple, Optional

from fastapi import Query

from airsense.config import settings
from airsense.errors import ValidationError

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

MUNICIPALITY_ID_ERROR = "El ID del municipio debe ser un número entero positivo"
STATION_ID_ERROR = "El ID de la estación debe ser un número entero positivo"
EXPOSURE_ID_ERROR = "El ID de exposición debe ser un número entero positivo"
MISSING_PARAMS_ERROR = "Faltan parámetros requeridos"


def year_error() -> str:
    return f"El año debe ser un número entre {settings.YEAR_MIN} y {settings.YEAR_MAX}"


def historical_example() -> str:
    return f"{settings.API_PREFIX}/datos?estacion=8986&anio=2015&exposicion=4"


def parse_int(value: Optional[str]) -> Optional[int]:
    """
    Parse the leading integer of a raw parameter.

    Returns:
        The parsed integer, or None when the value has no leading digits
    """
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def parse_positive_id(value: Optional[str], message: str) -> int:
    """Parse a positive integer id or raise ValidationError with ``message``."""
    parsed = parse_int(value)
    if parsed is None or parsed <= 0:
        raise ValidationError(message)
    return parsed


def parse_year(value: Optional[str]) -> int:
    """Parse a year inside the supported range or raise ValidationError."""
    parsed = parse_int(value)
    if parsed is None or not settings.YEAR_MIN <= parsed <= settings.YEAR_MAX:
        raise ValidationError(year_error())
    return parsed


async def valid_municipality_id(id_municipio: str) -> int:
    return parse_positive_id(id_municipio, MUNICIPALITY_ID_ERROR)


async def valid_station_id(id_estacion: str) -> int:
    return parse_positive_id(id_estacion, STATION_ID_ERROR)


async def valid_year(anio: str) -> int:
    return parse_year(anio)


class HistoricalQuery(NamedTuple):
    station_id: int
    year: int
    exposure_id: int


async def valid_historical_query(
    estacion: Optional[str] = Query(None, description="ID de la estación"),
    anio: Optional[str] = Query(None, description=f"Año ({settings.YEAR_MIN}-{settings.YEAR_MAX})"),
    exposicion: Optional[str] = Query(None, description="ID de exposición"),
) -> HistoricalQuery:
    """
    Validate the query string of the historical data endpoint.

    All three parameters are required; when any is missing the error lists
    them with a usage example.
    """
    if not estacion or not anio or not exposicion:
        raise ValidationError(
            MISSING_PARAMS_ERROR,
            parametros_requeridos={
                "estacion": "ID de la estación (número)",
                "anio": f"Año a consultar ({settings.YEAR_MIN}-{settings.YEAR_MAX})",
                "exposicion": "ID de exposición (número)",
            },
            ejemplo=historical_example(),
        )

    return HistoricalQuery(
        station_id=parse_positive_id(estacion, STATION_ID_ERROR),
        year=parse_year(anio),
        exposure_id=parse_positive_id(exposicion, EXPOSURE_ID_ERROR),
    )
