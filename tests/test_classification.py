"""
Tests for the air-quality classification rule.
"""

import pytest

from airsense.utils.classification import (
    ANNUAL_HOURS,
    DEFAULT_COLOR,
    WHO_SOURCE,
    classify,
    get_who_limits,
    normalize_symbol,
)


def test_normalize_symbol():
    assert normalize_symbol("PM2.5") == "PM25"
    assert normalize_symbol("pm10") == "PM10"
    assert normalize_symbol("O3") == "O3"


def test_who_limits_lookup():
    assert get_who_limits("PM2.5", 24) == {
        "tiempo_horas": 24,
        "buena": 15.0,
        "regular": 25.0,
        "fuente": WHO_SOURCE,
    }
    assert get_who_limits("PM10", ANNUAL_HOURS)["buena"] == 15.0
    assert get_who_limits("CO", 24)["regular"] == 7.0
    assert get_who_limits("O3", 1) is None
    assert get_who_limits("XYZ", 24) is None


@pytest.mark.parametrize(
    "mean, level, color",
    [
        (10.0, "Buena", "#4CAF50"),
        (15.0, "Buena", "#4CAF50"),
        (15.01, "Regular", "#FF9800"),
        (25.0, "Regular", "#FF9800"),
        (25.01, "Mala", "#F44336"),
    ],
)
def test_who_classification_boundaries(mean, level, color):
    """Test the guideline and interim target are inclusive upper bounds."""
    result = classify("PM2.5", 24, mean=mean, maximum=100.0, regulatory_limit=37.0)
    assert result["nivel"] == level
    assert result["color"] == color
    assert result["limites_oms"]["buena"] == 15.0


def test_regulatory_classification():
    """Test the regulatory limit decides when the WHO defines nothing."""
    good = classify("O3", 1, mean=60.0, maximum=140.0, regulatory_limit=150.0)
    assert good["nivel"] == "Buena"
    assert good["limites_oms"] is None

    moderate = classify("O3", 1, mean=60.0, maximum=200.0, regulatory_limit=150.0)
    assert moderate["nivel"] == "Regular"

    poor = classify("O3", 1, mean=160.0, maximum=200.0, regulatory_limit=150.0)
    assert poor["nivel"] == "Mala"


def test_undefined_classification():
    """Test a missing mean or missing limits gives the neutral level."""
    result = classify("O3", 1, mean=60.0, maximum=140.0)
    assert result["nivel"] == "Sin definir"
    assert result["color"] == DEFAULT_COLOR
    assert result["descripcion"]

    result = classify("PM2.5", 24, mean=None, maximum=None)
    assert result["nivel"] == "Sin definir"
    assert result["limites_oms"]["tiempo_horas"] == 24


def test_classification_is_deterministic():
    first = classify("PM10", 24, mean=48.0, maximum=90.0, regulatory_limit=75.0)
    second = classify("PM10", 24, mean=48.0, maximum=90.0, regulatory_limit=75.0)
    assert first == second
