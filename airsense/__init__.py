"""AirSense: historical air-quality viewer for the municipalities of Valle del Cauca."""

__version__ = "2.0.0"
