"""Animated SVG petal mandala: path ingestion, tessellation and open/close transitions."""

__version__ = "0.1.0"
