"""Public API for quadrant2drawio."""
from .converter import quadrant_to_drawio, quadrant_to_png, render
from .layout import LayoutConfig, LayoutConfigError
from .model import ChartModel, Point, Quadrants, XAxis, YAxis
from .parser import parse

__all__ = [
    "ChartModel",
    "LayoutConfig",
    "LayoutConfigError",
    "Point",
    "Quadrants",
    "XAxis",
    "YAxis",
    "parse",
    "quadrant_to_drawio",
    "quadrant_to_png",
    "render",
]
