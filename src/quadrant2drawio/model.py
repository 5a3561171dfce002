"""Semantic model of a parsed quadrant chart."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_TITLE = "Quadrant Chart"


def clamp_unit(value: float) -> float:
    value = float(value)
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class Point:
    """A labeled coordinate in the unit square; x and y are clamped on creation."""

    label: str
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", clamp_unit(self.x))
        object.__setattr__(self, "y", clamp_unit(self.y))


@dataclass(frozen=True)
class XAxis:
    left: str = ""
    right: str = ""


@dataclass(frozen=True)
class YAxis:
    bottom: str = ""
    top: str = ""


@dataclass(frozen=True)
class Quadrants:
    """Quadrant captions: q1 top-right, q2 top-left, q3 bottom-left, q4 bottom-right."""

    q1: str = ""
    q2: str = ""
    q3: str = ""
    q4: str = ""


@dataclass(frozen=True)
class ChartModel:
    title: str = DEFAULT_TITLE
    x_axis: XAxis = field(default_factory=XAxis)
    y_axis: YAxis = field(default_factory=YAxis)
    quadrants: Quadrants = field(default_factory=Quadrants)
    points: Tuple[Point, ...] = ()


__all__ = ["DEFAULT_TITLE", "ChartModel", "Point", "Quadrants", "XAxis", "YAxis", "clamp_unit"]
