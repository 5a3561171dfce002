"""Fixed-layout geometry for quadrant charts.

Turns a :class:`ChartModel` into an ordered list of :class:`Shape` records in
absolute canvas coordinates. List order is stacking order. Nothing here knows
about XML; see :mod:`quadrant2drawio.drawio` for serialization.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .model import ChartModel, Point

GREEN = "#28a745"
BLUE = "#007bff"
GRAY = "#6c757d"
AMBER = "#ffc107"
NEUTRAL = "#999999"

TEXT_BASE = "text;html=1;strokeColor=none;fillColor=none;align=center;verticalAlign=middle;whiteSpace=wrap;rounded=0;"
TITLE_STYLE = TEXT_BASE + "fontSize=24;fontStyle=1"
BORDER_STYLE = "rounded=0;whiteSpace=wrap;html=1;fillColor=#ffffff;strokeColor=#666666;"
WATERMARK_STYLE = TEXT_BASE + "fontSize=20;fontColor=#e0e0e0;fontStyle=1;"
DIVIDER_STYLE = "endArrow=none;html=1;strokeWidth=2;strokeColor=#b0b0b0;dashed=1;"
AXIS_LABEL_STYLE = TEXT_BASE + "fontSize=12;fontStyle=2;fontColor=#333333;"
POINT_LABEL_STYLE = (
    "text;html=1;strokeColor=none;fillColor=none;align=left;verticalAlign=middle;"
    "whiteSpace=wrap;rounded=0;fontSize=11;fontColor=#000000;fontStyle=1"
)
MARKER_STYLE = "ellipse;whiteSpace=wrap;html=1;aspect=fixed;fillColor={color};strokeColor=none;"


class LayoutConfigError(ValueError):
    """Raised when layout dimensions cannot produce a drawable chart."""


@dataclass(frozen=True)
class LayoutConfig:
    canvas_size: float = 600
    padding: float = 100
    title_top: float = 10
    title_height: float = 40
    axis_label_width: float = 150
    axis_label_height: float = 20
    marker_size: float = 12
    label_offset: float = 10
    top_label_rise: float = 30

    @property
    def total_size(self) -> float:
        return self.canvas_size + 2 * self.padding

    @property
    def half(self) -> float:
        return self.canvas_size / 2

    @property
    def mid(self) -> float:
        return self.padding + self.half

    def validate(self) -> "LayoutConfig":
        if not (math.isfinite(self.canvas_size) and math.isfinite(self.padding)):
            raise LayoutConfigError(
                f"canvas size and padding must be finite (got {self.canvas_size}, {self.padding})"
            )
        if self.canvas_size <= 0:
            raise LayoutConfigError(f"canvas size must be > 0 (got {self.canvas_size})")
        if self.padding < 0:
            raise LayoutConfigError(f"padding must be >= 0 (got {self.padding})")
        return self


DEFAULT_LAYOUT = LayoutConfig()


@dataclass(frozen=True)
class Shape:
    """One diagram cell.

    Vertices use ``x, y, width, height`` as their bounding box. Edges reuse the
    same fields for the source point ``(x, y)`` and target point
    ``(width, height)``.
    """

    value: str
    style: str
    x: float
    y: float
    width: float
    height: float
    kind: str = "vertex"

    @property
    def is_edge(self) -> bool:
        return self.kind == "edge"

    @property
    def source(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def target(self) -> Tuple[float, float]:
        return self.width, self.height


def to_canvas(x: float, y: float, config: LayoutConfig = DEFAULT_LAYOUT) -> Tuple[float, float]:
    """Map unit-square data coordinates to canvas pixels (y grows downward)."""
    size = config.canvas_size
    return config.padding + x * size, config.padding + (size - y * size)


def point_color(x: float, y: float) -> str:
    if x >= 0.5 and y >= 0.5:
        return GREEN
    if x < 0.5 and y >= 0.5:
        return BLUE
    if x < 0.5 and y < 0.5:
        return GRAY
    if x >= 0.5 and y < 0.5:
        return AMBER
    return NEUTRAL


def _vertex(value: str, style: str, x: float, y: float, width: float, height: float) -> Shape:
    return Shape(value, style, x, y, width, height)


def _edge(style: str, source: Tuple[float, float], target: Tuple[float, float]) -> Shape:
    return Shape("", style, source[0], source[1], target[0], target[1], kind="edge")


def _point_shapes(point: Point, config: LayoutConfig) -> List[Shape]:
    px, py = to_canvas(point.x, point.y, config)
    radius = config.marker_size / 2
    offset = config.label_offset
    return [
        _vertex(
            "",
            MARKER_STYLE.format(color=point_color(point.x, point.y)),
            px - radius,
            py - radius,
            config.marker_size,
            config.marker_size,
        ),
        _vertex(
            point.label,
            POINT_LABEL_STYLE,
            px + offset,
            py - offset,
            config.axis_label_width,
            config.axis_label_height,
        ),
    ]


def layout_chart(model: ChartModel, config: Optional[LayoutConfig] = None) -> List[Shape]:
    """Compute every shape of the chart in stacking order."""
    cfg = (config or DEFAULT_LAYOUT).validate()
    pad = cfg.padding
    size = cfg.canvas_size
    half = cfg.half
    mid = cfg.mid
    label_w = cfg.axis_label_width
    label_h = cfg.axis_label_height
    gap = cfg.label_offset

    shapes: List[Shape] = [
        _vertex(model.title, TITLE_STYLE, pad, cfg.title_top, size, cfg.title_height),
        _vertex("", BORDER_STYLE, pad, pad, size, size),
    ]

    quadrants = model.quadrants
    for value, x, y in (
        (quadrants.q2, pad, pad),
        (quadrants.q1, mid, pad),
        (quadrants.q3, pad, mid),
        (quadrants.q4, mid, mid),
    ):
        shapes.append(_vertex(value, WATERMARK_STYLE, x, y, half, half))

    shapes.append(_edge(DIVIDER_STYLE, (mid, pad), (mid, pad + size)))
    shapes.append(_edge(DIVIDER_STYLE, (pad, mid), (pad + size, mid)))

    shapes.extend(
        [
            _vertex(model.x_axis.left, AXIS_LABEL_STYLE + "align=left;", pad, mid + gap, label_w, label_h),
            _vertex(
                model.x_axis.right,
                AXIS_LABEL_STYLE + "align=right;",
                pad + size - label_w,
                mid + gap,
                label_w,
                label_h,
            ),
            _vertex(model.y_axis.top, AXIS_LABEL_STYLE, mid - label_w / 2, pad - cfg.top_label_rise, label_w, label_h),
            _vertex(model.y_axis.bottom, AXIS_LABEL_STYLE, mid - label_w / 2, pad + size + gap, label_w, label_h),
        ]
    )

    for point in model.points:
        shapes.extend(_point_shapes(point, cfg))
    return shapes


__all__ = [
    "AMBER",
    "BLUE",
    "DEFAULT_LAYOUT",
    "GRAY",
    "GREEN",
    "NEUTRAL",
    "LayoutConfig",
    "LayoutConfigError",
    "Shape",
    "layout_chart",
    "point_color",
    "to_canvas",
]
