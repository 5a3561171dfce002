"""Mermaid quadrantChart to draw.io conversion."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from .drawio import serialize
from .layout import LayoutConfig, layout_chart
from .model import ChartModel
from .parser import parse
from .preview import render_png


def render(
    model: ChartModel,
    config: Optional[LayoutConfig] = None,
    *,
    modified: Optional[datetime] = None,
) -> str:
    """Render a parsed chart as draw.io XML.

    Output is byte-identical for equal inputs once ``modified`` is pinned;
    otherwise only the file header's ``modified`` stamp varies.
    """
    return serialize(layout_chart(model, config), modified=modified)


def quadrant_to_drawio(
    source: str,
    config: Optional[LayoutConfig] = None,
    *,
    modified: Optional[datetime] = None,
) -> str:
    """Convert quadrantChart source text to draw.io XML."""
    return render(parse(source), config, modified=modified)


def quadrant_to_png(source: str, config: Optional[LayoutConfig] = None, *, scale: float = 1.0) -> bytes:
    return render_png(layout_chart(parse(source), config), config, scale=scale)


__all__ = ["quadrant_to_drawio", "quadrant_to_png", "render"]
