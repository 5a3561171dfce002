"""Raster preview of a laid-out chart using Pillow."""
from __future__ import annotations

import io
import math
from typing import Dict, Iterable, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .layout import DEFAULT_LAYOUT, LayoutConfig, Shape

DEFAULT_FONT_SIZE = 12
DASH_LENGTH = 6.0
DASH_GAP = 4.0

_Color = Optional[str]


def parse_style(style: str) -> Dict[str, str]:
    """Split a draw.io style string into a dict; bare tokens map to ``"1"``."""
    out: Dict[str, str] = {}
    for part in style.split(";"):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            key, value = part.split("=", 1)
            out[key.strip()] = value.strip()
        else:
            out[part] = "1"
    return out


def _color(value: Optional[str]) -> _Color:
    if not value or value == "none":
        return None
    return value


class _FontCache:
    def __init__(self) -> None:
        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    def get(self, size: float) -> ImageFont.ImageFont:
        key = max(1, int(round(size)))
        font = self._fonts.get(key)
        if font is None:
            font = ImageFont.load_default(size=key)
            self._fonts[key] = font
        return font


def _dashed_line(
    draw: ImageDraw.ImageDraw,
    start: Tuple[float, float],
    end: Tuple[float, float],
    *,
    fill: str,
    width: int,
    dash: float,
    gap: float,
) -> None:
    x0, y0 = start
    x1, y1 = end
    length = math.hypot(x1 - x0, y1 - y0)
    if length == 0:
        return
    ux, uy = (x1 - x0) / length, (y1 - y0) / length
    pos = 0.0
    while pos < length:
        seg_end = min(pos + dash, length)
        draw.line(
            [(x0 + ux * pos, y0 + uy * pos), (x0 + ux * seg_end, y0 + uy * seg_end)],
            fill=fill,
            width=width,
        )
        pos = seg_end + gap


def _draw_text(
    draw: ImageDraw.ImageDraw,
    shape: Shape,
    style: Dict[str, str],
    fonts: _FontCache,
    scale: float,
) -> None:
    if not shape.value:
        return
    font = fonts.get(float(style.get("fontSize", DEFAULT_FONT_SIZE)) * scale)
    left, top, right, bottom = draw.textbbox((0, 0), shape.value, font=font)
    text_w = right - left
    text_h = bottom - top
    box_x = shape.x * scale
    box_w = shape.width * scale
    align = style.get("align", "center")
    if align == "left":
        x = box_x
    elif align == "right":
        x = box_x + box_w - text_w
    else:
        x = box_x + (box_w - text_w) / 2
    y = shape.y * scale + (shape.height * scale - text_h) / 2
    draw.text((x - left, y - top), shape.value, fill=_color(style.get("fontColor")) or "#000000", font=font)


def render_png(
    shapes: Iterable[Shape],
    config: Optional[LayoutConfig] = None,
    *,
    scale: float = 1.0,
) -> bytes:
    """Rasterize shapes onto a white page covering the padded canvas."""
    if scale <= 0:
        raise ValueError("scale must be > 0")
    cfg = config or DEFAULT_LAYOUT
    side = max(1, int(round(cfg.total_size * scale)))
    image = Image.new("RGB", (side, side), "white")
    draw = ImageDraw.Draw(image)
    fonts = _FontCache()

    for shape in shapes:
        style = parse_style(shape.style)
        stroke = _color(style.get("strokeColor"))
        stroke_width = max(1, int(round(float(style.get("strokeWidth", 1)) * scale)))
        if shape.is_edge:
            start = (shape.x * scale, shape.y * scale)
            end = (shape.width * scale, shape.height * scale)
            color = stroke or "#000000"
            if style.get("dashed") == "1":
                _dashed_line(
                    draw, start, end, fill=color, width=stroke_width, dash=DASH_LENGTH * scale, gap=DASH_GAP * scale
                )
            else:
                draw.line([start, end], fill=color, width=stroke_width)
            continue
        if "text" in style:
            _draw_text(draw, shape, style, fonts, scale)
            continue
        box = [
            shape.x * scale,
            shape.y * scale,
            (shape.x + shape.width) * scale,
            (shape.y + shape.height) * scale,
        ]
        fill = _color(style.get("fillColor"))
        if "ellipse" in style:
            draw.ellipse(box, fill=fill, outline=stroke, width=stroke_width)
        else:
            draw.rectangle(box, fill=fill, outline=stroke, width=stroke_width)
        _draw_text(draw, shape, style, fonts, scale)

    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


__all__ = ["parse_style", "render_png"]
