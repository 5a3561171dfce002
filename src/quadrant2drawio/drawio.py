"""draw.io (mxGraph) document builder."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Iterable, Optional

from .layout import Shape

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

FILE_HOST = "Electron"
FILE_AGENT = "MermaidCLI"
DIAGRAM_ID = "mermaid-diagram"
GRAPH_MODEL_ATTRS = {
    "dx": "1000",
    "dy": "1000",
    "grid": "1",
    "gridSize": "10",
    "guides": "1",
    "tooltips": "1",
    "connect": "1",
    "arrows": "1",
    "fold": "1",
    "page": "1",
    "pageScale": "1",
    "pageWidth": "827",
    "pageHeight": "1169",
    "math": "0",
    "shadow": "0",
}

ROOT_CELL_ID = "0"
LAYER_CELL_ID = "1"
FIRST_SHAPE_ID = 2


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. ``2024-05-01T12:00:00.000Z``."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _fmt(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class DrawioDocument:
    """Builds one single-page draw.io file.

    The two bootstrap cells are created up front; every added shape gets the
    next sequential id starting at ``FIRST_SHAPE_ID``.
    """

    def __init__(self, *, modified: Optional[datetime] = None) -> None:
        self._mxfile = ET.Element(
            "mxfile",
            {
                "host": FILE_HOST,
                "modified": format_timestamp(modified),
                "agent": FILE_AGENT,
                "type": "device",
            },
        )
        diagram = ET.SubElement(self._mxfile, "diagram", {"id": DIAGRAM_ID})
        model = ET.SubElement(diagram, "mxGraphModel", dict(GRAPH_MODEL_ATTRS))
        self._root = ET.SubElement(model, "root")
        ET.SubElement(self._root, "mxCell", {"id": ROOT_CELL_ID})
        ET.SubElement(self._root, "mxCell", {"id": LAYER_CELL_ID, "parent": ROOT_CELL_ID})
        self._next_id = FIRST_SHAPE_ID

    def add_shape(self, shape: Shape) -> ET.Element:
        cell = ET.SubElement(
            self._root,
            "mxCell",
            {
                "id": str(self._next_id),
                "value": shape.value,
                "style": shape.style,
                "parent": LAYER_CELL_ID,
            },
        )
        self._next_id += 1
        if shape.is_edge:
            cell.set("edge", "1")
            geometry = ET.SubElement(cell, "mxGeometry", {"relative": "1", "as": "geometry"})
            for (px, py), role in ((shape.source, "sourcePoint"), (shape.target, "targetPoint")):
                ET.SubElement(geometry, "mxPoint", {"x": _fmt(px), "y": _fmt(py), "as": role})
        else:
            cell.set("vertex", "1")
            ET.SubElement(
                cell,
                "mxGeometry",
                {
                    "x": _fmt(shape.x),
                    "y": _fmt(shape.y),
                    "width": _fmt(shape.width),
                    "height": _fmt(shape.height),
                    "as": "geometry",
                },
            )
        return cell

    def extend(self, shapes: Iterable[Shape]) -> "DrawioDocument":
        for shape in shapes:
            self.add_shape(shape)
        return self

    def to_string(self) -> str:
        ET.indent(self._mxfile, space="  ")
        return XML_DECLARATION + "\n" + ET.tostring(self._mxfile, encoding="unicode") + "\n"


def serialize(shapes: Iterable[Shape], *, modified: Optional[datetime] = None) -> str:
    return DrawioDocument(modified=modified).extend(shapes).to_string()


__all__ = ["DrawioDocument", "FIRST_SHAPE_ID", "format_timestamp", "serialize"]
