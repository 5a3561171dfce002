"""Tolerant line parser for Mermaid quadrantChart source."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .model import DEFAULT_TITLE, ChartModel, Point, Quadrants, XAxis, YAxis

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "%%"
AXIS_SEPARATOR = "-->"

_POINT_RE = re.compile(r"(.+):\s*\[(-?[\d.]+),\s*(-?[\d.]+)\]")


@dataclass
class _ChartDraft:
    title: str = DEFAULT_TITLE
    x_left: str = ""
    x_right: str = ""
    y_bottom: str = ""
    y_top: str = ""
    quadrants: List[str] = field(default_factory=lambda: ["", "", "", ""])
    points: List[Point] = field(default_factory=list)

    def freeze(self) -> ChartModel:
        q1, q2, q3, q4 = self.quadrants
        return ChartModel(
            title=self.title,
            x_axis=XAxis(self.x_left, self.x_right),
            y_axis=YAxis(self.y_bottom, self.y_top),
            quadrants=Quadrants(q1, q2, q3, q4),
            points=tuple(self.points),
        )


_Handler = Callable[[_ChartDraft, str], bool]


def _strip_keyword(line: str, keyword: str) -> str:
    return line[len(keyword):].strip()


def _split_axis(line: str, keyword: str) -> Optional[Tuple[str, str]]:
    parts = line[len(keyword):].split(AXIS_SEPARATOR)
    if len(parts) != 2:
        return None
    return parts[0].strip(), parts[1].strip()


def _set_title(draft: _ChartDraft, line: str) -> bool:
    draft.title = _strip_keyword(line, "title")
    return True


def _set_x_axis(draft: _ChartDraft, line: str) -> bool:
    parts = _split_axis(line, "x-axis")
    if parts is None:
        return False
    draft.x_left, draft.x_right = parts
    return True


def _set_y_axis(draft: _ChartDraft, line: str) -> bool:
    parts = _split_axis(line, "y-axis")
    if parts is None:
        return False
    draft.y_bottom, draft.y_top = parts
    return True


def _quadrant_handler(index: int) -> _Handler:
    keyword = f"quadrant-{index}"

    def _set_quadrant(draft: _ChartDraft, line: str) -> bool:
        draft.quadrants[index - 1] = _strip_keyword(line, keyword)
        return True

    return _set_quadrant


def _looks_like_point(line: str) -> bool:
    return ":" in line and "[" in line and "]" in line


def _add_point(draft: _ChartDraft, line: str) -> bool:
    match = _POINT_RE.search(line)
    if not match:
        return False
    try:
        x = float(match.group(2))
        y = float(match.group(3))
    except ValueError:
        return False
    draft.points.append(Point(match.group(1).strip(), x, y))
    return True


def _prefix(keyword: str) -> Callable[[str], bool]:
    return lambda line: line.startswith(keyword)


# Prefix matching is inherited: "quadrant-10 ..." is claimed by the quadrant-1 rule.
_RULES: List[Tuple[Callable[[str], bool], _Handler]] = [
    (_prefix("title"), _set_title),
    (_prefix("x-axis"), _set_x_axis),
    (_prefix("y-axis"), _set_y_axis),
    (_prefix("quadrant-1"), _quadrant_handler(1)),
    (_prefix("quadrant-2"), _quadrant_handler(2)),
    (_prefix("quadrant-3"), _quadrant_handler(3)),
    (_prefix("quadrant-4"), _quadrant_handler(4)),
    (_looks_like_point, _add_point),
]


def parse(text: str) -> ChartModel:
    """Parse quadrantChart source into a :class:`ChartModel`.

    Parsing never fails. Comments, unknown lines and directives with unusable
    arguments are skipped; skipped lines are reported on this module's logger
    at DEBUG level only.
    """
    draft = _ChartDraft()
    for lineno, raw in enumerate(text.split("\n"), start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        for predicate, handler in _RULES:
            if predicate(line):
                if not handler(draft, line):
                    logger.debug("ignored malformed directive on line %d: %r", lineno, line)
                break
        else:
            logger.debug("ignored unrecognized line %d: %r", lineno, line)
    return draft.freeze()


__all__ = ["parse"]
