from __future__ import annotations

import sys
import unittest
from pathlib import Path

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from quadrant2drawio import ChartModel, LayoutConfig, LayoutConfigError, Point, Quadrants, XAxis, YAxis
from quadrant2drawio.layout import AMBER, BLUE, GRAY, GREEN, layout_chart, point_color, to_canvas

# title, border, 4 watermarks, 2 dividers, 4 axis labels
FIXED_SHAPES = 12


class CoordinateTests(unittest.TestCase):
    def test_corner_and_center_mapping(self) -> None:
        self.assertEqual(to_canvas(0, 0), (100, 700))
        self.assertEqual(to_canvas(1, 1), (700, 100))
        self.assertEqual(to_canvas(0.5, 0.5), (400, 400))

    def test_mapping_uses_config(self) -> None:
        config = LayoutConfig(canvas_size=200, padding=10)
        self.assertEqual(to_canvas(0, 0, config), (10, 210))
        self.assertEqual(to_canvas(1, 1, config), (210, 10))

    def test_color_buckets(self) -> None:
        self.assertEqual(point_color(0.9, 0.9), GREEN)
        self.assertEqual(point_color(0.1, 0.9), BLUE)
        self.assertEqual(point_color(0.1, 0.1), GRAY)
        self.assertEqual(point_color(0.9, 0.1), AMBER)
        self.assertEqual(point_color(0.5, 0.5), GREEN)
        self.assertEqual(point_color(0.5, 0.49), AMBER)


class LayoutTests(unittest.TestCase):
    def setUp(self) -> None:
        self.model = ChartModel(
            title="T",
            x_axis=XAxis("L", "R"),
            y_axis=YAxis("B", "Top"),
            quadrants=Quadrants("q1", "q2", "q3", "q4"),
            points=(Point("Alpha", 0.8, 0.9), Point("Zed", 0.1, 0.2)),
        )

    def test_emission_order(self) -> None:
        shapes = layout_chart(self.model)
        self.assertEqual(len(shapes), FIXED_SHAPES + 2 * len(self.model.points))
        values = [shape.value for shape in shapes]
        self.assertEqual(values[0], "T")
        self.assertEqual(values[1], "")
        self.assertEqual(values[2:6], ["q2", "q1", "q3", "q4"])
        self.assertEqual(values[8:12], ["L", "R", "Top", "B"])
        self.assertEqual(values[12:], ["", "Alpha", "", "Zed"])
        self.assertEqual([shape.is_edge for shape in shapes].count(True), 2)
        self.assertTrue(shapes[6].is_edge and shapes[7].is_edge)

    def test_frame_geometry(self) -> None:
        shapes = layout_chart(self.model)
        title, border = shapes[0], shapes[1]
        self.assertEqual((title.x, title.y, title.width, title.height), (100, 10, 600, 40))
        self.assertEqual((border.x, border.y, border.width, border.height), (100, 100, 600, 600))
        cells = [(s.x, s.y, s.width, s.height) for s in shapes[2:6]]
        self.assertEqual(
            cells,
            [(100, 100, 300, 300), (400, 100, 300, 300), (100, 400, 300, 300), (400, 400, 300, 300)],
        )

    def test_dividers_are_dashed_and_span_canvas(self) -> None:
        vertical, horizontal = layout_chart(self.model)[6:8]
        self.assertEqual((vertical.source, vertical.target), ((400, 100), (400, 700)))
        self.assertEqual((horizontal.source, horizontal.target), ((100, 400), (700, 400)))
        self.assertIn("dashed=1", vertical.style)

    def test_axis_labels(self) -> None:
        left, right, top, bottom = layout_chart(self.model)[8:12]
        self.assertEqual((left.x, left.y, left.width, left.height), (100, 410, 150, 20))
        self.assertTrue(left.style.endswith("align=left;"))
        self.assertEqual((right.x, right.y), (550, 410))
        self.assertTrue(right.style.endswith("align=right;"))
        self.assertEqual((top.x, top.y), (325, 70))
        self.assertEqual((bottom.x, bottom.y), (325, 710))

    def test_point_marker_and_label(self) -> None:
        marker, label = layout_chart(self.model)[12:14]
        self.assertAlmostEqual(marker.x, 574)
        self.assertAlmostEqual(marker.y, 154)
        self.assertEqual((marker.width, marker.height), (12, 12))
        self.assertIn(f"fillColor={GREEN};", marker.style)
        self.assertTrue(marker.style.startswith("ellipse;"))
        self.assertAlmostEqual(label.x, 590)
        self.assertAlmostEqual(label.y, 150)
        self.assertEqual(label.value, "Alpha")
        gray_marker = layout_chart(self.model)[14]
        self.assertIn(f"fillColor={GRAY};", gray_marker.style)

    def test_invalid_config_is_rejected(self) -> None:
        with self.assertRaises(LayoutConfigError):
            layout_chart(self.model, LayoutConfig(canvas_size=0))
        with self.assertRaises(LayoutConfigError):
            layout_chart(self.model, LayoutConfig(padding=-1))
        for bad in (
            LayoutConfig(canvas_size=float("nan")),
            LayoutConfig(canvas_size=float("inf")),
            LayoutConfig(padding=float("nan")),
        ):
            with self.assertRaises(LayoutConfigError):
                layout_chart(self.model, bad)


if __name__ == "__main__":
    unittest.main()
