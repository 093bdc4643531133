from __future__ import annotations

import unittest

from quadrant_plot.errors import QuadrantConfigError
from quadrant_plot.properties import (
    FontSpec,
    FunctionDrawProperties,
    GraphDrawProperties,
    LabelDrawProperties,
    parse_color,
    parse_font,
    resolve_color,
)
from quadrant_plot.quadrant import Quadrant


class DrawPropertiesTests(unittest.TestCase):
    def test_config_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(QuadrantConfigError, ValueError))

    def test_parse_color_forms(self) -> None:
        self.assertEqual(parse_color("#FF8000"), (255, 128, 0, 255))
        self.assertEqual(parse_color("#FF000080"), (255, 0, 0, 128))
        self.assertEqual(parse_color((1, 2, 3)), (1, 2, 3, 255))
        self.assertEqual(parse_color((1, 2, 3, 4)), (1, 2, 3, 4))

    def test_parse_color_rejects_bad_values(self) -> None:
        for bad in ("red", "#FFF", (1, 2), (0, 0, 256), (0.5, 0, 0)):
            with self.assertRaises(QuadrantConfigError, msg=repr(bad)):
                parse_color(bad)  # type: ignore[arg-type]

    def test_resolve_color_applies_alpha(self) -> None:
        self.assertEqual(resolve_color("#FF0000", 0.5), (255, 0, 0, 127))
        self.assertEqual(resolve_color("#FF0000", 3.0), (255, 0, 0, 255))

    def test_parse_font(self) -> None:
        self.assertEqual(parse_font("bold 11px Comic Mono"), FontSpec("Comic Mono", 11.0, True))
        self.assertEqual(parse_font("10px Arial"), FontSpec("Arial", 10.0, False))
        for bad in ("Arial", "bold px Arial", "0px Arial"):
            with self.assertRaises(QuadrantConfigError, msg=bad):
                parse_font(bad)
        with self.assertRaises(QuadrantConfigError):
            parse_font(11)  # type: ignore[arg-type]

    def test_graph_defaults(self) -> None:
        props = GraphDrawProperties()
        self.assertTrue(props.show_grid)
        self.assertEqual(props.grid_style, "solid")
        self.assertEqual(props.x_axis_thickness, 2.0)
        self.assertEqual(props.decimals, 0)

    def test_graph_from_mapping_accepts_camel_case_and_aliases(self) -> None:
        props = GraphDrawProperties.from_mapping(
            {"leftPx": 10, "gridThicknes": 2, "ticLableColor": "#FF0000", "grid_style": "dashed", "xAxisArrows": False}
        )
        self.assertEqual(props.left_px, 10)
        self.assertEqual(props.grid_thickness, 2)
        self.assertEqual(props.tic_label_color, "#FF0000")
        self.assertEqual(props.grid_style, "dashed")
        self.assertFalse(props.x_axis_arrows)

    def test_unknown_key_is_rejected(self) -> None:
        with self.assertRaises(QuadrantConfigError):
            GraphDrawProperties.from_mapping({"gridColour": "#000000"})
        with self.assertRaises(QuadrantConfigError):
            FunctionDrawProperties.from_mapping({"width": 3})

    def test_field_validation(self) -> None:
        with self.assertRaises(QuadrantConfigError):
            GraphDrawProperties(left_px=-1)
        with self.assertRaises(QuadrantConfigError):
            GraphDrawProperties(grid_color="grey")
        with self.assertRaises(QuadrantConfigError):
            GraphDrawProperties(grid_style="")
        with self.assertRaises(QuadrantConfigError):
            FunctionDrawProperties(thickness=float("nan"))
        with self.assertRaises(QuadrantConfigError):
            LabelDrawProperties(font="huge")

    def test_function_from_mapping(self) -> None:
        props = FunctionDrawProperties.from_mapping({"showDot": True, "showLine": False, "radius": 4, "color": "#112233"})
        self.assertTrue(props.show_dot)
        self.assertFalse(props.show_line)
        self.assertEqual(props.radius, 4)

    def test_quadrant_accepts_mapping_props(self) -> None:
        graph = Quadrant({"gridStyle": "dotted", "decimals": -2.4, "showGrid": False})
        self.assertEqual(graph.props.grid_style, "dotted")
        self.assertEqual(graph.decimals, 2)
        self.assertFalse(graph.grid_visible)
        self.assertFalse(graph.grid_shape.visible)

    def test_quadrant_rejects_invalid_mapping(self) -> None:
        with self.assertRaises(QuadrantConfigError):
            Quadrant({"gridColor": 42})


if __name__ == "__main__":
    unittest.main()
