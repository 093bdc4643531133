from __future__ import annotations

import math
import unittest

from quadrant_plot.decorators import (
    DASHED,
    DOTTED,
    SOLID,
    DashedLineDecorator,
    DottedLineDecorator,
    LineDecoratorFactory,
    SolidLineDecorator,
)
from quadrant_plot.scene import Circle, CurveTo, LineTo, MoveTo, Shape


def _drawn_and_skipped(sink: Shape) -> tuple[float, float]:
    drawn = 0.0
    skipped = 0.0
    pen: tuple[float, float] | None = None
    for cmd in sink.commands:
        if isinstance(cmd, MoveTo):
            if pen is not None:
                skipped += math.dist(pen, (cmd.x, cmd.y))
            pen = (cmd.x, cmd.y)
        elif isinstance(cmd, LineTo):
            assert pen is not None
            drawn += math.dist(pen, (cmd.x, cmd.y))
            pen = (cmd.x, cmd.y)
    return drawn, skipped


class SolidDecoratorTests(unittest.TestCase):
    def test_passes_commands_through(self) -> None:
        sink = Shape()
        line = SolidLineDecorator()
        line.move_to(sink, 1, 2)
        line.line_to(sink, 3, 4)
        line.curve_to(sink, 5, 6, 7, 8)
        self.assertEqual(sink.commands, [MoveTo(1, 2), LineTo(3, 4), CurveTo(5, 6, 7, 8)])
        line.clear(sink)
        self.assertTrue(sink.is_empty)


class DashedDecoratorTests(unittest.TestCase):
    def test_defaults(self) -> None:
        line = DashedLineDecorator()
        self.assertEqual((line.up_length, line.dn_length, line.dash_length), (3.0, 5.0, 8.0))
        self.assertTrue(line.drawing_line)

    def test_dash_pattern_along_one_segment(self) -> None:
        sink = Shape()
        line = DashedLineDecorator()
        line.move_to(sink, 0, 0)
        line.line_to(sink, 20, 0)
        self.assertEqual(
            sink.commands,
            [MoveTo(0, 0), LineTo(5, 0), MoveTo(8, 0), LineTo(13, 0), MoveTo(16, 0), LineTo(20, 0)],
        )
        self.assertEqual(line.overflow, 1.0)
        self.assertTrue(line.drawing_line)

    def test_pattern_continues_into_next_segment(self) -> None:
        sink = Shape()
        line = DashedLineDecorator()
        line.move_to(sink, 0, 0)
        line.line_to(sink, 20, 0)
        del sink.commands[:]
        line.line_to(sink, 30, 0)
        self.assertEqual(sink.commands, [LineTo(21, 0), MoveTo(24, 0), LineTo(29, 0), MoveTo(30, 0)])
        self.assertEqual(line.overflow, 2.0)
        self.assertFalse(line.drawing_line)

    def test_drawn_plus_skipped_equals_segment_length(self) -> None:
        for length in (1.0, 4.5, 8.0, 13.0, 37.25, 100.0):
            sink = Shape()
            line = DashedLineDecorator()
            line.move_to(sink, 0, 0)
            line.line_to(sink, length * 0.6, length * 0.8)
            drawn, skipped = _drawn_and_skipped(sink)
            self.assertAlmostEqual(drawn + skipped, length, places=6, msg=f"length={length}")

    def test_phase_after_segment_matches_remainder(self) -> None:
        for length in (3.0, 5.0, 6.5, 16.0, 21.0, 26.0):
            line = DashedLineDecorator()
            sink = Shape()
            line.move_to(sink, 0, 0)
            line.line_to(sink, length, 0)
            remainder = length % line.dash_length
            # phase flips once the pen-down part of the last cycle is complete
            expected_drawing = remainder < line.dn_length
            self.assertEqual(line.drawing_line, expected_drawing, msg=f"length={length}")

    def test_conservation_over_polyline(self) -> None:
        sink = Shape()
        line = DashedLineDecorator()
        points = [(0, 0), (7, 0), (7, 9), (20, 9), (20, 30)]
        line.move_to(sink, *points[0])
        for point in points[1:]:
            line.line_to(sink, *point)
        drawn, skipped = _drawn_and_skipped(sink)
        self.assertAlmostEqual(drawn + skipped, 7 + 9 + 13 + 21, places=6)

    def test_zero_length_segment_is_noop(self) -> None:
        sink = Shape()
        line = DashedLineDecorator()
        line.move_to(sink, 4, 4)
        line.line_to(sink, 4, 4)
        self.assertEqual(sink.commands, [MoveTo(4, 4)])
        self.assertEqual(line.overflow, 0.0)

    def test_move_to_keeps_phase(self) -> None:
        sink = Shape()
        line = DashedLineDecorator()
        line.move_to(sink, 0, 0)
        line.line_to(sink, 6, 0)
        line.move_to(sink, 0, 10)
        self.assertFalse(line.drawing_line)
        self.assertEqual(line.overflow, 2.0)

    def test_clear_and_reset_restart_pattern(self) -> None:
        sink = Shape()
        line = DashedLineDecorator()
        line.move_to(sink, 0, 0)
        line.line_to(sink, 6, 0)
        line.clear(sink)
        self.assertTrue(sink.is_empty)
        self.assertEqual(line.overflow, 0.0)
        self.assertTrue(line.drawing_line)

    def test_set_params_rounds_and_validates(self) -> None:
        line = DashedLineDecorator()
        line.set_params({"upLength": 2.4, "dn_length": 6.6})
        self.assertEqual((line.up_length, line.dn_length, line.dash_length), (2.0, 7.0, 9.0))
        line.set_params({"upLength": -1, "dnLength": math.nan})
        self.assertEqual((line.up_length, line.dn_length), (2.0, 7.0))

    def test_curves_pass_through(self) -> None:
        sink = Shape()
        DashedLineDecorator().curve_to(sink, 1, 2, 3, 4)
        self.assertEqual(sink.commands, [CurveTo(1, 2, 3, 4)])


class DottedDecoratorTests(unittest.TestCase):
    def test_defaults(self) -> None:
        line = DottedLineDecorator()
        self.assertEqual((line.radius, line.spacing, line.length), (3.0, 4.0, 10))

    def test_move_to_always_draws_a_dot(self) -> None:
        sink = Shape()
        line = DottedLineDecorator()
        line.move_to(sink, 5, 6)
        self.assertEqual(sink.commands, [Circle(5, 6, 3.0)])
        self.assertEqual(line.last_dot, (5, 6))

    def test_dots_are_evenly_spaced_across_segments(self) -> None:
        sink = Shape()
        line = DottedLineDecorator()
        line.move_to(sink, 0, 0)
        line.line_to(sink, 25, 0)
        line.line_to(sink, 30, 0)
        self.assertEqual(sink.commands, [Circle(0, 0, 3.0), Circle(10, 0, 3.0), Circle(20, 0, 3.0), Circle(30, 0, 3.0)])

    def test_short_segments_accumulate(self) -> None:
        sink = Shape()
        line = DottedLineDecorator()
        line.move_to(sink, 0, 0)
        for x in (4, 8, 12):
            line.line_to(sink, x, 0)
        self.assertEqual(sink.commands, [Circle(0, 0, 3.0), Circle(10, 0, 3.0)])

    def test_diagonal_spacing(self) -> None:
        sink = Shape()
        line = DottedLineDecorator()
        line.move_to(sink, 0, 0)
        line.line_to(sink, 30, 40)
        centers = [(cmd.x, cmd.y) for cmd in sink.commands if isinstance(cmd, Circle)]
        self.assertEqual(len(centers), 6)
        for a, b in zip(centers, centers[1:]):
            self.assertAlmostEqual(math.dist(a, b), 10.0)

    def test_zero_length_segment_is_noop(self) -> None:
        sink = Shape()
        line = DottedLineDecorator()
        line.move_to(sink, 1, 1)
        line.line_to(sink, 1, 1)
        self.assertEqual(len(sink.commands), 1)

    def test_set_params_floors_values(self) -> None:
        line = DottedLineDecorator()
        line.set_params({"radius": 2.7, "spacing": 5.9})
        self.assertEqual((line.radius, line.spacing, line.length), (2.0, 5.0, 9))
        line.set_params({"radius": 0})
        self.assertEqual(line.radius, 2.0)


class LineDecoratorFactoryTests(unittest.TestCase):
    def test_create_returns_one_instance_per_style(self) -> None:
        self.assertIs(LineDecoratorFactory.create(DASHED), LineDecoratorFactory.create(DASHED))
        self.assertIsInstance(LineDecoratorFactory.create(DOTTED), DottedLineDecorator)
        self.assertIsInstance(LineDecoratorFactory.create(SOLID), SolidLineDecorator)

    def test_unknown_style_falls_back_to_solid(self) -> None:
        self.assertIs(LineDecoratorFactory.create("wavy"), LineDecoratorFactory.create(SOLID))
        self.assertIs(LineDecoratorFactory.create(None), LineDecoratorFactory.create(SOLID))
        self.assertEqual(LineDecoratorFactory.resolve("wavy"), SOLID)

    def test_overlapping_sessions_get_distinct_instances(self) -> None:
        with LineDecoratorFactory.stroke_session(DASHED) as outer:
            with LineDecoratorFactory.stroke_session(DASHED) as inner:
                self.assertIsNot(outer, inner)

    def test_session_starts_with_fresh_pattern_state(self) -> None:
        sink = Shape()
        with LineDecoratorFactory.stroke_session(DASHED) as line:
            line.move_to(sink, 0, 0)
            line.line_to(sink, 20, 0)
        with LineDecoratorFactory.stroke_session(DASHED) as line:
            assert isinstance(line, DashedLineDecorator)
            self.assertEqual(line.overflow, 0.0)
            self.assertTrue(line.drawing_line)

    def test_session_params_are_not_shared(self) -> None:
        with LineDecoratorFactory.stroke_session(DOTTED, {"radius": 1, "spacing": 2}) as line:
            assert isinstance(line, DottedLineDecorator)
            self.assertEqual(line.length, 4)
        with LineDecoratorFactory.stroke_session(DOTTED) as line:
            assert isinstance(line, DottedLineDecorator)
            self.assertEqual(line.length, 10)


if __name__ == "__main__":
    unittest.main()
