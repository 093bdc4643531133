from __future__ import annotations

import unittest

from quadrant_plot.scales import format_tic_label, format_tick, round_half_up


class ScalesTests(unittest.TestCase):
    def test_round_half_up_matches_pixel_rounding(self) -> None:
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(-2.5), -2)
        self.assertEqual(round_half_up(0.49), 0)
        self.assertEqual(round_half_up(-0.51), -1)

    def test_format_tick_trims_to_step_precision(self) -> None:
        self.assertEqual(format_tick(0.30000000000000004, step=0.1), "0.3")
        self.assertEqual(format_tick(30.0, step=10.0), "30")
        self.assertEqual(format_tick(1.25, step=0.25), "1.25")

    def test_format_tick_snaps_near_zero(self) -> None:
        self.assertEqual(format_tick(-1e-17, step=1.0), "0")
        self.assertEqual(format_tick(-0.0, step=1.0), "0")

    def test_format_tic_label(self) -> None:
        self.assertEqual(format_tic_label(3.0, 2), "3")
        self.assertEqual(format_tic_label(-4.0, 0), "-4")
        self.assertEqual(format_tic_label(0.3333, 2), "0.33")
        self.assertEqual(format_tic_label(7.5, 1), "7.5")
        self.assertEqual(format_tic_label(0.25, -1), "0")


if __name__ == "__main__":
    unittest.main()
