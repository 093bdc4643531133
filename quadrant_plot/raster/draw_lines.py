from __future__ import annotations

import numpy as np

from quadrant_plot.properties import RGBA
from quadrant_plot.raster.canvas import draw_pixel
from quadrant_plot.scales import round_half_up


def draw_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    half = max(0, width // 2)
    h, w = dst.shape[:2]
    # only the part that can reach the canvas is walked; the brush may overhang by ``half``
    clipped = clip_segment(x0, y0, x1, y1, -half, -half, w - 1 + half, h - 1 + half)
    if clipped is None:
        return
    # each covered pixel is blended once so translucent strokes do not darken where brushes overlap
    for x, y in sorted(segment_pixels(*clipped, width)):
        draw_pixel(dst, x, y, color)


def clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    x_min: float,
    y_min: float,
    x_max: float,
    y_max: float,
) -> tuple[int, int, int, int] | None:
    """Liang-Barsky clip of a segment to an inclusive rectangle, rounded to whole pixels.

    Returns ``None`` when the segment lies entirely outside.
    """
    dx = float(x1) - float(x0)
    dy = float(y1) - float(y0)
    t0, t1 = 0.0, 1.0
    for p, q in (
        (-dx, float(x0) - x_min),
        (dx, x_max - float(x0)),
        (-dy, float(y0) - y_min),
        (dy, y_max - float(y0)),
    ):
        if p == 0:
            if q < 0:
                return None
            continue
        r = q / p
        if p < 0:
            if r > t1:
                return None
            t0 = max(t0, r)
        else:
            if r < t0:
                return None
            t1 = min(t1, r)

    if t0 == 0.0 and t1 == 1.0:
        return int(x0), int(y0), int(x1), int(y1)
    return (
        round_half_up(x0 + t0 * dx),
        round_half_up(y0 + t0 * dy),
        round_half_up(x0 + t1 * dx),
        round_half_up(y0 + t1 * dy),
    )


def segment_pixels(x0: int, y0: int, x1: int, y1: int, width: int = 1) -> set[tuple[int, int]]:
    """Pixels of a Bresenham segment stamped with a square brush ``width`` pixels across."""
    half = max(0, width // 2)
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    covered: set[tuple[int, int]] = set()
    while True:
        for yy in range(y0 - half, y0 + half + 1):
            for xx in range(x0 - half, x0 + half + 1):
                covered.add((xx, yy))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    return covered
