from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from quadrant_plot.properties import RGBA
from quadrant_plot.raster.canvas import draw_span


def draw_disc(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    r = max(0.5, float(radius))
    for y in range(int(math.floor(cy - r)), int(math.ceil(cy + r)) + 1):
        dy = y - cy
        if abs(dy) > r:
            continue
        half = math.sqrt(r * r - dy * dy)
        draw_span(dst, int(math.ceil(cx - half)), int(math.floor(cx + half)), y, color)


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA) -> None:
    """Even-odd scanline fill, sampling at pixel centers."""
    pts = [(float(x), float(y)) for x, y in points]
    if len(pts) < 3:
        return
    ys = [p[1] for p in pts]
    y_start = max(0, int(math.floor(min(ys))))
    y_stop = min(dst.shape[0] - 1, int(math.ceil(max(ys))))
    edges = list(zip(pts, pts[1:] + pts[:1]))

    for y in range(y_start, y_stop + 1):
        sample = y + 0.5
        crossings: list[float] = []
        for (xa, ya), (xb, yb) in edges:
            if (ya <= sample < yb) or (yb <= sample < ya):
                crossings.append(xa + (sample - ya) * (xb - xa) / (yb - ya))
        crossings.sort()
        for left, right in zip(crossings[::2], crossings[1::2]):
            draw_span(dst, int(math.ceil(left - 0.5)), int(math.floor(right - 0.5)), y, color)
