from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Mapping

from quadrant_plot.decorators.base import read_positive

if TYPE_CHECKING:
    from quadrant_plot.scene import DrawingSink


_EPS = 1e-9


class DottedLineDecorator:
    """Dotted stroke: filled dots of ``radius`` whose centers sit ``2*radius + spacing`` apart."""

    style = "dotted"

    def __init__(self, radius: float = 3.0, spacing: float = 4.0) -> None:
        self._radius = float(radius)
        self._spacing = float(spacing)
        self._length = 2 * math.floor(self._radius) + math.floor(self._spacing)
        self._dot_x = 0.0
        self._dot_y = 0.0
        self._ref_x = 0.0
        self._ref_y = 0.0
        # stroke distance covered since the most recent dot
        self._unused = 0.0

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def spacing(self) -> float:
        return self._spacing

    @property
    def length(self) -> int:
        return self._length

    @property
    def last_dot(self) -> tuple[float, float]:
        return (self._dot_x, self._dot_y)

    def set_params(self, params: Mapping[str, Any]) -> None:
        radius = read_positive(params, "radius")
        spacing = read_positive(params, "spacing")
        if radius is not None:
            self._radius = radius
        if spacing is not None:
            self._spacing = spacing

        self._radius = float(max(1, math.floor(self._radius)))
        self._spacing = float(max(1, math.floor(self._spacing)))
        self._length = int(2 * self._radius + self._spacing)

    def move_to(self, sink: "DrawingSink", x: float, y: float) -> None:
        # every stroke starts with a dot
        self._draw_dot(sink, x, y)
        self._ref_x = x
        self._ref_y = y
        self._unused = 0.0

    def line_to(self, sink: "DrawingSink", x: float, y: float) -> None:
        dx = x - self._ref_x
        dy = y - self._ref_y
        seg_length = math.hypot(dx, dy)
        if seg_length == 0:
            return

        if self._unused + seg_length < self._length - _EPS:
            self._unused += seg_length
        else:
            ux = dx / seg_length
            uy = dy / seg_length
            offset = self._length - self._unused
            last_offset = 0.0
            while offset <= seg_length + _EPS:
                self._draw_dot(sink, self._ref_x + ux * offset, self._ref_y + uy * offset)
                last_offset = offset
                offset += self._length
            self._unused = max(0.0, seg_length - last_offset)

        self._ref_x = x
        self._ref_y = y

    def curve_to(self, sink: "DrawingSink", cx: float, cy: float, x1: float, y1: float) -> None:
        # quadratic segments are stroked solid
        sink.curve_to(cx, cy, x1, y1)

    def clear(self, sink: "DrawingSink") -> None:
        sink.clear()
        self.reset()

    def reset(self) -> None:
        self._dot_x = 0.0
        self._dot_y = 0.0
        self._ref_x = 0.0
        self._ref_y = 0.0
        self._unused = 0.0

    def _draw_dot(self, sink: "DrawingSink", x: float, y: float) -> None:
        self._dot_x = x
        self._dot_y = y
        sink.draw_circle(x, y, self._radius)
