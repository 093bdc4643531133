from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Mapping

from quadrant_plot.decorators.base import read_positive
from quadrant_plot.scales import round_half_up

if TYPE_CHECKING:
    from quadrant_plot.scene import DrawingSink


_EPS = 1e-3


class DashedLineDecorator:
    """Dashed stroke built from a pen-down length followed by a pen-up length.

    Pattern state (the unfinished part of the current dash or gap and which of the two is
    active) carries over from one ``line_to`` to the next, and also across ``move_to``, so
    a polyline reads as one continuous dash pattern. Only ``clear``/``reset`` restart it.
    """

    style = "dashed"

    def __init__(self, up_length: float = 3.0, dn_length: float = 5.0) -> None:
        self._up_length = float(up_length)
        self._dn_length = float(dn_length)
        self._dash_length = self._up_length + self._dn_length
        self._pen_x = 0.0
        self._pen_y = 0.0
        self._overflow = 0.0
        self._drawing_line = True

    @property
    def up_length(self) -> float:
        return self._up_length

    @property
    def dn_length(self) -> float:
        return self._dn_length

    @property
    def dash_length(self) -> float:
        return self._dash_length

    @property
    def overflow(self) -> float:
        return self._overflow

    @property
    def drawing_line(self) -> bool:
        return self._drawing_line

    def set_params(self, params: Mapping[str, Any]) -> None:
        dn = read_positive(params, "dn_length", "dnLength")
        up = read_positive(params, "up_length", "upLength")
        if dn is not None:
            self._dn_length = dn
        if up is not None:
            self._up_length = up

        self._up_length = float(max(1, round_half_up(self._up_length)))
        self._dn_length = float(max(1, round_half_up(self._dn_length)))
        self._dash_length = self._up_length + self._dn_length

    def move_to(self, sink: "DrawingSink", x: float, y: float) -> None:
        sink.move_to(x, y)
        self._pen_x = x
        self._pen_y = y

    def line_to(self, sink: "DrawingSink", x: float, y: float) -> None:
        dx = x - self._pen_x
        dy = y - self._pen_y
        seg_length = math.hypot(dx, dy)
        if seg_length < _EPS:
            return
        ca = dx / seg_length
        sa = dy / seg_length

        # finish the dash or gap left over from the previous segment
        if self._overflow > 0:
            if self._overflow > seg_length:
                if self._drawing_line:
                    self._exec_line_to(sink, x, y)
                else:
                    self.move_to(sink, x, y)
                self._overflow -= seg_length
                return

            end_x = self._pen_x + ca * self._overflow
            end_y = self._pen_y + sa * self._overflow
            if self._drawing_line:
                self._exec_line_to(sink, end_x, end_y)
            else:
                self.move_to(sink, end_x, end_y)

            seg_length -= self._overflow
            self._overflow = 0.0
            self._drawing_line = not self._drawing_line
            if seg_length < _EPS:
                return

        dashes = math.floor(seg_length / self._dash_length)
        if dashes > 0:
            dn_x = ca * self._dn_length
            dn_y = sa * self._dn_length
            up_x = ca * self._up_length
            up_y = sa * self._up_length
            for _ in range(dashes):
                if self._drawing_line:
                    self._exec_line_to(sink, self._pen_x + dn_x, self._pen_y + dn_y)
                    self.move_to(sink, self._pen_x + up_x, self._pen_y + up_y)
                else:
                    self.move_to(sink, self._pen_x + up_x, self._pen_y + up_y)
                    self._exec_line_to(sink, self._pen_x + dn_x, self._pen_y + dn_y)
            seg_length -= self._dash_length * dashes

        # partial cycle at the end of the segment
        if self._drawing_line:
            if seg_length > self._dn_length:
                self._exec_line_to(sink, self._pen_x + ca * self._dn_length, self._pen_y + sa * self._dn_length)
                self.move_to(sink, x, y)
                self._overflow = max(0.0, self._up_length - (seg_length - self._dn_length))
                self._drawing_line = False
            else:
                self._exec_line_to(sink, x, y)
                if abs(seg_length - self._dn_length) < _EPS:
                    self._overflow = 0.0
                    self._drawing_line = False
                else:
                    self._overflow = max(0.0, self._dn_length - seg_length)
        else:
            if seg_length > self._up_length:
                self.move_to(sink, self._pen_x + ca * self._up_length, self._pen_y + sa * self._up_length)
                self._overflow = max(0.0, self._dn_length - (seg_length - self._up_length))
                self._drawing_line = True
                self._exec_line_to(sink, x, y)
            else:
                self.move_to(sink, x, y)
                if abs(seg_length - self._up_length) < _EPS:
                    self._overflow = 0.0
                    self._drawing_line = True
                else:
                    self._overflow = max(0.0, self._up_length - seg_length)

    def curve_to(self, sink: "DrawingSink", cx: float, cy: float, x1: float, y1: float) -> None:
        # quadratic segments are stroked solid
        sink.curve_to(cx, cy, x1, y1)

    def clear(self, sink: "DrawingSink") -> None:
        sink.clear()
        self.reset()

    def reset(self) -> None:
        self._pen_x = 0.0
        self._pen_y = 0.0
        self._overflow = 0.0
        self._drawing_line = True

    def _exec_line_to(self, sink: "DrawingSink", x: float, y: float) -> None:
        if x == self._pen_x and y == self._pen_y:
            return
        self._pen_x = x
        self._pen_y = y
        sink.line_to(x, y)
