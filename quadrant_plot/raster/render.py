from __future__ import annotations

import numpy as np

from quadrant_plot.properties import RGBA
from quadrant_plot.raster.draw_lines import draw_segment
from quadrant_plot.raster.draw_markers import draw_disc, fill_polygon
from quadrant_plot.raster.draw_text import draw_text
from quadrant_plot.scales import round_half_up
from quadrant_plot.scene import (
    BeginFill,
    BeginStroke,
    Circle,
    Container,
    CurveTo,
    DisplayObject,
    EndFill,
    EndStroke,
    LineTo,
    MoveTo,
    Shape,
    StrokeStyle,
    Text,
)


CURVE_STEPS = 16


def rasterize(node: DisplayObject, canvas: np.ndarray, *, x_offset: float = 0.0, y_offset: float = 0.0) -> None:
    """Paint a display-list subtree onto an RGBA canvas, children in insertion order."""
    if not node.visible:
        return
    ox = x_offset + node.x
    oy = y_offset + node.y
    if isinstance(node, Container):
        for child in node.children:
            rasterize(child, canvas, x_offset=ox, y_offset=oy)
    elif isinstance(node, Shape):
        _ShapePainter(canvas, ox, oy).replay(node)
    elif isinstance(node, Text):
        draw_text(
            canvas,
            round_half_up(ox),
            round_half_up(oy),
            node.text,
            node.color,
            font_family=node.font.family,
            font_size_px=node.font.size_px,
            bold=node.font.bold,
        )


class _ShapePainter:
    def __init__(self, canvas: np.ndarray, ox: float, oy: float) -> None:
        self._canvas = canvas
        self._ox = ox
        self._oy = oy
        self._pen = (0.0, 0.0)
        self._thickness = 1
        self._stroke: RGBA | None = None
        self._fill: RGBA | None = None
        self._subpaths: list[list[tuple[float, float]]] = []

    def replay(self, shape: Shape) -> None:
        for cmd in shape.commands:
            if isinstance(cmd, MoveTo):
                self._move(cmd.x, cmd.y)
            elif isinstance(cmd, LineTo):
                self._line(cmd.x, cmd.y)
            elif isinstance(cmd, CurveTo):
                x0, y0 = self._pen
                for i in range(1, CURVE_STEPS + 1):
                    t = i / CURVE_STEPS
                    u = 1.0 - t
                    self._line(
                        u * u * x0 + 2 * u * t * cmd.cx + t * t * cmd.x,
                        u * u * y0 + 2 * u * t * cmd.cy + t * t * cmd.y,
                    )
            elif isinstance(cmd, StrokeStyle):
                self._thickness = max(1, round_half_up(cmd.thickness))
            elif isinstance(cmd, BeginStroke):
                self._stroke = cmd.color
            elif isinstance(cmd, EndStroke):
                self._stroke = None
            elif isinstance(cmd, BeginFill):
                self._fill = cmd.color
                self._subpaths = []
            elif isinstance(cmd, EndFill):
                self._flush_fill()
            elif isinstance(cmd, Circle):
                # dots take the fill color, or the stroke color when stroked without a fill
                color = self._fill or self._stroke
                if color is not None:
                    draw_disc(self._canvas, self._ox + cmd.x, self._oy + cmd.y, cmd.radius, color)
        self._flush_fill()

    def _move(self, x: float, y: float) -> None:
        self._pen = (x, y)
        if self._fill is not None:
            self._subpaths.append([(self._ox + x, self._oy + y)])

    def _line(self, x: float, y: float) -> None:
        if self._stroke is not None:
            x0, y0 = self._pen
            draw_segment(
                self._canvas,
                round_half_up(self._ox + x0),
                round_half_up(self._oy + y0),
                round_half_up(self._ox + x),
                round_half_up(self._oy + y),
                self._stroke,
                width=self._thickness,
            )
        if self._fill is not None:
            if not self._subpaths:
                self._subpaths.append([(self._ox + self._pen[0], self._oy + self._pen[1])])
            self._subpaths[-1].append((self._ox + x, self._oy + y))
        self._pen = (x, y)

    def _flush_fill(self) -> None:
        if self._fill is not None:
            for path in self._subpaths:
                fill_polygon(self._canvas, path, self._fill)
        self._fill = None
        self._subpaths = []
