from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Literal

from quadrant_plot.axis import IN, MAJOR, MINOR, Axis, ZoomDirection, zoom_direction
from quadrant_plot.scales import round_half_up

if TYPE_CHECKING:
    from quadrant_plot.decorators.base import LineDecorator
    from quadrant_plot.scene import DrawingSink


LOGGER = logging.getLogger(__name__)

Orientation = Literal["H", "V"]

HORIZONTAL: Orientation = "H"
VERTICAL: Orientation = "V"


class GraphAxis:
    """A drawable graph axis: an :class:`Axis` placed inside a pixel box.

    The box bounds are kept in data units (``left``/``right`` across, ``top``/``bottom`` up).
    Drawing follows the y-down canvas convention, so a vertical axis measures tick offsets
    up from the bottom edge of the box.
    """

    HORIZONTAL: Orientation = HORIZONTAL
    VERTICAL: Orientation = VERTICAL
    MAJOR = MAJOR
    MINOR = MINOR

    def __init__(self, orientation: str = HORIZONTAL) -> None:
        self._orientation: Orientation = HORIZONTAL
        self._axis = Axis()
        self._left = 0.0
        self._top = 0.0
        self._right = 0.0
        self._bottom = 0.0
        self._length = 10
        self._height = 10
        self.orientation = orientation

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @orientation.setter
    def orientation(self, value: str) -> None:
        if value == HORIZONTAL or value == VERTICAL:
            self._orientation = value  # type: ignore[assignment]
        else:
            LOGGER.debug("ignoring unknown axis orientation %r", value)

    @property
    def is_horizontal(self) -> bool:
        return self._orientation == HORIZONTAL

    @property
    def axis(self) -> Axis:
        return self._axis

    @property
    def length(self) -> int:
        return self._length

    @property
    def height(self) -> int:
        return self._height

    @property
    def min(self) -> float:
        return self._axis.min

    @property
    def max(self) -> float:
        return self._axis.max

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        return (self._left, self._top, self._right, self._bottom)

    @property
    def major_inc(self) -> float:
        return self._axis.major_inc

    @major_inc.setter
    def major_inc(self, inc: float) -> None:
        if _positive(inc):
            self._axis.major_inc = inc

    @property
    def minor_inc(self) -> float:
        return self._axis.minor_inc

    @minor_inc.setter
    def minor_inc(self, inc: float) -> None:
        if _positive(inc):
            self._axis.minor_inc = inc

    def set_bounds(self, left: float, top: float, right: float, bottom: float, length: float, height: float) -> None:
        """Assign the box in data units and pixels.

        Each bound pair is accepted on its own: ``left``/``right`` only when ``right > left``
        and ``top``/``bottom`` only when ``top > bottom``. Non-positive pixel sizes are ignored.
        """
        if right > left:
            self._left = float(left)
            self._right = float(right)
        else:
            LOGGER.debug("ignoring horizontal bounds left=%r right=%r", left, right)

        if top > bottom:
            self._top = float(top)
            self._bottom = float(bottom)
        else:
            LOGGER.debug("ignoring vertical bounds top=%r bottom=%r", top, bottom)

        if _positive(length):
            self._length = round_half_up(float(length))
        if _positive(height):
            self._height = round_half_up(float(height))
        self._sync_axis()

    def is_visible(self) -> bool:
        """True when the zero line of this axis falls inside the box."""
        if self.is_horizontal:
            return not (self._top < 0 or self._bottom > 0)
        return not (self._left > 0 or self._right < 0)

    @property
    def axis_offset(self) -> float:
        """Pixel distance from the top (horizontal) or left (vertical) box edge to the zero line.

        May be negative or exceed the box when the axis is out of view.
        """
        if self.is_horizontal:
            span = self._top - self._bottom
            return self._height / span * abs(self._top) if span > 0 else 0.0
        span = self._right - self._left
        return self._length / span * abs(self._left) if span > 0 else 0.0

    def axis_position(self, override: bool = False) -> float:
        # override pins the x-axis to the box bottom and the y-axis to the box left edge
        if override:
            return float(self._height) if self.is_horizontal else 0.0
        return self.axis_offset

    def zoom(self, direction: str, factor: float) -> None:
        """Zoom about the current midpoint; the orthogonal box bounds scale with the axis."""
        zoom_dir = zoom_direction(direction)
        if zoom_dir is None or not _finite(factor):
            return
        factor = round_half_up(abs(float(factor)))
        if factor == 0:
            return

        self._axis.zoom(zoom_dir, factor)

        if self.is_horizontal:
            self._left = self._axis.min
            self._right = self._axis.max
            self._top, self._bottom = _scale_about_midpoint(self._top, self._bottom, zoom_dir, factor)
        else:
            self._bottom = self._axis.min
            self._top = self._axis.max
            self._right, self._left = _scale_about_midpoint(self._right, self._left, zoom_dir, factor)

    def shift(self, dx: float, dy: float) -> None:
        """Pan by a pixel amount; each orientation shifts its own axis and the orthogonal bounds."""
        self._axis.shift(dx if self.is_horizontal else dy)
        if self._axis.px_per_unit == 0 or self._length == 0 or self._height == 0:
            return

        if self.is_horizontal:
            self._left = self._axis.min
            self._right = self._axis.max
            if _finite(dy):
                units = (self._bottom - self._top) / self._height
                self._top -= dy * units
                self._bottom -= dy * units
        else:
            self._bottom = self._axis.min
            self._top = self._axis.max
            if _finite(dx):
                units = (self._right - self._left) / self._length
                self._left -= dx * units
                self._right -= dx * units

    def draw_axis(self, sink: "DrawingSink", decorator: "LineDecorator", override: bool = False) -> None:
        if not override and not self.is_visible():
            return
        pos = self.axis_position(override)
        if self.is_horizontal:
            decorator.move_to(sink, 0, pos)
            decorator.line_to(sink, self._length, pos)
        else:
            decorator.move_to(sink, pos, 0)
            decorator.line_to(sink, pos, self._height)

    def draw_arrows(
        self,
        left_sink: "DrawingSink | None",
        right_sink: "DrawingSink | None",
        arrow_width: float = 8,
        arrow_height: float = 5,
        override: bool = False,
    ) -> None:
        """Emit arrowhead triangles as closed paths for the caller to fill.

        ``left_sink`` receives the left (horizontal) or bottom (vertical) arrow, ``right_sink``
        the right or top one. Pass ``None`` to skip either.
        """
        if not override and not self.is_visible():
            return
        pos = self.axis_position(override)
        half_w = 0.5 * arrow_width
        half_h = 0.5 * arrow_height

        if self.is_horizontal:
            if left_sink is not None:
                _triangle(left_sink, (0, pos), (arrow_width, pos - half_h), (arrow_width, pos + half_h))
            if right_sink is not None:
                tip = self._length
                _triangle(right_sink, (tip, pos), (tip - arrow_width, pos - half_h), (tip - arrow_width, pos + half_h))
        else:
            if left_sink is not None:
                base = self._height - arrow_height
                _triangle(left_sink, (pos, self._height), (pos - half_w, base), (pos + half_w, base))
            if right_sink is not None:
                _triangle(right_sink, (pos, 0), (pos - half_w, arrow_height), (pos + half_w, arrow_height))

    def draw_major_tic_marks(self, sink: "DrawingSink", tic_length: float, override: bool = False) -> None:
        self._draw_tic_marks(sink, MAJOR, tic_length, override)

    def draw_minor_tic_marks(self, sink: "DrawingSink", tic_length: float, override: bool = False) -> None:
        self._draw_tic_marks(sink, MINOR, tic_length, override)

    def draw_grid(self, sink: "DrawingSink", decorator: "LineDecorator") -> None:
        """Full-box lines at every major tick, drawn whether or not the axis is in view."""
        for offset in self._axis.get_tic_coordinates(MAJOR):
            if self.is_horizontal:
                decorator.move_to(sink, offset, 0)
                decorator.line_to(sink, offset, self._height)
            else:
                y = self._height - offset
                decorator.move_to(sink, 0, y)
                decorator.line_to(sink, self._length, y)

    def get_tic_mark_labels(self, kind: str) -> list[str]:
        return self._axis.get_tic_marks(kind)

    def get_tic_coordinates(self, kind: str) -> list[int]:
        return self._axis.get_tic_coordinates(kind)

    def _draw_tic_marks(self, sink: "DrawingSink", kind: str, tic_length: float, override: bool) -> None:
        if not override and not self.is_visible():
            return
        offsets = self._axis.get_tic_coordinates(kind)
        if override:
            # the far-end tick sits under the arrowhead
            offsets = offsets[:-1]
        pos = self.axis_position(override)
        half = 0.5 * tic_length

        for offset in offsets:
            if self.is_horizontal:
                sink.move_to(offset, pos - half)
                sink.line_to(offset, pos + half)
            else:
                y = self._height - offset
                sink.move_to(pos - half, y)
                sink.line_to(pos + half, y)

    def _sync_axis(self) -> None:
        if self.is_horizontal:
            self._axis.min = self._left
            self._axis.max = self._right
            self._axis.length = self._length
        else:
            self._axis.min = self._bottom
            self._axis.max = self._top
            self._axis.length = self._height


def _finite(value: object) -> bool:
    try:
        return math.isfinite(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False


def _positive(value: object) -> bool:
    return _finite(value) and float(value) > 0  # type: ignore[arg-type]


def _scale_about_midpoint(high: float, low: float, direction: ZoomDirection, factor: int) -> tuple[float, float]:
    midpoint = 0.5 * (high + low)
    d = high - midpoint
    if direction == IN:
        d = d / factor
    else:
        d = d * factor
    return (midpoint + d, midpoint - d)


def _triangle(sink: "DrawingSink", tip: tuple[float, float], a: tuple[float, float], b: tuple[float, float]) -> None:
    sink.move_to(*tip)
    sink.line_to(*a)
    sink.line_to(*b)
    sink.line_to(*tip)
