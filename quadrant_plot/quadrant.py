from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Any, Mapping

import numpy as np

from quadrant_plot.adapters import coerce_coordinates, coerce_labelled_coordinates
from quadrant_plot.axis import MAJOR
from quadrant_plot.decorators import SOLID, LineDecoratorFactory
from quadrant_plot.graph_axis import HORIZONTAL, VERTICAL, GraphAxis
from quadrant_plot.properties import (
    RGBA,
    FunctionDrawProperties,
    GraphDrawProperties,
    LabelDrawProperties,
    parse_font,
    resolve_color,
)
from quadrant_plot.raster.canvas import new_canvas
from quadrant_plot.raster.render import rasterize
from quadrant_plot.scales import format_tic_label, round_half_up
from quadrant_plot.scene import Container, Shape, Text


LOGGER = logging.getLogger(__name__)

WHITE: RGBA = (255, 255, 255, 255)

# tick labels closer than this to the arrow end (or the origin corner) are hidden
_LABEL_EDGE_PX = 10
_X_LABEL_GAP_PX = 10
_Y_LABEL_GAP_PX = 4
# pixel positions stay exactly representable after the int64 cast
_PIXEL_LIMIT = 2.0**52


def _empty() -> np.ndarray:
    return np.empty(0, dtype=np.float64)


@dataclass
class _FunctionLayer:
    props: FunctionDrawProperties
    shape: Shape
    xs: np.ndarray = field(default_factory=_empty)
    ys: np.ndarray = field(default_factory=_empty)


@dataclass
class _LabelLayer:
    props: LabelDrawProperties
    container: Container


class Quadrant:
    """Single-quadrant graph engine.

    Owns the x/y :class:`GraphAxis` pair, the draw properties and the named function and label
    layers, and draws everything into a display list rooted at :attr:`root`. Axes are always
    pinned to the left and bottom edges of the graph box. Invalid input to any mutator is
    logged and ignored.
    """

    def __init__(self, props: GraphDrawProperties | Mapping[str, Any] | None = None) -> None:
        self._x_axis = GraphAxis(HORIZONTAL)
        self._y_axis = GraphAxis(VERTICAL)

        self._x_axis_length = 100
        self._y_axis_length = 100
        self._px_per_unit_x = 0.0
        self._px_per_unit_y = 0.0
        self._left = 0.0
        self._top = 0.0
        self._right = 0.0
        self._bottom = 0.0

        self._major_x_inc = 0.0
        self._minor_x_inc = 0.0
        self._major_y_inc = 0.0
        self._minor_y_inc = 0.0

        self._props = GraphDrawProperties()
        self._decimals = 0
        self._show_grid = self._props.show_grid
        self._grid_style = SOLID
        self._grid_invalidated = False
        self._labels_invalidated = False

        self._grid_shape = Shape()
        self._x_axis_shape = Shape()
        self._x_tic_marks = Shape()
        self._x_arrows = Shape()
        self._x_tic_labels = Container()
        self._y_axis_shape = Shape()
        self._y_tic_marks = Shape()
        self._y_arrows = Shape()
        self._y_tic_labels = Container()
        self._function_layers = Container()
        self._label_layers = Container()

        self._root = Container()
        for child in (
            self._grid_shape,
            self._x_axis_shape,
            self._x_tic_marks,
            self._x_arrows,
            self._x_tic_labels,
            self._y_axis_shape,
            self._y_tic_marks,
            self._y_arrows,
            self._y_tic_labels,
            self._function_layers,
            self._label_layers,
        ):
            self._root.add_child(child)

        self._x_label_pool: list[Text] = []
        self._y_label_pool: list[Text] = []
        self._fcn_layers: dict[str, _FunctionLayer] = {}
        self._lbl_layers: dict[str, _LabelLayer] = {}

        if props is not None:
            self.set_draw_props(props)

    @property
    def root(self) -> Container:
        return self._root

    @property
    def props(self) -> GraphDrawProperties:
        return self._props

    @property
    def x_axis(self) -> GraphAxis:
        return self._x_axis

    @property
    def y_axis(self) -> GraphAxis:
        return self._y_axis

    @property
    def left(self) -> float:
        return self._left

    @property
    def top(self) -> float:
        return self._top

    @property
    def right(self) -> float:
        return self._right

    @property
    def bottom(self) -> float:
        return self._bottom

    @property
    def x_axis_length(self) -> int:
        return self._x_axis_length

    @property
    def y_axis_length(self) -> int:
        return self._y_axis_length

    @property
    def px_per_unit_x(self) -> float:
        return self._px_per_unit_x

    @property
    def px_per_unit_y(self) -> float:
        return self._px_per_unit_y

    @property
    def grid_invalidated(self) -> bool:
        return self._grid_invalidated

    @property
    def labels_invalidated(self) -> bool:
        return self._labels_invalidated

    @property
    def grid_shape(self) -> Shape:
        return self._grid_shape

    @property
    def x_axis_shape(self) -> Shape:
        return self._x_axis_shape

    @property
    def y_axis_shape(self) -> Shape:
        return self._y_axis_shape

    @property
    def x_tic_marks(self) -> Shape:
        return self._x_tic_marks

    @property
    def y_tic_marks(self) -> Shape:
        return self._y_tic_marks

    @property
    def x_arrows(self) -> Shape:
        return self._x_arrows

    @property
    def y_arrows(self) -> Shape:
        return self._y_arrows

    @property
    def x_tic_labels(self) -> tuple[Text, ...]:
        return tuple(self._x_label_pool)

    @property
    def y_tic_labels(self) -> tuple[Text, ...]:
        return tuple(self._y_label_pool)

    @property
    def function_layer_names(self) -> tuple[str, ...]:
        return tuple(self._fcn_layers)

    @property
    def label_layer_names(self) -> tuple[str, ...]:
        return tuple(self._lbl_layers)

    def function_layer(self, name: str) -> Shape | None:
        layer = self._fcn_layers.get(name)
        return None if layer is None else layer.shape

    def function_layer_data(self, name: str) -> tuple[np.ndarray, np.ndarray] | None:
        layer = self._fcn_layers.get(name)
        if layer is None:
            return None
        return layer.xs.copy(), layer.ys.copy()

    def label_layer(self, name: str) -> Container | None:
        layer = self._lbl_layers.get(name)
        return None if layer is None else layer.container

    def set_draw_props(self, props: GraphDrawProperties | Mapping[str, Any]) -> None:
        """Replace the graph draw properties; a mapping is validated through ``from_mapping``."""
        if not isinstance(props, GraphDrawProperties):
            props = GraphDrawProperties.from_mapping(props)
        self._props = props
        self._decimals = abs(round_half_up(props.decimals))
        self._show_grid = props.show_grid
        self._grid_shape.visible = props.show_grid
        self._grid_style = LineDecoratorFactory.resolve(props.grid_style)
        self._grid_invalidated = True
        self._labels_invalidated = True

    def set_graph_bounds(
        self,
        left: float,
        top: float,
        right: float,
        bottom: float,
        x_axis_length: float,
        y_axis_length: float,
    ) -> None:
        """Assign the data-space window and the pixel size of the graph box.

        The four bounds are kept only if ``right > left`` and ``top > bottom`` (a non-finite
        entry falls back to its current value first). Pixel lengths always apply, clamped to
        at least one pixel.
        """
        l = float(left) if _finite(left) else self._left
        t = float(top) if _finite(top) else self._top
        r = float(right) if _finite(right) else self._right
        b = float(bottom) if _finite(bottom) else self._bottom

        if r > l and t > b:
            self._left, self._top, self._right, self._bottom = l, t, r, b
        else:
            LOGGER.debug("ignoring graph bounds left=%r top=%r right=%r bottom=%r", left, top, right, bottom)

        if _finite(x_axis_length):
            self._x_axis_length = max(1, round_half_up(float(x_axis_length)))
        if _finite(y_axis_length):
            self._y_axis_length = max(1, round_half_up(float(y_axis_length)))

        x_span = self._right - self._left
        y_span = self._top - self._bottom
        self._px_per_unit_x = self._x_axis_length / x_span if x_span > 0 else 0.0
        self._px_per_unit_y = self._y_axis_length / y_span if y_span > 0 else 0.0

        for axis in (self._x_axis, self._y_axis):
            axis.set_bounds(
                self._left, self._top, self._right, self._bottom, self._x_axis_length, self._y_axis_length
            )

        self._grid_invalidated = True
        self._labels_invalidated = True

    @property
    def decimals(self) -> int:
        return self._decimals

    @decimals.setter
    def decimals(self, value: float) -> None:
        if not _finite(value):
            LOGGER.debug("ignoring non-finite decimals: %r", value)
            return
        self._decimals = max(0, round_half_up(float(value)))
        self._labels_invalidated = True

    @property
    def major_x_inc(self) -> float:
        return self._major_x_inc

    @major_x_inc.setter
    def major_x_inc(self, value: float) -> None:
        self._major_x_inc = self._set_increment(value, self._major_x_inc, self._x_axis, "major_inc")

    @property
    def minor_x_inc(self) -> float:
        return self._minor_x_inc

    @minor_x_inc.setter
    def minor_x_inc(self, value: float) -> None:
        self._minor_x_inc = self._set_increment(value, self._minor_x_inc, self._x_axis, "minor_inc")

    @property
    def major_y_inc(self) -> float:
        return self._major_y_inc

    @major_y_inc.setter
    def major_y_inc(self, value: float) -> None:
        self._major_y_inc = self._set_increment(value, self._major_y_inc, self._y_axis, "major_inc")

    @property
    def minor_y_inc(self) -> float:
        return self._minor_y_inc

    @minor_y_inc.setter
    def minor_y_inc(self, value: float) -> None:
        self._minor_y_inc = self._set_increment(value, self._minor_y_inc, self._y_axis, "minor_inc")

    @property
    def grid_visible(self) -> bool:
        return self._show_grid

    def show_grid(self, show: bool) -> None:
        self._show_grid = bool(show)
        self._grid_shape.visible = self._show_grid
        if self._show_grid and self._grid_invalidated:
            self._draw_grid()

    def add_function_layer(
        self, name: str, props: FunctionDrawProperties | Mapping[str, Any] | None = None
    ) -> None:
        """Register (or re-register) a named function layer with empty data."""
        if not name:
            LOGGER.debug("ignoring function layer with an empty name")
            return
        props = _function_props(props)
        layer = self._fcn_layers.get(name)
        if layer is None:
            shape = Shape()
            self._function_layers.add_child(shape)
            self._fcn_layers[name] = _FunctionLayer(props=props, shape=shape)
            return
        layer.props = props
        layer.xs = _empty()
        layer.ys = _empty()

    def add_function_layer_data(self, name: str, xs: Any, ys: Any) -> None:
        """Cache coordinates for a layer without drawing them."""
        layer = self._fcn_layers.get(name)
        if layer is None:
            LOGGER.debug("ignoring data for unknown function layer %r", name)
            return
        coords = coerce_coordinates(xs, ys)
        if coords is None:
            return
        layer.xs, layer.ys = coords

    def add_label_layer(self, name: str, props: LabelDrawProperties | Mapping[str, Any] | None = None) -> None:
        if not name:
            LOGGER.debug("ignoring label layer with an empty name")
            return
        props = _label_props(props, self._props.graph_label_font)
        layer = self._lbl_layers.get(name)
        if layer is None:
            container = Container()
            self._label_layers.add_child(container)
            self._lbl_layers[name] = _LabelLayer(props=props, container=container)
            return
        layer.props = props

    def graph_label_layer(self, name: str, xs: Any, ys: Any, labels: Any) -> None:
        """Replace a label layer's text objects with one label per data point."""
        layer = self._lbl_layers.get(name)
        if layer is None:
            LOGGER.debug("ignoring labels for unknown label layer %r", name)
            return
        coords = coerce_labelled_coordinates(xs, ys, labels)
        if coords is None:
            return
        xs_arr, ys_arr, texts = coords
        x_px, y_px = self._to_pixels(xs_arr, ys_arr)
        font = parse_font(layer.props.font)
        color = resolve_color(layer.props.color)

        layer.container.remove_all_children()
        for text, x, y in zip(texts, x_px.tolist(), y_px.tolist()):
            layer.container.add_child(Text(x=x, y=y, text=text, font=font, color=color))

    def graph_layer(self, name: str, xs: Any = None, ys: Any = None) -> None:
        """Draw one function layer, from new coordinates when both are given or from its cache."""
        layer = self._fcn_layers.get(name)
        if layer is None:
            LOGGER.debug("ignoring unknown function layer %r", name)
            return

        if xs is not None and ys is not None:
            coords = coerce_coordinates(xs, ys)
            if coords is None:
                return
            layer.xs, layer.ys = coords

        shape = layer.shape
        shape.clear()
        if layer.xs.size == 0:
            return

        props = layer.props
        color = resolve_color(props.color, props.alpha)
        points = list(zip(*(arr.tolist() for arr in self._to_pixels(layer.xs, layer.ys))))

        if props.show_line:
            shape.set_stroke_style(props.thickness)
            shape.begin_stroke(color)
            with LineDecoratorFactory.stroke_session(props.line_style) as decorator:
                first_x, first_y = points[0]
                decorator.move_to(shape, first_x, first_y)
                for x, y in points[1:]:
                    decorator.line_to(shape, x, y)
            shape.end_stroke()

        if props.show_dot:
            radius = max(2, round_half_up(abs(props.radius)))
            for x, y in points:
                shape.begin_fill(color)
                shape.draw_circle(x, y, radius)
                shape.end_fill()

    def to_pixel(self, x: float, y: float) -> tuple[int, int]:
        """Graph-box pixel position of a data point (y-down, origin at the box's top-left)."""
        return (
            round_half_up((x - self._left) * self._px_per_unit_x),
            round_half_up((self._top - y) * self._px_per_unit_y),
        )

    def redraw(self) -> None:
        if self._show_grid:
            self._draw_grid()
        self._draw_axes()
        self._draw_tic_labels()
        for name in self._fcn_layers:
            self.graph_layer(name)

    def clear(self) -> None:
        """Erase layer content; layer definitions and cached data are kept."""
        for layer in self._fcn_layers.values():
            layer.shape.clear()
        for label_layer in self._lbl_layers.values():
            label_layer.container.remove_all_children()

    def render(self, canvas: np.ndarray | None = None, *, background: RGBA = WHITE) -> np.ndarray:
        """Rasterize the display list.

        Without ``canvas`` a new one is allocated to fit the graph box plus the pixel margins
        from the draw properties. The graph box is placed at ``(left_px, top_px)`` either way.
        """
        props = self._props
        left_px = round_half_up(props.left_px)
        top_px = round_half_up(props.top_px)
        if canvas is None:
            width = left_px + self._x_axis_length + round_half_up(props.right_px)
            height = top_px + self._y_axis_length + round_half_up(props.bottom_px)
            canvas = new_canvas(width, height, background)
        rasterize(self._root, canvas, x_offset=left_px, y_offset=top_px)
        return canvas

    def _draw_grid(self) -> None:
        shape = self._grid_shape
        shape.clear()
        if not self._show_grid:
            return
        props = self._props
        shape.set_stroke_style(props.grid_thickness)
        shape.begin_stroke(resolve_color(props.grid_color, props.grid_alpha))
        for axis, inc in ((self._x_axis, self._major_x_inc), (self._y_axis, self._major_y_inc)):
            if inc <= 0:
                continue
            with LineDecoratorFactory.stroke_session(self._grid_style) as decorator:
                axis.draw_grid(shape, decorator)
        shape.end_stroke()
        self._grid_invalidated = False

    def _draw_axes(self) -> None:
        props = self._props
        self._draw_axis(
            self._x_axis,
            self._x_axis_shape,
            self._x_arrows,
            self._x_tic_marks,
            thickness=props.x_axis_thickness,
            color=resolve_color(props.x_axis_color, props.x_axis_alpha),
            show_arrows=props.x_axis_arrows,
            arrow_size=(3 * props.x_axis_thickness + 2, 2 * props.x_axis_thickness + 1),
            major_inc=self._major_x_inc,
            minor_inc=self._minor_x_inc,
        )
        self._draw_axis(
            self._y_axis,
            self._y_axis_shape,
            self._y_arrows,
            self._y_tic_marks,
            thickness=props.y_axis_thickness,
            color=resolve_color(props.y_axis_color, props.y_axis_alpha),
            show_arrows=props.y_axis_arrows,
            arrow_size=(3 * props.y_axis_thickness + 1, 2 * props.y_axis_thickness + 2),
            major_inc=self._major_y_inc,
            minor_inc=self._minor_y_inc,
        )

    def _draw_axis(
        self,
        axis: GraphAxis,
        line: Shape,
        arrows: Shape,
        tics: Shape,
        *,
        thickness: float,
        color: RGBA,
        show_arrows: bool,
        arrow_size: tuple[float, float],
        major_inc: float,
        minor_inc: float,
    ) -> None:
        line.clear()
        line.set_stroke_style(thickness)
        line.begin_stroke(color)
        with LineDecoratorFactory.stroke_session(SOLID) as decorator:
            axis.draw_axis(line, decorator, override=True)
        line.end_stroke()

        arrows.clear()
        if show_arrows:
            arrows.begin_fill(color)
            axis.draw_arrows(None, arrows, arrow_size[0], arrow_size[1], override=True)
            arrows.end_fill()

        tics.clear()
        major_length = 6 * thickness
        if major_inc > 0:
            tics.set_stroke_style(max(1, thickness - 1))
            tics.begin_stroke(color)
            axis.draw_major_tic_marks(tics, major_length, override=True)
            tics.end_stroke()
        if minor_inc > 0:
            tics.set_stroke_style(max(1, thickness - 2))
            tics.begin_stroke(color)
            axis.draw_minor_tic_marks(tics, max(2, 0.5 * major_length), override=True)
            tics.end_stroke()

    def _draw_tic_labels(self) -> None:
        props = self._props
        font = parse_font(props.tic_label_font)
        color = resolve_color(props.tic_label_color)

        # x labels: centered under each major tick, below the pinned x-axis
        offsets, values = _major_tics(self._x_axis, self._major_x_inc)
        pool = self._reserve_labels(self._x_label_pool, self._x_tic_labels, len(offsets))
        baseline = self._x_axis.axis_position(override=True) + _X_LABEL_GAP_PX
        axis_length = self._x_axis.length
        for lbl, offset, value in zip(pool, offsets, values):
            if value == "0":
                continue
            lbl.text = format_tic_label(float(value), self._decimals)
            lbl.font = font
            lbl.color = color
            width, _ = lbl.bounds()
            lbl.x = round_half_up(offset - 0.5 * width)
            lbl.y = baseline
            lbl.visible = offset < axis_length - _LABEL_EDGE_PX

        # y labels: one column left of the pinned y-axis, vertically centered on each tick
        offsets, values = _major_tics(self._y_axis, self._major_y_inc)
        pool = self._reserve_labels(self._y_label_pool, self._y_tic_labels, len(offsets))
        axis_x = self._y_axis.axis_position(override=True)
        axis_height = self._y_axis.height
        shown: list[Text] = []
        max_width = 0
        for lbl, offset, value in zip(pool, offsets, values):
            if value == "0":
                continue
            lbl.text = format_tic_label(float(value), self._decimals)
            lbl.font = font
            lbl.color = color
            width, height = lbl.bounds()
            max_width = max(max_width, width)
            tic_y = axis_height - offset
            lbl.y = round_half_up(tic_y - 0.5 * height) - 1
            lbl.visible = tic_y > _LABEL_EDGE_PX
            shown.append(lbl)
        for lbl in shown:
            lbl.x = axis_x - max_width - _Y_LABEL_GAP_PX

        self._labels_invalidated = False

    @staticmethod
    def _reserve_labels(pool: list[Text], container: Container, count: int) -> list[Text]:
        """Grow the pool to ``count`` labels and hide every pooled label."""
        while len(pool) < count:
            lbl = Text(text=" ", visible=False)
            container.add_child(lbl)
            pool.append(lbl)
        for lbl in pool:
            lbl.visible = False
        return pool[:count]

    def _set_increment(self, value: float, current: float, axis: GraphAxis, attr: str) -> float:
        if not _finite(value):
            LOGGER.debug("ignoring non-finite %s: %r", attr, value)
            return current
        inc = max(0.0, float(value))
        if inc > 0:
            setattr(axis, attr, inc)
        self._grid_invalidated = True
        self._labels_invalidated = True
        return inc

    def _to_pixels(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        with np.errstate(over="ignore", invalid="ignore"):
            x_px = np.floor((xs - self._left) * self._px_per_unit_x + 0.5)
            y_px = np.floor((self._top - ys) * self._px_per_unit_y + 0.5)
        x_px = np.clip(x_px, -_PIXEL_LIMIT, _PIXEL_LIMIT).astype(np.int64)
        y_px = np.clip(y_px, -_PIXEL_LIMIT, _PIXEL_LIMIT).astype(np.int64)
        return x_px, y_px


def _finite(value: object) -> bool:
    try:
        return math.isfinite(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False


def _major_tics(axis: GraphAxis, inc: float) -> tuple[list[int], list[str]]:
    # an increment reset to zero leaves the axis holding its last positive value
    if inc <= 0:
        return [], []
    return axis.get_tic_coordinates(MAJOR), axis.get_tic_mark_labels(MAJOR)


def _function_props(props: FunctionDrawProperties | Mapping[str, Any] | None) -> FunctionDrawProperties:
    if props is None:
        return FunctionDrawProperties()
    if isinstance(props, FunctionDrawProperties):
        return props
    return FunctionDrawProperties.from_mapping(props)


def _label_props(props: LabelDrawProperties | Mapping[str, Any] | None, default_font: str) -> LabelDrawProperties:
    if props is None:
        return LabelDrawProperties(font=default_font)
    if isinstance(props, LabelDrawProperties):
        return props
    return LabelDrawProperties.from_mapping(props)
