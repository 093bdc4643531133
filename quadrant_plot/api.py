from __future__ import annotations

from typing import Any, Mapping

from quadrant_plot.properties import GraphDrawProperties
from quadrant_plot.quadrant import Quadrant


def quadrant(
    left: float,
    top: float,
    right: float,
    bottom: float,
    x_axis_length: int = 100,
    y_axis_length: int = 100,
    *,
    props: GraphDrawProperties | Mapping[str, Any] | None = None,
    major_x_inc: float | None = None,
    major_y_inc: float | None = None,
    minor_x_inc: float | None = None,
    minor_y_inc: float | None = None,
) -> Quadrant:
    """Build a quadrant with bounds, box size and tick increments already assigned."""
    if x_axis_length <= 0:
        raise ValueError("x_axis_length must be > 0")
    if y_axis_length <= 0:
        raise ValueError("y_axis_length must be > 0")
    if not (right > left and top > bottom):
        raise ValueError("bounds require right > left and top > bottom")

    graph = Quadrant(props)
    graph.set_graph_bounds(left, top, right, bottom, x_axis_length, y_axis_length)
    if major_x_inc is not None:
        graph.major_x_inc = major_x_inc
    if major_y_inc is not None:
        graph.major_y_inc = major_y_inc
    if minor_x_inc is not None:
        graph.minor_x_inc = minor_x_inc
    if minor_y_inc is not None:
        graph.minor_y_inc = minor_y_inc
    return graph
