from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Mapping, Protocol

if TYPE_CHECKING:
    from quadrant_plot.scene import DrawingSink


class LineDecorator(Protocol):
    """Stroke pattern applied between a caller's move/line commands and a drawing sink."""

    style: str

    def set_params(self, params: Mapping[str, Any]) -> None: ...

    def move_to(self, sink: "DrawingSink", x: float, y: float) -> None: ...

    def line_to(self, sink: "DrawingSink", x: float, y: float) -> None: ...

    def curve_to(self, sink: "DrawingSink", cx: float, cy: float, x1: float, y1: float) -> None: ...

    def clear(self, sink: "DrawingSink") -> None: ...

    def reset(self) -> None: ...


class SolidLineDecorator:
    """Identity decorator: every command goes straight to the sink."""

    style = "solid"

    def set_params(self, params: Mapping[str, Any]) -> None:
        return

    def move_to(self, sink: "DrawingSink", x: float, y: float) -> None:
        sink.move_to(x, y)

    def line_to(self, sink: "DrawingSink", x: float, y: float) -> None:
        sink.line_to(x, y)

    def curve_to(self, sink: "DrawingSink", cx: float, cy: float, x1: float, y1: float) -> None:
        sink.curve_to(cx, cy, x1, y1)

    def clear(self, sink: "DrawingSink") -> None:
        sink.clear()

    def reset(self) -> None:
        return


def read_positive(params: Mapping[str, Any], *keys: str) -> float | None:
    """First finite, strictly positive value found under any of ``keys``."""
    for key in keys:
        if key not in params:
            continue
        try:
            value = float(params[key])
        except (TypeError, ValueError):
            return None
        if math.isfinite(value) and value > 0:
            return value
        return None
    return None
