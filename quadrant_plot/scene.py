from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Union

from quadrant_plot.properties import RGBA, FontSpec
from quadrant_plot.raster.draw_text import text_size


class DrawingSink(Protocol):
    """Path-drawing capability the geometry engine and decorators are written against."""

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def curve_to(self, cx: float, cy: float, x1: float, y1: float) -> None: ...

    def set_stroke_style(self, thickness: float) -> None: ...

    def begin_stroke(self, color: RGBA) -> None: ...

    def end_stroke(self) -> None: ...

    def begin_fill(self, color: RGBA) -> None: ...

    def end_fill(self) -> None: ...

    def draw_circle(self, x: float, y: float, radius: float) -> None: ...

    def clear(self) -> None: ...


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CurveTo:
    cx: float
    cy: float
    x: float
    y: float


@dataclass(frozen=True)
class StrokeStyle:
    thickness: float


@dataclass(frozen=True)
class BeginStroke:
    color: RGBA


@dataclass(frozen=True)
class EndStroke:
    pass


@dataclass(frozen=True)
class BeginFill:
    color: RGBA


@dataclass(frozen=True)
class EndFill:
    pass


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float


Command = Union[MoveTo, LineTo, CurveTo, StrokeStyle, BeginStroke, EndStroke, BeginFill, EndFill, Circle]


@dataclass
class DisplayObject:
    x: float = 0.0
    y: float = 0.0
    visible: bool = True


@dataclass
class Shape(DisplayObject):
    """Records drawing commands; a backend replays them later."""

    commands: list[Command] = field(default_factory=list)

    def move_to(self, x: float, y: float) -> None:
        self.commands.append(MoveTo(x, y))

    def line_to(self, x: float, y: float) -> None:
        self.commands.append(LineTo(x, y))

    def curve_to(self, cx: float, cy: float, x1: float, y1: float) -> None:
        self.commands.append(CurveTo(cx, cy, x1, y1))

    def set_stroke_style(self, thickness: float) -> None:
        self.commands.append(StrokeStyle(thickness))

    def begin_stroke(self, color: RGBA) -> None:
        self.commands.append(BeginStroke(color))

    def end_stroke(self) -> None:
        self.commands.append(EndStroke())

    def begin_fill(self, color: RGBA) -> None:
        self.commands.append(BeginFill(color))

    def end_fill(self) -> None:
        self.commands.append(EndFill())

    def draw_circle(self, x: float, y: float, radius: float) -> None:
        self.commands.append(Circle(x, y, radius))

    def clear(self) -> None:
        self.commands.clear()

    @property
    def is_empty(self) -> bool:
        return not self.commands


@dataclass
class Text(DisplayObject):
    text: str = ""
    font: FontSpec = field(default_factory=lambda: FontSpec(family="Comic Mono", size_px=10.0))
    color: RGBA = (0, 0, 0, 255)

    def bounds(self) -> tuple[int, int]:
        return text_size(self.text, font_family=self.font.family, font_size_px=self.font.size_px)


@dataclass
class Container(DisplayObject):
    children: list[DisplayObject] = field(default_factory=list)

    def add_child(self, child: DisplayObject) -> DisplayObject:
        self.children.append(child)
        return child

    def remove_all_children(self) -> None:
        self.children.clear()

    @property
    def num_children(self) -> int:
        return len(self.children)
