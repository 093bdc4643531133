from __future__ import annotations

from dataclasses import dataclass, fields
from functools import lru_cache
import math
import re
from typing import Any, Mapping, TypeVar, Union

from quadrant_plot.errors import QuadrantConfigError


RGBA = tuple[int, int, int, int]
ColorLike = Union[str, tuple[int, int, int], tuple[int, int, int, int]]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")
_FONT = re.compile(r"^\s*(?:(bold|normal)\s+)?(\d+(?:\.\d+)?)px\s+(\S.*?)\s*$", re.IGNORECASE)

DEFAULT_TIC_LABEL_FONT = "10px Comic Mono"


@dataclass(frozen=True)
class FontSpec:
    family: str
    size_px: float
    bold: bool = False


def parse_font(font: str) -> FontSpec:
    """Parse a CSS-like font shorthand such as ``"bold 11px Arial"``."""
    if not isinstance(font, str):
        raise QuadrantConfigError(f"font must be a string, got {type(font).__name__}")
    return _parse_font(font)


@lru_cache(maxsize=64)
def _parse_font(font: str) -> FontSpec:
    match = _FONT.match(font)
    if match is None:
        raise QuadrantConfigError(f"font `{font}` must look like `[bold] <size>px <family>`")
    weight, size, family = match.groups()
    size_px = float(size)
    if size_px <= 0:
        raise QuadrantConfigError(f"font `{font}` must have a positive size")
    return FontSpec(family=family, size_px=size_px, bold=(weight or "").lower() == "bold")


def parse_color(color: ColorLike) -> RGBA:
    if isinstance(color, str):
        if not _HEX_COLOR.match(color):
            raise QuadrantConfigError(f"color `{color}` must be a hex color (#RRGGBB or #RRGGBBAA)")
        r, g, b = (int(color[i : i + 2], 16) for i in (1, 3, 5))
        a = int(color[7:9], 16) if len(color) == 9 else 255
        return (r, g, b, a)
    if isinstance(color, (tuple, list)) and len(color) in (3, 4):
        channels = tuple(color)
        if not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in channels):
            raise QuadrantConfigError(f"color {color!r} channels must be integers in [0, 255]")
        if len(channels) == 3:
            return (channels[0], channels[1], channels[2], 255)
        return (channels[0], channels[1], channels[2], channels[3])
    raise QuadrantConfigError(f"unsupported color value: {color!r}")


def resolve_color(color: ColorLike, alpha: float = 1.0) -> RGBA:
    r, g, b, a = parse_color(color)
    out_a = int(max(0.0, min(1.0, alpha)) * a)
    return (r, g, b, out_a)


def _check_number(owner: str, name: str, value: Any, *, minimum: float | None = None) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise QuadrantConfigError(f"{owner}.{name} must be a finite number")
    if minimum is not None and value < minimum:
        raise QuadrantConfigError(f"{owner}.{name} must be >= {minimum}")


def _check_style(owner: str, name: str, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise QuadrantConfigError(f"{owner}.{name} must be a non-empty line style name")


@dataclass(frozen=True)
class GraphDrawProperties:
    """Draw properties for the graph itself (grid, axes, tick labels), not its layers."""

    left_px: int = 0
    top_px: int = 0
    right_px: int = 0
    bottom_px: int = 0
    show_grid: bool = True
    grid_thickness: float = 1.0
    grid_color: ColorLike = "#CCCCCC"
    grid_alpha: float = 1.0
    grid_style: str = "solid"
    x_axis_thickness: float = 2.0
    x_axis_color: ColorLike = "#000000"
    x_axis_alpha: float = 1.0
    x_axis_arrows: bool = True
    y_axis_thickness: float = 2.0
    y_axis_color: ColorLike = "#000000"
    y_axis_alpha: float = 1.0
    y_axis_arrows: bool = True
    tic_label_font: str = DEFAULT_TIC_LABEL_FONT
    tic_label_color: ColorLike = "#000000"
    graph_label_font: str = "bold 11px Comic Mono"
    decimals: int = 0

    def __post_init__(self) -> None:
        owner = type(self).__name__
        for name in ("left_px", "top_px", "right_px", "bottom_px"):
            _check_number(owner, name, getattr(self, name), minimum=0)
        for name in ("grid_thickness", "x_axis_thickness", "y_axis_thickness"):
            _check_number(owner, name, getattr(self, name), minimum=0)
        for name in ("grid_alpha", "x_axis_alpha", "y_axis_alpha", "decimals"):
            _check_number(owner, name, getattr(self, name))
        for name in ("grid_color", "x_axis_color", "y_axis_color", "tic_label_color"):
            parse_color(getattr(self, name))
        for name in ("tic_label_font", "graph_label_font"):
            parse_font(getattr(self, name))
        _check_style(owner, "grid_style", self.grid_style)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GraphDrawProperties":
        return _from_mapping(cls, data, {"gridThicknes": "grid_thickness", "ticLableColor": "tic_label_color"})


@dataclass(frozen=True)
class FunctionDrawProperties:
    """Stroke and dot settings for one function layer."""

    thickness: float = 1.0
    color: ColorLike = "#0000FF"
    alpha: float = 1.0
    show_line: bool = True
    show_dot: bool = False
    radius: float = 2.0
    line_style: str = "solid"

    def __post_init__(self) -> None:
        owner = type(self).__name__
        _check_number(owner, "thickness", self.thickness, minimum=0)
        _check_number(owner, "alpha", self.alpha)
        _check_number(owner, "radius", self.radius)
        parse_color(self.color)
        _check_style(owner, "line_style", self.line_style)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FunctionDrawProperties":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class LabelDrawProperties:
    font: str = "bold 11px Comic Mono"
    color: ColorLike = "#000000"

    def __post_init__(self) -> None:
        parse_font(self.font)
        parse_color(self.color)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LabelDrawProperties":
        return _from_mapping(cls, data)


_PropsT = TypeVar("_PropsT", GraphDrawProperties, FunctionDrawProperties, LabelDrawProperties)


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _from_mapping(cls: type[_PropsT], data: Mapping[str, Any], aliases: Mapping[str, str] | None = None) -> _PropsT:
    known = {f.name for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        name = (aliases or {}).get(key) or _snake_case(key)
        if name not in known:
            raise QuadrantConfigError(f"Unknown {cls.__name__} key: {key}")
        kwargs[name] = value
    return cls(**kwargs)
