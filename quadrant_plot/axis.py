from __future__ import annotations

import logging
import math
from typing import Callable, Literal

import numpy as np

from quadrant_plot.scales import format_tick, round_half_up


LOGGER = logging.getLogger(__name__)

TicKind = Literal["major", "minor"]
ZoomDirection = Literal["in", "out"]

MAJOR: TicKind = "major"
MINOR: TicKind = "minor"
IN: ZoomDirection = "in"
OUT: ZoomDirection = "out"

# relative slack used when deciding whether a tick lands on a bound
_TIC_EPS = 1e-9

BoundsCallback = Callable[[float, float], None]


def _is_finite(value: object) -> bool:
    try:
        return math.isfinite(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False


def zoom_direction(value: object) -> ZoomDirection | None:
    """``IN`` or ``OUT`` for a case-insensitive direction string, otherwise ``None``."""
    if not isinstance(value, str):
        return None
    value = value.lower()
    if value == IN:
        return IN
    if value == OUT:
        return OUT
    return None


class Axis:
    """Linear mapping between a real interval ``[min, max]`` and an integer pixel length.

    The axis never draws anything. It answers pixel/value queries and enumerates tick
    positions for a horizontal or vertical graph axis that owns it. Invalid updates are
    ignored so the last good mapping is always retained.
    """

    def __init__(self) -> None:
        self._min = 0.0
        self._max = 0.0
        self._length = 0
        self._px_per_unit = 0.0
        self._major_inc = 0.0
        self._minor_inc = 0.0
        self.on_bounds_changed: BoundsCallback | None = None

    @property
    def px_per_unit(self) -> float:
        return self._px_per_unit

    @property
    def min(self) -> float:
        return self._min

    @min.setter
    def min(self, value: float) -> None:
        if not _is_finite(value):
            LOGGER.debug("ignoring non-finite axis minimum: %r", value)
            return
        self._min = float(value)
        self._update_mapping()
        self._notify()

    @property
    def max(self) -> float:
        return self._max

    @max.setter
    def max(self, value: float) -> None:
        if not _is_finite(value):
            LOGGER.debug("ignoring non-finite axis maximum: %r", value)
            return
        self._max = float(value)
        self._update_mapping()
        self._notify()

    @property
    def length(self) -> int:
        return self._length

    @length.setter
    def length(self, value: float) -> None:
        if not _is_finite(value):
            LOGGER.debug("ignoring non-finite axis length: %r", value)
            return
        self._length = abs(round_half_up(float(value)))
        self._update_mapping()

    @property
    def major_inc(self) -> float:
        return self._major_inc

    @major_inc.setter
    def major_inc(self, inc: float) -> None:
        if _is_finite(inc) and float(inc) > 0:
            self._major_inc = float(inc)

    @property
    def minor_inc(self) -> float:
        return self._minor_inc

    @minor_inc.setter
    def minor_inc(self, inc: float) -> None:
        if _is_finite(inc) and float(inc) > 0:
            self._minor_inc = float(inc)

    def get_pixel(self, value: float) -> float:
        return (value - self._min) * self._px_per_unit

    def get_value(self, pixel: float) -> float:
        if self._length == 0:
            return self._min
        return self._min + (pixel / self._length) * (self._max - self._min)

    def get_tic_marks(self, kind: str) -> list[str]:
        """Decimal labels for every tick of ``kind`` inside ``[min, max]``."""
        inc = self._increment(kind)
        tics = self._tic_values(inc)
        return [format_tick(float(v), step=inc) for v in tics]

    def get_tic_coordinates(self, kind: str) -> list[int]:
        """Integer pixel offsets (from the ``min`` end) of every tick of ``kind``."""
        tics = self._tic_values(self._increment(kind))
        return [round_half_up((float(v) - self._min) * self._px_per_unit) for v in tics]

    def zoom(self, direction: str, factor: float) -> None:
        zoom_dir = zoom_direction(direction)
        if zoom_dir is None:
            LOGGER.debug("ignoring unknown zoom direction %r", direction)
            return
        if not _is_finite(factor) or float(factor) < 1:
            return
        factor = round_half_up(float(factor))

        midpoint = 0.5 * (self._max + self._min)
        d = self._max - midpoint
        if zoom_dir == IN:
            d = d / factor
        else:
            d = d * factor

        self._min = midpoint - d
        self.max = midpoint + d

    def shift(self, amount: float) -> None:
        """Translate both bounds by ``amount`` pixels; length and scale are unchanged."""
        if not _is_finite(amount) or self._px_per_unit == 0:
            return
        delta = float(amount) / self._px_per_unit
        self._min -= delta
        self._max -= delta
        self._notify()

    def _increment(self, kind: str) -> float:
        if kind == MAJOR:
            return self._major_inc
        if kind == MINOR:
            return self._minor_inc
        return 0.0

    def _tic_values(self, inc: float) -> np.ndarray:
        if self._px_per_unit == 0 or inc <= 0:
            return np.empty(0, dtype=np.float64)
        first = math.ceil(self._min / inc - _TIC_EPS)
        last = math.floor(self._max / inc + _TIC_EPS)
        if last < first:
            return np.empty(0, dtype=np.float64)
        tics = np.arange(first, last + 1, dtype=np.float64) * inc
        tics[np.isclose(tics, 0.0, rtol=0.0, atol=inc * _TIC_EPS)] = 0.0
        return tics

    def _update_mapping(self) -> None:
        span = self._max - self._min
        self._px_per_unit = self._length / span if span > 0 else 0.0

    def _notify(self) -> None:
        if self.on_bounds_changed is not None:
            self.on_bounds_changed(self._min, self._max)
