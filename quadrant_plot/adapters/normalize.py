from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
import logging
from typing import Any

import numpy as np

from quadrant_plot.errors import CoordinateDataError


LOGGER = logging.getLogger(__name__)

try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def coerce_coordinates(xs: Any, ys: Any) -> tuple[np.ndarray, np.ndarray] | None:
    """Copy paired x/y inputs into float64 arrays holding only the finite pairs.

    Returns ``None`` (and logs why) for input the quadrant ignores: a missing side, a length
    mismatch, empty data, non-numeric values or no finite pair at all. The returned arrays
    never alias the caller's.
    """
    paired = _paired_finite(xs, ys)
    if paired is None:
        return None
    x_arr, y_arr, mask = paired
    return x_arr[mask], y_arr[mask]


def coerce_labelled_coordinates(xs: Any, ys: Any, labels: Any) -> tuple[np.ndarray, np.ndarray, list[str]] | None:
    """Like :func:`coerce_coordinates`, keeping each label with its point when pairs are dropped."""
    paired = _paired_finite(xs, ys)
    if paired is None:
        return None
    x_arr, y_arr, mask = paired
    texts = coerce_labels(labels, x_arr.size)
    kept = [text for text, keep in zip(texts, mask.tolist()) if keep]
    return x_arr[mask], y_arr[mask], kept


def _paired_finite(xs: Any, ys: Any) -> tuple[np.ndarray, np.ndarray, np.ndarray] | None:
    if xs is None or ys is None:
        LOGGER.debug("ignoring coordinates: x and y are both required")
        return None
    try:
        x_arr = _coerce_1d_numeric(xs, label="x")
        y_arr = _coerce_1d_numeric(ys, label="y")
    except CoordinateDataError as exc:
        LOGGER.debug("ignoring coordinates: %s", exc)
        return None

    if x_arr.shape != y_arr.shape:
        LOGGER.debug("ignoring coordinates: x and y length mismatch: %d != %d", x_arr.size, y_arr.size)
        return None
    if x_arr.size == 0:
        LOGGER.debug("ignoring coordinates: empty series")
        return None

    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    if not np.any(mask):
        LOGGER.debug("ignoring coordinates: series contains no finite points")
        return None
    if not np.all(mask):
        LOGGER.debug("dropping %d non-finite coordinate pairs", int(mask.size - np.count_nonzero(mask)))
    return x_arr, y_arr, mask


def coerce_labels(labels: Any, count: int) -> list[str]:
    """Label text for ``count`` points; missing entries become empty strings."""
    if labels is None or isinstance(labels, (str, bytes)):
        values: list[Any] = []
    else:
        values = list(labels)
    out = ["" if v is None else str(v) for v in values[:count]]
    out.extend([""] * (count - len(out)))
    return out


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise CoordinateDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object).reshape(-1), label=label)

    raise CoordinateDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None or isinstance(raw, bool):
            raise CoordinateDataError(f"{label} contains non-numeric value at index {i}: {raw!r}")
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise CoordinateDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
