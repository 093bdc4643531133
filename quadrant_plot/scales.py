from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math

import numpy as np


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_tick(value: float, *, step: float | None = None) -> str:
    """Plain decimal text for a tick value, trimmed to the precision implied by ``step``."""
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    decimals = _decimals_from_step(step) if step is not None else 6

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_tic_label(value: float, decimals: int) -> str:
    """Integral values render without decimals, everything else fixed to ``decimals`` places."""
    if not np.isfinite(value):
        return str(value)
    if round_half_up(value) == value:
        return str(int(value))
    return f"{value:.{max(0, int(decimals))}f}"


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
