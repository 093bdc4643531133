from __future__ import annotations


class QuadrantConfigError(ValueError):
    """Raised when draw-property configuration cannot be validated."""


class CoordinateDataError(ValueError):
    """Raised when layer coordinates cannot be read as 1-D numeric arrays."""
