"""
Affine mapping between Ivlev's index and proportion space.

The index points are drawn on the proportion axis, so every panel needs the same
(a, b) pair: v_primary = v_index * b + a, and back for the secondary tick labels.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np
from .config import PROPORTION_RANGE, INDEX_RANGE


@dataclass(frozen=True)
class DualAxisScale:
    a: float
    b: float

    def to_primary(self, v):
        """Index value(s) -> primary (proportion) axis."""
        return np.asarray(v, dtype=float) * self.b + self.a

    def to_secondary(self, x):
        """Primary axis value(s) -> index value(s)."""
        return (np.asarray(x, dtype=float) - self.a) / self.b

    @property
    def zero_line(self) -> float:
        """Primary-axis position of index = 0."""
        return self.a


def compute_dual_axis_scale(
    primary: Tuple[float, float] = PROPORTION_RANGE,
    secondary: Tuple[float, float] = INDEX_RANGE,
) -> DualAxisScale:
    """
    b = (p1 - p0) / (s1 - s0); a = p0 - b * s0.

    For the fixed ranges [0, 1] and [-1, 1] this gives a = b = 0.5.
    """
    p0, p1 = map(float, primary)
    s0, s1 = map(float, secondary)
    if s1 == s0 or p1 == p0:
        raise ValueError(f"Axis ranges must have nonzero width, got {primary} and {secondary}.")
    b = (p1 - p0) / (s1 - s0)
    a = p0 - b * s0
    return DualAxisScale(a=a, b=b)


DEFAULT_SCALE = compute_dual_axis_scale()
