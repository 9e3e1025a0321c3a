"""Numeric and geometry helpers used across the game."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def spans_overlap(a0: float, a1: float, b0: float, b1: float) -> bool:
    """True if the open intervals (a0, a1) and (b0, b1) intersect."""
    return a0 < b1 and b0 < a1


def vertical_gradient(
    w: int,
    h: int,
    top: Sequence[int],
    bottom: Sequence[int],
) -> np.ndarray:
    """Build a (w, h, 3) uint8 array blending ``top`` into ``bottom`` down the y axis.

    The layout matches what ``pygame.surfarray.make_surface`` expects.
    """
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[None, :, None]
    top_c = np.asarray(top, dtype=np.float32)[None, None, :]
    bottom_c = np.asarray(bottom, dtype=np.float32)[None, None, :]
    column = top_c * (1.0 - t) + bottom_c * t
    return np.broadcast_to(np.rint(column), (w, h, 3)).astype(np.uint8)
