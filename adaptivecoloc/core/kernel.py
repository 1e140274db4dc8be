"""Radial spatial kernel and neighborhood window helpers."""

from __future__ import annotations

import math

import numpy as np

DEFAULT_KERNEL_REACH = math.sqrt(2.5)


def kernel_generate(radius: int, reach: float = DEFAULT_KERNEL_REACH) -> np.ndarray:
    """Linear radial kernel of shape ``(2r+1, 2r+1)``.

    Weight at offset ``(i, j)`` is ``1 - sqrt(i^2 + j^2) / (r * reach)``, clipped
    to zero once that distance reaches ``r * reach``. A radius of 0 gives the
    single-pixel kernel ``[[1.0]]``.
    """
    r = int(radius)
    if r < 0:
        raise ValueError("radius must be >= 0.")
    if r == 0:
        kernel = np.ones((1, 1), dtype=float)
    else:
        offsets = np.arange(-r, r + 1)
        dist = np.sqrt(offsets[:, None] ** 2 + offsets[None, :] ** 2) / (r * float(reach))
        kernel = np.where(dist < 1.0, 1.0 - dist, 0.0)
    kernel.setflags(write=False)
    return kernel


def update_range(location: int, radius: int, boundary: int) -> tuple[int, int]:
    """Inclusive ``[lo, hi]`` window around ``location`` clamped to ``[0, boundary)``."""
    lo = max(int(location) - int(radius), 0)
    hi = min(int(location) + int(radius), int(boundary) - 1)
    return lo, hi
