"""Small pure helpers for core computations."""

from __future__ import annotations

import math

import numpy as np


def real_2d(name: str, values) -> np.ndarray:
    arr = np.asarray(values)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a 2D grid, got shape {arr.shape}.")
    if arr.size == 0:
        raise ValueError(f"{name} must be non-empty.")
    if not (np.issubdtype(arr.dtype, np.number) or arr.dtype == bool):
        raise ValueError(f"{name} must hold real-valued samples, got dtype {arr.dtype}.")
    if np.iscomplexobj(arr):
        raise ValueError(f"{name} must hold real-valued samples, got complex data.")
    return arr.astype(float, copy=False)


def finite_scalar(name: str, value) -> float:
    out = float(value)
    if not math.isfinite(out):
        raise ValueError(f"{name} must be finite, got {value!r}.")
    return out


def decorrelation_scale(shape: tuple[int, int]) -> float:
    """``2 * sqrt(ln(rows * cols))``, shared by the sampler and the stop rule."""
    n = int(shape[0]) * int(shape[1])
    return 2.0 * math.sqrt(math.log(n)) if n > 1 else 0.0


def pixel_rng(seed: int, round_index: int, row: int, col: int) -> np.random.Generator:
    """Independent tie-breaking stream for one pixel in one round."""
    entropy = [int(seed) & 0xFFFFFFFFFFFFFFFF, int(round_index), int(row), int(col)]
    return np.random.default_rng(np.random.SeedSequence(entropy))
