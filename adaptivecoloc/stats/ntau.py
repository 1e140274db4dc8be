"""Effective weighted sample size of a thresholded local sample."""

from __future__ import annotations

import math

import numpy as np


def apply_thresholds(
    w: np.ndarray, x: np.ndarray, y: np.ndarray, thres1: float, thres2: float
) -> np.ndarray:
    """Zero ``w`` in place wherever ``x < thres1`` or ``y < thres2``."""
    if not isinstance(w, np.ndarray):
        raise TypeError("w must be a numpy array; it is modified in place.")
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if not (w.shape == x_arr.shape == y_arr.shape):
        raise ValueError("w, x and y must have the same shape.")
    w[(x_arr < float(thres1)) | (y_arr < float(thres2))] = 0.0
    return w


def effective_sample_size(
    w: np.ndarray, x: np.ndarray, y: np.ndarray, thres1: float, thres2: float
) -> float:
    """Kish effective count ``(sum w)^2 / sum w^2`` after threshold gating.

    Gating writes into ``w``; the estimator run afterwards reads the gated weights.
    """
    apply_thresholds(w, x, y, thres1, thres2)
    sum_w = float(np.sum(w))
    sum_sq_w = float(np.dot(w, w))
    denom = sum_w * sum_w
    if denom <= 0.0 or sum_sq_w <= 0.0:
        return 0.0
    return denom / sum_sq_w


def effective_sqrt_n(
    w: np.ndarray, x: np.ndarray, y: np.ndarray, thres1: float, thres2: float
) -> float:
    return math.sqrt(effective_sample_size(w, x, y, thres1, thres2))
