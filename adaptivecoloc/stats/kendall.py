"""Weighted Kendall rank correlation with randomized tie-breaking.

The statistic is

    tau = sum_{i<j} w_i w_j s_ij / sum_{i<j} w_i w_j,
    s_ij = sign(x_i - x_j) * sign(y_i - y_j),

where exact ties are resolved by one uniform key per sample, drawn from the
supplied generator and shared by both variables. With every pair strictly
ordered, ``tau = 1 - 2 D / T`` with ``D`` the weighted discordant mass and ``T``
the weighted pair mass. ``D`` is obtained from a bottom-up merge sort of the
y-ranks taken in x-order, accumulating cumulative run weights per level.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class KendallWorkspace:
    """Preallocated rank and index arrays reused across calls."""

    index: np.ndarray
    rank: np.ndarray

    @classmethod
    def allocate(cls, capacity: int) -> "KendallWorkspace":
        n = max(int(capacity), 1)
        return cls(index=np.arange(n, dtype=np.int64), rank=np.zeros(n, dtype=np.int64))

    @property
    def capacity(self) -> int:
        return int(self.index.size)


def _as_samples(x, y, w) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    x_arr = np.asarray(x, dtype=float).ravel()
    y_arr = np.asarray(y, dtype=float).ravel()
    w_arr = np.asarray(w, dtype=float).ravel()
    if not (x_arr.size == y_arr.size == w_arr.size):
        raise ValueError("x, y and w must have the same length.")
    if np.any(w_arr < 0):
        raise ValueError("w must be non-negative.")
    return x_arr, y_arr, w_arr


def _weighted_inversions(keys: np.ndarray, weights: np.ndarray, index: np.ndarray) -> float:
    """Sum of ``w_i * w_j`` over positions ``i < j`` with ``keys[i] > keys[j]``.

    ``keys`` must be a permutation of ``0..m-1``.
    """
    m = int(keys.size)
    idx = index[:m]
    total = 0.0
    width = 1
    while width < m:
        # Each run of length `width` is sorted; offsetting by the pair-block id
        # makes the concatenation of all left runs globally sorted.
        offset = (idx // (2 * width)) * m
        is_right = (idx // width) % 2 == 1
        left = ~is_right
        if np.any(is_right):
            left_keys = keys[left] + offset[left]
            cumw = np.concatenate(([0.0], np.cumsum(weights[left])))
            q = keys[is_right] + offset[is_right]
            pos = np.searchsorted(left_keys, q)
            end = np.searchsorted(left_keys, offset[is_right] + m)
            total += float(np.dot(weights[is_right], cumw[end] - cumw[pos]))
        order = np.argsort(keys + offset, kind="stable")
        keys = keys[order]
        weights = weights[order]
        width *= 2
    return total


def weighted_kendall_tau(
    x: np.ndarray,
    y: np.ndarray,
    w: np.ndarray,
    workspace: KendallWorkspace | None = None,
    rng: np.random.Generator | None = None,
) -> float:
    """Weighted Kendall tau of ``(x, y)`` with non-negative importance weights ``w``.

    Samples with zero weight are dropped before ranking. The generator draws
    exactly one uniform tie key per positive-weight sample, in input order.
    Fewer than two weighted samples give 0.0.
    """
    x_arr, y_arr, w_arr = _as_samples(x, y, w)
    active = np.flatnonzero(w_arr > 0)
    m = int(active.size)
    if m < 2:
        return 0.0

    xs = x_arr[active]
    ys = y_arr[active]
    ws = w_arr[active]
    if rng is None:
        rng = np.random.default_rng(0)
    tie_key = rng.random(m)

    if workspace is None or workspace.capacity < m:
        workspace = KendallWorkspace.allocate(m)
    rank = workspace.rank[:m]
    rank[np.lexsort((tie_key, ys))] = workspace.index[:m]
    order = np.lexsort((tie_key, xs))

    sum_w = float(np.sum(ws))
    pair_mass = 0.5 * (sum_w * sum_w - float(np.dot(ws, ws)))
    if pair_mass <= 0.0:
        return 0.0
    discordant = _weighted_inversions(rank[order], ws[order], workspace.index)
    tau = (pair_mass - 2.0 * discordant) / pair_mass
    return float(min(1.0, max(-1.0, tau)))


def weighted_kendall_tau_pairwise(
    x: np.ndarray,
    y: np.ndarray,
    w: np.ndarray,
    tie_key: np.ndarray | None = None,
) -> float:
    """O(n^2) reference for `weighted_kendall_tau`.

    ``tie_key`` is indexed over the positive-weight samples only, matching the
    draws `weighted_kendall_tau` makes. Without it, tied pairs score zero.
    """
    x_arr, y_arr, w_arr = _as_samples(x, y, w)
    active = np.flatnonzero(w_arr > 0)
    if active.size < 2:
        return 0.0
    xs = x_arr[active]
    ys = y_arr[active]
    ws = w_arr[active]

    sx = np.sign(xs[:, None] - xs[None, :])
    sy = np.sign(ys[:, None] - ys[None, :])
    if tie_key is not None:
        key = np.asarray(tie_key, dtype=float).ravel()
        if key.size != active.size:
            raise ValueError("tie_key length must equal the number of positive weights.")
        sk = np.sign(key[:, None] - key[None, :])
        sx = np.where(sx == 0, sk, sx)
        sy = np.where(sy == 0, sk, sy)

    ww = np.triu(ws[:, None] * ws[None, :], k=1)
    den = float(ww.sum())
    if den <= 0.0:
        return 0.0
    return float(np.sum(ww * sx * sy) / den)
