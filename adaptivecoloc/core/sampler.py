"""Local weighted sample extraction around one pixel."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from adaptivecoloc.core.kernel import update_range


@dataclass
class LocalSample:
    """Reusable ``(x, y, w)`` buffers sized for the largest neighborhood."""

    x: np.ndarray
    y: np.ndarray
    w: np.ndarray

    @classmethod
    def allocate(cls, capacity: int) -> "LocalSample":
        n = int(capacity)
        if n < 1:
            raise ValueError("capacity must be >= 1.")
        return cls(x=np.zeros(n), y=np.zeros(n), w=np.zeros(n))

    @property
    def capacity(self) -> int:
        return int(self.w.size)


def tau_similarity_weights(
    local_tau: np.ndarray, center_tau: float, center_sqrt_n: float, dn: float
) -> np.ndarray:
    """``(1 - d)^2`` with ``d = |tau_local - tau_center| * sqrtN_center / Dn``, 0 once ``d >= 1``."""
    d = np.abs(np.asarray(local_tau, dtype=float) - float(center_tau)) * float(center_sqrt_n)
    if dn > 0:
        d = d / float(dn)
    else:
        d = np.where(d > 0, np.inf, 0.0)
    return np.where(d < 1.0, (1.0 - d) ** 2, 0.0)


def gather_local_sample(
    image1: np.ndarray,
    image2: np.ndarray,
    old_tau: np.ndarray,
    old_sqrt_n: np.ndarray,
    kernel: np.ndarray,
    row: int,
    col: int,
    dn: float,
    buffers: LocalSample | None = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Collect kernel- and tau-weighted samples in the window around ``(row, col)``.

    Near the borders the window is clamped but the kernel keeps its offsets
    relative to the center pixel, so edge pixels see a partial kernel slice.
    Returned arrays have length ``kernel.size``; positions past the clamped
    window are zero.
    """
    radius = (int(kernel.shape[0]) - 1) // 2
    n_rows, n_cols = image1.shape
    r0, r1 = update_range(row, radius, n_rows)
    c0, c1 = update_range(col, radius, n_cols)

    total = int(kernel.size)
    if buffers is None:
        buffers = LocalSample.allocate(total)
    if buffers.capacity < total:
        raise ValueError(
            f"LocalSample capacity {buffers.capacity} is smaller than the kernel size {total}."
        )
    x = buffers.x[:total]
    y = buffers.y[:total]
    w = buffers.w[:total]

    rows = slice(r0, r1 + 1)
    cols = slice(c0, c1 + 1)
    k = kernel[r0 - row + radius : r1 - row + radius + 1, c0 - col + radius : c1 - col + radius + 1]
    n = int(k.size)

    x[:n] = image1[rows, cols].ravel()
    y[:n] = image2[rows, cols].ravel()
    w[:n] = k.ravel() * tau_similarity_weights(
        old_tau[rows, cols].ravel(), old_tau[row, col], old_sqrt_n[row, col], dn
    )
    x[n:] = 0.0
    y[n:] = 0.0
    w[n:] = 0.0
    return x, y, w
