"""Synthetic two-channel images with a known colocalized region."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PhantomPairParams:
    height: int = 32
    width: int = 32
    radius_frac: float = 0.3  # disk radius as a fraction of the shorter side
    rho: float = 0.9  # within-disk channel correlation
    background_level: float = 10.0
    signal_level: float = 100.0
    noise_sigma: float = 10.0
    seed: int = 0


def colocalized_disk_mask(height: int, width: int, radius_frac: float) -> np.ndarray:
    yy, xx = np.mgrid[0:height, 0:width]
    cy = (height - 1) / 2.0
    cx = (width - 1) / 2.0
    r = float(radius_frac) * min(height, width)
    return (yy - cy) ** 2 + (xx - cx) ** 2 <= r * r


def generate_phantom_pair(params: PhantomPairParams) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Two channels correlated (``rho``) inside a central disk, independent outside.

    Returns ``(image1, image2, mask)`` with float images.
    """
    if params.height <= 0 or params.width <= 0:
        raise ValueError("height/width must be positive")
    if not -1.0 <= params.rho <= 1.0:
        raise ValueError("rho must lie in [-1, 1]")
    if params.noise_sigma < 0:
        raise ValueError("noise_sigma must be >= 0")

    rng = np.random.default_rng(params.seed)
    shape = (int(params.height), int(params.width))
    mask = colocalized_disk_mask(shape[0], shape[1], params.radius_frac)

    z_shared = rng.normal(size=shape)
    z1 = rng.normal(size=shape)
    z2 = rng.normal(size=shape)
    rho = float(params.rho)
    c2 = np.where(mask, rho * z_shared + np.sqrt(1.0 - rho * rho) * z2, z2)
    c1 = np.where(mask, z_shared, z1)

    base = np.where(mask, params.signal_level, params.background_level)
    image1 = base + params.noise_sigma * c1
    image2 = base + params.noise_sigma * c2
    return image1.astype(float), image2.astype(float), mask
