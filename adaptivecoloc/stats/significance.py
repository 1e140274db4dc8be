"""Significance calls and run summaries for colocalization maps."""

from __future__ import annotations

import numpy as np
import pandas as pd

from adaptivecoloc.core.types import ASKTResult
from adaptivecoloc.stats.qnorm import qnorm


def significance_threshold(alpha: float = 0.05, two_sided: bool = False) -> float:
    """Critical value of the approximately standard-normal output statistic."""
    a = float(alpha)
    if not 0.0 < a < 1.0:
        raise ValueError(f"alpha must lie in (0, 1), got {alpha}.")
    return qnorm(a / 2.0 if two_sided else a, lower_tail=False)


def significant_pixels(
    output: np.ndarray, alpha: float = 0.05, two_sided: bool = False
) -> np.ndarray:
    stat = np.asarray(output, dtype=float)
    crit = significance_threshold(alpha, two_sided=two_sided)
    if two_sided:
        return np.abs(stat) > crit
    return stat > crit


def summarize_colocalization(result: ASKTResult, alpha: float = 0.05) -> pd.DataFrame:
    """One-row table describing a finished run."""
    out = np.asarray(result.output, dtype=float)
    sig = significant_pixels(out, alpha=alpha)
    weighted = np.asarray(result.sqrt_n) > 0
    row = {
        "n_pixels": int(out.size),
        "n_weighted": int(weighted.sum()),
        "frozen_fraction": float(np.mean(result.frozen)),
        "mean_tau": float(np.mean(result.tau[weighted])) if weighted.any() else float("nan"),
        "mean_output": float(np.mean(out)),
        "max_output": float(np.max(out)),
        "alpha": float(alpha),
        "critical_value": significance_threshold(alpha),
        "significant_fraction": float(np.mean(sig)),
        "final_radius": int(result.radii[-1]) if result.radii else 0,
    }
    return pd.DataFrame([row])
