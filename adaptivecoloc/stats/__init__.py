"""Statistical utilities for adaptive colocalization."""

from adaptivecoloc.stats.kendall import (
    KendallWorkspace,
    weighted_kendall_tau,
    weighted_kendall_tau_pairwise,
)
from adaptivecoloc.stats.ntau import (
    apply_thresholds,
    effective_sample_size,
    effective_sqrt_n,
)
from adaptivecoloc.stats.qnorm import qnorm
from adaptivecoloc.stats.significance import (
    significance_threshold,
    significant_pixels,
    summarize_colocalization,
)

__all__ = [
    "KendallWorkspace",
    "weighted_kendall_tau",
    "weighted_kendall_tau_pairwise",
    "apply_thresholds",
    "effective_sample_size",
    "effective_sqrt_n",
    "qnorm",
    "significance_threshold",
    "significant_pixels",
    "summarize_colocalization",
]
