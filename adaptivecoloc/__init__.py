"""Adaptive colocalization public API."""

from adaptivecoloc._version import __version__
from adaptivecoloc.core.compute import adaptive_smoothed_kendall_tau
from adaptivecoloc.core.kernel import kernel_generate
from adaptivecoloc.core.types import ASKTConfig, ASKTResult
from adaptivecoloc.stats.kendall import weighted_kendall_tau
from adaptivecoloc.stats.ntau import effective_sample_size, effective_sqrt_n
from adaptivecoloc.stats.qnorm import qnorm


def plot_colocalization_maps(*args, **kwargs):
    """Lazy wrapper to avoid importing matplotlib at import time."""
    from adaptivecoloc.plotting.maps import plot_colocalization_maps as _plot

    return _plot(*args, **kwargs)


__all__ = [
    "__version__",
    "ASKTConfig",
    "ASKTResult",
    "adaptive_smoothed_kendall_tau",
    "kernel_generate",
    "weighted_kendall_tau",
    "effective_sample_size",
    "effective_sqrt_n",
    "qnorm",
    "plot_colocalization_maps",
]
