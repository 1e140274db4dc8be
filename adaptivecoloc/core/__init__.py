"""Core compute subpackage."""

from adaptivecoloc.core.compute import adaptive_smoothed_kendall_tau
from adaptivecoloc.core.kernel import kernel_generate, update_range
from adaptivecoloc.core.sampler import LocalSample, gather_local_sample
from adaptivecoloc.core.types import DEFAULT_CONFIG, ASKTConfig, ASKTResult, ScanMaps

__all__ = [
    "ASKTConfig",
    "ASKTResult",
    "DEFAULT_CONFIG",
    "ScanMaps",
    "LocalSample",
    "adaptive_smoothed_kendall_tau",
    "gather_local_sample",
    "kernel_generate",
    "update_range",
]
