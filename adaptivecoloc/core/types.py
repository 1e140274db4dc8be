"""Typed configuration and result containers for the adaptive Kendall tau scan."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np

_BACKENDS = ("loky", "threading", "multiprocessing")


@dataclass(frozen=True)
class ASKTConfig:
    """Scan constants for one adaptive smoothed Kendall tau run."""

    n_rounds: int = 15
    warmup_round: int = 8
    step_size: float = 1.15
    output_scale: float = 1.5
    kernel_reach: float = math.sqrt(2.5)
    intermediate_dtype: str = "float64"
    n_jobs: int = -1
    backend: str = "loky"
    rows_per_task: int = 8

    def validate(self) -> "ASKTConfig":
        if int(self.n_rounds) < 1:
            raise ValueError("n_rounds must be >= 1.")
        if not 0 <= int(self.warmup_round) < int(self.n_rounds):
            raise ValueError(
                f"warmup_round must lie in [0, n_rounds), got {self.warmup_round}."
            )
        if not float(self.step_size) > 1.0:
            raise ValueError("step_size must be > 1.")
        if not float(self.kernel_reach) > 0.0:
            raise ValueError("kernel_reach must be positive.")
        if not np.issubdtype(np.dtype(self.intermediate_dtype), np.floating):
            raise ValueError(
                f"intermediate_dtype must be a floating dtype, got '{self.intermediate_dtype}'."
            )
        if self.backend not in _BACKENDS:
            raise ValueError(
                f"Unknown backend '{self.backend}'. Use one of: {', '.join(_BACKENDS)}."
            )
        if int(self.n_jobs) == 0:
            raise ValueError("n_jobs must be non-zero.")
        if int(self.rows_per_task) < 1:
            raise ValueError("rows_per_task must be >= 1.")
        return self

    def radii(self) -> list[int]:
        """Integer neighborhood radius used in each round."""
        out: list[int] = []
        size = 1.0
        for _ in range(int(self.n_rounds)):
            out.append(int(math.floor(size)))
            size *= float(self.step_size)
        return out

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = ASKTConfig()


@dataclass
class ScanMaps:
    """Double-buffered per-pixel state owned by the iteration driver.

    ``stop`` holds the frozen flag; ``stop_tau``/``stop_sqrt_n`` hold the
    snapshot taken at the warm-up round. ``output`` is single-buffered: it is
    written for every active pixel and never rolled back.
    """

    old_tau: np.ndarray
    new_tau: np.ndarray
    old_sqrt_n: np.ndarray
    new_sqrt_n: np.ndarray
    stop: np.ndarray
    stop_tau: np.ndarray
    stop_sqrt_n: np.ndarray
    output: np.ndarray

    @classmethod
    def allocate(cls, shape: tuple[int, int], dtype: str = "float64") -> "ScanMaps":
        dt = np.dtype(dtype)
        return cls(
            old_tau=np.zeros(shape, dtype=dt),
            new_tau=np.zeros(shape, dtype=dt),
            old_sqrt_n=np.ones(shape, dtype=dt),
            new_sqrt_n=np.zeros(shape, dtype=dt),
            stop=np.zeros(shape, dtype=bool),
            stop_tau=np.zeros(shape, dtype=dt),
            stop_sqrt_n=np.zeros(shape, dtype=dt),
            output=np.zeros(shape, dtype=float),
        )

    def swap(self) -> None:
        """Promote this round's maps to "old" without copying."""
        self.old_tau, self.new_tau = self.new_tau, self.old_tau
        self.old_sqrt_n, self.new_sqrt_n = self.new_sqrt_n, self.old_sqrt_n


@dataclass(frozen=True)
class ASKTResult:
    """Output of `adaptive_smoothed_kendall_tau`.

    - `output`: colocalization statistic tau * sqrt(N) * output_scale from the
      last round each pixel was active. For a frozen pixel this is the round
      that froze it, while `tau` and `sqrt_n` hold the rolled-back values.
    - `frozen`: pixels excluded from bandwidth growth after the warm-up round.
    """

    output: np.ndarray
    tau: np.ndarray
    sqrt_n: np.ndarray
    frozen: np.ndarray
    radii: tuple[int, ...]
    n_frozen_per_round: tuple[int, ...]
    metadata: dict[str, Any] = field(default_factory=dict)
