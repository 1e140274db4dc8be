"""Adaptive smoothed Kendall tau scan (no plotting, no filesystem I/O)."""

from __future__ import annotations

import logging
from contextlib import nullcontext

import numpy as np
from joblib import Parallel, delayed

from adaptivecoloc.core.kernel import kernel_generate
from adaptivecoloc.core.sampler import LocalSample, gather_local_sample
from adaptivecoloc.core.types import DEFAULT_CONFIG, ASKTConfig, ASKTResult, ScanMaps
from adaptivecoloc.core.utils import (
    decorrelation_scale,
    finite_scalar,
    pixel_rng,
    real_2d,
)
from adaptivecoloc.stats.kendall import KendallWorkspace, weighted_kendall_tau
from adaptivecoloc.stats.ntau import effective_sqrt_n

LOGGER_NAME = "adaptivecoloc"


def _scan_rows(
    row_start: int,
    row_stop: int,
    round_index: int,
    image1: np.ndarray,
    image2: np.ndarray,
    old_tau: np.ndarray,
    old_sqrt_n: np.ndarray,
    frozen: np.ndarray,
    kernel: np.ndarray,
    thres1: float,
    thres2: float,
    dn: float,
    seed: int,
    skip_frozen: bool,
    output_scale: float,
) -> tuple[int, np.ndarray, np.ndarray, np.ndarray]:
    """Update tau, sqrt(N) and the output statistic for rows ``[row_start, row_stop)``.

    Frozen pixels are left at zero; the driver carries their state over.
    """
    n_cols = int(image1.shape[1])
    tau_block = np.zeros((row_stop - row_start, n_cols), dtype=float)
    sqrt_n_block = np.zeros((row_stop - row_start, n_cols), dtype=float)
    out_block = np.zeros((row_stop - row_start, n_cols), dtype=float)
    sample = LocalSample.allocate(kernel.size)
    workspace = KendallWorkspace.allocate(kernel.size)

    for row in range(row_start, row_stop):
        for col in range(n_cols):
            if skip_frozen and frozen[row, col]:
                continue
            x, y, w = gather_local_sample(
                image1, image2, old_tau, old_sqrt_n, kernel, row, col, dn, buffers=sample
            )
            sqrt_n = effective_sqrt_n(w, x, y, thres1, thres2)
            sqrt_n_block[row - row_start, col] = sqrt_n
            if sqrt_n > 0:
                rng = pixel_rng(seed, round_index, row, col)
                tau = weighted_kendall_tau(x, y, w, workspace=workspace, rng=rng)
                tau_block[row - row_start, col] = tau
                out_block[row - row_start, col] = tau * sqrt_n * output_scale
    return row_start, tau_block, sqrt_n_block, out_block


def _row_blocks(n_rows: int, rows_per_task: int) -> list[tuple[int, int]]:
    step = max(1, int(rows_per_task))
    return [(start, min(start + step, n_rows)) for start in range(0, n_rows, step)]


def _check_result_array(result, shape: tuple[int, int]) -> np.ndarray:
    if not isinstance(result, np.ndarray):
        raise ValueError(f"result must be a numpy array, got {type(result).__name__}.")
    if result.shape != shape:
        raise ValueError(f"result shape {result.shape} does not match image shape {shape}.")
    if not result.flags.writeable:
        raise ValueError("result array is read-only.")
    return result


def adaptive_smoothed_kendall_tau(
    image1,
    image2,
    thres1: float,
    thres2: float,
    result: np.ndarray | None = None,
    seed: int = 0,
    parallel: bool = False,
    *,
    config: ASKTConfig | None = None,
    logger: logging.Logger | None = None,
) -> ASKTResult:
    """Compute the adaptive smoothed Kendall tau colocalization map.

    Each round grows the neighborhood radius geometrically, re-estimates a
    kernel- and tau-weighted Kendall tau around every active pixel, and, after
    the warm-up round, freezes pixels whose estimate drifts beyond the global
    scale, rolling back that round's update for them.

    Args:
        image1, image2: Equal-shaped 2D real grids (one per channel).
        thres1, thres2: Samples below either threshold get zero weight.
        result: Optional preallocated array of the image shape; filled in place
            with ``tau * sqrt(N) * output_scale``. A pixel that freezes keeps
            the output of the round that froze it.
        seed: Seed for tie-breaking. Each pixel and round gets its own stream,
            so serial and parallel runs agree exactly.
        parallel: Process row blocks with joblib.
        config: Scan constants; defaults to `DEFAULT_CONFIG`.
        logger: Logger for progress messages.

    Returns:
        `ASKTResult` with the final maps.
    """
    cfg = (config or DEFAULT_CONFIG).validate()
    log = logger or logging.getLogger(LOGGER_NAME)

    img1 = real_2d("image1", image1)
    img2 = real_2d("image2", image2)
    if img1.shape != img2.shape:
        raise ValueError(f"image1 shape {img1.shape} does not match image2 shape {img2.shape}.")
    shape = (int(img1.shape[0]), int(img1.shape[1]))
    if result is not None:
        result = _check_result_array(result, shape)
    t1 = finite_scalar("thres1", thres1)
    t2 = finite_scalar("thres2", thres2)

    dn = decorrelation_scale(shape)
    stop_scale = dn
    maps = ScanMaps.allocate(shape, cfg.intermediate_dtype)
    radii = cfg.radii()
    blocks = _row_blocks(shape[0], cfg.rows_per_task) if parallel else [(0, shape[0])]
    checking = False
    n_frozen: list[int] = []

    log.info(
        "ASKT scan: shape=%s rounds=%d warmup=%d parallel=%s seed=%d",
        shape,
        len(radii),
        cfg.warmup_round,
        bool(parallel),
        int(seed),
    )

    runner = Parallel(n_jobs=cfg.n_jobs, backend=cfg.backend) if parallel else nullcontext()
    with runner as pool:
        for s, radius in enumerate(radii):
            kernel = kernel_generate(radius, cfg.kernel_reach)
            args = (
                s,
                img1,
                img2,
                maps.old_tau,
                maps.old_sqrt_n,
                maps.stop,
                kernel,
                t1,
                t2,
                dn,
                int(seed),
                checking,
                float(cfg.output_scale),
            )
            if pool is None:
                rows = [_scan_rows(start, stop, *args) for start, stop in blocks]
            else:
                rows = pool(delayed(_scan_rows)(start, stop, *args) for start, stop in blocks)
            for start, tau_block, sqrt_n_block, out_block in rows:
                stop_row = start + tau_block.shape[0]
                maps.new_tau[start:stop_row] = tau_block
                maps.new_sqrt_n[start:stop_row] = sqrt_n_block
                active = ~maps.stop[start:stop_row]
                maps.output[start:stop_row][active] = out_block[active]

            newly_frozen = 0
            if checking:
                frozen = maps.stop
                maps.new_tau[frozen] = maps.old_tau[frozen]
                maps.new_sqrt_n[frozen] = maps.old_sqrt_n[frozen]
                drift = np.abs(maps.stop_tau - maps.new_tau) * maps.stop_sqrt_n
                newly = ~frozen & (drift > stop_scale)
                # output keeps the attempted update; only tau and sqrt(N) revert
                maps.new_tau[newly] = maps.old_tau[newly]
                maps.new_sqrt_n[newly] = maps.old_sqrt_n[newly]
                maps.stop |= newly
                newly_frozen = int(newly.sum())

            if s == cfg.warmup_round:
                maps.stop_tau[...] = maps.new_tau
                maps.stop_sqrt_n[...] = maps.new_sqrt_n
                checking = True

            n_frozen.append(int(maps.stop.sum()))
            log.debug(
                "round=%d radius=%d newly_frozen=%d frozen=%d",
                s,
                radius,
                newly_frozen,
                n_frozen[-1],
            )
            maps.swap()

    tau = np.array(maps.old_tau, dtype=float)
    sqrt_n = np.array(maps.old_sqrt_n, dtype=float)
    output = maps.output.copy()
    if result is not None:
        np.copyto(result, output, casting="unsafe")

    log.info(
        "ASKT scan complete: frozen=%d/%d final_radius=%d",
        n_frozen[-1],
        tau.size,
        radii[-1],
    )
    meta = {
        "shape": list(shape),
        "seed": int(seed),
        "thres1": t1,
        "thres2": t2,
        "parallel": bool(parallel),
        "decorrelation_scale": float(dn),
        "config": cfg.to_dict(),
    }
    return ASKTResult(
        output=output,
        tau=tau,
        sqrt_n=sqrt_n,
        frozen=maps.stop.copy(),
        radii=tuple(radii),
        n_frozen_per_round=tuple(n_frozen),
        metadata=meta,
    )
