"""Map plotting primitives bound to `ASKTResult` objects."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from adaptivecoloc.core.types import ASKTResult
from adaptivecoloc.plotting.styles import DEFAULT_PLOT_STYLE, PlotStyle
from adaptivecoloc.plotting.utils import save_figure


def _symmetric_limit(values: np.ndarray) -> float:
    arr = np.asarray(values, dtype=float)
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        return 1.0
    lim = float(np.max(np.abs(finite)))
    return lim if lim > 0 else 1.0


def plot_colocalization_maps(
    result: ASKTResult,
    *,
    title: str | None = None,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
) -> tuple[plt.Figure, np.ndarray]:
    """Output map, tau map and frozen mask side by side (no recomputation)."""
    if result.output.shape != result.tau.shape or result.tau.shape != result.frozen.shape:
        raise ValueError("result maps have inconsistent shapes.")

    w, h = style.panel_size
    fig, axes = plt.subplots(1, 3, figsize=(3 * w, h))

    lim = _symmetric_limit(result.output)
    im0 = axes[0].imshow(result.output, cmap=style.output_cmap, vmin=-lim, vmax=lim)
    axes[0].set_title("colocalization")
    fig.colorbar(im0, ax=axes[0], shrink=style.colorbar_shrink, pad=style.colorbar_pad)

    im1 = axes[1].imshow(result.tau, cmap=style.tau_cmap, vmin=-1.0, vmax=1.0)
    axes[1].set_title("tau")
    fig.colorbar(im1, ax=axes[1], shrink=style.colorbar_shrink, pad=style.colorbar_pad)

    axes[2].imshow(result.frozen.astype(float), cmap=style.frozen_cmap, vmin=0.0, vmax=1.0)
    axes[2].set_title(f"frozen ({int(result.frozen.sum())} px)")

    for ax in axes:
        ax.set_xticks([])
        ax.set_yticks([])
    if title:
        fig.suptitle(title)
    fig.tight_layout()
    return fig, axes


def plot_colocalization_maps_to_file(
    result: ASKTResult,
    out_png: str | Path,
    *,
    title: str | None = None,
    style: PlotStyle = DEFAULT_PLOT_STYLE,
) -> Path:
    out_path = Path(out_png)
    fig, _ = plot_colocalization_maps(result, title=title, style=style)
    save_figure(fig, out_path, style=style)
    return out_path
