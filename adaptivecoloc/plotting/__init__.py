"""Plotting helpers for colocalization maps."""

from adaptivecoloc.plotting.maps import (
    plot_colocalization_maps,
    plot_colocalization_maps_to_file,
)
from adaptivecoloc.plotting.styles import DEFAULT_PLOT_STYLE, PlotStyle, apply_plot_style
from adaptivecoloc.plotting.utils import save_figure

__all__ = [
    "DEFAULT_PLOT_STYLE",
    "PlotStyle",
    "apply_plot_style",
    "plot_colocalization_maps",
    "plot_colocalization_maps_to_file",
    "save_figure",
]
