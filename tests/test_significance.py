import numpy as np
import pytest

from adaptivecoloc.core.compute import adaptive_smoothed_kendall_tau
from adaptivecoloc.stats.significance import (
    significance_threshold,
    significant_pixels,
    summarize_colocalization,
)


def test_thresholds_match_normal_quantiles():
    assert significance_threshold(0.05) == pytest.approx(1.6448536269514722)
    assert significance_threshold(0.05, two_sided=True) == pytest.approx(1.959963984540054)


def test_invalid_alpha_rejected():
    with pytest.raises(ValueError, match="alpha"):
        significance_threshold(0.0)
    with pytest.raises(ValueError, match="alpha"):
        significance_threshold(1.0)


def test_significant_pixels_mask():
    out = np.array([[0.0, 1.7], [-2.0, 2.5]])
    assert significant_pixels(out, 0.05).tolist() == [[False, True], [False, True]]
    assert significant_pixels(out, 0.05, two_sided=True).tolist() == [
        [False, False],
        [True, True],
    ]


def test_summary_table_has_one_row():
    img = np.full((4, 4), 3.0)
    res = adaptive_smoothed_kendall_tau(img, img.copy(), 0.0, 0.0)
    table = summarize_colocalization(res, alpha=0.05)
    assert table.shape[0] == 1
    row = table.iloc[0]
    assert row["n_pixels"] == 16
    assert row["n_weighted"] == 16
    assert row["mean_tau"] == pytest.approx(1.0)
    assert row["frozen_fraction"] == 0.0
    assert row["final_radius"] == 7
