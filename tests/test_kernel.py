import math

import numpy as np
import pytest

from adaptivecoloc.core.kernel import kernel_generate, update_range


def test_kernel_shape_and_center():
    for r in [1, 2, 5]:
        k = kernel_generate(r)
        assert k.shape == (2 * r + 1, 2 * r + 1)
        assert k[r, r] == 1.0


def test_kernel_radius_zero_is_single_pixel():
    assert np.array_equal(kernel_generate(0), np.ones((1, 1)))


def test_kernel_fourfold_symmetry():
    for r in range(0, 7):
        k = kernel_generate(r)
        c = r
        for i in range(r + 1):
            for j in range(r + 1):
                v = k[c + i, c + j]
                assert k[c - i, c + j] == v
                assert k[c + i, c - j] == v
                assert k[c - i, c - j] == v


def test_kernel_decays_to_zero_outside_reach():
    for r in range(1, 8):
        k = kernel_generate(r)
        for i in range(-r, r + 1):
            for j in range(-r, r + 1):
                if math.sqrt(i * i + j * j) >= r * math.sqrt(2.5):
                    assert k[r + i, r + j] == 0.0
                else:
                    assert 0.0 < k[r + i, r + j] <= 1.0


def test_kernel_radius_one_corner_weight():
    k = kernel_generate(1)
    expected = 1.0 - math.sqrt(2.0) / math.sqrt(2.5)
    assert k[0, 0] == pytest.approx(expected)
    assert k[0, 1] == pytest.approx(1.0 - 1.0 / math.sqrt(2.5))


def test_kernel_is_read_only():
    k = kernel_generate(2)
    with pytest.raises(ValueError):
        k[0, 0] = 5.0


def test_kernel_negative_radius_raises():
    with pytest.raises(ValueError, match="radius"):
        kernel_generate(-1)


def test_update_range_clamps_to_grid():
    assert update_range(0, 2, 10) == (0, 2)
    assert update_range(5, 2, 10) == (3, 7)
    assert update_range(9, 3, 10) == (6, 9)
    assert update_range(1, 5, 3) == (0, 2)
