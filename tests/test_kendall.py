import numpy as np
import pytest

from adaptivecoloc.stats.kendall import (
    KendallWorkspace,
    weighted_kendall_tau,
    weighted_kendall_tau_pairwise,
)


def test_matches_pairwise_oracle_without_ties():
    rng = np.random.default_rng(0)
    for n in [2, 3, 7, 16, 49, 121]:
        x = rng.normal(size=n)
        y = 0.5 * x + rng.normal(size=n)
        w = rng.random(n)
        w[rng.random(n) < 0.2] = 0.0
        fast = weighted_kendall_tau(x, y, w, rng=np.random.default_rng(1))
        slow = weighted_kendall_tau_pairwise(x, y, w)
        assert fast == pytest.approx(slow, abs=1e-12)


def test_matches_pairwise_oracle_with_ties():
    rng = np.random.default_rng(4)
    for n in [5, 25, 81]:
        x = rng.integers(0, 4, size=n).astype(float)
        y = rng.integers(0, 3, size=n).astype(float)
        w = rng.random(n)
        w[::5] = 0.0
        m = int(np.count_nonzero(w > 0))
        fast = weighted_kendall_tau(x, y, w, rng=np.random.default_rng(9))
        tie_key = np.random.default_rng(9).random(m)
        slow = weighted_kendall_tau_pairwise(x, y, w, tie_key=tie_key)
        assert fast == pytest.approx(slow, abs=1e-12)


def test_unweighted_matches_classic_tau_a():
    x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    y = np.array([2.0, 1.0, 4.0, 3.0, 5.0])
    # 10 pairs, 2 discordant
    assert weighted_kendall_tau(x, y, np.ones(5)) == pytest.approx(0.6)


def test_perfect_agreement_and_reversal():
    x = np.arange(10, dtype=float)
    w = np.linspace(0.1, 1.0, 10)
    assert weighted_kendall_tau(x, 2.0 * x + 1.0, w) == pytest.approx(1.0)
    assert weighted_kendall_tau(x, -x, w) == pytest.approx(-1.0)


def test_all_tied_samples_agree_fully():
    x = np.full(9, 3.0)
    tau = weighted_kendall_tau(x, x.copy(), np.ones(9), rng=np.random.default_rng(123))
    assert tau == 1.0


def test_range_bound_random_inputs():
    rng = np.random.default_rng(11)
    for _ in range(50):
        n = int(rng.integers(2, 60))
        x = rng.integers(0, 5, size=n).astype(float)
        y = rng.normal(size=n)
        w = rng.random(n) + 1e-3
        tau = weighted_kendall_tau(x, y, w, rng=rng)
        assert -1.0 <= tau <= 1.0


def test_zero_weight_samples_do_not_contribute():
    rng = np.random.default_rng(2)
    x = rng.normal(size=12)
    y = rng.normal(size=12)
    w = rng.random(12)
    base = weighted_kendall_tau(x, y, w)
    x_pad = np.concatenate([x, [100.0, -100.0, 0.0]])
    y_pad = np.concatenate([y, [-100.0, 100.0, 0.0]])
    w_pad = np.concatenate([w, [0.0, 0.0, 0.0]])
    assert weighted_kendall_tau(x_pad, y_pad, w_pad) == pytest.approx(base, abs=1e-15)


def test_fewer_than_two_weighted_samples_gives_zero():
    x = np.array([1.0, 2.0, 3.0])
    assert weighted_kendall_tau(x, x, np.array([0.0, 1.0, 0.0])) == 0.0
    assert weighted_kendall_tau(x, x, np.zeros(3)) == 0.0


def test_seed_only_matters_through_ties():
    rng = np.random.default_rng(3)
    x = rng.normal(size=30)
    y = rng.normal(size=30)
    w = rng.random(30)
    a = weighted_kendall_tau(x, y, w, rng=np.random.default_rng(1))
    b = weighted_kendall_tau(x, y, w, rng=np.random.default_rng(2))
    assert a == b


def test_deterministic_for_fixed_seed_with_ties():
    x = np.array([1.0, 1.0, 2.0, 2.0, 3.0, 3.0])
    y = np.array([5.0, 4.0, 4.0, 5.0, 4.0, 5.0])
    w = np.ones(6)
    a = weighted_kendall_tau(x, y, w, rng=np.random.default_rng(77))
    b = weighted_kendall_tau(x, y, w, rng=np.random.default_rng(77))
    assert a == b


def test_workspace_reuse_across_sizes():
    ws = KendallWorkspace.allocate(20)
    rng = np.random.default_rng(8)
    for n in [20, 5, 13]:
        x = rng.normal(size=n)
        y = rng.normal(size=n)
        w = rng.random(n)
        assert weighted_kendall_tau(x, y, w, workspace=ws) == pytest.approx(
            weighted_kendall_tau_pairwise(x, y, w), abs=1e-12
        )


def test_length_mismatch_and_negative_weights_raise():
    with pytest.raises(ValueError, match="same length"):
        weighted_kendall_tau(np.ones(3), np.ones(4), np.ones(3))
    with pytest.raises(ValueError, match="non-negative"):
        weighted_kendall_tau(np.arange(3.0), np.arange(3.0), np.array([1.0, -1.0, 1.0]))
