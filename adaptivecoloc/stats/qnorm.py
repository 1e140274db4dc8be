"""Normal quantile function."""

from __future__ import annotations

import numpy as np
from scipy.stats import norm


def qnorm(
    p,
    mean: float = 0.0,
    sd: float = 1.0,
    lower_tail: bool = True,
    log_p: bool = False,
):
    """Inverse CDF of Normal(mean, sd).

    ``p`` outside ``[0, 1]`` (after exponentiation when ``log_p``) gives NaN
    rather than raising. ``p = 0`` and ``p = 1`` map to ``-inf``/``+inf`` on the
    lower tail and to ``+inf``/``-inf`` on the upper tail. Scalars in, float out;
    arrays in, arrays out.

    ``qnorm(0)`` is ``-inf``, not the ``+inf`` sentinel some ports return for
    both ends. The upper tail uses ``norm.isf`` instead of negating the
    lower-tail quantile; the two only agree when ``mean = 0``.
    """
    prob = np.asarray(p, dtype=float)
    if log_p:
        prob = np.exp(prob)
    with np.errstate(invalid="ignore"):
        if lower_tail:
            q = norm.ppf(prob, loc=mean, scale=sd)
        else:
            q = norm.isf(prob, loc=mean, scale=sd)
    q = np.where((prob < 0.0) | (prob > 1.0), np.nan, q)
    if q.ndim == 0:
        return float(q)
    return q
