"""
Selection of the Taylor degree m and the scaling parameter s.

exp(M) B is evaluated as (T_m(M / s))^s B, where T_m is the degree-m
Taylor polynomial. Each (m, s) costs m * s products with M, and is
accurate to unit roundoff when the norm of M / s is below the
degree-accuracy threshold theta_m. The selector picks the cheapest
accurate pair.

Everything here is a function of the scaled matrix M = t A alone, so
splitting the same product differently between t and A gives the same
parameters.
"""

import logging
import math
from collections import namedtuple

import numpy as np

from .theta import THETA_M, M_MAX, max_power
from .norms import onenorm, power_norm_estimate, EXACT_NORM_MAX_DIM
from .validation import as_square_matrix


logger = logging.getLogger(__name__)


ApproximationParameters = namedtuple('ApproximationParameters', ['m', 's'])


def taylor_cost(m: int, s: int) -> int:
    """Number of products with the matrix needed by the pair (m, s)."""
    return m * s


def _scaling(norm, m):
    """Smallest s >= 1 with norm / s <= theta_m."""
    return max(int(math.ceil(norm / THETA_M[m - 1])), 1)


def needs_power_norms(norm: float, n_columns: int = 1, m_max: int = M_MAX,
                      ell: int = 2) -> bool:
    """
    Whether estimating ||M^p||_1 can pay for itself.

    Condition (3.13) of Al-Mohy & Higham: below this bound the cost of the
    norm estimates exceeds any saving they could make in m * s, and
    ||M||_1 alone is used.
    """
    p_max = max_power(m_max)
    bound = (2 * ell * p_max * (p_max + 3) * THETA_M[m_max - 1]
             / float(max(n_columns, 1) * m_max))
    return norm > bound


def _cheapest(candidates):
    """Cheapest (m, s); ties go to the smaller degree."""
    best = None
    for m, s in candidates:
        if best is None or (taylor_cost(m, s), m) < (taylor_cost(*best), best[0]):
            best = (m, s)
    return best


def optimal_parameters(M, n_columns: int = 1, m_max: int = M_MAX,
                       ell: int = 2, itmax: int = 5, seed: int = 0,
                       exact_norm_max_dim: int = EXACT_NORM_MAX_DIM
                       ) -> ApproximationParameters:
    """
    Cheapest (m, s) for evaluating exp(M) B to unit roundoff.

    Parameters
    ----------
    M : array_like, shape (n, n)
        The scaled matrix t A.
    n_columns : int
        Number of columns of the operand B.
    m_max : int
        Largest Taylor degree considered (at most 55).
    ell : int
        Probe count of the norm estimator.
    itmax : int
        Maximum sweeps of the norm estimator.
    seed : int
        Seed of the norm estimator's probe vectors.
    exact_norm_max_dim : int
        Dimension up to which power norms are computed exactly.

    Returns
    -------
    ApproximationParameters
        (m, s). A zero matrix gives (1, 0), meaning no products at all.
        A matrix with non-finite entries gives (m_max, 1).
    """
    M = as_square_matrix(M)
    if not 1 <= m_max <= M_MAX:
        raise ValueError(f"m_max must be in [1, {M_MAX}], got {m_max}")

    norm = onenorm(M)
    if norm == 0.0:
        return ApproximationParameters(1, 0)
    if not np.isfinite(norm):
        logger.warning("Non-finite 1-norm in parameter selection; using m=%d, s=1",
                       m_max)
        return ApproximationParameters(m_max, 1)

    best = None
    if needs_power_norms(norm, n_columns, m_max, ell):
        p_max = max_power(m_max)
        d = {}
        for p in range(2, p_max + 2):
            est = power_norm_estimate(M, p, t=ell, itmax=itmax, seed=seed,
                                      exact_max_dim=exact_norm_max_dim)
            d[p] = est ** (1.0 / p)
        logger.debug("Power norm estimates d_p: %s", d)

        candidates = []
        for p in range(2, p_max + 1):
            alpha = max(d[p], d[p + 1])
            if not np.isfinite(alpha):
                continue
            for m in range(p * (p - 1) - 1, m_max + 1):
                candidates.append((m, _scaling(alpha, m)))
        best = _cheapest(candidates)

    if best is None:
        best = _cheapest((m, _scaling(norm, m)) for m in range(1, m_max + 1))

    m, s = best
    logger.debug("Selected m=%d, s=%d (||M||_1=%g, cost=%d)",
                 m, s, norm, taylor_cost(m, s))
    return ApproximationParameters(m, s)
