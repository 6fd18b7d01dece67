"""
Matrix 1-norms and estimates of the 1-norm of matrix powers.

Parameter selection needs ||M^p||_1 for several small powers p. Forming
M^p costs O(p n^3), so for all but tiny matrices the norm is estimated
with the block power method of Higham & Tisseur, which only ever applies
M (and M^T) to thin blocks of probe vectors: O(p n^2 t) per sweep for a
block of t probes.

The estimator is deterministic for a given seed, so repeated parameter
selection on the same matrix always reproduces the same estimate.

References
----------
- N. J. Higham and F. Tisseur, "A block algorithm for matrix 1-norm
  estimation, with an application to 1-norm pseudospectra",
  SIAM J. Matrix Anal. Appl. 21(4), 1185-1201 (2000)
"""

import logging

import numpy as np


logger = logging.getLogger(__name__)

# Below this dimension the exact norm of a power is cheaper than estimating it
EXACT_NORM_MAX_DIM = 4

# Attempts at redrawing a probe column that is parallel to an earlier one
_MAX_RESAMPLE = 10


def _check_power(p):
    if int(p) != p or p < 1:
        raise ValueError(f"Matrix power must be a positive integer, got {p}")


def onenorm(M) -> float:
    """
    Maximum absolute column sum of a matrix.

    Parameters
    ----------
    M : array_like, shape (n, k)
        Matrix (a transposed view is read in place).

    Returns
    -------
    float
        ||M||_1, or 0.0 for an empty matrix.
    """
    M = np.asarray(M)
    if M.size == 0:
        return 0.0
    return float(np.max(np.sum(np.abs(M), axis=0)))


def _apply_power(M, X, p):
    """Return M^p @ X using p successive products."""
    for _ in range(p):
        X = M @ X
    return X


def matrix_power_onenorm(M, p: int = 1) -> float:
    """
    Exact ||M^p||_1.

    For p > 1 the power is obtained by applying M to the identity p times,
    so this is only meant for small matrices.
    """
    _check_power(p)
    M = np.asarray(M)
    n = M.shape[0]
    if n == 0:
        return 0.0
    if p == 1:
        return onenorm(M)
    return onenorm(_apply_power(M, np.eye(n), int(p)))


def _starting_block(n, t, rng):
    """
    Initial probe block: a column of ones followed by random +-1 columns,
    each scaled by 1/n. Random columns parallel to an earlier one are redrawn.
    """
    X = np.ones((n, t))
    for j in range(1, t):
        for _ in range(_MAX_RESAMPLE):
            X[:, j] = rng.choice([-1.0, 1.0], size=n)
            if not np.any(np.abs(X[:, :j].T @ X[:, j]) == n):
                break
    return X / n


def _columns_parallel(S, S_old):
    """True if every column of S is parallel to some column of S_old."""
    n = S.shape[0]
    return bool(np.all(np.max(np.abs(S.T @ S_old), axis=1) == n))


def onenormest_power(M, p: int = 1, t: int = 2, itmax: int = 5,
                     seed: int = 0) -> float:
    """
    Estimate ||M^p||_1 without forming M^p.

    Block power iteration over t probe vectors (Higham & Tisseur,
    algorithm 2.4). Each sweep applies M^p to the probe block and
    (M^T)^p to its sign pattern; the next probes are the unit vectors
    where the gradient is largest. At most `itmax` sweeps are made.

    Parameters
    ----------
    M : array_like, shape (n, n)
        Square matrix.
    p : int
        Power of M whose norm is estimated.
    t : int
        Number of probe vectors (columns of the block).
    itmax : int
        Maximum number of sweeps.
    seed : int
        Seed of the generator drawing the random probe columns.

    Returns
    -------
    float
        A lower bound on ||M^p||_1 that is exact in many cases and rarely
        more than a factor 3 below it for t = 2. Non-finite input may give
        a non-finite result.
    """
    _check_power(p)
    if t < 1 or itmax < 1:
        raise ValueError(f"Need t >= 1 and itmax >= 1, got t={t}, itmax={itmax}")
    M = np.asarray(M)
    n = M.shape[0]
    if n == 0:
        return 0.0
    p = int(p)
    t = min(t, n)

    rng = np.random.default_rng(seed)
    X = _starting_block(n, t, rng)
    probe_index = None
    visited = np.zeros(n, dtype=bool)
    best_index = None
    est_old = 0.0
    S_old = None

    for k in range(itmax):
        Y = _apply_power(M, X, p)
        col_sums = np.sum(np.abs(Y), axis=0)
        j = int(np.argmax(col_sums))
        est = float(col_sums[j])
        if k > 0 and est <= est_old:
            est = est_old
            break
        est_old = est
        if probe_index is not None:
            best_index = probe_index[j]

        S = np.where(Y >= 0, 1.0, -1.0)
        if S_old is not None and _columns_parallel(S, S_old):
            break
        S_old = S

        Z = _apply_power(M.T, S, p)
        h = np.max(np.abs(Z), axis=1)
        if best_index is not None and np.max(h) == h[best_index]:
            break

        order = np.argsort(-h, kind='stable')
        order = order[~visited[order]]
        if order.size == 0:
            break
        probe_index = order[:t]
        visited[probe_index] = True
        X = np.zeros((n, probe_index.size))
        X[probe_index, np.arange(probe_index.size)] = 1.0

    logger.debug("onenormest_power: p=%d, n=%d, sweeps=%d, estimate=%g",
                 p, n, k + 1, est_old)
    return est_old


def power_norm_estimate(M, p: int = 1, t: int = 2, itmax: int = 5,
                        seed: int = 0,
                        exact_max_dim: int = EXACT_NORM_MAX_DIM) -> float:
    """
    ||M^p||_1, exact when that is cheap and estimated otherwise.

    The exact value is used for p = 1 (a column sum), and whenever the
    dimension is at most max(exact_max_dim, t), where applying M to the
    full identity costs no more than a single estimator sweep.
    """
    _check_power(p)
    M = np.asarray(M)
    n = M.shape[0]
    if p == 1 or n <= max(exact_max_dim, t):
        return matrix_power_onenorm(M, p)
    return onenormest_power(M, p, t=t, itmax=itmax, seed=seed)
