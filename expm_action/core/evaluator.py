"""
Evaluation of exp(t A) B by a scaled, truncated Taylor series.

With exp(t A) = (exp(t A / s))^s, each of the s stages replaces its input
block F by T_m(t A / s) F, accumulating the series term by term:

    T_0 = F,    T_k = (t / (s k)) A T_{k-1},    F <- F + T_1 + ... + T_m

Only products of A with n x p blocks are formed; no power of A and no
exponential of A is ever materialised. A is only read through `A @ X`,
so a transposed view is used in place.
"""

import logging

import numpy as np

from .theta import UNIT_ROUNDOFF
from .validation import as_count, as_operand, as_scale, as_square_matrix


logger = logging.getLogger(__name__)


def _inf_norm(X):
    """Infinity norm of a vector, or maximum absolute row sum of a block."""
    if X.ndim == 1:
        return np.max(np.abs(X))
    return np.max(np.sum(np.abs(X), axis=1))


def taylor_stages(A, B, t, m, s, tol=UNIT_ROUNDOFF, early_stop=True, eta=1.0):
    """
    Run the s scaled Taylor stages on B.

    Parameters
    ----------
    A : np.ndarray, shape (n, n)
        Real matrix, read only.
    B : np.ndarray, shape (n,) or (n, p)
        Operand, not modified. Must be non-empty.
    t : float
        Time scale.
    m, s : int
        Taylor degree and number of stages.
    tol : float
        Relative size of two successive terms below which the rest of a
        stage's series is dropped.
    early_stop : bool
        If False every stage applies exactly m terms.
    eta : float
        Factor applied to each stage's output (exp(t mu / s) when A has
        been shifted by mu I, 1 otherwise).

    Returns
    -------
    F : np.ndarray
        exp(t A) B, same shape as B.
    n_products : int
        Number of products with A that were performed.
    """
    F = np.array(B, dtype=float, copy=True)
    n_products = 0
    if s == 0:
        return F, n_products

    for _ in range(s):
        T = F
        c1 = _inf_norm(T)
        for k in range(1, m + 1):
            T = (t / (s * k)) * (A @ T)
            n_products += 1
            F += T
            if early_stop:
                c2 = _inf_norm(T)
                if c1 + c2 <= tol * _inf_norm(F):
                    break
                c1 = c2
        if eta != 1.0:
            F *= eta

    logger.debug("Taylor stages: m=%d, s=%d, products=%d", m, s, n_products)
    return F, n_products


def apply_taylor(A, B, t=1.0, m=1, s=1, tol=UNIT_ROUNDOFF, early_stop=True):
    """
    Apply (T_m(t A / s))^s to B.

    The caller chooses (m, s), typically from `select_parameters`. s = 0
    returns a copy of B.

    Parameters
    ----------
    A : array_like, shape (n, n)
        Square real matrix.
    B : array_like, shape (n,) or (n, p)
        Operand.
    t : float
        Time scale.
    m : int
        Taylor degree, at least 1.
    s : int
        Number of scaling stages, at least 0.
    tol : float
        Early termination tolerance of each stage.
    early_stop : bool
        Allow a stage to stop before m terms once they are negligible.

    Returns
    -------
    np.ndarray
        Same shape as B.

    Raises
    ------
    ValueError
        If m or s is not an integer in range, A is not square, B does not
        have n rows, t is not a scalar, or any input is complex.
    """
    m = as_count(m, "Taylor degree m", 1)
    s = as_count(s, "Number of stages s", 0)
    A = as_square_matrix(A)
    B = as_operand(B, A.shape[0])
    t = as_scale(t)
    if B.size == 0:
        return B.copy()
    F, _ = taylor_stages(A, B, t, m, s, tol=tol, early_stop=early_stop)
    return F
