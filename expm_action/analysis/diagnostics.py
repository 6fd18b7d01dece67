"""
Accuracy and cost diagnostics for the matrix exponential action.

The dense reference exp(t A) B is computed with scipy.linalg.expm (Pade
approximation with scaling and squaring), which is independent of the
Taylor-based evaluator being checked.
"""

from collections import namedtuple
from typing import Iterable, List, Optional

import numpy as np
from scipy.linalg import expm

from ..core.handler import MatrixExpActionHandler
from ..core.parameters import taylor_cost


CostRecord = namedtuple('CostRecord', ['t', 'm', 's', 'cost'])


def reference_action(A, B, t: float = 1.0) -> np.ndarray:
    """
    Dense reference exp(t A) @ B.

    Parameters
    ----------
    A : array_like, shape (n, n)
        Square matrix.
    B : array_like, shape (n,) or (n, p)
        Operand.
    t : float
        Time scale.

    Returns
    -------
    np.ndarray
        Same shape as B.
    """
    A = np.asarray(A, dtype=float)
    B = np.asarray(B, dtype=float)
    if A.shape[0] == 0 or B.size == 0:
        return B.copy()
    return expm(t * A) @ B


def relative_error(A, B, t: float = 1.0,
                   handler: Optional[MatrixExpActionHandler] = None) -> float:
    """
    Normwise relative error of the handler's exp(t A) B against the reference.

    Returns max|Y - Y_ref| / max|Y_ref|, or the absolute error when the
    reference is zero.
    """
    if handler is None:
        handler = MatrixExpActionHandler()
    Y = handler.action(A, B, t)
    Y_ref = reference_action(A, B, t)
    if Y_ref.size == 0:
        return 0.0
    err = float(np.max(np.abs(Y - Y_ref)))
    scale = float(np.max(np.abs(Y_ref)))
    return err / scale if scale > 0 else err


def cost_profile(A, times: Iterable[float], n_columns: int = 1,
                 handler: Optional[MatrixExpActionHandler] = None) -> List[CostRecord]:
    """
    Selected (m, s) and product count for one matrix over several time scales.

    Parameters
    ----------
    A : array_like, shape (n, n)
        Square matrix.
    times : iterable of float
        Time scales t.
    n_columns : int
        Number of operand columns the parameters are for.
    handler : MatrixExpActionHandler, optional
        Handler whose settings are used.

    Returns
    -------
    list of CostRecord
        One (t, m, s, cost) record per time scale, cost = m * s.
    """
    if handler is None:
        handler = MatrixExpActionHandler()
    records = []
    for t in times:
        m, s = handler.select_parameters(A, t, n_columns=n_columns)
        records.append(CostRecord(float(t), m, s, taylor_cost(m, s)))
    return records
