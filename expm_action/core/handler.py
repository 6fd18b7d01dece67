"""
Public entry points for the action of the matrix exponential.

`MatrixExpActionHandler` validates its inputs, selects (m, s) for the
scaled matrix t A and runs the Taylor stages. The module-level functions
share one default handler; handlers hold no mutable state, so a single
instance can serve concurrent callers.
"""

import dataclasses
import logging
from collections import namedtuple
from dataclasses import dataclass

import numpy as np

from .theta import M_MAX, UNIT_ROUNDOFF
from .norms import EXACT_NORM_MAX_DIM
from .parameters import ApproximationParameters, optimal_parameters
from .evaluator import taylor_stages
from .validation import as_operand, as_scale, as_square_matrix


logger = logging.getLogger(__name__)


ActionInfo = namedtuple('ActionInfo', ['m', 's', 'n_products', 'mu'])


@dataclass(frozen=True)
class ActionConfig:
    """
    Settings of a `MatrixExpActionHandler`.

    Parameters
    ----------
    m_max : int
        Largest Taylor degree considered, in [1, 55].
    tol : float
        Early termination tolerance of each Taylor stage.
    early_stop : bool
        Drop the tail of a stage's series once its terms are negligible.
    shift : bool
        Shift A by trace(A)/n times the identity before selecting (m, s),
        and fold exp(t mu) back into the result.
    norm_probes : int
        Number of probe vectors of the 1-norm estimator.
    norm_itmax : int
        Maximum sweeps of the 1-norm estimator.
    norm_seed : int
        Seed of the 1-norm estimator's random probes.
    exact_norm_max_dim : int
        Dimension up to which norms of matrix powers are computed exactly.
    """

    m_max: int = M_MAX
    tol: float = UNIT_ROUNDOFF
    early_stop: bool = True
    shift: bool = False
    norm_probes: int = 2
    norm_itmax: int = 5
    norm_seed: int = 0
    exact_norm_max_dim: int = EXACT_NORM_MAX_DIM

    def __post_init__(self):
        if not 1 <= self.m_max <= M_MAX:
            raise ValueError(f"m_max must be in [1, {M_MAX}], got {self.m_max}")
        if not self.tol > 0:
            raise ValueError(f"tol must be positive, got {self.tol}")
        if self.norm_probes < 1:
            raise ValueError(f"norm_probes must be at least 1, got {self.norm_probes}")
        if self.norm_itmax < 1:
            raise ValueError(f"norm_itmax must be at least 1, got {self.norm_itmax}")
        if self.exact_norm_max_dim < 0:
            raise ValueError("exact_norm_max_dim must be non-negative, "
                             f"got {self.exact_norm_max_dim}")


class MatrixExpActionHandler:
    """
    Computes exp(t A) B without forming exp(t A).

    Parameters
    ----------
    config : ActionConfig, optional
        Settings; defaults to `ActionConfig()`.
    **overrides
        Individual `ActionConfig` fields replacing those of `config`.

    Examples
    --------
    >>> handler = MatrixExpActionHandler()
    >>> A = np.array([[1.0, 0.0], [0.0, 2.0]])
    >>> handler.action(A, np.ones(2))
    array([2.71828183, 7.3890561 ])
    """

    def __init__(self, config=None, **overrides):
        if config is None:
            config = ActionConfig(**overrides)
        elif overrides:
            config = dataclasses.replace(config, **overrides)
        self._config = config

    @property
    def config(self) -> ActionConfig:
        """Settings of this handler."""
        return self._config

    def _optimal_parameters(self, M, n_columns):
        cfg = self._config
        return optimal_parameters(
            M, n_columns=n_columns, m_max=cfg.m_max, ell=cfg.norm_probes,
            itmax=cfg.norm_itmax, seed=cfg.norm_seed,
            exact_norm_max_dim=cfg.exact_norm_max_dim,
        )

    def select_parameters(self, A, t=1.0, n_columns=1) -> ApproximationParameters:
        """
        Taylor degree m and number of stages s for exp(t A).

        Depends only on the product t A: select_parameters(A, t1) equals
        select_parameters(t1 * A, 1.0).

        Parameters
        ----------
        A : array_like, shape (n, n)
            Square real matrix.
        t : float
            Time scale.
        n_columns : int
            Number of columns of the operand the parameters are for.

        Returns
        -------
        ApproximationParameters
            (m, s), with s = 0 when t A is zero.
        """
        A = as_square_matrix(A)
        t = as_scale(t)
        return self._optimal_parameters(t * A, n_columns)

    def action(self, A, B, t=1.0, return_info=False):
        """
        Compute exp(t A) B.

        Parameters
        ----------
        A : array_like, shape (n, n)
            Square real matrix (a transposed view is fine).
        B : array_like, shape (n,) or (n, p)
            Vector or block of column vectors.
        t : float
            Time scale, any sign. t = 0 returns a copy of B.
        return_info : bool
            Also return an `ActionInfo` with the parameters used.

        Returns
        -------
        np.ndarray
            exp(t A) B, same shape as B.
        ActionInfo
            Only if `return_info` is True.

        Raises
        ------
        ValueError
            If A is not square, B does not have n rows, t is not a scalar,
            or any input is complex.
        """
        A = as_square_matrix(A)
        n = A.shape[0]
        B = as_operand(B, n)
        t = as_scale(t)

        if B.size == 0:
            Y = B.copy()
            info = ActionInfo(1, 0, 0, 0.0)
            return (Y, info) if return_info else Y

        mu = 0.0
        if self._config.shift:
            mu = float(np.trace(A)) / n
            A = A - mu * np.eye(n)

        n_columns = 1 if B.ndim == 1 else B.shape[1]
        m, s = self._optimal_parameters(t * A, n_columns)

        if s == 0:
            Y = B.copy()
            if mu != 0.0:
                Y *= np.exp(t * mu)
            n_products = 0
        else:
            eta = np.exp(t * mu / s)
            Y, n_products = taylor_stages(
                A, B, t, m, s, tol=self._config.tol,
                early_stop=self._config.early_stop, eta=eta,
            )

        logger.debug("action: n=%d, columns=%d, t=%g, m=%d, s=%d, products=%d",
                     n, n_columns, t, m, s, n_products)
        if return_info:
            return Y, ActionInfo(m, s, n_products, mu)
        return Y


_default_handler = MatrixExpActionHandler()


def action(A, B, t=1.0, return_info=False):
    """exp(t A) B with the default settings; see `MatrixExpActionHandler.action`."""
    return _default_handler.action(A, B, t, return_info=return_info)


def select_parameters(A, t=1.0, n_columns=1) -> ApproximationParameters:
    """(m, s) for exp(t A) with the default settings."""
    return _default_handler.select_parameters(A, t, n_columns=n_columns)


def matrix_exp_multiply(A, B):
    """exp(A) B."""
    return _default_handler.action(A, B)


def scale_matrix_exp_multiply(t, A, B):
    """exp(t A) B."""
    return _default_handler.action(A, B, t)
