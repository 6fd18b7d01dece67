"""
Core module for the matrix exponential action.

This module exports the degree-accuracy table, the 1-norm estimator, the
(m, s) parameter selector, the Taylor stage evaluator, and the handler
that ties them together.
"""

from .theta import (
    UNIT_ROUNDOFF,
    M_MAX,
    P_MAX,
    THETA_M,
    max_power,
    theta,
)

from .norms import (
    EXACT_NORM_MAX_DIM,
    onenorm,
    matrix_power_onenorm,
    onenormest_power,
    power_norm_estimate,
)

from .parameters import (
    ApproximationParameters,
    taylor_cost,
    needs_power_norms,
    optimal_parameters,
)

from .evaluator import (
    taylor_stages,
    apply_taylor,
)

from .handler import (
    ActionConfig,
    ActionInfo,
    MatrixExpActionHandler,
    action,
    select_parameters,
    matrix_exp_multiply,
    scale_matrix_exp_multiply,
)

__all__ = [
    # Degree-accuracy table
    'UNIT_ROUNDOFF',
    'M_MAX',
    'P_MAX',
    'THETA_M',
    'max_power',
    'theta',
    # Norms
    'EXACT_NORM_MAX_DIM',
    'onenorm',
    'matrix_power_onenorm',
    'onenormest_power',
    'power_norm_estimate',
    # Parameter selection
    'ApproximationParameters',
    'taylor_cost',
    'needs_power_norms',
    'optimal_parameters',
    # Evaluation
    'taylor_stages',
    'apply_taylor',
    # Handler
    'ActionConfig',
    'ActionInfo',
    'MatrixExpActionHandler',
    'action',
    'select_parameters',
    'matrix_exp_multiply',
    'scale_matrix_exp_multiply',
]
