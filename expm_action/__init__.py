"""
Expm Action - the action of the matrix exponential on vectors and blocks.

This package computes Y = exp(t A) B for a dense real square matrix A,
a scalar t and an operand B with one or more columns, without ever
forming exp(t A). A Taylor degree m and a number of scaling stages s are
chosen to minimise the number of products with A subject to a backward
error of unit roundoff, and the truncated series is applied to B stage
by stage.

Main Features
-------------
- Action of the matrix exponential with automatic (m, s) selection
- Reusable parameter selection depending only on the product t A
- Block 1-norm estimation of matrix powers
- Diagnostics against a dense scipy reference

Quick Start
-----------
>>> import numpy as np
>>> from expm_action import action, select_parameters
>>> A = np.array([[-1.0, 2.0], [0.0, -3.0]])
>>> b = np.array([1.0, 1.0])

# exp(0.5 A) b
>>> y = action(A, b, 0.5)

# Parameters chosen for the same product t A
>>> m, s = select_parameters(A, 0.5)

Examples
--------
Several columns are processed as one block:

>>> B = np.eye(2)
>>> Y = action(A, B)  # the columns of exp(A)

Custom settings:

>>> from expm_action import MatrixExpActionHandler
>>> handler = MatrixExpActionHandler(shift=True, early_stop=False)
>>> Y, info = handler.action(A, B, 2.0, return_info=True)
>>> info.n_products == info.m * info.s
True

Checking against the dense reference:

>>> from expm_action.analysis import relative_error
>>> relative_error(A, B, 2.0) < 1e-12
True
"""

import logging

__version__ = "0.1.0"

from .core import (
    # Degree-accuracy table
    UNIT_ROUNDOFF,
    M_MAX,
    THETA_M,
    # Norms
    onenorm,
    onenormest_power,
    power_norm_estimate,
    # Parameter selection
    ApproximationParameters,
    taylor_cost,
    # Evaluation
    apply_taylor,
    # Handler
    ActionConfig,
    ActionInfo,
    MatrixExpActionHandler,
    action,
    select_parameters,
    matrix_exp_multiply,
    scale_matrix_exp_multiply,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    '__version__',
    # Degree-accuracy table
    'UNIT_ROUNDOFF',
    'M_MAX',
    'THETA_M',
    # Norms
    'onenorm',
    'onenormest_power',
    'power_norm_estimate',
    # Parameter selection
    'ApproximationParameters',
    'taylor_cost',
    # Evaluation
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
