"""
Input checks shared by the public entry points.

Inputs are converted to real float arrays; anything that would lose
information in that conversion, or has the wrong shape, raises ValueError.
"""

import numpy as np


def as_square_matrix(A):
    """Real float view of a square matrix."""
    if np.iscomplexobj(A):
        raise ValueError("Complex matrices are not supported")
    A = np.asarray(A, dtype=float)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {A.shape}")
    return A


def as_operand(B, n):
    """Real float vector or block with n rows."""
    if np.iscomplexobj(B):
        raise ValueError("Complex operands are not supported")
    B = np.asarray(B, dtype=float)
    if B.ndim not in (1, 2):
        raise ValueError(f"Operand must be a vector or a matrix, got shape {B.shape}")
    if B.shape[0] != n:
        raise ValueError(f"Operand has {B.shape[0]} rows, expected {n}")
    return B


def as_scale(t):
    """Real scalar time scale."""
    if np.ndim(t) != 0:
        raise ValueError(f"Time scale must be a scalar, got shape {np.shape(t)}")
    if np.iscomplexobj(t):
        raise ValueError("Complex time scales are not supported")
    return float(t)


def as_count(value, name, minimum):
    """Integer no smaller than minimum."""
    if (np.ndim(value) != 0 or not np.isfinite(value)
            or int(value) != value or value < minimum):
        raise ValueError(f"{name} must be an integer >= {minimum}, got {value}")
    return int(value)
