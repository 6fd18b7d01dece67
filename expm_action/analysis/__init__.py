"""
Analysis module for the matrix exponential action.

This module exports validation helpers against a dense reference and a
cost profile of the parameter selection over time scales.
"""

from .diagnostics import (
    CostRecord,
    reference_action,
    relative_error,
    cost_profile,
)

__all__ = [
    'CostRecord',
    'reference_action',
    'relative_error',
    'cost_profile',
]
