"""
Unit tests for the selection of the Taylor degree m and scaling s.
"""

import math
import unittest
import numpy as np

from expm_action import (
    THETA_M,
    M_MAX,
    ApproximationParameters,
    MatrixExpActionHandler,
    select_parameters,
    taylor_cost,
)
from expm_action.core import needs_power_norms, optimal_parameters


def _cheapest_from_norm(norm, m_max=M_MAX):
    """Brute-force (m, s) minimising m * s, ties to the smaller m."""
    best = None
    for m in range(1, m_max + 1):
        s = max(int(math.ceil(norm / THETA_M[m - 1])), 1)
        if best is None or (m * s, m) < (best[0] * best[1], best[0]):
            best = (m, s)
    return best


class TestSelectParameters(unittest.TestCase):
    """Tests for (m, s) selection."""

    def test_zero_matrix(self):
        """A zero matrix needs no products."""
        self.assertEqual(select_parameters(np.zeros((3, 3))), (1, 0))

    def test_zero_scale(self):
        """t = 0 needs no products whatever A is."""
        rng = np.random.default_rng(1)
        A = rng.uniform(-1, 1, (4, 4))
        self.assertEqual(select_parameters(A, 0.0), (1, 0))

    def test_empty_matrix(self):
        """A 0 x 0 matrix has zero norm."""
        self.assertEqual(select_parameters(np.zeros((0, 0)), 1.0), (1, 0))

    def test_returns_named_tuple(self):
        """The result unpacks and exposes m and s by name."""
        params = select_parameters(np.array([[1.0]]))
        self.assertIsInstance(params, ApproximationParameters)
        m, s = params
        self.assertEqual((params.m, params.s), (m, s))

    def test_known_selections(self):
        """Hand-checked selections for scalar matrices."""
        # ||A|| = 1: theta_18 = 1.09 is the first threshold above 1
        self.assertEqual(select_parameters(np.array([[1.0]])), (18, 1))
        # ||A|| = 20: 43 * 3 = 129 beats every other pair
        self.assertEqual(select_parameters(np.array([[20.0]])), (43, 3))
        # Sign of t does not matter
        self.assertEqual(select_parameters(np.array([[20.0]]), -1.0), (43, 3))

    def test_minimal_cost(self):
        """Below the power-norm threshold the cheapest pair is chosen."""
        rng = np.random.default_rng(42)
        for n in range(2, 10):
            A = rng.uniform(-1, 1, (n, n))
            for t in [0.01, 0.3, 1.0, 2.5]:
                norm = np.linalg.norm(t * A, 1)
                self.assertFalse(needs_power_norms(norm))
                self.assertEqual(tuple(select_parameters(A, t)),
                                 _cheapest_from_norm(norm))

    def test_scale_invariance(self):
        """Splitting t A differently between t and A gives the same (m, s)."""
        rng = np.random.default_rng(999)
        for n in range(2, 10):
            A = rng.uniform(-1, 1, (n, n))
            for t1 in [9.9, 50.0]:
                m1, s1 = select_parameters(A, t1)
                A_scaled = A.copy()
                A_scaled *= t1
                m2, s2 = select_parameters(A_scaled, 1.0)
                self.assertEqual(m1, m2)
                self.assertEqual(s1, s2)

                self.assertEqual(select_parameters(A, t1 * 2.0),
                                 select_parameters(A_scaled, 2.0))
                self.assertEqual(select_parameters(A, t1 * 0.5),
                                 select_parameters(A_scaled, 0.5))

                for t2 in [0.3, 1.7, 3.1]:
                    self.assertEqual(select_parameters(A, t1 * t2),
                                     select_parameters(A_scaled, t2),
                                     msg=f"n={n}, t1={t1}, t2={t2}")

    def test_power_norms_never_cost_more(self):
        """For large norms the refined selection is no dearer than the plain one."""
        rng = np.random.default_rng(17)
        for n in [5, 10, 20]:
            A = rng.uniform(-1, 1, (n, n))
            for t in [50.0, 100.0, 500.0]:
                norm = np.linalg.norm(t * A, 1)
                self.assertTrue(needs_power_norms(norm))
                m, s = select_parameters(A, t)
                m_ref, s_ref = _cheapest_from_norm(norm)
                self.assertLessEqual(taylor_cost(m, s), taylor_cost(m_ref, s_ref))
                self.assertGreaterEqual(m, 1)
                self.assertGreaterEqual(s, 1)

    def test_nilpotent_large_norm(self):
        """A nilpotent matrix of huge norm needs a single degree-1 stage."""
        A = np.array([[0.0, 1e6], [0.0, 0.0]])
        self.assertEqual(select_parameters(A), (1, 1))

    def test_bounds(self):
        """m stays within [1, m_max] and s >= 1 for non-zero input."""
        rng = np.random.default_rng(8)
        for scale in [1e-8, 1e-3, 1.0, 1e2, 1e4]:
            A = scale * rng.standard_normal((6, 6))
            m, s = select_parameters(A)
            self.assertTrue(1 <= m <= M_MAX)
            self.assertGreaterEqual(s, 1)

    def test_non_finite(self):
        """Non-finite entries fall back to (m_max, 1) with a warning."""
        A = np.array([[1.0, np.nan], [0.0, 1.0]])
        with self.assertLogs('expm_action', level='WARNING'):
            self.assertEqual(select_parameters(A), (M_MAX, 1))
        with self.assertLogs('expm_action', level='WARNING'):
            self.assertEqual(select_parameters(np.eye(2), np.inf), (M_MAX, 1))

    def test_reduced_m_max(self):
        """A handler with a smaller m_max never exceeds it."""
        handler = MatrixExpActionHandler(m_max=10)
        self.assertEqual(handler.select_parameters(np.array([[1.0]])), (10, 7))
        rng = np.random.default_rng(4)
        A = rng.uniform(-1, 1, (8, 8))
        for t in [0.5, 5.0, 80.0]:
            m, _ = handler.select_parameters(A, t)
            self.assertLessEqual(m, 10)

    def test_invalid_input(self):
        """Non-square matrices and non-scalar scales are rejected."""
        with self.assertRaises(ValueError):
            select_parameters(np.ones((2, 3)))
        with self.assertRaises(ValueError):
            select_parameters(np.eye(2), [1.0, 2.0])
        with self.assertRaises(ValueError):
            optimal_parameters(np.eye(2), m_max=0)

    def test_complex_rejected(self):
        """Complex matrices and scales raise instead of losing the imaginary part."""
        A = np.array([[0.0, 1j], [1j, 0.0]])
        with self.assertRaises(ValueError):
            select_parameters(A)
        with self.assertRaises(ValueError):
            optimal_parameters(5 * A)
        with self.assertRaises(ValueError):
            select_parameters(np.eye(2), 1j)


class TestPowerNormCondition(unittest.TestCase):
    """Tests for the switch to power-norm estimates."""

    def test_threshold(self):
        """The bound is 2 ell p_max (p_max + 3) theta_55 / (n0 m_max), about 63."""
        self.assertFalse(needs_power_norms(63.0))
        self.assertTrue(needs_power_norms(64.0))

    def test_more_columns_lower_threshold(self):
        """Wider operands justify the estimates at smaller norms."""
        self.assertFalse(needs_power_norms(40.0, n_columns=1))
        self.assertTrue(needs_power_norms(40.0, n_columns=2))

    def test_taylor_cost(self):
        """Cost counts products with the matrix."""
        self.assertEqual(taylor_cost(3, 4), 12)
        self.assertEqual(taylor_cost(18, 0), 0)


if __name__ == '__main__':
    unittest.main()
