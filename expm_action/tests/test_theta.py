"""
Unit tests for the degree-accuracy table.
"""

import unittest
import numpy as np

from expm_action import THETA_M, M_MAX, UNIT_ROUNDOFF
from expm_action.core import P_MAX, max_power, theta


class TestThetaTable(unittest.TestCase):
    """Tests for the theta_m thresholds."""

    def test_table_covers_all_degrees(self):
        """One threshold per degree 1..m_max."""
        self.assertEqual(M_MAX, 55)
        self.assertEqual(THETA_M.shape, (M_MAX,))

    def test_table_strictly_increasing(self):
        """Higher degrees tolerate larger norms."""
        self.assertTrue(np.all(np.diff(THETA_M) > 0))

    def test_known_values(self):
        """Spot check against the published tables."""
        self.assertAlmostEqual(theta(1), 2.22e-16, delta=1e-18)
        self.assertAlmostEqual(theta(10), 0.144, places=3)
        self.assertAlmostEqual(theta(30), 3.54, places=2)
        self.assertAlmostEqual(theta(55), 9.9, places=1)

    def test_table_read_only(self):
        """The table cannot be modified in place."""
        with self.assertRaises(ValueError):
            THETA_M[0] = 1.0

    def test_theta_out_of_range(self):
        """Degrees outside [1, m_max] are rejected."""
        with self.assertRaises(ValueError):
            theta(0)
        with self.assertRaises(ValueError):
            theta(M_MAX + 1)

    def test_max_power(self):
        """p_max is the largest p with p(p-1) <= m_max + 1."""
        self.assertEqual(P_MAX, 8)
        self.assertEqual(max_power(55), 8)
        self.assertEqual(max_power(1), 2)
        for m_max in range(1, 56):
            p = max_power(m_max)
            self.assertLessEqual(p * (p - 1), m_max + 1)
            self.assertGreater((p + 1) * p, m_max + 1)

    def test_unit_roundoff(self):
        """Unit roundoff is half the machine epsilon."""
        self.assertEqual(UNIT_ROUNDOFF, np.finfo(float).eps / 2)


if __name__ == '__main__':
    unittest.main()
