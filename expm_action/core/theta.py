"""
Degree-accuracy table for the truncated Taylor series of exp(M).

THETA_M[m - 1] is the largest 1-norm of M for which the degree-m Taylor
polynomial T_m(M / s)^s has a relative backward error no larger than the
double precision unit roundoff (2^-53), for any s. The first thirty values
are from Higham, "Functions of Matrices", table A.3; the remainder follow
Al-Mohy & Higham (2011), table 3.1.

References
----------
- A. H. Al-Mohy and N. J. Higham, "Computing the action of the matrix
  exponential, with an application to exponential integrators",
  SIAM J. Sci. Comput. 33(2), 488-511 (2011)
"""

import numpy as np


UNIT_ROUNDOFF = 2.0 ** -53

M_MAX = 55

THETA_M = np.array([
    2.22044605e-16, 2.58095680e-08, 1.38634787e-05, 3.39716884e-04,
    2.40087636e-03, 9.06565641e-03, 2.38445553e-02, 4.99122887e-02,
    8.95776020e-02, 1.44182976e-01, 2.14235807e-01, 2.99615891e-01,
    3.99777534e-01, 5.13914694e-01, 6.41083523e-01, 7.80287426e-01,
    9.30532846e-01, 1.09086372e+00, 1.26038106e+00, 1.43825260e+00,
    1.62371595e+00, 1.81607782e+00, 2.01471078e+00, 2.21904887e+00,
    2.42858252e+00, 2.64285346e+00, 2.86144963e+00, 3.08400054e+00,
    3.31017284e+00, 3.53966635e+00, 3.77221050e+00, 4.00756109e+00,
    4.24549744e+00, 4.48581986e+00, 4.72834735e+00, 4.97291563e+00,
    5.21937537e+00, 5.46759063e+00, 5.71743745e+00, 5.96880263e+00,
    6.22158266e+00, 6.47568274e+00, 6.73101590e+00, 6.98750228e+00,
    7.24506843e+00, 7.50364669e+00, 7.76317466e+00, 8.02359473e+00,
    8.28485363e+00, 8.54690205e+00, 8.80969427e+00, 9.07318789e+00,
    9.33634351e+00, 9.59912445e+00, 9.86149652e+00,
])
THETA_M.setflags(write=False)


def max_power(m_max: int = M_MAX) -> int:
    """
    Largest p with p(p - 1) <= m_max + 1.

    Powers beyond this are never needed when bounding the backward error
    of a series of degree at most m_max (8 for m_max = 55).
    """
    p = 1
    while (p + 1) * p <= m_max + 1:
        p += 1
    return p


P_MAX = max_power(M_MAX)


def theta(m: int) -> float:
    """Return the norm threshold theta_m for Taylor degree m (1-indexed)."""
    if not 1 <= m <= M_MAX:
        raise ValueError(f"Taylor degree {m} out of range [1, {M_MAX}]")
    return float(THETA_M[m - 1])
