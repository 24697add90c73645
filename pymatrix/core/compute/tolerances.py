"""
Numerical tolerances for factorization residuals.

A backward-stable factorization of a well-conditioned matrix leaves a
residual of a few n * eps in the one-norm; the LU solve also flags
pivots that collapse below eps relative to the largest.
"""

from pymatrix.core.compute.precision import EPS


# norm1(residual) / (n * eps) must stay below this for a backward-stable
# factorization of a well-conditioned matrix.
RESIDUAL_BOUND = 1000.0

# A pivot ratio min|U_jj| / max|U_jj| below this marks an LU solve as
# ill-conditioned.
PIVOT_RATIO_THRESHOLD = EPS


def scaled_residual(residual_norm1: float, n: int) -> float:
    """Residual in units of n * eps, the scale RESIDUAL_BOUND is stated in."""
    return residual_norm1 / (max(n, 1) * EPS)
