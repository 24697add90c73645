"""
Numerical precision constants and utilities.

Provides machine epsilon, the underflow floor used by the SVD
convergence tests, and the overflow-safe norm reduction shared by the
Frobenius norm and the Householder steps.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# Machine epsilon for float64, 2**-52 (~2.22e-16)
EPS: float = 2.0 ** -52

# Smallest magnitude treated as meaningful in negligibility tests, 2**-966
TINY: float = 2.0 ** -966

# Default SVD iteration cap is this factor times max(m, n)
SVD_SWEEPS_PER_DIMENSION: int = 75


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def hypot_norm(values: NDArray[np.floating[Any]]) -> float:
    """
    Euclidean norm accumulated as a left fold of hypot(acc, x).

    Unlike sqrt(sum(x**2)) no intermediate ever squares an entry, so
    vectors with entries near the overflow or underflow limits still
    produce a finite, accurate norm.

    Args:
        values: Array of any shape; it is reduced in C order

    Returns:
        The 2-norm of the flattened values (0.0 for an empty array)
    """
    return float(np.hypot.reduce(np.ravel(values), initial=0.0))
