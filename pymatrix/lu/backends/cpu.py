"""
CPU backend for LU decomposition.

Left-looking ("dot-product") Crout/Doolittle elimination with partial
row pivoting. The factors are packed into a single m x n scratch buffer:
strictly below the diagonal sit the multipliers of the unit lower
triangular L, on and above it the upper triangular U.
"""

import numpy as np

from pymatrix.core.compute.timing import Timer
from pymatrix.core.matrix import Matrix
from pymatrix.core.result import Result
from pymatrix.lu.solution import LUParams


def crout_factor(a: np.ndarray) -> tuple[np.ndarray, np.ndarray, int]:
    """
    Factor A(piv, :) = L U in place.

    Args:
        a: m x n float64 buffer; overwritten with the packed factors

    Returns:
        (a, piv, pivot_sign) where piv is the row permutation
    """
    m, n = a.shape
    piv = np.arange(m, dtype=np.intp)
    pivot_sign = 1
    lu_colj = np.empty(m, dtype=np.float64)

    for j in range(n):
        # Make a copy of the j-th column to localize references.
        lu_colj[:] = a[:, j]

        # Apply previous transformations: subtract the dot product of row
        # i of L with the column over 0..min(i, j). Rows above the
        # diagonal depend on each other; rows below only on the settled
        # top j entries, so they go in one product.
        top = min(j, m)
        for i in range(top):
            lu_colj[i] -= a[i, :i] @ lu_colj[:i]
        lu_colj[top:] -= a[top:, :top] @ lu_colj[:top]
        a[:, j] = lu_colj

        if j >= m:
            continue

        # Find pivot (first maximal magnitude) and exchange if necessary.
        p = j + int(np.argmax(np.abs(lu_colj[j:])))
        if p != j:
            a[[p, j], :] = a[[j, p], :]
            piv[p], piv[j] = piv[j], piv[p]
            pivot_sign = -pivot_sign

        # Compute multipliers.
        if a[j, j] != 0.0:
            a[j + 1:, j] /= a[j, j]

    return a, piv, pivot_sign


class CPUCroutBackend:
    """CPU backend running Crout elimination with partial pivoting."""

    @property
    def name(self) -> str:
        return 'cpu_crout'

    def solve(self, matrix: Matrix) -> Result[LUParams]:
        """
        Factor the matrix. Never fails; singular input yields a zero pivot.

        Args:
            matrix: Rectangular matrix (copied, never modified)

        Returns:
            Result containing LUParams
        """
        timer = Timer()
        timer.start()

        m, n = matrix.shape
        with timer.section('factorization'):
            store, piv, pivot_sign = crout_factor(matrix.to_array())

        diagonal = np.abs(np.diag(store))
        warnings_list = []
        if m < n or np.any(diagonal == 0.0):
            warnings_list.append(
                "matrix is singular: U has a zero (or missing) diagonal entry"
            )

        timer.stop()

        params = LUParams(lu=store, pivot=piv, pivot_sign=pivot_sign)
        return Result(
            params=params,
            info={
                'method': 'crout',
                'shape': (m, n),
                'pivoting': 'partial',
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
