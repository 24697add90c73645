"""
LU decomposition solution types.

Contains the parameter payload and user-facing decomposition wrapper.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.tolerances import PIVOT_RATIO_THRESHOLD
from pymatrix.core.exceptions import SingularMatrixError, ValidationError
from pymatrix.core.matrix import Matrix
from pymatrix.core.result import Result
from pymatrix.core.validation import check_row_count, check_square


@dataclass(frozen=True)
class LUParams:
    """
    Parameter payload for LU decomposition.

    This is the immutable data computed by backends. Arrays are flagged
    read-only on construction.

    Attributes:
        lu: m x n packed factors (L multipliers below the diagonal,
            U on and above it)
        pivot: Row permutation, A[pivot, :] = L @ U
        pivot_sign: +1 or -1, parity of the row exchanges
    """
    lu: NDArray[np.float64]
    pivot: NDArray[np.intp]
    pivot_sign: int

    def __post_init__(self):
        self.lu.flags.writeable = False
        self.pivot.flags.writeable = False


@dataclass
class LUDecomposition:
    """
    User-facing LU decomposition results.

    For an m x n matrix A the decomposition is a unit lower triangular
    L (m x k), an upper triangular U (k x n), k = min(m, n), and a row
    permutation so that A[pivot, :] = L @ U.

    The LU decomposition with pivoting always exists, even if the matrix
    is singular. Its primary use is the solution of square systems of
    simultaneous linear equations, which fails unless is_nonsingular.
    """
    _result: Result[LUParams]

    @property
    def params(self) -> LUParams:
        return self._result.params

    @property
    def m(self) -> int:
        return self._result.params.lu.shape[0]

    @property
    def n(self) -> int:
        return self._result.params.lu.shape[1]

    @property
    def L(self) -> Matrix:
        """Unit lower triangular factor, m x min(m, n)."""
        lu = self._result.params.lu
        k = min(self.m, self.n)
        lower = np.tril(lu[:, :k], k=-1)
        lower[np.arange(k), np.arange(k)] = 1.0
        return Matrix.from_array(lower)

    @property
    def U(self) -> Matrix:
        """Upper triangular factor, min(m, n) x n."""
        lu = self._result.params.lu
        k = min(self.m, self.n)
        return Matrix.from_array(np.triu(lu[:k, :]))

    @property
    def pivot(self) -> NDArray[np.intp]:
        """Copy of the row permutation."""
        return self._result.params.pivot.copy()

    @property
    def float_pivot(self) -> NDArray[np.float64]:
        """Row permutation as float64 values."""
        return self._result.params.pivot.astype(np.float64)

    @property
    def pivot_sign(self) -> int:
        return self._result.params.pivot_sign

    @property
    def is_nonsingular(self) -> bool:
        """
        True if every diagonal entry U[j, j], j in [0, n), is nonzero.

        A wide matrix (m < n) has no U[j, j] for j >= m and is singular.
        """
        if self.m < self.n:
            return False
        return bool(np.all(np.diag(self._result.params.lu) != 0.0))

    def det(self) -> float:
        """
        Determinant, pivot_sign * prod(diag(U)).

        Raises:
            DimensionError: If the factored matrix is not square
        """
        check_square((self.m, self.n), 'det')
        d = float(self._result.params.pivot_sign)
        for u_jj in np.diag(self._result.params.lu):
            d *= float(u_jj)
        return d

    def solve(self, b: Matrix) -> Matrix:
        """
        Solve A @ X = B.

        Args:
            b: Matrix with as many rows as A and any number of columns

        Returns:
            X (n x b.n) so that L @ U @ X = B[pivot, :]

        Raises:
            DimensionError: If b.m != m
            SingularMatrixError: If the factorization is singular
        """
        if not isinstance(b, Matrix):
            raise ValidationError(
                f"solve: right-hand side must be a Matrix, got {type(b).__name__}"
            )
        check_row_count(b.m, self.m, 'solve')
        if not self.is_nonsingular:
            raise SingularMatrixError(
                f"Matrix is singular: U has a zero diagonal entry "
                f"(shape {(self.m, self.n)})",
                matrix_name='A',
                condition_number=float('inf'),
                expected_rank=self.n,
            )

        lu = self._result.params.lu
        n = self.n
        diagonal = np.abs(np.diag(lu))
        if n > 0 and diagonal.min() < PIVOT_RATIO_THRESHOLD * diagonal.max():
            warnings.warn(
                f"Matrix is close to singular: pivot ratio "
                f"{diagonal.min() / diagonal.max():.3e}. Results may be inaccurate.",
                RuntimeWarning,
                stacklevel=2,
            )

        # Copy right hand side with pivoting
        x = b.to_array()[self._result.params.pivot, :]

        # Solve L*Y = B(piv,:); the unit diagonal is implicit.
        for k in range(n):
            x[k + 1:n, :] -= np.outer(lu[k + 1:n, k], x[k, :])

        # Solve U*X = Y
        for k in range(n - 1, -1, -1):
            x[k, :] /= lu[k, k]
            x[:k, :] -= np.outer(lu[:k, k], x[k, :])

        return Matrix.from_array(x[:n, :])

    # === Result envelope ===

    @property
    def info(self) -> dict[str, Any]:
        return dict(self._result.info)

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __repr__(self) -> str:
        return (
            f"LUDecomposition(shape={(self.m, self.n)}, "
            f"pivot_sign={self.pivot_sign}, nonsingular={self.is_nonsingular})"
        )
