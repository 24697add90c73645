"""
Singular value decomposition solution types.

Contains the parameter payload and user-facing decomposition wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.precision import EPS
from pymatrix.core.matrix import Matrix
from pymatrix.core.result import Result


@dataclass(frozen=True)
class SVDParams:
    """
    Parameter payload for the SVD.

    This is the immutable data computed by backends. Arrays are flagged
    read-only on construction.

    Attributes:
        u: m x k left singular vectors, k = min(m, n)
        s: k singular values, descending and non-negative
        v: n x n right singular vectors when m >= n, else n x m
    """
    u: NDArray[np.float64]
    s: NDArray[np.float64]
    v: NDArray[np.float64]

    def __post_init__(self):
        self.u.flags.writeable = False
        self.s.flags.writeable = False
        self.v.flags.writeable = False


@dataclass
class SVDDecomposition:
    """
    User-facing singular value decomposition results.

    A = U @ S @ V.T with orthonormal columns in U and V and
    S = diag(s), s[0] >= s[1] >= ... >= s[k-1] >= 0.

    The decomposition always exists. The condition number and the
    effective numerical rank are computed from the singular values.
    """
    _result: Result[SVDParams]

    @property
    def params(self) -> SVDParams:
        return self._result.params

    @property
    def m(self) -> int:
        return self._result.params.u.shape[0]

    @property
    def n(self) -> int:
        return self._result.params.v.shape[0]

    @property
    def U(self) -> Matrix:
        """Left singular vectors."""
        return Matrix.from_array(self._result.params.u)

    @property
    def V(self) -> Matrix:
        """Right singular vectors."""
        return Matrix.from_array(self._result.params.v)

    @property
    def S(self) -> Matrix:
        """Diagonal matrix of singular values, sized to match U and V."""
        s = self._result.params.s
        size = self._result.params.v.shape[1]
        diagonal = np.zeros((size, size), dtype=np.float64)
        diagonal[np.arange(s.size), np.arange(s.size)] = s
        return Matrix.from_array(diagonal)

    @property
    def singular_values(self) -> NDArray[np.float64]:
        """Copy of the singular values, descending."""
        return self._result.params.s.copy()

    def norm2(self) -> float:
        """Two norm, max(s). Zero for an empty matrix."""
        s = self._result.params.s
        return float(s[0]) if s.size else 0.0

    def cond(self) -> float:
        """
        Two norm condition number, max(s) / min(s).

        Returns inf when the smallest singular value is exactly zero and
        nan for an empty matrix.
        """
        s = self._result.params.s
        if s.size == 0:
            return float('nan')
        if s[-1] == 0.0:
            return float('inf')
        return float(s[0] / s[-1])

    def rank(self) -> int:
        """Effective numerical rank: number of s[i] > max(m, n) * s[0] * eps."""
        s = self._result.params.s
        if s.size == 0:
            return 0
        tol = max(self.m, self.n) * s[0] * EPS
        return int(np.count_nonzero(s > tol))

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
            f"SVDDecomposition(shape={(self.m, self.n)}, "
            f"rank={self.rank()}, norm2={self.norm2():.6g})"
        )
