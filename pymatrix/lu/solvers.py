"""
Solver dispatch for LU decomposition.

This module provides the lu() function (public API) and backend selection.
"""

from typing import Literal

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.matrix import Matrix
from pymatrix.core.protocols import Backend
from pymatrix.lu.backends.cpu import CPUCroutBackend
from pymatrix.lu.solution import LUDecomposition, LUParams


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_crout']


def lu(
    A: Matrix,
    *,
    backend: BackendChoice = 'auto',
) -> LUDecomposition:
    """
    LU decomposition with partial pivoting.

    Computes A[pivot, :] = L @ U for any rectangular A. The factorization
    always exists, so this never fails for singular input; only
    LUDecomposition.solve() and det() have preconditions.

    Args:
        A: Matrix to decompose. It is copied, never modified.
        backend: Computational backend to use:
            - 'auto': Best available (currently 'cpu_crout')
            - 'cpu' / 'cpu_crout': Left-looking Crout elimination

    Returns:
        LUDecomposition with L, U, pivot, det() and solve()

    Raises:
        ValidationError: If A is not a Matrix
        ValueError: If the backend name is unknown

    Example:
        >>> from pymatrix import Matrix, lu
        >>> A = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 10]])
        >>> b = Matrix.from_rows([[1], [2], [3]])
        >>> x = lu(A).solve(b)
        >>> (A @ x - b).norm_inf() < 1e-10
        True
    """
    if not isinstance(A, Matrix):
        raise ValidationError(f"A: expected a Matrix, got {type(A).__name__}")

    backend_impl = _get_backend(backend)
    result = backend_impl.solve(A)
    return LUDecomposition(_result=result)


def _get_backend(choice: BackendChoice) -> Backend[LUParams]:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_crout'):
        return CPUCroutBackend()
    raise ValueError(f"Unknown backend: {choice!r}")
