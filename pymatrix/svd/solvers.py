"""
Solver dispatch for the singular value decomposition.

This module provides the svd() function (public API) and backend selection.
"""

from typing import Literal

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.matrix import Matrix
from pymatrix.core.protocols import Backend
from pymatrix.svd.backends.cpu import CPUGolubKahanBackend
from pymatrix.svd.solution import SVDDecomposition, SVDParams


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_golub_kahan']


def svd(
    A: Matrix,
    *,
    backend: BackendChoice = 'auto',
    max_iterations: int | None = None,
) -> SVDDecomposition:
    """
    Singular value decomposition.

    Computes A = U @ S @ V.T with U (m x k) and V (n x k) having
    orthonormal columns and S = diag(s), k = min(m, n), s descending and
    non-negative. For m >= n, V is square.

    Args:
        A: Matrix to decompose. It is copied, never modified.
        backend: Computational backend to use:
            - 'auto': Best available (currently 'cpu_golub_kahan')
            - 'cpu' / 'cpu_golub_kahan': Householder bidiagonalization
              plus implicit-shift QR iteration
        max_iterations: Cap on QR iteration passes. Default is
            75 * max(m, n), far above what convergent input needs.

    Returns:
        SVDDecomposition with U, S, V, norm2(), cond() and rank()

    Raises:
        ValidationError: If A is not a Matrix or max_iterations < 1
        ValueError: If the backend name is unknown
        NonConvergenceError: If the iteration cap is reached

    Example:
        >>> from pymatrix import Matrix, svd
        >>> A = Matrix.from_rows([[3, 0], [0, 4]])
        >>> svd(A).singular_values
        array([4., 3.])
    """
    if not isinstance(A, Matrix):
        raise ValidationError(f"A: expected a Matrix, got {type(A).__name__}")
    if max_iterations is not None:
        if isinstance(max_iterations, bool) or not isinstance(max_iterations, int):
            raise ValidationError(
                f"max_iterations: expected an integer, got {type(max_iterations).__name__}"
            )
        if max_iterations < 1:
            raise ValidationError(
                f"max_iterations: must be >= 1, got {max_iterations}"
            )

    backend_impl = _get_backend(backend, max_iterations)
    result = backend_impl.solve(A)
    return SVDDecomposition(_result=result)


def _get_backend(
    choice: BackendChoice,
    max_iterations: int | None,
) -> Backend[SVDParams]:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_golub_kahan'):
        return CPUGolubKahanBackend(max_iterations=max_iterations)
    raise ValueError(f"Unknown backend: {choice!r}")
