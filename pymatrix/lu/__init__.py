"""
LU decomposition with partial pivoting.

Public API:
    lu(A, ...) -> LUDecomposition

The lu() function is the only entry point. It handles:
    - Input validation
    - Backend selection
    - Result wrapping

Example:
    >>> from pymatrix.lu import lu
    >>> decomposition = lu(A)
    >>> x = decomposition.solve(b)
    >>> print(decomposition.det())
"""

from pymatrix.lu.solution import LUDecomposition, LUParams
from pymatrix.lu.solvers import lu

__all__ = [
    "lu",
    "LUDecomposition",
    "LUParams",
]
