"""
Singular value decomposition.

Public API:
    svd(A, ...) -> SVDDecomposition

Example:
    >>> from pymatrix.svd import svd
    >>> decomposition = svd(A)
    >>> print(decomposition.rank(), decomposition.cond())
"""

from pymatrix.svd.solution import SVDDecomposition, SVDParams
from pymatrix.svd.solvers import svd

__all__ = [
    "svd",
    "SVDDecomposition",
    "SVDParams",
]
