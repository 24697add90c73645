"""
PyMatrix: dense real matrices and their classical factorizations.

Submodules:
    core: Matrix type, exceptions, shared compute infrastructure
    lu: LU decomposition with partial pivoting
    svd: Singular value decomposition
"""

__version__ = "0.1.0"

from pymatrix.core import (
    Matrix,
    PyMatrixError,
    ValidationError,
    DimensionError,
    BoundsError,
    ConstructionError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
    NonConvergenceError,
)
from pymatrix.lu import lu, LUDecomposition
from pymatrix.svd import svd, SVDDecomposition

__all__ = [
    "__version__",
    "Matrix",
    "lu",
    "svd",
    "LUDecomposition",
    "SVDDecomposition",
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "BoundsError",
    "ConstructionError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
    "NonConvergenceError",
]
