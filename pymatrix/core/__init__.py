"""
Core infrastructure for PyMatrix.

This module provides the Matrix type and the shared abstractions used by
every decomposition sub-package (lu, svd).

Key components:
    matrix: Dense Matrix with value semantics
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, precision constants, tolerance tiers
"""

from pymatrix.core.protocols import Backend
from pymatrix.core.result import Result
from pymatrix.core.matrix import Matrix
from pymatrix.core.exceptions import (
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

__all__ = [
    # Matrix
    "Matrix",
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
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
