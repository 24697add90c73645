"""
Exception hierarchy for PyMatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyMatrixError(Exception):
    """Base exception for all PyMatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised when operand shapes disagree in elementwise operations, when
    the inner dimensions of a matrix product differ, when a submatrix
    assignment does not match the addressed region, or when an operation
    requires a square matrix.
    """
    pass


class BoundsError(ValidationError, IndexError):
    """
    Index outside the valid range.

    Also an IndexError, so code written against plain sequences keeps
    working.

    Attributes:
        index: The offending index (or range bound)
        size: Extent of the addressed dimension
        axis: 'row' or 'column'
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        size: int | None = None,
        axis: str | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.size = size
        self.axis = axis


class ConstructionError(ValidationError):
    """
    Matrix could not be built from the given data.

    Raised for ragged row sequences and for packed arrays whose length
    is not a multiple of the declared row count.
    """
    pass


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when a matrix operation requires invertibility but the
    factorization has a zero pivot.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(m, n))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class ConvergenceError(PyMatrixError):
    """
    Iterative algorithm failed to converge.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final change in the monitored quantity, if known
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold


class NonConvergenceError(ConvergenceError):
    """
    The SVD QR iteration hit its iteration cap.

    Attributes (in addition to ConvergenceError):
        remaining: Number of singular values still unconverged
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        remaining: int | None = None,
        final_change: float | None = None,
    ):
        super().__init__(
            message,
            iterations=iterations,
            final_change=final_change,
            reason='max_iterations',
            threshold=None,
        )
        self.remaining = remaining
