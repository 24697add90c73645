"""
Core protocols for PyMatrix.

Backends are matched structurally (Protocol) rather than nominally (ABC),
so a new factorization backend only has to provide a name and a solve().
"""

from typing import Protocol, TypeVar, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from pymatrix.core.matrix import Matrix
    from pymatrix.core.result import Result

P = TypeVar('P', covariant=True)  # Factor payload type


@runtime_checkable
class Backend(Protocol[P]):
    """
    Protocol for decomposition backends.

    Each backend takes a Matrix and produces a decomposition-specific
    factor payload wrapped in a Result. Backends never mutate the input;
    they copy it into their own scratch buffers.

    Backends are stateless apart from construction-time configuration
    (e.g. an iteration cap). This makes them easy to test and swap.

    Type Parameters:
        P: The factor payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_crout', 'cpu_golub_kahan'
        """
        ...

    def solve(self, matrix: 'Matrix') -> 'Result[P]':
        """
        Factor the matrix.

        Args:
            matrix: The matrix to decompose (left untouched)

        Returns:
            Result envelope containing the factor payload and metadata

        Raises:
            NonConvergenceError: If an iterative method exceeds its cap
        """
        ...
