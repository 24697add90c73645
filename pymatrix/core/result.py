"""
Generic result container for all PyMatrix decompositions.

Every backend returns its factors inside a Result envelope. Decomposition
wrappers (LUDecomposition, SVDDecomposition) hold the envelope and derive
all user-facing quantities from its payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, iterations, transposed)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True); payload arrays are flagged read-only
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Factor payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for a matrix decomposition.

    Type Parameters:
        P: The decomposition-specific factor payload type

    Attributes:
        params: Factor payload (packed LU store, U/S/V, ...)
        info: Structured metadata (method, shape, iteration counts)
        timing: Per-phase timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> # Direct method
        >>> Result(
        ...     params=LUParams(lu=store, pivot=piv, pivot_sign=-1),
        ...     info={'method': 'crout', 'shape': (3, 3)},
        ...     timing={'total_seconds': 0.0001},
        ...     backend_name='cpu_crout'
        ... )

        >>> # Iterative method
        >>> Result(
        ...     params=SVDParams(u=U, s=s, v=V),
        ...     info={'method': 'golub_kahan', 'iterations': 23},
        ...     timing={'total_seconds': 0.002, 'qr_iteration': 0.001},
        ...     backend_name='cpu_golub_kahan'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
