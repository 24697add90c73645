"""
Shared compute infrastructure for PyMatrix.

This module provides timing utilities, precision constants and tolerance
tiers shared by every decomposition backend.

IMPORTANT: This is NOT where decomposition backends live. Those go in
{decomposition}/backends/. This module contains shared NUMERIC
infrastructure.

Submodules:
    timing: Execution timing utilities
    precision: Machine epsilon, underflow floor, hypot reduction
    tolerances: Residual bound and pivot-ratio threshold
"""

from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.precision import EPS, TINY, hypot_norm, machine_epsilon

__all__ = [
    # Timing
    "Timer",
    # Precision
    "EPS",
    "TINY",
    "hypot_norm",
    "machine_epsilon",
]
