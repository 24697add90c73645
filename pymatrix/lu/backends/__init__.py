"""
LU backends.

Available backends:
    CPUCroutBackend: Left-looking Crout elimination with partial pivoting
"""

from pymatrix.lu.backends.cpu import CPUCroutBackend

__all__ = [
    "CPUCroutBackend",
]
