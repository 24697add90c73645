"""
SVD backends.

Available backends:
    CPUGolubKahanBackend: Householder bidiagonalization + implicit-shift QR
"""

from pymatrix.svd.backends.cpu import CPUGolubKahanBackend

__all__ = [
    "CPUGolubKahanBackend",
]
