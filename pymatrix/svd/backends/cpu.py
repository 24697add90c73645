"""
CPU backend for the singular value decomposition.

Golub-Kahan SVD: Householder bidiagonalization followed by implicit-shift
QR iteration on the bidiagonal (LINPACK dsvdc lineage). The reduction
assumes rows >= columns; wider inputs are decomposed through their
transpose and the factors exchanged.
"""

import numpy as np

from pymatrix.core.compute.precision import SVD_SWEEPS_PER_DIMENSION
from pymatrix.core.compute.timing import Timer
from pymatrix.core.matrix import Matrix
from pymatrix.core.result import Result
from pymatrix.svd._bidiagonal import bidiagonalize, form_u, form_v
from pymatrix.svd._qr_sweep import diagonalize
from pymatrix.svd.solution import SVDParams


def default_max_iterations(m: int, n: int) -> int:
    """Default cap on QR iteration passes for an m x n input."""
    return SVD_SWEEPS_PER_DIMENSION * max(m, n, 1)


class CPUGolubKahanBackend:
    """
    CPU backend running Golub-Kahan bidiagonalization plus QR iteration.

    Args:
        max_iterations: Cap on total QR iteration passes. None uses
            default_max_iterations(m, n) for each input.
    """

    def __init__(self, max_iterations: int | None = None):
        self._max_iterations = max_iterations

    @property
    def name(self) -> str:
        return 'cpu_golub_kahan'

    def solve(self, matrix: Matrix) -> Result[SVDParams]:
        """
        Decompose the matrix.

        Args:
            matrix: Rectangular matrix (copied, never modified)

        Returns:
            Result containing SVDParams

        Raises:
            NonConvergenceError: If the QR iteration exceeds its cap
        """
        timer = Timer()
        timer.start()

        m, n = matrix.shape
        a = matrix.to_array()
        transposed = m < n
        if transposed:
            a = np.ascontiguousarray(a.T)
        rows, cols = a.shape

        max_iterations = self._max_iterations
        if max_iterations is None:
            max_iterations = default_max_iterations(m, n)

        passes = 0
        qr_steps = 0
        if cols == 0:
            u = np.zeros((rows, 0), dtype=np.float64)
            s = np.zeros(0, dtype=np.float64)
            v = np.zeros((0, 0), dtype=np.float64)
        else:
            with timer.section('bidiagonalization'):
                form = bidiagonalize(a)
            with timer.section('accumulate_uv'):
                form_u(form)
                form_v(form)
            with timer.section('qr_iteration'):
                passes, qr_steps = diagonalize(
                    form.s, form.e, form.u, form.v, form.order, max_iterations
                )
            u, s, v = form.u, form.s[:cols].copy(), form.v

        if transposed:
            u, v = v, u

        timer.stop()

        return Result(
            params=SVDParams(u=u, s=s, v=v),
            info={
                'method': 'golub_kahan',
                'shape': (m, n),
                'transposed': transposed,
                'iterations': passes,
                'qr_steps': qr_steps,
                'max_iterations': max_iterations,
            },
            timing=timer.result(),
            backend_name=self.name,
        )
