"""
Householder reduction to upper bidiagonal form.

Derived from the LINPACK dsvdc reduction. For an m x n matrix A with
m >= n, alternating column and row reflections produce orthogonal U0,
V0 and an upper bidiagonal B (diagonal s, super-diagonal e) with
A = U0 B V0'. The reflector vectors are stored in u and v during the
reduction and expanded into explicit orthogonal matrices afterwards.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.precision import hypot_norm


@dataclass
class BidiagonalForm:
    """
    Working state handed from the reduction to the QR iteration.

    Attributes:
        s: Diagonal of B (length n)
        e: Super-diagonal of B, e[k] couples s[k] and s[k+1] (length n)
        u: m x n, left reflectors, then left orthogonal factor
        v: n x n, right reflectors, then right orthogonal factor
        nct: Number of column reflections
        nrt: Number of row reflections
        order: Order of the bidiagonal, initial active window p
    """
    s: NDArray[np.float64]
    e: NDArray[np.float64]
    u: NDArray[np.float64]
    v: NDArray[np.float64]
    nct: int
    nrt: int
    order: int


def bidiagonalize(a: NDArray[np.float64]) -> BidiagonalForm:
    """
    Reduce a to bidiagonal form, storing the diagonal elements in s
    and the super-diagonal elements in e.

    Args:
        a: m x n scratch buffer with m >= n >= 1; overwritten

    Returns:
        BidiagonalForm with reflectors in u and v (see form_u, form_v)
    """
    m, n = a.shape
    nu = min(m, n)
    s = np.zeros(min(m + 1, n), dtype=np.float64)
    e = np.zeros(n, dtype=np.float64)
    u = np.zeros((m, nu), dtype=np.float64)
    v = np.zeros((n, n), dtype=np.float64)
    work = np.zeros(m, dtype=np.float64)

    nct = min(m - 1, n)
    nrt = max(0, min(n - 2, m))
    for k in range(max(nct, nrt)):
        if k < nct:
            # Compute the transformation for the k-th column and place
            # the k-th diagonal in s[k]; norm without under/overflow.
            s[k] = hypot_norm(a[k:, k])
            if s[k] != 0.0:
                if a[k, k] < 0.0:
                    s[k] = -s[k]
                a[k:, k] /= s[k]
                a[k, k] += 1.0
            s[k] = -s[k]

        if k < nct and s[k] != 0.0:
            # Apply the transformation to the remaining columns.
            t = -(a[k:, k] @ a[k:, k + 1:]) / a[k, k]
            a[k:, k + 1:] += np.outer(a[k:, k], t)

        # Place the k-th row of A into e for the subsequent calculation
        # of the row transformation.
        e[k + 1:] = a[k, k + 1:]

        if k < nct:
            u[k:, k] = a[k:, k]

        if k < nrt:
            # Compute the k-th row transformation and place the k-th
            # super-diagonal in e[k].
            e[k] = hypot_norm(e[k + 1:])
            if e[k] != 0.0:
                if e[k + 1] < 0.0:
                    e[k] = -e[k]
                e[k + 1:] /= e[k]
                e[k + 1] += 1.0
            e[k] = -e[k]
            if k + 1 < m and e[k] != 0.0:
                work[k + 1:] = a[k + 1:, k + 1:] @ e[k + 1:]
                a[k + 1:, k + 1:] += np.outer(work[k + 1:], -e[k + 1:] / e[k + 1])
            v[k + 1:, k] = e[k + 1:]

    # Set up the final bidiagonal matrix of order p.
    p = min(n, m + 1)
    if nct < n:
        s[nct] = a[nct, nct]
    if m < p:
        s[p - 1] = 0.0
    if nrt + 1 < p:
        e[nrt] = a[nrt, p - 1]
    e[p - 1] = 0.0

    return BidiagonalForm(s=s, e=e, u=u, v=v, nct=nct, nrt=nrt, order=p)


def form_u(form: BidiagonalForm) -> None:
    """Expand the stored column reflectors into the explicit U, in place."""
    u, s, nct = form.u, form.s, form.nct
    nu = u.shape[1]

    for j in range(nct, nu):
        u[:, j] = 0.0
        u[j, j] = 1.0

    for k in range(nct - 1, -1, -1):
        if s[k] != 0.0:
            t = -(u[k:, k] @ u[k:, k + 1:nu]) / u[k, k]
            u[k:, k + 1:nu] += np.outer(u[k:, k], t)
            u[k:, k] = -u[k:, k]
            u[k, k] += 1.0
            u[:max(k - 1, 0), k] = 0.0
        else:
            u[:, k] = 0.0
            u[k, k] = 1.0


def form_v(form: BidiagonalForm) -> None:
    """Expand the stored row reflectors into the explicit V, in place."""
    v, e, nrt = form.v, form.e, form.nrt
    n = v.shape[0]
    nu = form.u.shape[1]

    for k in range(n - 1, -1, -1):
        if k < nrt and e[k] != 0.0:
            t = -(v[k + 1:, k] @ v[k + 1:, k + 1:nu]) / v[k + 1, k]
            v[k + 1:, k + 1:nu] += np.outer(v[k + 1:, k], t)
        v[:, k] = 0.0
        v[k, k] = 1.0
