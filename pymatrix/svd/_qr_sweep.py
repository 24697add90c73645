"""
Implicit-shift QR iteration on an upper bidiagonal matrix.

Each pass inspects the active window s[0:p], e[0:p-1] for negligible
entries and performs one of four actions:

    DEFLATE  (1)  s[p-1] and e[k-1] negligible, k < p: chase e[p-2] out
                  with rotations from the right (updates V)
    SPLIT    (2)  s[k] negligible, k < p: chase e[k-1] out with rotations
                  from the left (updates U)
    QR_STEP  (3)  e[k-1] negligible, s[k..p-1] not: one shifted QR sweep
                  over the block (updates U and V)
    CONVERGE (4)  e[p-2] negligible: s[p-1] has converged; make it
                  non-negative, sort it into place, shrink p

An entry is negligible when it is below tiny + eps * (magnitude of its
neighbours).
"""

import math

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.precision import EPS, TINY
from pymatrix.core.exceptions import NonConvergenceError

DEFLATE = 1
SPLIT = 2
QR_STEP = 3
CONVERGE = 4


def _rotate_columns(x: NDArray[np.float64], j: int, l: int, cs: float, sn: float) -> None:
    """Apply the Givens rotation [cs sn; -sn cs] to columns j and l of x."""
    t = cs * x[:, j] + sn * x[:, l]
    x[:, l] = -sn * x[:, j] + cs * x[:, l]
    x[:, j] = t


def _swap_columns(x: NDArray[np.float64], j: int, l: int) -> None:
    x[:, [j, l]] = x[:, [l, j]]


def classify(s: NDArray[np.float64], e: NDArray[np.float64], p: int) -> tuple[int, int]:
    """
    Inspect the active window for negligible elements.

    Negligible entries found along the way are set to exactly zero.

    Returns:
        (case, k) where k is the first index of the block to work on
    """
    k = p - 2
    while k >= 0:
        if abs(e[k]) <= TINY + EPS * (abs(s[k]) + abs(s[k + 1])):
            e[k] = 0.0
            break
        k -= 1

    if k == p - 2:
        return CONVERGE, k + 1

    ks = p - 1
    while ks > k:
        t = 0.0
        if ks != p:
            t += abs(e[ks])
        if ks != k + 1:
            t += abs(e[ks - 1])
        if abs(s[ks]) <= TINY + EPS * t:
            s[ks] = 0.0
            break
        ks -= 1

    if ks == k:
        return QR_STEP, k + 1
    if ks == p - 1:
        return DEFLATE, k + 1
    return SPLIT, ks + 1


def deflate(s, e, v, k: int, p: int) -> None:
    """Deflate negligible s[p-1]."""
    f = e[p - 2]
    e[p - 2] = 0.0
    for j in range(p - 2, k - 1, -1):
        t = math.hypot(s[j], f)
        cs = s[j] / t
        sn = f / t
        s[j] = t
        if j != k:
            f = -sn * e[j - 1]
            e[j - 1] = cs * e[j - 1]
        _rotate_columns(v, j, p - 1, cs, sn)


def split(s, e, u, k: int, p: int) -> None:
    """Split at negligible s[k-1]."""
    f = e[k - 1]
    e[k - 1] = 0.0
    for j in range(k, p):
        t = math.hypot(s[j], f)
        cs = s[j] / t
        sn = f / t
        s[j] = t
        f = -sn * e[j]
        e[j] = cs * e[j]
        _rotate_columns(u, j, k - 1, cs, sn)


def qr_step(s, e, u, v, k: int, p: int) -> None:
    """One implicitly shifted QR sweep over the block s[k:p]."""
    m = u.shape[0]

    # Calculate the shift from the trailing 2 x 2 block.
    scale = max(abs(s[p - 1]), abs(s[p - 2]), abs(e[p - 2]), abs(s[k]), abs(e[k]))
    sp = s[p - 1] / scale
    spm1 = s[p - 2] / scale
    epm1 = e[p - 2] / scale
    sk = s[k] / scale
    ek = e[k] / scale
    b = ((spm1 + sp) * (spm1 - sp) + epm1 * epm1) / 2.0
    c = (sp * epm1) * (sp * epm1)
    shift = 0.0
    if b != 0.0 or c != 0.0:
        shift = math.sqrt(b * b + c)
        if b < 0.0:
            shift = -shift
        shift = c / (b + shift)
    f = (sk + sp) * (sk - sp) + shift
    g = sk * ek

    # Chase zeros.
    for j in range(k, p - 1):
        t = math.hypot(f, g)
        cs = f / t
        sn = g / t
        if j != k:
            e[j - 1] = t
        f = cs * s[j] + sn * e[j]
        e[j] = cs * e[j] - sn * s[j]
        g = sn * s[j + 1]
        s[j + 1] = cs * s[j + 1]
        _rotate_columns(v, j, j + 1, cs, sn)

        t = math.hypot(f, g)
        cs = f / t
        sn = g / t
        s[j] = t
        f = cs * e[j] + sn * s[j + 1]
        s[j + 1] = -sn * e[j] + cs * s[j + 1]
        g = sn * e[j + 1]
        e[j + 1] = cs * e[j + 1]
        if j < m - 1:
            _rotate_columns(u, j, j + 1, cs, sn)
    e[p - 2] = f


def converge(s, u, v, k: int, last: int) -> None:
    """
    Finish singular value s[k]: make it non-negative and move it down
    past smaller values so s[k:last+1] stays descending.
    """
    m = u.shape[0]
    n = v.shape[0]

    if s[k] <= 0.0:
        s[k] = -s[k] if s[k] < 0.0 else 0.0
        v[:, k] = -v[:, k]

    while k < last:
        if s[k] >= s[k + 1]:
            break
        s[k], s[k + 1] = s[k + 1], s[k]
        if k < n - 1:
            _swap_columns(v, k, k + 1)
        if k < m - 1:
            _swap_columns(u, k, k + 1)
        k += 1


def diagonalize(
    s: NDArray[np.float64],
    e: NDArray[np.float64],
    u: NDArray[np.float64],
    v: NDArray[np.float64],
    order: int,
    max_iterations: int,
) -> tuple[int, int]:
    """
    Drive the bidiagonal (s, e) to diagonal form, updating u and v.

    Args:
        s, e: Bidiagonal of the given order; overwritten, s ends up
              holding the sorted singular values
        u, v: Orthogonal factors from the reduction; updated in place
        order: Order of the bidiagonal
        max_iterations: Cap on total passes of the main loop

    Returns:
        (passes, qr_steps) actually performed

    Raises:
        NonConvergenceError: If the cap is reached before p reaches 0
    """
    p = order
    last = order - 1
    passes = 0
    qr_steps = 0

    while p > 0:
        if passes >= max_iterations:
            raise NonConvergenceError(
                f"SVD did not converge after {passes} iterations "
                f"({p} singular values outstanding)",
                iterations=passes,
                remaining=p,
                final_change=float(abs(e[p - 2])) if p > 1 else None,
            )
        passes += 1

        case, k = classify(s, e, p)
        if case == DEFLATE:
            deflate(s, e, v, k, p)
        elif case == SPLIT:
            split(s, e, u, k, p)
        elif case == QR_STEP:
            qr_step(s, e, u, v, k, p)
            qr_steps += 1
        else:
            converge(s, u, v, k, last)
            p -= 1

    return passes, qr_steps
