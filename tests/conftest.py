"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrix import Matrix


def build_magic(n: int) -> Matrix:
    """Magic square of order n (MATLAB's construction)."""
    m = np.zeros((n, n))
    if n % 2 == 1:
        # Odd order
        a = (n + 1) // 2
        b = n + 1
        for j in range(n):
            for i in range(n):
                m[i, j] = n * ((i + j + a) % n) + ((i + 2 * j + b) % n) + 1
    elif n % 4 == 0:
        # Doubly even order
        for j in range(n):
            for i in range(n):
                if ((i + 1) // 2) % 2 == ((j + 1) // 2) % 2:
                    m[i, j] = n * n - n * i - j
                else:
                    m[i, j] = n * i + j + 1
    else:
        # Singly even order
        p = n // 2
        k = (n - 2) // 4
        a = build_magic(p).to_array()
        m[:p, :p] = a
        m[:p, p:] = a + 2 * p * p
        m[p:, :p] = a + 3 * p * p
        m[p:, p:] = a + p * p
        for i in range(p):
            for j in list(range(k)) + list(range(n - k + 1, n)):
                m[i, j], m[i + p, j] = m[i + p, j], m[i, j]
        m[k, 0], m[k + p, 0] = m[k + p, 0], m[k, 0]
        m[k, k], m[k + p, k] = m[k + p, k], m[k, k]
    return Matrix.from_array(m)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def magic():
    """Magic square builder, magic(n) -> Matrix."""
    return build_magic


@pytest.fixture
def well_conditioned():
    """The 3 x 3 system used throughout the examples."""
    return Matrix.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 10.0]])


@pytest.fixture
def rank_deficient():
    """3 x 3 matrix whose second row is twice the first; U[2, 2] is exactly zero."""
    return Matrix.from_rows([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [1.0, 1.0, 1.0]])


@pytest.fixture
def random_square(rng):
    """Random 6 x 6 matrix, comfortably nonsingular."""
    return Matrix.from_array(rng.standard_normal((6, 6)) + 6.0 * np.eye(6))
