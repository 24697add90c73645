"""
Tests for LU decomposition with partial pivoting.

Validates:
    - Factor structure: A[pivot, :] = L @ U, unit lower L, upper U
    - Agreement with scipy.linalg.lu on generic input
    - Rectangular (tall and wide) and empty inputs
    - det() against cofactor expansion
    - solve() residual bound, dimension and singularity errors
    - Ill-conditioning warning and the Result envelope
"""

import numpy as np
import pytest
import scipy.linalg

from pymatrix import Matrix, lu
from pymatrix.core.compute.tolerances import RESIDUAL_BOUND, scaled_residual
from pymatrix.core.exceptions import DimensionError, SingularMatrixError, ValidationError


def cofactor_det3(a):
    """Determinant of a 3 x 3 array by cofactor expansion along row 0."""
    return (
        a[0, 0] * (a[1, 1] * a[2, 2] - a[1, 2] * a[2, 1])
        - a[0, 1] * (a[1, 0] * a[2, 2] - a[1, 2] * a[2, 0])
        + a[0, 2] * (a[1, 0] * a[2, 1] - a[1, 1] * a[2, 0])
    )


def assert_factors_reconstruct(A, decomposition):
    """A[pivot, :] == L @ U to working precision."""
    permuted = A.get_matrix(decomposition.pivot, slice(None))
    difference = (decomposition.L @ decomposition.U - permuted).norm1()
    assert difference <= 100 * max(A.m, A.n, 1) * np.finfo(float).eps * max(A.norm1(), 1.0)


# ═══════════════════════════════════════════════════════════════════════
# Factor structure
# ═══════════════════════════════════════════════════════════════════════


class TestFactors:

    def test_reconstruction(self, well_conditioned):
        assert_factors_reconstruct(well_conditioned, lu(well_conditioned))

    def test_triangular_shapes(self, well_conditioned):
        result = lu(well_conditioned)
        L = result.L.to_array()
        U = result.U.to_array()
        np.testing.assert_array_equal(np.diag(L), np.ones(3))
        np.testing.assert_array_equal(np.triu(L, k=1), np.zeros((3, 3)))
        np.testing.assert_array_equal(np.tril(U, k=-1), np.zeros((3, 3)))

    def test_multipliers_bounded(self, random_square):
        # Partial pivoting keeps every multiplier at most 1 in magnitude.
        L = lu(random_square).L.to_array()
        assert np.max(np.abs(L)) <= 1.0

    def test_pivot_is_permutation(self, random_square):
        result = lu(random_square)
        assert sorted(result.pivot.tolist()) == list(range(6))
        np.testing.assert_array_equal(result.float_pivot, result.pivot.astype(float))
        assert result.float_pivot.dtype == np.float64

    def test_pivot_sign_matches_parity(self, well_conditioned):
        result = lu(well_conditioned)
        permutation = np.eye(3)[result.pivot]
        assert result.pivot_sign == round(np.linalg.det(permutation))

    def test_known_pivot(self, well_conditioned):
        # The largest entry of column 0 is 7, in row 2.
        result = lu(well_conditioned)
        assert result.pivot[0] == 2
        assert result.U[0, 0] == 7.0

    def test_input_not_mutated(self, well_conditioned):
        before = well_conditioned.copy()
        lu(well_conditioned)
        assert well_conditioned == before

    def test_accessors_return_copies(self, well_conditioned):
        result = lu(well_conditioned)
        pivot = result.pivot
        pivot[0] = 99
        assert result.pivot[0] != 99
        L = result.L
        L[0, 0] = 5.0
        assert result.L[0, 0] == 1.0

    def test_params_read_only(self, well_conditioned):
        params = lu(well_conditioned).params
        with pytest.raises(ValueError):
            params.lu[0, 0] = 0.0
        with pytest.raises(ValueError):
            params.pivot[0] = 0


class TestAgainstScipy:
    """Same pivot sequence and factors as LAPACK's getrf."""

    def test_matches_scipy(self, rng):
        values = rng.standard_normal((7, 7))
        result = lu(Matrix.from_array(values))
        P, L, U = scipy.linalg.lu(values)
        np.testing.assert_array_equal(result.pivot, np.argmax(P, axis=0))
        np.testing.assert_allclose(result.L.to_array(), L, rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(result.U.to_array(), U, rtol=1e-10, atol=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# Rectangular and empty input
# ═══════════════════════════════════════════════════════════════════════


class TestRectangular:

    def test_tall(self, rng):
        A = Matrix.from_array(rng.standard_normal((6, 3)))
        result = lu(A)
        assert result.L.shape == (6, 3)
        assert result.U.shape == (3, 3)
        assert result.is_nonsingular
        assert_factors_reconstruct(A, result)

    def test_wide(self, rng):
        A = Matrix.from_array(rng.standard_normal((3, 6)))
        result = lu(A)
        assert result.L.shape == (3, 3)
        assert result.U.shape == (3, 6)
        assert not result.is_nonsingular
        assert result.warnings
        assert_factors_reconstruct(A, result)

    def test_wide_solve_is_singular(self, rng):
        A = Matrix.from_array(rng.standard_normal((2, 4)))
        with pytest.raises(SingularMatrixError):
            lu(A).solve(Matrix(2, 1, 1.0))

    @pytest.mark.parametrize("n", [4, 6, 9])
    def test_wide_two_rows(self, n):
        A = Matrix.from_array(np.arange(1.0, 2 * n + 1.0).reshape(2, n))
        result = lu(A)
        assert result.U.shape == (2, n)
        assert_factors_reconstruct(A, result)

    def test_no_rows(self):
        result = lu(Matrix(0, 3))
        assert result.L.shape == (0, 0)
        assert result.U.shape == (0, 3)
        assert not result.is_nonsingular
        with pytest.raises(DimensionError, match="must be square"):
            result.det()

    def test_det_rectangular(self, rng):
        with pytest.raises(DimensionError, match="must be square"):
            lu(Matrix.from_array(rng.standard_normal((4, 3)))).det()

    def test_empty(self):
        result = lu(Matrix(0, 0))
        assert result.det() == 1.0
        assert result.is_nonsingular
        assert result.solve(Matrix(0, 2)).shape == (0, 2)


# ═══════════════════════════════════════════════════════════════════════
# Determinant
# ═══════════════════════════════════════════════════════════════════════


class TestDeterminant:

    def test_known_value(self, well_conditioned):
        assert lu(well_conditioned).det() == pytest.approx(-3.0, rel=1e-12)

    def test_matches_cofactor_expansion(self, rng):
        for _ in range(10):
            values = rng.standard_normal((3, 3))
            expected = cofactor_det3(values)
            assert lu(Matrix.from_array(values)).det() == pytest.approx(expected, rel=1e-10, abs=1e-12)

    def test_singular_is_zero(self, rank_deficient):
        assert lu(rank_deficient).det() == 0.0

    def test_identity(self):
        assert lu(Matrix.identity(5)).det() == 1.0


# ═══════════════════════════════════════════════════════════════════════
# Solve
# ═══════════════════════════════════════════════════════════════════════


class TestSolve:

    def test_three_by_three_scenario(self, well_conditioned):
        b = Matrix.from_rows([[1.0], [2.0], [3.0]])
        x = lu(well_conditioned).solve(b)
        assert x.shape == (3, 1)
        assert (well_conditioned @ x - b).norm_inf() < 1e-10

    def test_matches_numpy(self, random_square, rng):
        B = Matrix.from_array(rng.standard_normal((6, 4)))
        X = lu(random_square).solve(B)
        expected = np.linalg.solve(random_square.to_array(), B.to_array())
        np.testing.assert_allclose(X.to_array(), expected, rtol=1e-10, atol=1e-12)

    @pytest.mark.parametrize("n", [1, 2, 5, 10, 20])
    def test_residual_bound(self, n, rng):
        A = Matrix.from_array(rng.standard_normal((n, n)) + n * np.eye(n))
        B = Matrix.from_array(rng.standard_normal((n, 3)))
        X = lu(A).solve(B)
        residual = (A @ X - B).norm1()
        assert scaled_residual(residual, n) < RESIDUAL_BOUND

    def test_tall_solve_returns_n_rows(self, rng):
        A = Matrix.from_array(rng.standard_normal((5, 3)))
        X = lu(A).solve(Matrix(5, 2, 1.0))
        assert X.shape == (3, 2)

    def test_rhs_not_mutated(self, well_conditioned):
        b = Matrix.from_rows([[1.0], [2.0], [3.0]])
        lu(well_conditioned).solve(b)
        assert b.to_list() == [[1.0], [2.0], [3.0]]

    def test_row_mismatch(self, well_conditioned):
        with pytest.raises(DimensionError, match="row dimensions must agree"):
            lu(well_conditioned).solve(Matrix(2, 1))

    def test_non_matrix_rhs(self, well_conditioned):
        with pytest.raises(ValidationError):
            lu(well_conditioned).solve(np.ones((3, 1)))

    def test_singular(self, rank_deficient):
        result = lu(rank_deficient)
        assert not result.is_nonsingular
        with pytest.raises(SingularMatrixError) as exc_info:
            result.solve(Matrix(3, 1, 1.0))
        assert exc_info.value.matrix_name == 'A'
        assert exc_info.value.expected_rank == 3

    def test_close_to_singular_warns(self):
        A = Matrix.from_rows([[1.0, 0.0], [0.0, 1e-20]])
        with pytest.warns(RuntimeWarning, match="close to singular"):
            x = lu(A).solve(Matrix.from_rows([[1.0], [1e-20]]))
        np.testing.assert_allclose(x.to_array(), [[1.0], [1.0]])


# ═══════════════════════════════════════════════════════════════════════
# Entry point and envelope
# ═══════════════════════════════════════════════════════════════════════


class TestEntryPoint:

    @pytest.mark.parametrize("backend", ['auto', 'cpu', 'cpu_crout'])
    def test_backends(self, backend, well_conditioned):
        result = lu(well_conditioned, backend=backend)
        assert result.backend_name == 'cpu_crout'

    def test_unknown_backend(self, well_conditioned):
        with pytest.raises(ValueError, match="Unknown backend"):
            lu(well_conditioned, backend='gpu')

    def test_rejects_non_matrix(self):
        with pytest.raises(ValidationError, match="expected a Matrix"):
            lu(np.eye(3))

    def test_info_and_timing(self, well_conditioned):
        result = lu(well_conditioned)
        assert result.info['method'] == 'crout'
        assert result.info['shape'] == (3, 3)
        assert 'factorization' in result.timing
        assert result.warnings == ()

    def test_singular_warning_recorded(self, rank_deficient):
        result = lu(rank_deficient)
        assert any("singular" in w for w in result.warnings)

    def test_method_shortcut(self, well_conditioned):
        assert well_conditioned.lu().det() == lu(well_conditioned).det()

    def test_repr(self, well_conditioned):
        assert "LUDecomposition(shape=(3, 3)" in repr(lu(well_conditioned))
