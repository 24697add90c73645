"""
Tests for the singular value decomposition.

Validates:
    - Reconstruction U @ S @ V.T == A within n * eps
    - Singular values descending and non-negative
    - Orthonormal columns of U and V
    - Tall, wide (transposed) and empty inputs
    - Agreement with numpy.linalg.svd
    - norm2 / cond / rank queries
    - Iteration cap and NonConvergenceError
"""

import math

import numpy as np
import pytest

from pymatrix import Matrix, svd
from pymatrix.core.compute import EPS
from pymatrix.core.compute.tolerances import RESIDUAL_BOUND, scaled_residual
from pymatrix.core.exceptions import ConvergenceError, NonConvergenceError, ValidationError

SHAPES = [(1, 1), (2, 2), (3, 3), (5, 3), (3, 5), (8, 8), (10, 4), (4, 10), (1, 6), (6, 1)]


def reconstruct(decomposition):
    return decomposition.U @ decomposition.S @ decomposition.V.T


# ═══════════════════════════════════════════════════════════════════════
# Core properties
# ═══════════════════════════════════════════════════════════════════════


class TestProperties:

    @pytest.mark.parametrize("shape", SHAPES)
    def test_reconstruction(self, shape, rng):
        A = Matrix.random(*shape, rng=rng)
        result = svd(A)
        residual = (reconstruct(result) - A).norm1()
        assert scaled_residual(residual, max(shape)) < RESIDUAL_BOUND

    @pytest.mark.parametrize("shape", SHAPES)
    def test_descending_non_negative(self, shape, rng):
        A = Matrix.from_array(rng.standard_normal(shape))
        s = svd(A).singular_values
        assert s.size == min(shape)
        assert np.all(s >= 0.0)
        assert np.all(np.diff(s) <= 0.0)

    @pytest.mark.parametrize("shape", SHAPES)
    def test_orthonormal_columns(self, shape, rng):
        A = Matrix.from_array(rng.standard_normal(shape))
        result = svd(A)
        U = result.U.to_array()
        V = result.V.to_array()
        np.testing.assert_allclose(U.T @ U, np.eye(U.shape[1]), atol=1e-12)
        np.testing.assert_allclose(V.T @ V, np.eye(V.shape[1]), atol=1e-12)

    def test_input_not_mutated(self, well_conditioned):
        before = well_conditioned.copy()
        svd(well_conditioned)
        assert well_conditioned == before

    def test_known_diagonal(self):
        result = svd(Matrix.from_rows([[3.0, 0.0], [0.0, 4.0]]))
        np.testing.assert_array_equal(result.singular_values, [4.0, 3.0])
        np.testing.assert_allclose(reconstruct(result).to_array(), [[3.0, 0.0], [0.0, 4.0]])

    def test_negative_diagonal_made_positive(self):
        result = svd(Matrix.from_rows([[-2.0, 0.0], [0.0, 1.0]]))
        np.testing.assert_array_equal(result.singular_values, [2.0, 1.0])

    def test_zero_matrix(self):
        result = svd(Matrix(4, 3))
        np.testing.assert_array_equal(result.singular_values, np.zeros(3))
        assert result.rank() == 0
        assert result.norm2() == 0.0
        assert result.cond() == math.inf

    def test_rank_one(self):
        x = np.arange(1.0, 5.0)
        result = svd(Matrix.from_array(np.outer(x, x)))
        assert result.rank() == 1
        assert result.norm2() == pytest.approx(x @ x)


# ═══════════════════════════════════════════════════════════════════════
# Shapes
# ═══════════════════════════════════════════════════════════════════════


class TestShapes:

    def test_tall_factor_shapes(self, rng):
        result = svd(Matrix.random(6, 4, rng=rng))
        assert result.U.shape == (6, 4)
        assert result.S.shape == (4, 4)
        assert result.V.shape == (4, 4)
        assert result.info['transposed'] is False

    def test_wide_factor_shapes(self, rng):
        result = svd(Matrix.random(4, 6, rng=rng))
        assert result.U.shape == (4, 4)
        assert result.S.shape == (4, 4)
        assert result.V.shape == (6, 4)
        assert result.info['transposed'] is True
        assert (result.m, result.n) == (4, 6)

    def test_wide_matches_transpose(self, rng):
        A = Matrix.random(3, 7, rng=rng)
        np.testing.assert_allclose(
            svd(A).singular_values, svd(A.T).singular_values, rtol=1e-12
        )

    @pytest.mark.parametrize("shape", [(0, 0), (3, 0), (0, 3)])
    def test_empty(self, shape):
        result = svd(Matrix(*shape))
        assert result.singular_values.size == 0
        assert result.norm2() == 0.0
        assert result.rank() == 0
        assert math.isnan(result.cond())
        assert (result.m, result.n) == shape
        assert reconstruct(result).shape == shape


# ═══════════════════════════════════════════════════════════════════════
# Agreement with LAPACK
# ═══════════════════════════════════════════════════════════════════════


class TestAgainstNumpy:

    @pytest.mark.parametrize("shape", [(5, 5), (9, 4), (4, 9), (12, 12)])
    def test_singular_values(self, shape, rng):
        values = rng.standard_normal(shape)
        ours = svd(Matrix.from_array(values)).singular_values
        expected = np.linalg.svd(values, compute_uv=False)
        np.testing.assert_allclose(ours, expected, rtol=1e-10, atol=1e-12 * expected[0])

    def test_norm2_and_cond(self, rng):
        values = rng.standard_normal((6, 4))
        result = svd(Matrix.from_array(values))
        assert result.norm2() == pytest.approx(np.linalg.norm(values, 2), rel=1e-10)
        assert result.cond() == pytest.approx(np.linalg.cond(values), rel=1e-8)

    def test_rank_matches_numpy(self, rank_deficient, rng):
        assert svd(rank_deficient).rank() == np.linalg.matrix_rank(rank_deficient.to_array())
        values = rng.standard_normal((6, 3)) @ rng.standard_normal((3, 5))
        assert svd(Matrix.from_array(values)).rank() == 3


# ═══════════════════════════════════════════════════════════════════════
# Iteration cap
# ═══════════════════════════════════════════════════════════════════════


class TestIterationCap:

    def test_default_cap_recorded(self, rng):
        result = svd(Matrix.random(5, 3, rng=rng))
        assert result.info['max_iterations'] == 75 * 5
        assert 0 < result.info['iterations'] <= result.info['max_iterations']

    def test_identity_passes(self):
        # Already diagonal: one convergence pass per singular value.
        result = svd(Matrix.identity(3), max_iterations=3)
        assert result.info['iterations'] == 3
        assert result.info['qr_steps'] == 0

    def test_identity_cap_too_small(self):
        with pytest.raises(NonConvergenceError) as exc_info:
            svd(Matrix.identity(3), max_iterations=2)
        assert exc_info.value.iterations == 2
        assert exc_info.value.remaining == 1
        assert exc_info.value.reason == 'max_iterations'

    def test_general_matrix_cap(self, well_conditioned):
        with pytest.raises(ConvergenceError):
            svd(well_conditioned, max_iterations=1)

    @pytest.mark.parametrize("bad", [0, -5, 2.5, True])
    def test_invalid_cap(self, bad, well_conditioned):
        with pytest.raises(ValidationError, match="max_iterations"):
            svd(well_conditioned, max_iterations=bad)


# ═══════════════════════════════════════════════════════════════════════
# Entry point and envelope
# ═══════════════════════════════════════════════════════════════════════


class TestEntryPoint:

    @pytest.mark.parametrize("backend", ['auto', 'cpu', 'cpu_golub_kahan'])
    def test_backends(self, backend, well_conditioned):
        assert svd(well_conditioned, backend=backend).backend_name == 'cpu_golub_kahan'

    def test_unknown_backend(self, well_conditioned):
        with pytest.raises(ValueError, match="Unknown backend"):
            svd(well_conditioned, backend='gpu')

    def test_rejects_non_matrix(self):
        with pytest.raises(ValidationError, match="expected a Matrix"):
            svd([[1.0, 2.0]])

    def test_timing_sections(self, well_conditioned):
        timing = svd(well_conditioned).timing
        for key in ('total_seconds', 'bidiagonalization', 'accumulate_uv', 'qr_iteration'):
            assert key in timing

    def test_params_read_only(self, well_conditioned):
        params = svd(well_conditioned).params
        with pytest.raises(ValueError):
            params.s[0] = 0.0

    def test_singular_values_copy(self, well_conditioned):
        result = svd(well_conditioned)
        s = result.singular_values
        s[0] = -1.0
        assert result.singular_values[0] > 0.0

    def test_method_shortcuts(self, well_conditioned):
        result = svd(well_conditioned)
        assert well_conditioned.norm2() == result.norm2()
        assert well_conditioned.cond() == result.cond()
        assert well_conditioned.rank() == result.rank() == 3

    def test_rank_tolerance(self):
        # A singular value just under max(m, n) * s[0] * eps is not counted.
        A = Matrix.from_rows([[1.0, 0.0], [0.0, EPS]])
        assert svd(A).rank() == 1

    def test_repr(self, well_conditioned):
        assert "SVDDecomposition(shape=(3, 3), rank=3" in repr(svd(well_conditioned))
