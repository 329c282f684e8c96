"""
Tests for linear system solvers.

Validates:
    - solve() against NumPy for every scalar type, vector and matrix
      right-hand sides, transposed systems and the Cholesky path
    - SingularMatrixError for exactly singular systems
    - IllConditionedWarning below machine epsilon
    - solve_triangular() for both triangles, transposes and unit diagonal
    - Mixed operand dtypes, empty inputs, concurrent use
"""

import warnings
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from pylinalg.core.exceptions import (
    DimensionError,
    IllConditionedWarning,
    InvalidArgumentError,
    NotPositiveDefiniteError,
    SingularMatrixError,
)
from pylinalg.core.scalar import REAL64
from pylinalg.operations.solve import solve, solve_triangular


@pytest.fixture
def well_conditioned(random_matrix):
    """Factory for diagonally shifted, well-conditioned square matrices."""
    def make(n, scalar):
        return random_matrix((n, n), scalar) + n * np.eye(n, dtype=scalar.dtype)
    return make


# ═══════════════════════════════════════════════════════════════════════
# solve
# ═══════════════════════════════════════════════════════════════════════


class TestSolve:

    def test_vector(self, scalar, random_matrix, assert_close, well_conditioned):
        a = well_conditioned(6, scalar)
        b = random_matrix((6,), scalar)
        x = solve(a, b)
        assert x.shape == (6,)
        assert x.dtype == scalar.dtype
        assert_close(a @ x, b, scalar)

    def test_matrix(self, scalar, random_matrix, assert_close, well_conditioned):
        a = well_conditioned(5, scalar)
        b = random_matrix((5, 3), scalar)
        assert_close(a @ solve(a, b), b, scalar)

    def test_transposed(self, scalar, random_matrix, assert_close, well_conditioned):
        a = well_conditioned(5, scalar)
        b = random_matrix((5,), scalar)
        assert_close(a.T @ solve(a, b, transposed=True), b, scalar)

    def test_matches_numpy(self, rng):
        a = rng.standard_normal((8, 8))
        b = rng.standard_normal((8, 2))
        np.testing.assert_allclose(solve(a, b), np.linalg.solve(a, b), rtol=1e-10)

    def test_layout_independent(self, scalar, random_matrix, assert_close, well_conditioned):
        a = well_conditioned(5, scalar)
        b = random_matrix((5, 2), scalar)
        c_x = solve(np.ascontiguousarray(a), np.ascontiguousarray(b))
        f_x = solve(np.asfortranarray(a), np.asfortranarray(b))
        assert c_x.flags.c_contiguous
        assert f_x.flags.f_contiguous
        assert c_x.dtype == f_x.dtype == scalar.dtype
        assert_close(c_x, f_x, scalar)

    def test_positive_definite_path(self, scalar, random_matrix, hpd_matrix, assert_close):
        a = hpd_matrix(5, scalar)
        b = random_matrix((5, 2), scalar)
        assert_close(a @ solve(a, b, assume_a='pos'), b, scalar)

    def test_positive_definite_transposed(self, scalar, random_matrix, hpd_matrix, assert_close):
        a = hpd_matrix(4, scalar)
        b = random_matrix((4,), scalar)
        x = solve(a, b, assume_a='pos', transposed=True)
        assert_close(a.T @ x, b, scalar)

    def test_positive_definite_rejects_indefinite(self):
        with pytest.raises(NotPositiveDefiniteError):
            solve(np.array([[1.0, 2.0], [2.0, 1.0]]), np.ones(2), assume_a='pos')

    def test_bad_assume_a(self):
        with pytest.raises(InvalidArgumentError, match="assume_a"):
            solve(np.eye(2), np.ones(2), assume_a='sym')

    def test_singular(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            solve(np.array([[1.0, 2.0], [2.0, 4.0]]), np.ones(2))
        assert exc_info.value.pivot == 1

    def test_ill_conditioned_warns(self):
        a = np.diag([1.0, 1.0, 1e-17])
        with pytest.warns(IllConditionedWarning) as record:
            x = solve(a, np.ones(3))
        assert record[0].message.rcond < np.finfo(np.float64).eps
        np.testing.assert_allclose(x, [1.0, 1.0, 1e17])

    def test_well_conditioned_does_not_warn(self, well_conditioned):
        a = well_conditioned(4, REAL64)
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            solve(a, np.ones(4))

    def test_rhs_mismatch(self):
        with pytest.raises(DimensionError, match="Inconsistent lengths"):
            solve(np.eye(3), np.ones(4))

    def test_non_square(self):
        with pytest.raises(DimensionError):
            solve(np.ones((3, 2)), np.ones(3))

    def test_mixed_dtypes_promoted(self, well_conditioned):
        a = well_conditioned(3, REAL64).astype(np.float32)
        b = np.array([1j, 2.0, 3.0])
        x = solve(a, b)
        assert x.dtype == np.complex128
        np.testing.assert_allclose(a @ x, b, atol=1e-5)

    def test_input_untouched(self, rng, well_conditioned):
        a = np.asfortranarray(well_conditioned(4, REAL64))
        b = rng.standard_normal(4)
        a_orig, b_orig = a.copy(), b.copy()
        solve(a, b)
        np.testing.assert_array_equal(a, a_orig)
        np.testing.assert_array_equal(b, b_orig)

    def test_empty_short_circuit(self, no_backend):
        assert solve(np.zeros((0, 0)), np.zeros(0)).shape == (0,)
        assert solve(np.eye(3), np.zeros((3, 0))).shape == (3, 0)

    def test_concurrent_calls(self, rng, well_conditioned):
        systems = [(well_conditioned(10, REAL64), rng.standard_normal(10))
                   for _ in range(20)]
        expected = [solve(a, b) for a, b in systems]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda ab: solve(*ab), systems))
        for got, want in zip(results, expected):
            np.testing.assert_allclose(got, want)



# ═══════════════════════════════════════════════════════════════════════
# solve_triangular
# ═══════════════════════════════════════════════════════════════════════


class TestSolveTriangular:

    @pytest.mark.parametrize('lower', [True, False])
    @pytest.mark.parametrize('trans', ['N', 'T', 'C'])
    def test_solves(self, scalar, lower, trans, random_matrix, assert_close, well_conditioned):
        full = well_conditioned(5, scalar)
        a = np.tril(full) if lower else np.triu(full)
        b = random_matrix((5,), scalar)
        x = solve_triangular(a, b, lower=lower, trans=trans)
        op = {'N': a, 'T': a.T, 'C': np.conj(a.T)}[trans]
        assert_close(op @ x, b, scalar)

    def test_other_triangle_ignored(self, rng):
        a = np.triu(rng.standard_normal((4, 4)) + 4 * np.eye(4))
        garbage = a + np.tril(np.full((4, 4), 1e6), -1)
        b = rng.standard_normal(4)
        np.testing.assert_allclose(
            solve_triangular(garbage, b), solve_triangular(a, b),
        )

    def test_unit_diagonal(self):
        a = np.array([[7.0, 0.0], [2.0, 9.0]])
        x = solve_triangular(a, np.array([1.0, 4.0]), lower=True, unit_diagonal=True)
        np.testing.assert_allclose(x, [1.0, 2.0])

    def test_zero_diagonal(self):
        a = np.array([[1.0, 2.0, 3.0], [0.0, 1.0, 4.0], [0.0, 0.0, 0.0]])
        with pytest.raises(SingularMatrixError) as exc_info:
            solve_triangular(a, np.ones(3))
        assert exc_info.value.pivot == 2
        assert exc_info.value.routine == 'dtrtrs'

    def test_matrix_rhs_layout(self, rng):
        a = np.triu(rng.standard_normal((4, 4)) + 4 * np.eye(4))
        b = np.asfortranarray(rng.standard_normal((4, 3)))
        x = solve_triangular(a, b)
        assert x.flags.f_contiguous
        np.testing.assert_allclose(a @ x, b)
