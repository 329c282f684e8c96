"""
Tests for generalized eigenproblems A v = λ B v.

Validates:
    - A V = B V diag(w) for general pencils (ggev)
    - Infinite eigenvalues where beta == 0
    - Symmetric-definite pencils (sygvd / hegvd): all three problem
      types, B-orthonormal eigenvectors, B not positive definite
    - Same results for row- and column-major operands
"""

import numpy as np
import pytest
import scipy.linalg

from pylinalg.core.exceptions import (
    DimensionError,
    InvalidArgumentError,
    NotPositiveDefiniteError,
)
from pylinalg.core.scalar import REAL64
from pylinalg.operations.generalized import _ratios, eig_generalized, eigh_generalized


# ═══════════════════════════════════════════════════════════════════════
# General pencils
# ═══════════════════════════════════════════════════════════════════════


class TestEigGeneralized:

    def test_right_eigenvectors(self, scalar, random_matrix, hpd_matrix, assert_close):
        a = random_matrix((5, 5), scalar)
        b = hpd_matrix(5, scalar)
        result = eig_generalized(a, b)
        w, v = result.eigenvalues, result.eigenvectors
        assert np.all(np.isfinite(w))
        assert_close(a @ v, (b @ v) * w, scalar, ill_conditioned=True)

    def test_left_eigenvectors(self, scalar, random_matrix, hpd_matrix, assert_close):
        a = random_matrix((4, 4), scalar)
        b = hpd_matrix(4, scalar)
        result = eig_generalized(a, b, left=True, right=False)
        assert result.eigenvectors is None
        vlh = np.conj(result.left_eigenvectors.T)
        w = result.eigenvalues
        assert_close(vlh @ a, w[:, None] * (vlh @ b), scalar, ill_conditioned=True)

    def test_matches_scipy(self, rng, hpd_matrix):
        a = rng.standard_normal((5, 5))
        b = hpd_matrix(5, REAL64)
        w = eig_generalized(a, b, right=False).eigenvalues
        expected = scipy.linalg.eigvals(a, b)
        np.testing.assert_allclose(np.sort_complex(w), np.sort_complex(expected), atol=1e-10)

    def test_ratio_of_alpha_beta(self, rng, hpd_matrix):
        a = rng.standard_normal((4, 4))
        b = hpd_matrix(4, REAL64)
        result = eig_generalized(a, b)
        np.testing.assert_allclose(result.eigenvalues, result.alpha / result.beta)

    def test_infinite_eigenvalue(self):
        result = eig_generalized(np.eye(2), np.diag([1.0, 0.0]))
        w = result.eigenvalues
        assert np.sum(np.isinf(w)) == 1
        np.testing.assert_allclose(w[np.isfinite(w)], [1.0])
        assert np.sum(result.beta == 0) == 1

    def test_ratios(self):
        w = _ratios(
            np.array([2.0 + 0j, 1.0, 0.0]),
            np.array([1.0, 0.0, 0.0]),
            np.dtype(np.complex128),
        )
        assert w[0] == 2.0
        assert np.isinf(w[1])
        assert np.isnan(w[2])

    def test_shape_mismatch(self):
        with pytest.raises(DimensionError):
            eig_generalized(np.eye(3), np.eye(2))

    def test_mixed_dtypes(self, rng):
        a = rng.standard_normal((3, 3)).astype(np.float32)
        b = np.eye(3, dtype=np.complex128)
        result = eig_generalized(a, b)
        assert result.routine == 'zggev'
        assert result.eigenvalues.dtype == np.complex128

    @pytest.mark.parametrize('b_order', ['C', 'F'])
    def test_layout(self, scalar, b_order, random_matrix, hpd_matrix, assert_close):
        a = random_matrix((4, 4), scalar)
        b = hpd_matrix(4, scalar)
        c_result = eig_generalized(np.ascontiguousarray(a), np.array(b, order=b_order), left=True)
        f_result = eig_generalized(np.asfortranarray(a), np.asfortranarray(b), left=True)
        for c_part, f_part in [
            (c_result.eigenvectors, f_result.eigenvectors),
            (c_result.left_eigenvectors, f_result.left_eigenvectors),
        ]:
            assert c_part.shape == f_part.shape == (4, 4)
            assert c_part.dtype == f_part.dtype == scalar.complex_dtype
            assert c_part.flags.c_contiguous
            assert f_part.flags.f_contiguous
            assert_close(c_part, f_part, scalar, ill_conditioned=True)
        assert_close(c_result.eigenvalues, f_result.eigenvalues, scalar, ill_conditioned=True)

    def test_empty_short_circuit(self, no_backend):
        result = eig_generalized(np.zeros((0, 0)), np.zeros((0, 0)))
        assert result.eigenvalues.shape == (0,)
        assert result.eigenvectors.shape == (0, 0)


# ═══════════════════════════════════════════════════════════════════════
# Symmetric-definite pencils
# ═══════════════════════════════════════════════════════════════════════


class TestEighGeneralized:

    def test_type_one(self, scalar, hpd_matrix, hermitian_matrix, assert_close):
        a = hermitian_matrix(5, scalar)
        b = hpd_matrix(5, scalar)
        result = eigh_generalized(a, b)
        w, v = result.eigenvalues, result.eigenvectors
        assert w.dtype == scalar.real_dtype
        assert np.all(np.diff(w) >= 0)
        assert_close(a @ v, (b @ v) * w, scalar, ill_conditioned=True)
        assert_close(np.conj(v.T) @ b @ v, np.eye(5), scalar, ill_conditioned=True)

    def test_type_two(self, hpd_matrix, hermitian_matrix):
        a = hermitian_matrix(4, REAL64)
        b = hpd_matrix(4, REAL64)
        result = eigh_generalized(a, b, itype=2)
        v, w = result.eigenvectors, result.eigenvalues
        np.testing.assert_allclose(a @ b @ v, v * w, atol=1e-9)

    def test_type_three(self, hpd_matrix, hermitian_matrix):
        a = hermitian_matrix(4, REAL64)
        b = hpd_matrix(4, REAL64)
        result = eigh_generalized(a, b, itype=3)
        v, w = result.eigenvectors, result.eigenvalues
        np.testing.assert_allclose(b @ a @ v, v * w, atol=1e-9)

    def test_matches_scipy(self, scalar, hpd_matrix, hermitian_matrix, assert_close):
        a = hermitian_matrix(5, scalar)
        b = hpd_matrix(5, scalar)
        expected = scipy.linalg.eigh(a, b, eigvals_only=True)
        result = eigh_generalized(a, b, eigvals_only=True)
        assert result.eigenvectors is None
        assert_close(result.eigenvalues, expected, scalar, ill_conditioned=True)

    def test_upper_triangle(self, hpd_matrix, hermitian_matrix):
        a = hermitian_matrix(4, REAL64)
        b = hpd_matrix(4, REAL64)
        np.testing.assert_allclose(
            eigh_generalized(a, b, uplo='upper').eigenvalues,
            eigh_generalized(a, b).eigenvalues,
            atol=1e-12,
        )

    @pytest.mark.parametrize('b_order', ['C', 'F'])
    def test_layout(self, scalar, b_order, hermitian_matrix, hpd_matrix, assert_close):
        a = hermitian_matrix(4, scalar)
        b = hpd_matrix(4, scalar)
        c_result = eigh_generalized(np.ascontiguousarray(a), np.array(b, order=b_order))
        f_result = eigh_generalized(np.asfortranarray(a), np.asfortranarray(b))
        c_v, f_v = c_result.eigenvectors, f_result.eigenvectors
        assert c_v.shape == f_v.shape == (4, 4)
        assert c_v.dtype == f_v.dtype == scalar.dtype
        assert c_v.flags.c_contiguous
        assert f_v.flags.f_contiguous
        assert_close(c_result.eigenvalues, f_result.eigenvalues, scalar, ill_conditioned=True)
        assert_close(c_v, f_v, scalar, ill_conditioned=True)

    def test_routine_by_realness(self, scalar, hermitian_matrix):
        expected = scalar.prefix + ('hegvd' if scalar.is_complex else 'sygvd')
        a = hermitian_matrix(2, scalar)
        assert eigh_generalized(a, np.eye(2, dtype=scalar.dtype)).routine == expected

    def test_b_not_positive_definite(self, scalar):
        a = np.eye(3, dtype=scalar.dtype)
        b = np.diag([1.0, 1.0, -1.0]).astype(scalar.dtype)
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            eigh_generalized(a, b)
        err = exc_info.value
        assert err.order == 3
        assert err.matrix_name == 'b'
        assert err.info == 6

    def test_bad_itype(self):
        with pytest.raises(InvalidArgumentError, match="itype"):
            eigh_generalized(np.eye(2), np.eye(2), itype=4)

    def test_empty_short_circuit(self, no_backend):
        result = eigh_generalized(np.zeros((0, 0)), np.zeros((0, 0)))
        assert result.eigenvalues.shape == (0,)
        assert result.eigenvectors.shape == (0, 0)
