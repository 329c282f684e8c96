"""
Tests for matrix inversion via getrf + getri.
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import DimensionError, SingularMatrixError
from pylinalg.operations.inverse import inv


class TestInverse:

    def test_identity_product(self, scalar, random_matrix, assert_close):
        a = random_matrix((5, 5), scalar) + 5 * np.eye(5, dtype=scalar.dtype)
        inv_a = inv(a)
        assert inv_a.dtype == scalar.dtype
        assert_close(a @ inv_a, np.eye(5), scalar)
        assert_close(inv_a @ a, np.eye(5), scalar)

    def test_matches_numpy(self, rng):
        a = rng.standard_normal((6, 6))
        np.testing.assert_allclose(inv(a), np.linalg.inv(a), rtol=1e-9, atol=1e-12)

    def test_known_inverse(self):
        a = np.array([[4.0, 7.0], [2.0, 6.0]])
        np.testing.assert_allclose(inv(a), [[0.6, -0.7], [-0.2, 0.4]])

    def test_singular(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            inv(np.array([[1.0, 2.0], [2.0, 4.0]]))
        assert exc_info.value.pivot == 1

    def test_non_square(self):
        with pytest.raises(DimensionError):
            inv(np.ones((2, 3)))

    def test_layout_preserved(self, scalar, random_matrix, assert_close):
        a = random_matrix((4, 4), scalar) + 4 * np.eye(4, dtype=scalar.dtype)
        c_inv = inv(np.ascontiguousarray(a))
        f_inv = inv(np.asfortranarray(a))
        assert c_inv.flags.c_contiguous
        assert f_inv.flags.f_contiguous
        assert c_inv.dtype == f_inv.dtype == scalar.dtype
        assert_close(c_inv, f_inv, scalar)

    def test_input_untouched(self, rng):
        a = np.asfortranarray(rng.standard_normal((4, 4)) + 4 * np.eye(4))
        original = a.copy()
        inv(a)
        np.testing.assert_array_equal(a, original)

    def test_overwrite(self, rng):
        a = np.asfortranarray(rng.standard_normal((4, 4)) + 4 * np.eye(4))
        expected = inv(a)
        result = inv(a, overwrite_a=True)
        assert result is a
        np.testing.assert_allclose(a, expected)

    def test_empty_short_circuit(self, no_backend):
        assert inv(np.zeros((0, 0), dtype=np.float32)).dtype == np.float32
