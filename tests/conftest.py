"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pylinalg.core.compute.tolerances import select_tolerance
from pylinalg.core.scalar import SCALARS


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(params=SCALARS, ids=lambda s: s.name)
def scalar(request):
    """Each of the four LAPACK scalar types in turn."""
    return request.param


@pytest.fixture
def random_matrix(rng):
    """Factory for random arrays of a scalar type, entries O(1)."""
    def make(shape, scalar):
        data = rng.standard_normal(shape)
        if scalar.is_complex:
            data = data + 1j * rng.standard_normal(shape)
        return data.astype(scalar.dtype)
    return make


@pytest.fixture
def hpd_matrix(random_matrix):
    """Factory for well-conditioned Hermitian positive definite matrices."""
    def make(n, scalar):
        g = random_matrix((n, n), scalar)
        a = g @ np.conj(g.T) + n * np.eye(n)
        return a.astype(scalar.dtype)
    return make


@pytest.fixture
def hermitian_matrix(random_matrix):
    """Factory for Hermitian (or real symmetric) matrices."""
    def make(n, scalar):
        g = random_matrix((n, n), scalar)
        return ((g + np.conj(g.T)) / 2).astype(scalar.dtype)
    return make


@pytest.fixture
def assert_close():
    """assert_allclose with the tolerance tier of a scalar type."""
    def check(actual, expected, scalar, ill_conditioned=False):
        tier = select_tolerance(scalar, ill_conditioned)
        np.testing.assert_allclose(actual, expected, rtol=tier.rtol, atol=tier.atol)
    return check


@pytest.fixture
def no_backend(monkeypatch):
    """Make any routine resolution fail, to prove it never happens."""
    from pylinalg.core.backends import lapack

    def fail(name):
        raise AssertionError(f"routine {name} was resolved")

    monkeypatch.setattr(lapack, 'get_routine', fail)
