"""
Tests for PyLinalg exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyLinalgError)
    - Diagnostic attributes on InvalidArgumentError, SingularMatrixError,
      NotPositiveDefiniteError, ConvergenceError, AllocationError
    - Default attribute values (None for optional attributes)
    - Warnings are UserWarnings
"""

import warnings

import pytest

from pylinalg.core.exceptions import (
    AllocationError,
    ConvergenceError,
    DimensionError,
    IllConditionedWarning,
    InvalidArgumentError,
    LinalgWarning,
    NotPositiveDefiniteError,
    NumericalError,
    PyLinalgError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyLinalgError."""

    def test_validation_error_is_invalid_argument(self):
        with pytest.raises(InvalidArgumentError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_dimension_error_is_pylinalg_error(self):
        with pytest.raises(PyLinalgError):
            raise DimensionError("wrong shape")

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_not_positive_definite_is_singular(self):
        with pytest.raises(SingularMatrixError):
            raise NotPositiveDefiniteError("not PD")

    def test_convergence_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise ConvergenceError("did not converge")

    def test_allocation_error_is_memory_error(self):
        """AllocationError is catchable both ways."""
        with pytest.raises(MemoryError):
            raise AllocationError("too big")
        with pytest.raises(PyLinalgError):
            raise AllocationError("too big")

    def test_numerical_and_argument_errors_are_disjoint(self):
        assert not isinstance(SingularMatrixError("x"), InvalidArgumentError)
        assert not isinstance(InvalidArgumentError("x"), NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# InvalidArgumentError
# ═══════════════════════════════════════════════════════════════════════


class TestInvalidArgumentError:
    """InvalidArgumentError carries the routine and argument position."""

    def test_all_attributes(self):
        err = InvalidArgumentError(
            "dgetrf: argument 4 (lda) had an illegal value",
            routine='dgetrf',
            position=4,
            argument='lda',
        )
        assert err.routine == 'dgetrf'
        assert err.position == 4
        assert err.argument == 'lda'
        assert "lda" in str(err)

    def test_defaults_are_none(self):
        err = InvalidArgumentError("bad")
        assert err.routine is None
        assert err.position is None
        assert err.argument is None


# ═══════════════════════════════════════════════════════════════════════
# Numerical errors
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries the pivot and the raw status."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "dgetrf: matrix is singular",
            routine='dgetrf',
            info=3,
            pivot=2,
            matrix_name='a',
        )
        assert err.routine == 'dgetrf'
        assert err.info == 3
        assert err.pivot == 2
        assert err.matrix_name == 'a'

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.routine is None
        assert err.info is None
        assert err.pivot is None
        assert err.matrix_name is None


class TestNotPositiveDefiniteError:
    """NotPositiveDefiniteError reports the order of the failing minor."""

    def test_order_and_pivot(self):
        err = NotPositiveDefiniteError("not PD", routine='dpotrf', info=2, order=2)
        assert err.order == 2
        assert err.pivot == 1
        assert err.info == 2

    def test_defaults_are_none(self):
        err = NotPositiveDefiniteError("not PD")
        assert err.order is None
        assert err.pivot is None


class TestConvergenceError:

    def test_unconverged(self):
        err = ConvergenceError("failed", routine='dsyev', info=3, unconverged=3)
        assert err.unconverged == 3
        assert err.routine == 'dsyev'

    def test_defaults_are_none(self):
        err = ConvergenceError("failed")
        assert err.unconverged is None
        assert err.info is None


class TestAllocationError:

    def test_attributes(self):
        err = AllocationError("too big", routine='dgeqrf', requested=2**40)
        assert err.routine == 'dgeqrf'
        assert err.requested == 2**40


# ═══════════════════════════════════════════════════════════════════════
# Warnings
# ═══════════════════════════════════════════════════════════════════════


class TestWarnings:

    def test_ill_conditioned_is_user_warning(self):
        assert issubclass(IllConditionedWarning, LinalgWarning)
        assert issubclass(LinalgWarning, UserWarning)

    def test_rcond_survives_warn(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            warnings.warn(IllConditionedWarning("near singular", rcond=1e-20))
        assert caught[0].message.rcond == 1e-20
