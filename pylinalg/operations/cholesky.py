"""
Cholesky decomposition of Hermitian (or real symmetric) positive definite
matrices.

Computes A = L L^H (uplo='lower') or A = U^H U (uplo='upper'). Only the
declared triangle of A is read; the other triangle is ignored and zeroed
in the returned factor.

The factorization object also provides the operations that reuse it:
solving A x = b, inverting A, and the (log-)determinant of A.

Example:
    >>> a = np.array([[4., 12., -16.], [12., 37., -43.], [-16., -43., 98.]])
    >>> chol = cholesky(a)
    >>> chol.lower
    array([[ 2.,  0.,  0.],
           [ 6.,  1.,  0.],
           [-8.,  5.,  3.]])
    >>> round(chol.det(), 9)
    36.0
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.compute.status import StatusContract, check_status
from pylinalg.core.compute.workspace import execute
from pylinalg.core.layout import (
    MatrixView,
    from_lapack,
    lapack_input,
    rhs_from_lapack,
    rhs_to_lapack,
    to_lapack,
    write_back,
)
from pylinalg.core.scalar import Operation, ScalarType, scalar_of
from pylinalg.operations._common import (
    Triangle,
    lower_flag,
    prepare_matrix,
    prepare_rhs,
    unify,
)


@dataclass(frozen=True)
class CholeskyResult:
    """
    Result of Cholesky decomposition.

    Attributes:
        factor: L if uplo == 'lower', U if uplo == 'upper'; the other
            triangle is zero
        uplo: Which triangle the factor occupies
        routine: LAPACK routine that computed the factor
    """
    factor: NDArray[np.inexact[Any]]
    uplo: Triangle
    routine: str

    @property
    def scalar(self) -> ScalarType:
        return scalar_of(self.factor.dtype)

    @property
    def lower(self) -> NDArray[np.inexact[Any]]:
        """
        L from A = L L^H.

        No computation when uplo == 'lower'; otherwise the conjugate
        transpose of the factor.
        """
        if self.uplo == 'lower':
            return self.factor
        return np.ascontiguousarray(self.scalar.conj(self.factor.T))

    @property
    def upper(self) -> NDArray[np.inexact[Any]]:
        """U from A = U^H U."""
        if self.uplo == 'upper':
            return self.factor
        return np.ascontiguousarray(self.scalar.conj(self.factor.T))

    def logdet(self) -> float:
        """
        Natural log of det(A).

        det(A) = prod |f_ii|^2 is real and positive for a Hermitian
        positive definite A.
        """
        diag = np.diagonal(self.factor)
        return float(np.sum(np.log(self.scalar.abs_sqr(diag))))

    def det(self) -> float:
        """Determinant of A, computed through logdet() to avoid overflow."""
        return float(np.exp(self.logdet()))

    def solve(
        self,
        b: ArrayLike,
        *,
        check_finite: bool = True,
    ) -> NDArray[np.inexact[Any]]:
        """
        Solve A x = b using the factorization.

        Args:
            b: Right-hand side, shape (n,) or (n, k)
            check_finite: Reject NaN/Inf in b

        Returns:
            x with the shape of b
        """
        n = self.factor.shape[0]
        b_arr = prepare_rhs(b, 'b', n, check_finite=check_finite)
        view = MatrixView.from_array(self.factor, 'factor')
        view, b_arr, scalar = unify(view, b_arr)
        if n == 0 or b_arr.size == 0:
            return np.zeros(b_arr.shape, dtype=scalar.dtype)

        c = lapack_input(view, scalar)
        rhs, was_vector = rhs_to_lapack(b_arr, scalar)
        x, info = execute(
            scalar, Operation.CHOLESKY_SOLVE, None,
            c, rhs.data, lower=lower_flag(self.uplo), overwrite_b=1,
        )
        check_status(info, scalar.routine_name(Operation.CHOLESKY_SOLVE),
                     StatusContract.NONE)
        return rhs_from_lapack(x, rhs, was_vector)

    def inv(self) -> NDArray[np.inexact[Any]]:
        """
        Inverse of A using the factorization.

        Raises:
            SingularMatrixError: If a diagonal element of the factor is zero
        """
        scalar = self.scalar
        n = self.factor.shape[0]
        if n == 0:
            return np.zeros((0, 0), dtype=scalar.dtype)

        view = MatrixView.from_array(self.factor, 'factor')
        c = to_lapack(view, scalar).data
        lower = lower_flag(self.uplo)
        inv_a, info = execute(
            scalar, Operation.CHOLESKY_INVERSE, None, c, lower=lower, overwrite_c=1,
        )
        check_status(info, scalar.routine_name(Operation.CHOLESKY_INVERSE),
                     StatusContract.SINGULAR, matrix_name='factor')
        # The routine fills one triangle only
        if lower:
            tri = np.tril(inv_a)
            full = tri + scalar.conj(np.tril(tri, -1).T)
        else:
            tri = np.triu(inv_a)
            full = tri + scalar.conj(np.triu(tri, 1).T)
        return from_lapack(full, view)


def cholesky(
    a: ArrayLike,
    *,
    uplo: Triangle = 'lower',
    overwrite_a: bool = False,
    check_finite: bool = True,
) -> CholeskyResult:
    """
    Cholesky decomposition via LAPACK potrf.

    Args:
        a: Hermitian positive definite matrix (n x n). Only the triangle
            named by uplo is read.
        uplo: 'lower' computes L (A = L L^H), 'upper' computes U (A = U^H U)
        overwrite_a: Allow the factor to be written into a. On failure a
            may be left partially overwritten.
        check_finite: Reject NaN/Inf in a

    Returns:
        CholeskyResult with the factor in the layout of a

    Raises:
        DimensionError: If a is not square
        NotPositiveDefiniteError: If a leading minor is not positive
            definite (carries its order)
    """
    lower = lower_flag(uplo)
    view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    scalar = view.scalar
    routine = scalar.routine_name(Operation.CHOLESKY)

    if view.is_empty:
        return CholeskyResult(
            factor=np.zeros((0, 0), dtype=scalar.dtype), uplo=uplo, routine=routine,
        )

    buffer = to_lapack(view, scalar, overwrite=overwrite_a)
    c, info = execute(
        scalar, Operation.CHOLESKY, None,
        buffer.data, lower=lower, clean=1, overwrite_a=int(buffer.may_overwrite),
    )
    check_status(info, routine, StatusContract.NOT_POSITIVE_DEFINITE, matrix_name='a')
    return CholeskyResult(factor=write_back(buffer, c), uplo=uplo, routine=routine)


def cholesky_solve(
    a: ArrayLike,
    b: ArrayLike,
    *,
    check_finite: bool = True,
) -> NDArray[np.inexact[Any]]:
    """Solve A x = b for Hermitian positive definite A (upper factor)."""
    return cholesky(a, uplo='upper', check_finite=check_finite).solve(
        b, check_finite=check_finite,
    )


def cholesky_inv(
    a: ArrayLike,
    *,
    check_finite: bool = True,
) -> NDArray[np.inexact[Any]]:
    """Inverse of a Hermitian positive definite matrix."""
    return cholesky(a, uplo='upper', check_finite=check_finite).inv()


def cholesky_det(
    a: ArrayLike,
    *,
    check_finite: bool = True,
) -> float:
    """Determinant of a Hermitian positive definite matrix."""
    return cholesky(a, uplo='upper', check_finite=check_finite).det()
