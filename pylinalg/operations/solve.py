"""
Linear system solvers.

solve() factors A with LU (getrf), solves with the factors (getrs) and
estimates the reciprocal condition number (gecon). A system whose
condition estimate falls below machine epsilon is still solved, with an
IllConditionedWarning. assume_a='pos' takes the Cholesky path instead.

solve_triangular() calls trtrs directly.
"""

import warnings
from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.compute.status import StatusContract, check_status
from pylinalg.core.compute.workspace import execute
from pylinalg.core.exceptions import IllConditionedWarning, InvalidArgumentError
from pylinalg.core.layout import MatrixView, lapack_input, rhs_from_lapack, rhs_to_lapack
from pylinalg.core.scalar import Operation
from pylinalg.operations._common import prepare_matrix, prepare_rhs, unify
from pylinalg.operations.cholesky import cholesky
from pylinalg.operations.lu import Transpose, factorize, solve_factored, trans_code

AssumeA = Literal['gen', 'pos']


def solve(
    a: ArrayLike,
    b: ArrayLike,
    *,
    assume_a: AssumeA = 'gen',
    transposed: bool = False,
    overwrite_a: bool = False,
    check_finite: bool = True,
) -> NDArray[np.inexact[Any]]:
    """
    Solve A x = b (or A^T x = b) for square A.

    Args:
        a: Coefficient matrix (n x n)
        b: Right-hand side, shape (n,) or (n, k)
        assume_a: 'gen' for a general matrix (LU), 'pos' for Hermitian
            positive definite (Cholesky, lower triangle read)
        transposed: Solve A^T x = b instead
        overwrite_a: Allow the factors to be written into a
        check_finite: Reject NaN/Inf in a and b

    Returns:
        x with the shape of b

    Raises:
        DimensionError: If a is not square or b does not match it
        SingularMatrixError: If a has an exactly zero pivot
        NotPositiveDefiniteError: If assume_a='pos' and a is not
            positive definite

    Warns:
        IllConditionedWarning: If the reciprocal condition number is
            below machine epsilon
    """
    if assume_a not in ('gen', 'pos'):
        raise InvalidArgumentError(
            f"assume_a must be 'gen' or 'pos', got {assume_a!r}",
            argument='assume_a',
        )
    view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    b_arr = prepare_rhs(b, 'b', view.rows, check_finite=check_finite)
    view, b_arr, scalar = unify(view, b_arr)

    if view.is_empty or b_arr.size == 0:
        return np.zeros(b_arr.shape, dtype=scalar.dtype)

    if assume_a == 'pos':
        chol = cholesky(view.array, uplo='lower', overwrite_a=overwrite_a,
                        check_finite=False)
        if transposed:
            # A^T = conj(A) for Hermitian A
            return scalar.conj(chol.solve(scalar.conj(b_arr), check_finite=False))
        return chol.solve(b_arr, check_finite=False)

    norm = 'I' if transposed else '1'
    anorm = execute(
        scalar, Operation.NORM, None, norm, lapack_input(view, scalar),
    )[0]

    fact = factorize(view, scalar, overwrite_a)
    if fact.error is not None:
        raise fact.error

    lu_view = MatrixView.from_array(fact.lu, 'lu')
    x = solve_factored(lu_view, fact.piv, b_arr, scalar, trans_code('T' if transposed else 'N'))

    rcond, info = execute(scalar, Operation.CONDITION, None, fact.lu, anorm, norm=norm)
    check_status(info, scalar.routine_name(Operation.CONDITION), StatusContract.NONE)
    if rcond < scalar.eps:
        warnings.warn(
            IllConditionedWarning(
                f"Ill-conditioned matrix (rcond={float(rcond):.6g}): "
                f"result may not be accurate.",
                rcond=float(rcond),
            ),
            stacklevel=2,
        )
    return x


def solve_triangular(
    a: ArrayLike,
    b: ArrayLike,
    *,
    lower: bool = False,
    trans: Transpose = 'N',
    unit_diagonal: bool = False,
    check_finite: bool = True,
) -> NDArray[np.inexact[Any]]:
    """
    Solve A x = b for triangular A via trtrs.

    Args:
        a: Triangular matrix (n x n); only the triangle named by lower
            is read
        b: Right-hand side, shape (n,) or (n, k)
        lower: a is lower triangular
        trans: Solve with A ('N'), A^T ('T') or A^H ('C')
        unit_diagonal: Assume ones on the diagonal without reading it
        check_finite: Reject NaN/Inf in a and b

    Raises:
        SingularMatrixError: If a diagonal element of a is exactly zero
    """
    code = trans_code(trans)
    view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    b_arr = prepare_rhs(b, 'b', view.rows, check_finite=check_finite)
    view, b_arr, scalar = unify(view, b_arr)

    if view.is_empty or b_arr.size == 0:
        return np.zeros(b_arr.shape, dtype=scalar.dtype)

    data = lapack_input(view, scalar)
    rhs, was_vector = rhs_to_lapack(b_arr, scalar)
    x, info = execute(
        scalar, Operation.TRIANGULAR_SOLVE, None, data, rhs.data,
        lower=int(lower), trans=code, unitdiag=int(unit_diagonal), overwrite_b=1,
    )
    check_status(info, scalar.routine_name(Operation.TRIANGULAR_SOLVE),
                 StatusContract.SINGULAR, matrix_name='a')
    return rhs_from_lapack(x, rhs, was_vector)
