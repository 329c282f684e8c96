"""
Generalized eigenproblems A v = λ B v.

eig_generalized() handles general pencils with the QZ algorithm (ggev).
Eigenvalues are reported as ratios alpha / beta; beta == 0 is an infinite
eigenvalue, and alpha == beta == 0 marks a singular pencil (NaN).

eigh_generalized() handles Hermitian A with Hermitian positive definite B
via sygvd (real) or hegvd (complex). Those routines have no query mode
in SciPy, so their workspace is sized from the documented formulas.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core import validation
from pylinalg.core.compute.status import StatusContract, check_status
from pylinalg.core.compute.workspace import (
    WorkspaceRequest,
    closed_form,
    execute,
    query_in_place,
)
from pylinalg.core.exceptions import InvalidArgumentError
from pylinalg.core.layout import MatrixView, from_lapack, to_lapack
from pylinalg.core.scalar import Operation, ScalarType
from pylinalg.operations._common import Triangle, lower_flag, prepare_matrix, unify
from pylinalg.operations.eig import pair_eigenvectors
from pylinalg.operations.eigh import EighResult


@dataclass(frozen=True)
class GeneralizedEigResult:
    """
    Result of a general generalized eigen-decomposition.

    Attributes:
        alpha: Eigenvalue numerators (complex)
        beta: Eigenvalue denominators; real for real pencils
        eigenvalues: alpha / beta, inf where beta == 0, nan where both are 0
        eigenvectors: Right eigenvectors as columns, or None
        left_eigenvectors: Left eigenvectors as columns, or None
        routine: LAPACK routine that computed the decomposition
    """
    alpha: NDArray[np.complexfloating[Any, Any]]
    beta: NDArray[np.inexact[Any]]
    eigenvalues: NDArray[np.complexfloating[Any, Any]]
    eigenvectors: NDArray[np.complexfloating[Any, Any]] | None
    left_eigenvectors: NDArray[np.complexfloating[Any, Any]] | None
    routine: str


def _ratios(
    alpha: NDArray[Any],
    beta: NDArray[Any],
    dtype: np.dtype,
) -> NDArray[np.complexfloating[Any, Any]]:
    infinite = beta == 0
    indeterminate = infinite & (alpha == 0)
    safe_beta = np.where(infinite, 1, beta)
    w = (alpha / safe_beta).astype(dtype)
    w[infinite] = np.inf
    w[indeterminate] = np.nan
    return w


def eig_generalized(
    a: ArrayLike,
    b: ArrayLike,
    *,
    left: bool = False,
    right: bool = True,
    overwrite_a: bool = False,
    overwrite_b: bool = False,
    check_finite: bool = True,
) -> GeneralizedEigResult:
    """
    Solve A v = λ B v for general square A and B.

    Args:
        a: Square matrix (n x n)
        b: Square matrix of the same shape
        left: Compute left eigenvectors
        right: Compute right eigenvectors
        overwrite_a: Allow a to be destroyed by the routine
        overwrite_b: Allow b to be destroyed by the routine
        check_finite: Reject NaN/Inf in a and b

    Returns:
        GeneralizedEigResult

    Raises:
        DimensionError: If a is not square or b differs in shape
        ConvergenceError: If the QZ iteration failed
    """
    a_view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    b_view = prepare_matrix(b, 'b', check_finite=check_finite, square=True)
    validation.check_same_shape(a_view.array, b_view.array, ('a', 'b'))
    a_view, b_arr, scalar = unify(a_view, b_view.array)
    b_view = MatrixView.from_array(b_arr, 'b')
    routine = scalar.routine_name(Operation.EIG_GENERALIZED)
    n = a_view.rows

    if a_view.is_empty:
        empty_vectors = np.zeros((0, 0), dtype=scalar.complex_dtype)
        return GeneralizedEigResult(
            alpha=np.zeros(0, dtype=scalar.complex_dtype),
            beta=np.zeros(0, dtype=scalar.dtype),
            eigenvalues=np.zeros(0, dtype=scalar.complex_dtype),
            eigenvectors=empty_vectors if right else None,
            left_eigenvectors=empty_vectors if left else None,
            routine=routine,
        )

    a_buf = to_lapack(a_view, scalar, overwrite=overwrite_a)
    b_buf = to_lapack(b_view, scalar, overwrite=overwrite_b)
    flags = dict(compute_vl=int(left), compute_vr=int(right))
    request = query_in_place(scalar, Operation.EIG_GENERALIZED, a_buf.data, b_buf.data, **flags)
    ret = execute(
        scalar, Operation.EIG_GENERALIZED, request, a_buf.data, b_buf.data,
        overwrite_a=int(a_buf.may_overwrite), overwrite_b=int(b_buf.may_overwrite),
        **flags,
    )
    if scalar.is_complex:
        alpha, beta, vl, vr, _work, info = ret
    else:
        alphar, alphai, beta, vl, vr, _work, info = ret
    check_status(info, routine, StatusContract.NOT_CONVERGED, n=n)

    if scalar.is_complex:
        alpha = np.asarray(alpha, dtype=scalar.complex_dtype)
    else:
        alpha = (alphar + 1j * alphai).astype(scalar.complex_dtype)
        if right:
            vr = pair_eigenvectors(alphai, vr, scalar.complex_dtype)
        if left:
            vl = pair_eigenvectors(alphai, vl, scalar.complex_dtype)

    return GeneralizedEigResult(
        alpha=alpha,
        beta=np.asarray(beta),
        eigenvalues=_ratios(alpha, beta, scalar.complex_dtype),
        eigenvectors=from_lapack(vr, a_view) if right else None,
        left_eigenvectors=from_lapack(vl, a_view) if left else None,
        routine=routine,
    )


def _pencil_workspace(scalar: ScalarType, n: int, vectors: bool) -> WorkspaceRequest:
    """Documented minimum workspace of sygvd / hegvd."""
    if scalar.is_complex:
        if vectors:
            sizes = dict(lwork=2 * n + n * n, lrwork=1 + 5 * n + 2 * n * n, liwork=3 + 5 * n)
        else:
            sizes = dict(lwork=n + 1, lrwork=n, liwork=1)
    elif vectors:
        sizes = dict(lwork=1 + 6 * n + 2 * n * n, liwork=3 + 5 * n)
    else:
        sizes = dict(lwork=2 * n + 1, liwork=1)
    return closed_form(scalar, Operation.EIGH_GENERALIZED, **sizes)


def eigh_generalized(
    a: ArrayLike,
    b: ArrayLike,
    *,
    uplo: Triangle = 'lower',
    eigvals_only: bool = False,
    itype: int = 1,
    overwrite_a: bool = False,
    overwrite_b: bool = False,
    check_finite: bool = True,
) -> EighResult:
    """
    Solve a symmetric-definite generalized eigenproblem.

    itype selects the problem: 1 for A v = λ B v, 2 for A B v = λ v,
    3 for B A v = λ v. B must be Hermitian positive definite.

    Returns:
        EighResult with ascending eigenvalues; eigenvectors are
        B-orthonormal

    Raises:
        DimensionError: If a is not square or b differs in shape
        ConvergenceError: If the eigenvalue algorithm failed
        NotPositiveDefiniteError: If b is not positive definite
            (matrix_name='b', order of the failing leading minor)
    """
    lower = lower_flag(uplo)
    if itype not in (1, 2, 3):
        raise InvalidArgumentError(
            f"itype must be 1, 2 or 3, got {itype!r}", argument='itype',
        )
    a_view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    b_view = prepare_matrix(b, 'b', check_finite=check_finite, square=True)
    validation.check_same_shape(a_view.array, b_view.array, ('a', 'b'))
    a_view, b_arr, scalar = unify(a_view, b_view.array)
    b_view = MatrixView.from_array(b_arr, 'b')
    routine = scalar.routine_name(Operation.EIGH_GENERALIZED)
    n = a_view.rows

    if a_view.is_empty:
        return EighResult(
            eigenvalues=np.zeros(0, dtype=scalar.real_dtype),
            eigenvectors=None if eigvals_only else np.zeros((0, 0), dtype=scalar.dtype),
            routine=routine,
        )

    a_buf = to_lapack(a_view, scalar, overwrite=overwrite_a)
    b_buf = to_lapack(b_view, scalar, overwrite=overwrite_b)
    request = _pencil_workspace(scalar, n, vectors=not eigvals_only)
    w, v, info = execute(
        scalar, Operation.EIGH_GENERALIZED, request, a_buf.data, b_buf.data,
        itype=itype, jobz='N' if eigvals_only else 'V', uplo='L' if lower else 'U',
        overwrite_a=int(a_buf.may_overwrite), overwrite_b=int(b_buf.may_overwrite),
    )
    check_status(info, routine, StatusContract.DEFINITE_PENCIL, n=n)

    return EighResult(
        eigenvalues=np.asarray(w, dtype=scalar.real_dtype),
        eigenvectors=None if eigvals_only else from_lapack(v, a_view),
        routine=routine,
    )
