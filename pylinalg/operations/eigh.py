"""
Eigen-decomposition of real symmetric / complex Hermitian matrices.

Dispatches to syev (real) or heev (complex). Only one triangle of the
input is read. Symmetry is the caller's precondition, as it is for the
routines: an asymmetric input gives an undefined numerical result, not
an error, unless check_hermitian=True asks for validation.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core import validation
from pylinalg.core.compute.status import StatusContract, check_status
from pylinalg.core.compute.tolerances import select_tolerance
from pylinalg.core.compute.workspace import execute, query_with_routine
from pylinalg.core.layout import from_lapack, to_lapack
from pylinalg.core.scalar import Operation
from pylinalg.operations._common import Triangle, lower_flag, prepare_matrix


@dataclass(frozen=True)
class EighResult:
    """
    Result of a symmetric/Hermitian eigen-decomposition.

    Attributes:
        eigenvalues: Real eigenvalues in ascending order
        eigenvectors: Orthonormal eigenvectors as columns, or None if
            only eigenvalues were requested
        routine: LAPACK routine that computed the decomposition
    """
    eigenvalues: NDArray[np.floating[Any]]
    eigenvectors: NDArray[np.inexact[Any]] | None
    routine: str


def eigh(
    a: ArrayLike,
    *,
    uplo: Triangle = 'lower',
    eigvals_only: bool = False,
    check_hermitian: bool = False,
    overwrite_a: bool = False,
    check_finite: bool = True,
) -> EighResult:
    """
    Eigenvalues (and eigenvectors) of a symmetric/Hermitian matrix.

    Args:
        a: Symmetric/Hermitian matrix (n x n); only the triangle named by
            uplo is read
        uplo: Triangle of a to read
        eigvals_only: Skip eigenvectors
        check_hermitian: Verify a equals its conjugate transpose within
            the tolerance tier of its precision before calling the routine
        overwrite_a: Allow a to be destroyed by the routine
        check_finite: Reject NaN/Inf in a

    Returns:
        EighResult with ascending eigenvalues

    Raises:
        DimensionError: If a is not square
        ValidationError: If check_hermitian=True and a is not Hermitian
        ConvergenceError: If the algorithm failed to converge
    """
    lower = lower_flag(uplo)
    view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    scalar = view.scalar
    routine = scalar.routine_name(Operation.EIGH)
    n = view.rows

    if check_hermitian:
        tier = select_tolerance(scalar)
        validation.check_hermitian(view.array, 'a', rtol=tier.rtol, atol=tier.atol)

    if view.is_empty:
        return EighResult(
            eigenvalues=np.zeros(0, dtype=scalar.real_dtype),
            eigenvectors=None if eigvals_only else np.zeros((0, 0), dtype=scalar.dtype),
            routine=routine,
        )

    buffer = to_lapack(view, scalar, overwrite=overwrite_a)
    request = query_with_routine(
        scalar, Operation.EIGH_WORKSPACE, Operation.EIGH, ('lwork',), n, lower=lower,
    )
    w, v, info = execute(
        scalar, Operation.EIGH, request, buffer.data,
        compute_v=int(not eigvals_only), lower=lower,
        overwrite_a=int(buffer.may_overwrite),
    )
    check_status(info, routine, StatusContract.NOT_CONVERGED, n=n)

    return EighResult(
        eigenvalues=np.asarray(w, dtype=scalar.real_dtype),
        eigenvectors=None if eigvals_only else from_lapack(v, view),
        routine=routine,
    )
