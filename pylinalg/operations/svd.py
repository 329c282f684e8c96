"""
Singular value decomposition A = U diag(s) V^H.

Two drivers are available: gesdd (divide and conquer, the default; faster
for large matrices) and gesvd (QR iteration; slower, occasionally more
robust). Both size their workspace through SciPy's *_lwork queries.
"""

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.compute.status import StatusContract, check_status
from pylinalg.core.compute.workspace import execute, query_with_routine
from pylinalg.core.exceptions import InvalidArgumentError
from pylinalg.core.layout import from_lapack, to_lapack
from pylinalg.core.scalar import Operation
from pylinalg.operations._common import prepare_matrix

LapackDriver = Literal['gesdd', 'gesvd']

_DRIVERS = {
    'gesdd': (Operation.SVD, Operation.SVD_WORKSPACE),
    'gesvd': (Operation.SVD_GESVD, Operation.SVD_GESVD_WORKSPACE),
}


@dataclass(frozen=True)
class SVDResult:
    """
    Result of singular value decomposition.

    Attributes:
        U: Left singular vectors (m x m, or m x k with full_matrices=False,
           where k = min(m, n)); None if compute_uv=False
        s: Singular values in descending order, length k
        Vh: Conjugate-transposed right singular vectors (n x n, or k x n);
            None if compute_uv=False
        routine: LAPACK routine that computed the decomposition
    """
    U: NDArray[np.inexact[Any]] | None
    s: NDArray[np.floating[Any]]
    Vh: NDArray[np.inexact[Any]] | None
    routine: str


def svd(
    a: ArrayLike,
    *,
    full_matrices: bool = True,
    compute_uv: bool = True,
    lapack_driver: LapackDriver = 'gesdd',
    overwrite_a: bool = False,
    check_finite: bool = True,
) -> SVDResult:
    """
    Singular value decomposition of an m x n matrix.

    Args:
        a: Matrix to decompose (m x n)
        full_matrices: Square U and Vh; otherwise reduced shapes
        compute_uv: Compute U and Vh as well as s
        lapack_driver: 'gesdd' or 'gesvd'
        overwrite_a: Allow a to be destroyed by the routine
        check_finite: Reject NaN/Inf in a

    Returns:
        SVDResult

    Raises:
        ConvergenceError: If the routine failed to converge
    """
    if lapack_driver not in _DRIVERS:
        raise InvalidArgumentError(
            f"lapack_driver must be 'gesdd' or 'gesvd', got {lapack_driver!r}",
            argument='lapack_driver',
        )
    op, query_op = _DRIVERS[lapack_driver]
    view = prepare_matrix(a, 'a', check_finite=check_finite)
    scalar = view.scalar
    routine = scalar.routine_name(op)
    m, n = view.shape
    k = min(m, n)

    if view.is_empty:
        s = np.zeros(0, dtype=scalar.real_dtype)
        if not compute_uv:
            return SVDResult(U=None, s=s, Vh=None, routine=routine)
        if full_matrices:
            U = np.eye(m, dtype=scalar.dtype)
            Vh = np.eye(n, dtype=scalar.dtype)
        else:
            U = np.zeros((m, k), dtype=scalar.dtype)
            Vh = np.zeros((k, n), dtype=scalar.dtype)
        return SVDResult(U=U, s=s, Vh=Vh, routine=routine)

    flags = dict(compute_uv=int(compute_uv), full_matrices=int(full_matrices))
    buffer = to_lapack(view, scalar, overwrite=overwrite_a)
    request = query_with_routine(scalar, query_op, op, ('lwork',), m, n, **flags)
    u, s, vt, info = execute(
        scalar, op, request, buffer.data, overwrite_a=int(buffer.may_overwrite), **flags,
    )
    check_status(info, routine, StatusContract.NOT_CONVERGED)

    s = np.asarray(s, dtype=scalar.real_dtype)
    if not compute_uv:
        return SVDResult(U=None, s=s, Vh=None, routine=routine)
    return SVDResult(
        U=from_lapack(u, view),
        s=s,
        Vh=from_lapack(vt, view),
        routine=routine,
    )
