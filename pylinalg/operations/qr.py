"""
QR decomposition implementations.

Computes A = QR with geqrf (Householder reflectors, workspace queried in
place) and forms Q explicitly with orgqr (real) or ungqr (complex).
Used for least squares through qr_solve().
"""

from dataclasses import dataclass
from typing import Literal, Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.compute.status import StatusContract, check_status
from pylinalg.core.compute.workspace import execute, query_in_place
from pylinalg.core.exceptions import (
    DimensionError,
    InvalidArgumentError,
    SingularMatrixError,
)
from pylinalg.core.layout import from_lapack, to_lapack
from pylinalg.core.scalar import Operation, ScalarType
from pylinalg.operations._common import prepare_matrix, prepare_rhs, unify
from pylinalg.operations.solve import solve_triangular

QRMode = Literal['reduced', 'complete', 'r']


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal/unitary matrix (m x k for reduced mode where
           k = min(m, n), m x m for complete mode, None for mode 'r')
        R: Upper triangular matrix (k x n, or m x n for complete mode)
        rank: Numerical rank determined from R diagonal
        routine: LAPACK routine that computed the factorization
    """
    Q: NDArray[np.inexact[Any]] | None
    R: NDArray[np.inexact[Any]]
    rank: int
    routine: str


def _numerical_rank(R: NDArray[Any], shape: tuple[int, int], scalar: ScalarType) -> int:
    diag_R = scalar.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R[0] > 0:
        # Tolerance based on matrix size and machine epsilon
        tol = max(shape) * scalar.eps * diag_R[0]
        return int(np.sum(diag_R > tol))
    return 0


def qr(
    a: ArrayLike,
    *,
    mode: QRMode = 'reduced',
    overwrite_a: bool = False,
    check_finite: bool = True,
) -> QRResult:
    """
    QR decomposition using LAPACK geqrf.

    Computes A = QR where Q is orthogonal (unitary) and R is upper
    triangular.

    Args:
        a: Matrix to decompose (m x n)
        mode: 'reduced' for economy QR (Q is m x k, R is k x n where k = min(m,n))
              'complete' for full QR (Q is m x m, R is m x n)
              'r' for R only (Q is never formed)
        overwrite_a: Allow a to be used as the routine's work area
        check_finite: Reject NaN/Inf in a

    Returns:
        QRResult with Q, R, and numerical rank
    """
    if mode not in ('reduced', 'complete', 'r'):
        raise InvalidArgumentError(
            f"mode must be 'reduced', 'complete' or 'r', got {mode!r}",
            argument='mode',
        )
    view = prepare_matrix(a, 'a', check_finite=check_finite)
    scalar = view.scalar
    routine = scalar.routine_name(Operation.QR)
    m, n = view.shape
    k = min(m, n)

    if view.is_empty:
        if mode == 'complete':
            Q = np.eye(m, dtype=scalar.dtype)
            R = np.zeros((m, n), dtype=scalar.dtype)
        else:
            Q = np.zeros((m, k), dtype=scalar.dtype)
            R = np.zeros((k, n), dtype=scalar.dtype)
        return QRResult(Q=None if mode == 'r' else Q, R=R, rank=0, routine=routine)

    buffer = to_lapack(view, scalar, overwrite=overwrite_a)
    request = query_in_place(scalar, Operation.QR, buffer.data)
    qr_, tau, _work, info = execute(
        scalar, Operation.QR, request, buffer.data, overwrite_a=int(buffer.may_overwrite),
    )
    check_status(info, routine, StatusContract.NONE)

    R = np.triu(qr_) if mode == 'complete' else np.triu(qr_[:k, :])
    rank = _numerical_rank(R, (m, n), scalar)

    Q = None
    if mode != 'r':
        if mode == 'complete' and m > n:
            reflectors = np.zeros((m, m), dtype=scalar.dtype, order='F')
            reflectors[:, :n] = qr_
        elif m < n:
            reflectors = np.asfortranarray(qr_[:, :m])
        else:
            reflectors = np.array(qr_, order='F')
        request_q = query_in_place(scalar, Operation.QR_Q, reflectors, tau)
        Q, _work, info = execute(
            scalar, Operation.QR_Q, request_q, reflectors, tau, overwrite_a=1,
        )
        check_status(info, request_q.routine, StatusContract.NONE)
        Q = from_lapack(Q, view)

    return QRResult(Q=Q, R=from_lapack(R, view), rank=rank, routine=routine)


def qr_solve(
    X: ArrayLike,
    y: ArrayLike,
    check_rank: bool,
    *,
    check_finite: bool = True,
) -> NDArray[np.inexact[Any]]:
    """
    Solve least squares via QR decomposition.

    Solves: min_β ||y - Xβ||² via QR decomposition of X.

    The solution is computed as:
        X = QR
        β = R⁻¹ Q^H y

    Args:
        X: Design matrix (m x n), must have m >= n
        y: Response, shape (m,) or (m, k)
        check_rank: If True, raise SingularMatrixError on rank-deficient X
        check_finite: Reject NaN/Inf in X and y

    Returns:
        Coefficients β, shape (n,) or (n, k)

    Raises:
        DimensionError: If X has fewer rows than columns or y does not
            match X
        SingularMatrixError: If X is rank-deficient and check_rank=True
    """
    view = prepare_matrix(X, 'X', check_finite=check_finite)
    y_arr = prepare_rhs(y, 'y', view.rows, check_finite=check_finite)
    view, y_arr, scalar = unify(view, y_arr)
    m, n = view.shape
    if m < n:
        raise DimensionError(
            f"X: least squares via QR requires rows >= columns, got shape {view.shape}"
        )

    qr_result = qr(view.array, mode='reduced', check_finite=False)

    if check_rank and qr_result.rank < n:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={n}. "
            f"This indicates perfect multicollinearity.",
            routine=qr_result.routine,
            matrix_name='X',
        )

    if n == 0:
        return np.zeros((0,) + y_arr.shape[1:], dtype=scalar.dtype)

    # β = R⁻¹ Q^H y
    # Compute Q^H y first, then solve the triangular system
    Qty = scalar.conj(qr_result.Q.T) @ y_arr

    # R is n x n upper triangular (for reduced QR with m >= n)
    return solve_triangular(qr_result.R[:n, :n], Qty[:n], lower=False,
                            check_finite=False)
