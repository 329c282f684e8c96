"""
LU decomposition with partial pivoting.

Computes A = P L U for square A via LAPACK getrf. The factorization
object reuses the factors for solving, inverting and the determinant.
solve(), inv(), det() and slogdet() in their own modules are built on
the same factorization step (factorize()).
"""

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.compute.status import StatusContract, check_status, translate_status
from pylinalg.core.compute.workspace import execute, query_with_routine
from pylinalg.core.exceptions import InvalidArgumentError, PyLinalgError
from pylinalg.core.layout import (
    LapackBuffer,
    MatrixView,
    from_lapack,
    lapack_input,
    rhs_from_lapack,
    rhs_to_lapack,
    to_lapack,
    write_back,
)
from pylinalg.core.scalar import Operation, ScalarType, scalar_of
from pylinalg.operations._common import prepare_matrix, prepare_rhs, unify

Transpose = Literal['N', 'T', 'C']

_TRANS_CODES = {'N': 0, 'T': 1, 'C': 2}


@dataclass(frozen=True)
class Factorization:
    """Raw outcome of getrf, before the status is acted on."""
    buffer: LapackBuffer
    lu: NDArray[Any]
    piv: NDArray[np.int32]
    error: PyLinalgError | None
    routine: str


def factorize(view: MatrixView, scalar: ScalarType, overwrite: bool) -> Factorization:
    """
    Run getrf on a square, non-empty matrix.

    The status is translated but not raised, so that callers such as
    det() can give a singular factorization its mathematical meaning.
    Negative statuses are raised immediately.
    """
    routine = scalar.routine_name(Operation.LU)
    buffer = to_lapack(view, scalar, overwrite=overwrite)
    lu, piv, info = execute(
        scalar, Operation.LU, None, buffer.data, overwrite_a=int(buffer.may_overwrite),
    )
    error = translate_status(info, routine, StatusContract.SINGULAR, matrix_name=view.name)
    if isinstance(error, InvalidArgumentError):
        raise error
    return Factorization(buffer=buffer, lu=lu, piv=piv, error=error, routine=routine)


def trans_code(trans: str) -> int:
    if trans not in _TRANS_CODES:
        raise InvalidArgumentError(
            f"trans must be one of 'N', 'T', 'C', got {trans!r}",
            argument='trans',
        )
    return _TRANS_CODES[trans]


def permutation_parity(piv: NDArray[np.int32]) -> int:
    """+1 or -1 depending on the number of row interchanges in piv."""
    swaps = int(np.count_nonzero(piv != np.arange(piv.shape[0])))
    return -1 if swaps % 2 else 1


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU decomposition.

    Attributes:
        lu: Unit lower triangular L (below the diagonal) and U (on and
            above the diagonal) packed in one n x n matrix
        piv: 0-based pivot indices; row i was interchanged with row piv[i]
        routine: LAPACK routine that computed the factors
    """
    lu: NDArray[np.inexact[Any]]
    piv: NDArray[np.int32]
    routine: str

    @property
    def scalar(self) -> ScalarType:
        return scalar_of(self.lu.dtype)

    @property
    def n(self) -> int:
        return self.lu.shape[0]

    @property
    def l(self) -> NDArray[np.inexact[Any]]:
        return np.tril(self.lu, -1) + np.eye(self.n, dtype=self.lu.dtype)

    @property
    def u(self) -> NDArray[np.inexact[Any]]:
        return np.triu(self.lu)

    @property
    def perm(self) -> NDArray[np.intp]:
        """Row permutation such that A[perm] == L @ U."""
        perm = np.arange(self.n)
        for i, p in enumerate(self.piv):
            perm[i], perm[p] = perm[p], perm[i]
        return perm

    @property
    def p(self) -> NDArray[np.inexact[Any]]:
        """Permutation matrix such that A == P @ L @ U."""
        return np.eye(self.n, dtype=self.lu.dtype)[:, self.perm]

    def solve(
        self,
        b: ArrayLike,
        *,
        trans: Transpose = 'N',
        check_finite: bool = True,
    ) -> NDArray[np.inexact[Any]]:
        """
        Solve A x = b (trans='N'), A^T x = b ('T') or A^H x = b ('C').

        Args:
            b: Right-hand side, shape (n,) or (n, k)
            trans: Which system to solve
            check_finite: Reject NaN/Inf in b
        """
        code = trans_code(trans)
        b_arr = prepare_rhs(b, 'b', self.n, check_finite=check_finite)
        view = MatrixView.from_array(self.lu, 'lu')
        view, b_arr, scalar = unify(view, b_arr)
        if self.n == 0 or b_arr.size == 0:
            return np.zeros(b_arr.shape, dtype=scalar.dtype)
        return solve_factored(view, self.piv, b_arr, scalar, code)

    def det(self) -> Any:
        """Determinant: product of U's diagonal, sign-flipped per interchange."""
        if self.n == 0:
            return self.lu.dtype.type(1)
        return self.lu.dtype.type(
            permutation_parity(self.piv) * np.prod(np.diagonal(self.lu))
        )

    def inv(self) -> NDArray[np.inexact[Any]]:
        """
        Inverse of A from the factors.

        Raises:
            SingularMatrixError: If U has a zero diagonal element
        """
        scalar = self.scalar
        if self.n == 0:
            return np.zeros((0, 0), dtype=scalar.dtype)
        view = MatrixView.from_array(self.lu, 'lu')
        buffer = to_lapack(view, scalar)
        return from_lapack(invert_factored(buffer.data, self.piv, scalar), view)


def solve_factored(
    view: MatrixView,
    piv: NDArray[np.int32],
    b: NDArray[Any],
    scalar: ScalarType,
    code: int,
) -> NDArray[Any]:
    """getrs on LU factors; b must already have the scalar's dtype."""
    lu = lapack_input(view, scalar)
    rhs, was_vector = rhs_to_lapack(b, scalar)
    x, info = execute(
        scalar, Operation.LU_SOLVE, None, lu, piv, rhs.data, trans=code, overwrite_b=1,
    )
    check_status(info, scalar.routine_name(Operation.LU_SOLVE), StatusContract.NONE)
    return rhs_from_lapack(x, rhs, was_vector)


def invert_factored(
    lu: NDArray[Any],
    piv: NDArray[np.int32],
    scalar: ScalarType,
) -> NDArray[Any]:
    """
    getri on LU factors held in a Fortran buffer the caller may lose.

    The workspace is sized by the getri query before the inverse runs.
    """
    n = lu.shape[0]
    request = query_with_routine(
        scalar, Operation.LU_INVERSE_WORKSPACE, Operation.LU_INVERSE, ('lwork',), n,
    )
    inv_a, info = execute(
        scalar, Operation.LU_INVERSE, request, lu, piv, overwrite_lu=1,
    )
    check_status(info, request.routine, StatusContract.SINGULAR, matrix_name='a')
    return inv_a


def lu(
    a: ArrayLike,
    *,
    overwrite_a: bool = False,
    check_finite: bool = True,
) -> LUResult:
    """
    LU decomposition with partial pivoting via LAPACK getrf.

    Args:
        a: Square matrix (n x n)
        overwrite_a: Allow the packed factors to be written into a
        check_finite: Reject NaN/Inf in a

    Returns:
        LUResult with factors in the layout of a

    Raises:
        DimensionError: If a is not square
        SingularMatrixError: If U has an exactly zero diagonal element
            (pivot carries its 0-based index)
    """
    view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    scalar = view.scalar

    if view.is_empty:
        return LUResult(
            lu=np.zeros((0, 0), dtype=scalar.dtype),
            piv=np.zeros(0, dtype=np.int32),
            routine=scalar.routine_name(Operation.LU),
        )

    fact = factorize(view, scalar, overwrite_a)
    if fact.error is not None:
        raise fact.error
    return LUResult(
        lu=write_back(fact.buffer, fact.lu),
        piv=np.asarray(fact.piv, dtype=np.int32),
        routine=fact.routine,
    )
