"""
Eigen-decomposition of general square matrices via geev.

Eigenvalues are returned as complex numbers for every scalar type. For
real input the routine reports conjugate pairs as separate real and
imaginary parts; those are reassembled here, including the complex
eigenvectors that LAPACK stores as two consecutive real columns.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.compute.status import StatusContract, check_status
from pylinalg.core.compute.workspace import execute, query_with_routine
from pylinalg.core.layout import from_lapack, to_lapack
from pylinalg.core.scalar import Operation
from pylinalg.operations._common import prepare_matrix


@dataclass(frozen=True)
class EigResult:
    """
    Result of a general eigen-decomposition.

    Attributes:
        eigenvalues: Complex eigenvalues in the order LAPACK returns them
        eigenvectors: Right eigenvectors as columns (unit 2-norm), or None
            if not requested
        left_eigenvectors: Left eigenvectors as columns, or None if not
            requested
        routine: LAPACK routine that computed the decomposition
    """
    eigenvalues: NDArray[np.complexfloating[Any, Any]]
    eigenvectors: NDArray[np.complexfloating[Any, Any]] | None
    left_eigenvectors: NDArray[np.complexfloating[Any, Any]] | None
    routine: str


def pair_eigenvectors(
    imag: NDArray[np.floating[Any]],
    vectors: NDArray[np.floating[Any]],
    dtype: np.dtype,
) -> NDArray[np.complexfloating[Any, Any]]:
    """
    Rebuild complex eigenvectors from LAPACK's real storage.

    For a conjugate pair (imag[j] > 0, imag[j+1] < 0), columns j and j+1
    hold the real and imaginary parts of the eigenvector for eigenvalue
    j; the eigenvector for j+1 is its conjugate.
    """
    out = vectors.astype(dtype)
    n = imag.shape[0]
    j = 0
    while j < n:
        if imag[j] > 0 and j + 1 < n:
            out[:, j] = vectors[:, j] + 1j * vectors[:, j + 1]
            out[:, j + 1] = np.conj(out[:, j])
            j += 2
        else:
            j += 1
    return out


def eig(
    a: ArrayLike,
    *,
    left: bool = False,
    right: bool = True,
    overwrite_a: bool = False,
    check_finite: bool = True,
) -> EigResult:
    """
    Eigenvalues and eigenvectors of a general square matrix.

    Args:
        a: Square matrix (n x n)
        left: Compute left eigenvectors
        right: Compute right eigenvectors
        overwrite_a: Allow a to be destroyed by the routine
        check_finite: Reject NaN/Inf in a

    Returns:
        EigResult; vector outputs the caller did not ask for are None and
        never requested from the routine

    Raises:
        DimensionError: If a is not square
        ConvergenceError: If the QR algorithm failed; unconverged carries
            the number of eigenvalues not computed
    """
    view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    scalar = view.scalar
    routine = scalar.routine_name(Operation.EIG)
    n = view.rows

    if view.is_empty:
        empty_vectors = np.zeros((0, 0), dtype=scalar.complex_dtype)
        return EigResult(
            eigenvalues=np.zeros(0, dtype=scalar.complex_dtype),
            eigenvectors=empty_vectors if right else None,
            left_eigenvectors=empty_vectors if left else None,
            routine=routine,
        )

    buffer = to_lapack(view, scalar, overwrite=overwrite_a)
    request = query_with_routine(
        scalar, Operation.EIG_WORKSPACE, Operation.EIG, ('lwork',),
        n, compute_vl=int(left), compute_vr=int(right),
    )
    ret = execute(
        scalar, Operation.EIG, request, buffer.data,
        compute_vl=int(left), compute_vr=int(right),
        overwrite_a=int(buffer.may_overwrite),
    )
    if scalar.is_complex:
        w, vl, vr, info = ret
    else:
        wr, wi, vl, vr, info = ret
    check_status(info, routine, StatusContract.NOT_CONVERGED, n=n)

    if scalar.is_complex:
        eigenvalues = np.asarray(w, dtype=scalar.complex_dtype)
    else:
        eigenvalues = (wr + 1j * wi).astype(scalar.complex_dtype)
        if right:
            vr = pair_eigenvectors(wi, vr, scalar.complex_dtype)
        if left:
            vl = pair_eigenvectors(wi, vl, scalar.complex_dtype)

    return EigResult(
        eigenvalues=eigenvalues,
        eigenvectors=from_lapack(vr, view) if right else None,
        left_eigenvectors=from_lapack(vl, view) if left else None,
        routine=routine,
    )
