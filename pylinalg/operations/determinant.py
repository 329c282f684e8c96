"""
Determinants via LU.

det(A) = (-1)^s * prod(U_ii), where s is the number of row interchanges
recorded in the pivot array. A factorization that meets an exactly zero
pivot is not an error here: the determinant is exactly zero.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pylinalg.core.exceptions import SingularMatrixError
from pylinalg.operations._common import prepare_matrix
from pylinalg.operations.lu import factorize, permutation_parity


def det(
    a: ArrayLike,
    *,
    overwrite_a: bool = False,
    check_finite: bool = True,
) -> Any:
    """
    Determinant of a square matrix.

    Args:
        a: Square matrix (n x n)
        overwrite_a: Allow the LU factors to be written into a
        check_finite: Reject NaN/Inf in a

    Returns:
        Determinant as a scalar of a's dtype (1 for a 0 x 0 matrix)

    Raises:
        DimensionError: If a is not square
    """
    view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    scalar = view.scalar
    if view.is_empty:
        return scalar.dtype.type(1)

    fact = factorize(view, scalar, overwrite_a)
    if isinstance(fact.error, SingularMatrixError):
        return scalar.dtype.type(0)
    diag = np.diagonal(fact.lu)
    return scalar.dtype.type(permutation_parity(fact.piv) * np.prod(diag))


def slogdet(
    a: ArrayLike,
    *,
    overwrite_a: bool = False,
    check_finite: bool = True,
) -> tuple[Any, float]:
    """
    Sign and natural log of the absolute determinant.

    Stays finite where det() would overflow or underflow.

    Returns:
        (sign, logabsdet). sign is +1/-1 for real matrices and a unit
        complex number for complex ones; a singular matrix gives
        (0, -inf).
    """
    view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    scalar = view.scalar
    if view.is_empty:
        return scalar.dtype.type(1), 0.0

    fact = factorize(view, scalar, overwrite_a)
    if isinstance(fact.error, SingularMatrixError):
        return scalar.dtype.type(0), float('-inf')
    diag = np.diagonal(fact.lu)
    magnitudes = scalar.abs(diag)
    phases = diag / magnitudes
    sign = scalar.dtype.type(permutation_parity(fact.piv) * np.prod(phases))
    return sign, float(np.sum(np.log(magnitudes)))
