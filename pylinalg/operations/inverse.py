"""
Matrix inverse via LU.

getrf factors A, then getri forms the inverse from the factors. getri's
workspace is sized by its query routine before it runs.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.layout import write_back
from pylinalg.operations._common import prepare_matrix
from pylinalg.operations.lu import factorize, invert_factored


def inv(
    a: ArrayLike,
    *,
    overwrite_a: bool = False,
    check_finite: bool = True,
) -> NDArray[np.inexact[Any]]:
    """
    Compute the inverse of a square matrix.

    Args:
        a: Square matrix (n x n)
        overwrite_a: Allow the inverse to be written into a
        check_finite: Reject NaN/Inf in a

    Returns:
        Inverse of a, in the layout of a

    Raises:
        DimensionError: If a is not square
        SingularMatrixError: If a has an exactly zero pivot
    """
    view = prepare_matrix(a, 'a', check_finite=check_finite, square=True)
    scalar = view.scalar
    if view.is_empty:
        return np.zeros((0, 0), dtype=scalar.dtype)

    fact = factorize(view, scalar, overwrite_a)
    if fact.error is not None:
        raise fact.error
    inv_a = invert_factored(fact.lu, fact.piv, scalar)
    return write_back(fact.buffer, inv_a)
