"""
Matrix and vector norms.

opnorm() computes operator-style matrix norms with lange, which reads the
matrix in LAPACK layout. norm() computes elementwise norms of arrays of
any shape through the scalar type's magnitude functions.
"""

from typing import Literal

import numpy as np
from numpy.typing import ArrayLike

from pylinalg.core import validation
from pylinalg.core.compute.workspace import execute
from pylinalg.core.exceptions import InvalidArgumentError
from pylinalg.core.layout import lapack_input
from pylinalg.core.scalar import Operation, scalar_of
from pylinalg.operations._common import prepare_matrix

NormKind = Literal['one', 'inf', 'fro', 'max']
VectorNormKind = Literal['l1', 'l2', 'max']

# lange norm codes
_LANGE_CODES = {'one': '1', 'inf': 'I', 'fro': 'F', 'max': 'M'}


def opnorm(
    a: ArrayLike,
    kind: NormKind = 'one',
    *,
    check_finite: bool = True,
) -> float:
    """
    Matrix norm of a 2D array.

    Args:
        a: Matrix (m x n)
        kind: 'one' (max column sum), 'inf' (max row sum), 'fro'
            (Frobenius) or 'max' (largest magnitude)
        check_finite: Reject NaN/Inf in a

    Returns:
        The norm as a Python float (0.0 for an empty matrix)
    """
    if kind not in _LANGE_CODES:
        raise InvalidArgumentError(
            f"kind must be one of {', '.join(map(repr, _LANGE_CODES))}, got {kind!r}",
            argument='kind',
        )
    view = prepare_matrix(a, 'a', check_finite=check_finite)
    if view.is_empty:
        return 0.0
    scalar = view.scalar
    value = execute(
        scalar, Operation.NORM, None, _LANGE_CODES[kind], lapack_input(view, scalar),
    )[0]
    return float(value)


def norm(x: ArrayLike, kind: VectorNormKind = 'l2') -> float:
    """
    Elementwise norm of an array of any shape.

    Args:
        x: Array
        kind: 'l1' (sum of magnitudes), 'l2' (Euclidean) or 'max'

    Returns:
        The norm as a Python float (0.0 for an empty array)
    """
    if kind not in ('l1', 'l2', 'max'):
        raise InvalidArgumentError(
            f"kind must be 'l1', 'l2' or 'max', got {kind!r}", argument='kind',
        )
    arr = validation.check_array(x, 'x')
    if arr.size == 0:
        return 0.0
    scalar = scalar_of(arr.dtype)
    if kind == 'l1':
        return float(np.sum(scalar.abs(arr)))
    if kind == 'max':
        return float(np.max(scalar.abs(arr)))
    return float(np.sqrt(np.sum(scalar.abs_sqr(arr))))
