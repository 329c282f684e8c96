"""Shared input handling for operations."""

from typing import Any, Literal

from numpy.typing import ArrayLike, NDArray

from pylinalg.core import validation
from pylinalg.core.exceptions import DimensionError, InvalidArgumentError
from pylinalg.core.layout import MatrixView
from pylinalg.core.scalar import ScalarType, common_scalar

Triangle = Literal['lower', 'upper']


def prepare_matrix(
    a: ArrayLike,
    name: str,
    *,
    check_finite: bool,
    square: bool = False,
) -> MatrixView:
    """
    Validate a matrix argument and describe it.

    This is the boundary: validate here, trust everywhere else.
    """
    arr = validation.check_array(a, name)
    if square:
        validation.check_square(arr, name)
    else:
        validation.check_2d(arr, name)
    if check_finite:
        validation.check_finite(arr, name)
    return MatrixView.from_array(arr, name)


def prepare_rhs(
    b: ArrayLike,
    name: str,
    rows: int,
    *,
    check_finite: bool,
) -> NDArray[Any]:
    """Validate a right-hand side (vector or matrix) against a row count."""
    arr = validation.check_array(b, name)
    validation.check_rhs(arr, name)
    if arr.shape[0] != rows:
        raise DimensionError(
            f"Inconsistent lengths: matrix has {rows} rows, "
            f"{name} has {arr.shape[0]} rows"
        )
    if check_finite:
        validation.check_finite(arr, name)
    return arr


def unify(
    view: MatrixView,
    other: NDArray[Any],
) -> tuple[MatrixView, NDArray[Any], ScalarType]:
    """
    Bring a matrix and a second operand to one scalar type.

    The promotion is explicit so that the routine sees a single type.
    """
    scalar = common_scalar(view.array.dtype, other.dtype)
    if view.array.dtype != scalar.dtype:
        view = MatrixView.from_array(view.array.astype(scalar.dtype), view.name)
    if other.dtype != scalar.dtype:
        other = other.astype(scalar.dtype)
    return view, other, scalar


def lower_flag(uplo: str) -> int:
    """LAPACK 'lower' integer flag from a Triangle."""
    if uplo not in ('lower', 'upper'):
        raise InvalidArgumentError(
            f"uplo must be 'lower' or 'upper', got {uplo!r}",
            argument='uplo',
        )
    return int(uplo == 'lower')
