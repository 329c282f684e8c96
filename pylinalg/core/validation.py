"""
Input validation utilities for PyLinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion beyond promotion to a LAPACK dtype
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinalg.core.exceptions import (
    DimensionError,
    InvalidArgumentError,
    ValidationError,
)
from pylinalg.core.scalar import promote_dtype


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.inexact[Any]]:
    """
    Validate and convert input to a numpy array with a LAPACK dtype.

    Accepts any array-like. Integer and boolean data are promoted to
    float64 and float16 to float32; float32, float64, complex64 and
    complex128 arrays are returned unchanged (no copy).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with one of the four supported dtypes

    Raises:
        ValidationError: If input cannot be converted to a numeric array
            or has no LAPACK counterpart
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not (np.issubdtype(result.dtype, np.number)
            or np.issubdtype(result.dtype, np.bool_)):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    try:
        target = promote_dtype(result.dtype)
    except InvalidArgumentError as e:
        raise ValidationError(f"{name}: {e}") from e

    if result.dtype != target:
        result = result.astype(target)

    return result


def check_finite(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.inexact[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_2d(array: NDArray[np.inexact[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_rhs(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify a right-hand side is a vector or a matrix of column vectors.

    Raises:
        DimensionError: If array is not 1D or 2D
    """
    if array.ndim not in (1, 2):
        raise DimensionError(
            f"{name}: expected 1D or 2D array, got {array.ndim}D with shape {array.shape}"
        )


def check_square(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify a 2D array is square.

    Raises:
        DimensionError: If the number of rows differs from the number of
            columns
    """
    check_2d(array, name)
    rows, cols = array.shape
    if rows != cols:
        raise DimensionError(
            f"{name}: expected square matrix, got shape {array.shape}"
        )


def check_same_shape(
    a: NDArray[np.inexact[Any]],
    b: NDArray[np.inexact[Any]],
    names: tuple[str, str],
) -> None:
    """
    Verify two arrays have identical shapes.

    Raises:
        DimensionError: If shapes differ
    """
    if a.shape != b.shape:
        raise DimensionError(
            f"Inconsistent shapes: {names[0]}={a.shape}, {names[1]}={b.shape}"
        )


def check_hermitian(
    array: NDArray[np.inexact[Any]],
    name: str,
    rtol: float,
    atol: float,
) -> None:
    """
    Verify a square matrix equals its conjugate transpose within tolerance.

    Only called when the caller opts in; the eigen routines themselves
    read a single triangle and never check.

    Raises:
        ValidationError: If the matrix is not symmetric/Hermitian
    """
    if not np.allclose(array, np.conj(array.T), rtol=rtol, atol=atol):
        deviation = float(np.max(np.abs(array - np.conj(array.T))))
        raise ValidationError(
            f"{name}: not symmetric/Hermitian (max deviation {deviation:.3g})"
        )
