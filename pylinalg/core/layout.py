"""
Memory layout adapter.

LAPACK reads and writes column-major (Fortran-ordered) contiguous
buffers. NumPy arrays may be row-major (C-ordered), column-major, or
arbitrary strided views. This module is the only place that reasons
about the difference:

    to_lapack():    caller array -> Fortran buffer (zero copy if possible)
    lapack_input(): same, for routines that never write their input
    write_back():   in-place routine result -> caller array
    from_lapack():  routine output -> caller's layout

Operations are written against "already in LAPACK layout" and never
inspect strides themselves.

Two contracts are offered to callers:
    - overwrite=False ("materializes a copy"): the caller's array is never
      modified.
    - overwrite=True ("consumes and overwrites its input"): the routine
      works directly in the caller's array when its layout and dtype
      already match; otherwise the result is copied back into the
      caller's array in the caller's own layout.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import DimensionError, ValidationError
from pylinalg.core.scalar import ScalarType, scalar_of


class Layout(Enum):
    """Storage order of a 2D array."""
    ROW_MAJOR = 'C'
    COLUMN_MAJOR = 'F'
    STRIDED = 'strided'


def layout_of(array: NDArray[Any]) -> Layout:
    """
    Classify the storage order of a 2D array.

    Arrays that are both C- and F-contiguous (a single row or column, or
    empty) are reported as column-major since LAPACK can read them as-is.
    """
    if array.flags.f_contiguous:
        return Layout.COLUMN_MAJOR
    if array.flags.c_contiguous:
        return Layout.ROW_MAJOR
    return Layout.STRIDED


@dataclass(frozen=True)
class MatrixView:
    """
    Borrowed view of a caller-owned matrix.

    Attributes:
        array: The caller's array (never copied by construction)
        name: Parameter name used in error messages
        rows: Number of rows
        cols: Number of columns
        layout: Storage order of the caller's array
        leading_dimension: Elements between consecutive columns
            (column-major) or rows (row-major); 0 for strided views
    """
    array: NDArray[Any]
    name: str
    rows: int
    cols: int
    layout: Layout
    leading_dimension: int

    @classmethod
    def from_array(cls, array: NDArray[Any], name: str) -> 'MatrixView':
        """
        Describe a 2D array.

        Raises:
            DimensionError: If the array is not 2D
        """
        if array.ndim != 2:
            raise DimensionError(
                f"{name}: expected 2D array, got {array.ndim}D with shape {array.shape}"
            )
        rows, cols = array.shape
        layout = layout_of(array)
        itemsize = array.dtype.itemsize
        if rows == 0 or cols == 0:
            lda = max(1, rows)
        elif layout is Layout.COLUMN_MAJOR:
            lda = max(1, rows) if cols == 1 else array.strides[1] // itemsize
        elif layout is Layout.ROW_MAJOR:
            lda = max(1, cols) if rows == 1 else array.strides[0] // itemsize
        else:
            lda = 0
        view = cls(
            array=array, name=name, rows=rows, cols=cols,
            layout=layout, leading_dimension=lda,
        )
        view._check_invariants()
        return view

    def _check_invariants(self) -> None:
        if self.rows * self.cols > self.array.size:
            raise DimensionError(
                f"{self.name}: {self.rows}x{self.cols} exceeds buffer of "
                f"{self.array.size} elements"
            )
        if self.layout is Layout.COLUMN_MAJOR and self.leading_dimension < max(1, self.rows):
            raise DimensionError(
                f"{self.name}: leading dimension {self.leading_dimension} "
                f"< rows {self.rows}"
            )
        if self.layout is Layout.ROW_MAJOR and self.leading_dimension < max(1, self.cols):
            raise DimensionError(
                f"{self.name}: leading dimension {self.leading_dimension} "
                f"< cols {self.cols}"
            )

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def is_empty(self) -> bool:
        return self.rows == 0 or self.cols == 0

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    @property
    def scalar(self) -> ScalarType:
        return scalar_of(self.array.dtype)

    def satisfies(self, scalar: ScalarType) -> bool:
        """True if LAPACK can use the caller's buffer directly."""
        return (
            self.layout is Layout.COLUMN_MAJOR
            and self.array.dtype == scalar.dtype
            and self.array.flags.writeable
            and self.array.flags.aligned
        )


@dataclass(frozen=True)
class LapackBuffer:
    """
    A Fortran-ordered buffer ready to hand to a routine.

    Attributes:
        data: The buffer itself
        view: View of the caller's array it was derived from
        copied: True if data is a private copy
        overwrite: True if the caller agreed to have its array overwritten
    """
    data: NDArray[Any]
    view: MatrixView
    copied: bool
    overwrite: bool

    @property
    def may_overwrite(self) -> bool:
        """
        Whether the routine may destroy data.

        True for private copies, and for the caller's own array when the
        caller opted into overwriting.
        """
        return self.copied or self.overwrite


def to_lapack(
    view: MatrixView,
    scalar: ScalarType,
    overwrite: bool = False,
) -> LapackBuffer:
    """
    Produce a column-major contiguous buffer for a routine.

    Returns the caller's own array when it is already Fortran-contiguous
    with the target dtype and the caller allows overwriting. Otherwise a
    Fortran-ordered copy is materialized.

    Args:
        view: The caller's matrix
        scalar: Element type the routine expects
        overwrite: Caller allows its array to be consumed

    Returns:
        LapackBuffer describing the buffer and how it was obtained

    Raises:
        ValidationError: If overwrite is requested on a read-only array
    """
    if overwrite and not view.array.flags.writeable:
        raise ValidationError(
            f"overwrite_{view.name}=True but {view.name} is read-only"
        )
    if overwrite and view.satisfies(scalar):
        return LapackBuffer(data=view.array, view=view, copied=False, overwrite=True)
    data = np.array(view.array, dtype=scalar.dtype, order='F', copy=True)
    return LapackBuffer(data=data, view=view, copied=True, overwrite=overwrite)


def lapack_input(view: MatrixView, scalar: ScalarType) -> NDArray[Any]:
    """
    Buffer for a routine that only reads its input.

    The caller's own array is returned when it is already column-major
    with the target dtype (read-only arrays included, as nothing is
    written); otherwise a Fortran-ordered copy.
    """
    if (
        view.layout is Layout.COLUMN_MAJOR
        and view.array.dtype == scalar.dtype
        and view.array.flags.aligned
    ):
        return view.array
    return np.array(view.array, dtype=scalar.dtype, order='F', copy=True)


def write_back(buffer: LapackBuffer, result: NDArray[Any]) -> NDArray[Any]:
    """
    Deliver an in-place routine result.

    With overwrite, the result ends up in the caller's array (copied back
    in the caller's layout if the routine worked on a copy or on memory of
    its own) and the caller's array is returned. Without overwrite, the
    result is returned in the caller's layout and the caller's array is
    left untouched.
    """
    if not buffer.overwrite:
        return from_lapack(result, buffer.view)
    target = buffer.view.array
    if not np.shares_memory(result, target):
        target[...] = result
    return target


def from_lapack(result: NDArray[Any], view: MatrixView) -> NDArray[Any]:
    """
    Convert a routine output to the storage order of the caller's input.

    Column-major callers get Fortran-ordered arrays, row-major and strided
    callers get C-ordered arrays. Values are identical either way.
    """
    if view.layout is Layout.COLUMN_MAJOR:
        return np.asfortranarray(result)
    return np.ascontiguousarray(result)


def rhs_to_lapack(
    array: NDArray[Any],
    scalar: ScalarType,
) -> tuple[LapackBuffer, bool]:
    """
    Prepare a right-hand side as a private Fortran-ordered 2D buffer.

    Vectors are treated as a single column. The caller's array is never
    overwritten, so routines may solve in place in the returned buffer.

    Returns:
        (buffer, was_vector)
    """
    was_vector = array.ndim == 1
    matrix = array.reshape(-1, 1) if was_vector else array
    view = MatrixView.from_array(matrix, 'b')
    return to_lapack(view, scalar), was_vector


def rhs_from_lapack(
    result: NDArray[Any],
    buffer: LapackBuffer,
    was_vector: bool,
) -> NDArray[Any]:
    """Return a solution in the shape and layout of its right-hand side."""
    if was_vector:
        return np.ascontiguousarray(result).reshape(-1)
    return from_lapack(result, buffer.view)
