"""
Scalar types and their LAPACK routine bindings.

LAPACK provides every routine in four precisions, distinguished by a
one-letter prefix:

    s: real single      (float32)
    d: real double      (float64)
    c: complex single   (complex64)
    z: complex double   (complex128)

Some routines additionally change name with realness (orgqr/ungqr,
syev/heev, sygvd/hegvd). ScalarType hides both: callers ask for a logical
Operation and get the routine for their element type.

The routine table is checked for completeness at import time. Adding an
Operation without a binding for every ScalarType fails when the module
is imported, so there is no runtime "unsupported type" path for any
(operation, scalar) pair.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import numpy as np
from numpy.typing import DTypeLike

from pylinalg.core.exceptions import InvalidArgumentError


class Operation(str, Enum):
    """Logical operations with a LAPACK binding."""
    CHOLESKY = 'cholesky'
    CHOLESKY_SOLVE = 'cholesky_solve'
    CHOLESKY_INVERSE = 'cholesky_inverse'
    LU = 'lu'
    LU_SOLVE = 'lu_solve'
    LU_INVERSE = 'lu_inverse'
    LU_INVERSE_WORKSPACE = 'lu_inverse_workspace'
    CONDITION = 'condition'
    QR = 'qr'
    QR_Q = 'qr_q'
    TRIANGULAR_SOLVE = 'triangular_solve'
    EIG = 'eig'
    EIG_WORKSPACE = 'eig_workspace'
    EIGH = 'eigh'
    EIGH_WORKSPACE = 'eigh_workspace'
    EIG_GENERALIZED = 'eig_generalized'
    EIGH_GENERALIZED = 'eigh_generalized'
    SVD = 'svd'
    SVD_WORKSPACE = 'svd_workspace'
    SVD_GESVD = 'svd_gesvd'
    SVD_GESVD_WORKSPACE = 'svd_gesvd_workspace'
    NORM = 'norm'


def _uniform(base: str) -> dict[str, str]:
    """Same routine name in all four precisions."""
    return {prefix: prefix + base for prefix in 'sdcz'}


def _by_realness(real: str, complex_: str) -> dict[str, str]:
    """Routine whose name differs between real and complex types."""
    return {
        's': 's' + real,
        'd': 'd' + real,
        'c': 'c' + complex_,
        'z': 'z' + complex_,
    }


_ROUTINES: dict[Operation, dict[str, str]] = {
    Operation.CHOLESKY: _uniform('potrf'),
    Operation.CHOLESKY_SOLVE: _uniform('potrs'),
    Operation.CHOLESKY_INVERSE: _uniform('potri'),
    Operation.LU: _uniform('getrf'),
    Operation.LU_SOLVE: _uniform('getrs'),
    Operation.LU_INVERSE: _uniform('getri'),
    Operation.LU_INVERSE_WORKSPACE: _uniform('getri_lwork'),
    Operation.CONDITION: _uniform('gecon'),
    Operation.QR: _uniform('geqrf'),
    Operation.QR_Q: _by_realness('orgqr', 'ungqr'),
    Operation.TRIANGULAR_SOLVE: _uniform('trtrs'),
    Operation.EIG: _uniform('geev'),
    Operation.EIG_WORKSPACE: _uniform('geev_lwork'),
    Operation.EIGH: _by_realness('syev', 'heev'),
    Operation.EIGH_WORKSPACE: _by_realness('syev_lwork', 'heev_lwork'),
    Operation.EIG_GENERALIZED: _uniform('ggev'),
    Operation.EIGH_GENERALIZED: _by_realness('sygvd', 'hegvd'),
    Operation.SVD: _uniform('gesdd'),
    Operation.SVD_WORKSPACE: _uniform('gesdd_lwork'),
    Operation.SVD_GESVD: _uniform('gesvd'),
    Operation.SVD_GESVD_WORKSPACE: _uniform('gesvd_lwork'),
    Operation.NORM: _uniform('lange'),
}


@dataclass(frozen=True)
class ScalarType:
    """
    One of the four element types LAPACK supports.

    Attributes:
        name: Short identifier ('real32', 'real64', 'complex64', 'complex128')
        dtype: NumPy dtype of matrix elements
        real_dtype: Dtype of magnitudes, eigenvalues of Hermitian matrices
            and singular values
        complex_dtype: Dtype of general eigenvalues for this precision
        prefix: LAPACK precision prefix
    """
    name: str
    dtype: np.dtype
    real_dtype: np.dtype
    complex_dtype: np.dtype
    prefix: str

    def __repr__(self) -> str:
        return f"ScalarType({self.name})"

    @property
    def is_complex(self) -> bool:
        return self.prefix in 'cz'

    @property
    def eps(self) -> float:
        """Machine epsilon of the underlying real precision."""
        return float(np.finfo(self.real_dtype).eps)

    def conj(self, x: Any) -> Any:
        """Complex conjugate; identity for real types."""
        if self.is_complex:
            return np.conj(x)
        return x

    def abs(self, x: Any) -> Any:
        """Magnitude as a real value, for real and complex inputs alike."""
        return np.asarray(np.abs(x), dtype=self.real_dtype)[()]

    def abs_sqr(self, x: Any) -> Any:
        """Squared magnitude without the square root."""
        if self.is_complex:
            return np.real(x) ** 2 + np.imag(x) ** 2
        return x * x

    def routine_name(self, op: Operation) -> str:
        """Full LAPACK routine name for an operation, e.g. 'zungqr'."""
        return _ROUTINES[op][self.prefix]

    def routine(self, op: Operation) -> Callable[..., Any]:
        """
        Resolve the backend routine for an operation.

        Looked up on every call so that the backend module stays the
        single point of resolution.
        """
        from pylinalg.core.backends import lapack as backend

        return backend.get_routine(self.routine_name(op))


REAL32 = ScalarType(
    name='real32',
    dtype=np.dtype(np.float32),
    real_dtype=np.dtype(np.float32),
    complex_dtype=np.dtype(np.complex64),
    prefix='s',
)
REAL64 = ScalarType(
    name='real64',
    dtype=np.dtype(np.float64),
    real_dtype=np.dtype(np.float64),
    complex_dtype=np.dtype(np.complex128),
    prefix='d',
)
COMPLEX64 = ScalarType(
    name='complex64',
    dtype=np.dtype(np.complex64),
    real_dtype=np.dtype(np.float32),
    complex_dtype=np.dtype(np.complex64),
    prefix='c',
)
COMPLEX128 = ScalarType(
    name='complex128',
    dtype=np.dtype(np.complex128),
    real_dtype=np.dtype(np.float64),
    complex_dtype=np.dtype(np.complex128),
    prefix='z',
)

SCALARS: tuple[ScalarType, ...] = (REAL32, REAL64, COMPLEX64, COMPLEX128)

_BY_DTYPE: dict[np.dtype, ScalarType] = {s.dtype: s for s in SCALARS}


def _check_complete() -> None:
    """Every operation must be bound for every scalar type."""
    for op in Operation:
        bindings = _ROUTINES.get(op)
        if bindings is None:
            raise TypeError(f"Operation {op.name} has no routine bindings")
        missing = [s.name for s in SCALARS if s.prefix not in bindings]
        if missing:
            raise TypeError(
                f"Operation {op.name} has no routine for {', '.join(missing)}"
            )


_check_complete()


def promote_dtype(dtype: DTypeLike) -> np.dtype:
    """
    Map an input dtype onto one of the four supported dtypes.

    Integers and booleans become float64, float16 becomes float32.
    Supported dtypes pass through unchanged.

    Raises:
        InvalidArgumentError: For dtypes with no LAPACK counterpart
            (object, strings, datetimes, extended precision)
    """
    dt = np.dtype(dtype)
    if dt in _BY_DTYPE:
        return dt
    if dt == np.float16:
        return np.dtype(np.float32)
    if np.issubdtype(dt, np.integer) or np.issubdtype(dt, np.bool_):
        return np.dtype(np.float64)
    raise InvalidArgumentError(
        f"dtype {dt} has no LAPACK counterpart; expected one of "
        f"{', '.join(str(s.dtype) for s in SCALARS)}"
    )


def scalar_of(dtype: DTypeLike) -> ScalarType:
    """Select the ScalarType for an array dtype (after promotion)."""
    return _BY_DTYPE[promote_dtype(dtype)]


def common_scalar(*dtypes: DTypeLike) -> ScalarType:
    """
    Select one ScalarType for several operands.

    Operands are promoted explicitly to a single type so that no routine
    ever sees mixed element types.
    """
    if not dtypes:
        raise ValueError("common_scalar() requires at least one dtype")
    result = promote_dtype(dtypes[0])
    for dt in dtypes[1:]:
        result = np.promote_types(result, promote_dtype(dt))
    return _BY_DTYPE[promote_dtype(result)]
