"""
Core infrastructure for PyLinalg.

This module provides the machinery shared by every operation: scalar
types and their routine bindings, the memory-layout adapter, the
workspace protocol and the translation of status codes to exceptions.

Key components:
    scalar: ScalarType variants and the Operation -> routine table
    layout: MatrixView and conversion to/from LAPACK storage
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Workspace protocol, status translation, tolerances
    backends: Resolution of routine names in scipy.linalg.lapack
"""

from pylinalg.core.scalar import (
    COMPLEX64,
    COMPLEX128,
    REAL32,
    REAL64,
    SCALARS,
    Operation,
    ScalarType,
    common_scalar,
    scalar_of,
)
from pylinalg.core.layout import Layout, MatrixView
from pylinalg.core.exceptions import (
    PyLinalgError,
    InvalidArgumentError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
    AllocationError,
    LinalgWarning,
    IllConditionedWarning,
)

__all__ = [
    # Scalar types
    "ScalarType",
    "Operation",
    "REAL32",
    "REAL64",
    "COMPLEX64",
    "COMPLEX128",
    "SCALARS",
    "scalar_of",
    "common_scalar",
    # Layout
    "Layout",
    "MatrixView",
    # Exceptions
    "PyLinalgError",
    "InvalidArgumentError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
    "AllocationError",
    "LinalgWarning",
    "IllConditionedWarning",
]
