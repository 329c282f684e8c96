"""
PyLinalg: scalar-generic dense linear algebra on top of LAPACK.

Call Cholesky, LU, QR, eigen-decompositions, SVD, solves, inverses,
determinants and norms on NumPy arrays of any of the four LAPACK element
types (float32, float64, complex64, complex128) and any storage order.
The matching LAPACK routine is chosen from the array's dtype, its
workspace is queried before it runs, and its status code is raised as a
typed exception.

Submodules:
    core: Scalar types, layout adapter, workspace protocol, exceptions
    operations: The decompositions and derived operations
"""

__version__ = "0.1.0"

from pylinalg.core import (
    COMPLEX64,
    COMPLEX128,
    REAL32,
    REAL64,
    ScalarType,
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
from pylinalg.operations import (
    CholeskyResult,
    EigResult,
    EighResult,
    GeneralizedEigResult,
    LUResult,
    QRResult,
    SVDResult,
    cholesky,
    cholesky_det,
    cholesky_inv,
    cholesky_solve,
    det,
    eig,
    eig_generalized,
    eigh,
    eigh_generalized,
    inv,
    lu,
    norm,
    opnorm,
    qr,
    qr_solve,
    slogdet,
    solve,
    solve_triangular,
    svd,
)

__all__ = [
    "__version__",
    # Scalar types
    "ScalarType",
    "REAL32",
    "REAL64",
    "COMPLEX64",
    "COMPLEX128",
    # Operations
    "cholesky",
    "cholesky_solve",
    "cholesky_inv",
    "cholesky_det",
    "lu",
    "qr",
    "qr_solve",
    "eig",
    "eigh",
    "eig_generalized",
    "eigh_generalized",
    "svd",
    "solve",
    "solve_triangular",
    "inv",
    "det",
    "slogdet",
    "opnorm",
    "norm",
    # Results
    "CholeskyResult",
    "LUResult",
    "QRResult",
    "EigResult",
    "EighResult",
    "GeneralizedEigResult",
    "SVDResult",
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
