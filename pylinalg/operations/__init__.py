"""
Dense linear-algebra operations.

Each operation validates its input, selects the routine for the input's
scalar type, runs it through the workspace protocol and translates its
status. Matrices come back in the storage order of the caller's input.

Public API:
    cholesky, cholesky_solve, cholesky_inv, cholesky_det
    lu, solve, solve_triangular, inv, det, slogdet
    qr, qr_solve
    eig, eigh, eig_generalized, eigh_generalized
    svd
    opnorm, norm
"""

from pylinalg.operations.cholesky import (
    CholeskyResult,
    cholesky,
    cholesky_det,
    cholesky_inv,
    cholesky_solve,
)
from pylinalg.operations.lu import LUResult, lu
from pylinalg.operations.qr import QRResult, qr, qr_solve
from pylinalg.operations.eig import EigResult, eig
from pylinalg.operations.eigh import EighResult, eigh
from pylinalg.operations.generalized import (
    GeneralizedEigResult,
    eig_generalized,
    eigh_generalized,
)
from pylinalg.operations.svd import SVDResult, svd
from pylinalg.operations.solve import solve, solve_triangular
from pylinalg.operations.inverse import inv
from pylinalg.operations.determinant import det, slogdet
from pylinalg.operations.norm import norm, opnorm

__all__ = [
    # Cholesky
    "cholesky",
    "cholesky_solve",
    "cholesky_inv",
    "cholesky_det",
    "CholeskyResult",
    # LU family
    "lu",
    "LUResult",
    "solve",
    "solve_triangular",
    "inv",
    "det",
    "slogdet",
    # QR
    "qr",
    "qr_solve",
    "QRResult",
    # Eigen
    "eig",
    "EigResult",
    "eigh",
    "EighResult",
    "eig_generalized",
    "eigh_generalized",
    "GeneralizedEigResult",
    # SVD
    "svd",
    "SVDResult",
    # Norms
    "opnorm",
    "norm",
]
