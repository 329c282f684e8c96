"""
Exception hierarchy for PyLinalg.

All exceptions inherit from PyLinalgError to allow catching any
library-specific error. Every nonzero LAPACK status code is translated
into exactly one of the concrete classes here (see
pylinalg.core.compute.status).

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinalgError(Exception):
    """Base exception for all PyLinalg errors."""
    pass


class InvalidArgumentError(PyLinalgError):
    """
    An argument was rejected.

    Raised either by input validation at the API boundary or by the
    translation of a negative LAPACK status (``info = -k`` means the k-th
    argument of the routine had an illegal value).

    Attributes:
        routine: LAPACK routine that rejected the argument, if any
        position: 1-based position of the offending routine argument
        argument: Name of the offending argument, if known
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        position: int | None = None,
        argument: str | None = None,
    ):
        super().__init__(message)
        self.routine = routine
        self.position = position
        self.argument = argument


class ValidationError(InvalidArgumentError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks before any
    routine is called.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class NumericalError(PyLinalgError):
    """
    Numerical computation failed.

    Base class for failures reported by a routine through a positive
    status code.

    Attributes:
        routine: LAPACK routine that reported the failure
        info: Raw status code returned by the routine
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message)
        self.routine = routine
        self.info = info


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when a factorization or solve meets an exactly zero pivot.

    Attributes:
        pivot: 0-based index of the offending diagonal element, if known
        matrix_name: Name/description of the problematic matrix
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
        pivot: int | None = None,
        matrix_name: str | None = None,
    ):
        super().__init__(message, routine=routine, info=info)
        self.pivot = pivot
        self.matrix_name = matrix_name


class NotPositiveDefiniteError(SingularMatrixError):
    """
    Matrix is not positive definite.

    Raised when a Cholesky-type factorization finds a leading minor that
    is not positive definite.

    Attributes:
        order: Order of the leading minor that is not positive definite
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
        order: int | None = None,
        matrix_name: str | None = None,
    ):
        pivot = order - 1 if order is not None else None
        super().__init__(
            message, routine=routine, info=info, pivot=pivot,
            matrix_name=matrix_name,
        )
        self.order = order


class ConvergenceError(NumericalError):
    """
    Iterative eigenvalue or singular value routine failed to converge.

    Attributes:
        unconverged: Number of values that failed to converge, if the
            routine reports it
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
        unconverged: int | None = None,
    ):
        super().__init__(message, routine=routine, info=info)
        self.unconverged = unconverged


class AllocationError(PyLinalgError, MemoryError):
    """
    Workspace could not be obtained.

    Raised when a queried workspace exceeds what the backend can address
    or when allocating it fails. Never retried.

    Attributes:
        routine: Routine whose workspace could not be obtained
        requested: Requested size in elements, if known
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        requested: int | None = None,
    ):
        super().__init__(message)
        self.routine = routine
        self.requested = requested


class LinalgWarning(UserWarning):
    """Base warning for non-fatal numerical conditions."""
    pass


class IllConditionedWarning(LinalgWarning):
    """
    Solve succeeded but the matrix is numerically ill-conditioned.

    Attributes:
        rcond: Reciprocal condition number estimate
    """

    def __init__(self, message: str, rcond: float | None = None):
        super().__init__(message)
        self.rcond = rcond
