"""
Translation of LAPACK status codes.

Every LAPACK routine reports its outcome through an integer ``info``:

    info == 0   success
    info == -k  the k-th argument had an illegal value
    info > 0    a numerical failure whose meaning depends on the routine

The meaning of a positive code is fixed by the routine's documented
contract, not by the vendor implementing it, so it is named here once per
routine family (StatusContract) rather than per backend.

translate_status() is a pure mapping from a code to an exception instance
(or None). check_status() raises it. No nonzero code is ever ignored.
"""

from enum import Enum

from pylinalg.core.exceptions import (
    ConvergenceError,
    InvalidArgumentError,
    NotPositiveDefiniteError,
    NumericalError,
    PyLinalgError,
    SingularMatrixError,
)


class StatusContract(Enum):
    """Meaning of a positive status code."""
    # Routine never reports a positive code (potrs, getrs, geqrf, ...)
    NONE = 'none'
    # info = i: U(i,i) or the i-th diagonal of a factor is exactly zero
    SINGULAR = 'singular'
    # info = i: leading minor of order i is not positive definite
    NOT_POSITIVE_DEFINITE = 'not_positive_definite'
    # info = i: i values failed to converge; for QZ (ggev) n+1 and n+2
    # report other failures of the iteration
    NOT_CONVERGED = 'not_converged'
    # sygvd/hegvd: i <= n did not converge, i > n means B has a leading
    # minor of order i - n that is not positive definite
    DEFINITE_PENCIL = 'definite_pencil'


# LAPACK argument names, by routine without precision prefix. Used only to
# make InvalidArgumentError messages readable.
_ARGUMENT_NAMES: dict[str, tuple[str, ...]] = {
    'potrf': ('uplo', 'n', 'a', 'lda', 'info'),
    'potrs': ('uplo', 'n', 'nrhs', 'a', 'lda', 'b', 'ldb', 'info'),
    'potri': ('uplo', 'n', 'a', 'lda', 'info'),
    'getrf': ('m', 'n', 'a', 'lda', 'ipiv', 'info'),
    'getrs': ('trans', 'n', 'nrhs', 'a', 'lda', 'ipiv', 'b', 'ldb', 'info'),
    'getri': ('n', 'a', 'lda', 'ipiv', 'work', 'lwork', 'info'),
    'gecon': ('norm', 'n', 'a', 'lda', 'anorm', 'rcond', 'work', 'iwork', 'info'),
    'geqrf': ('m', 'n', 'a', 'lda', 'tau', 'work', 'lwork', 'info'),
    'orgqr': ('m', 'n', 'k', 'a', 'lda', 'tau', 'work', 'lwork', 'info'),
    'ungqr': ('m', 'n', 'k', 'a', 'lda', 'tau', 'work', 'lwork', 'info'),
    'trtrs': ('uplo', 'trans', 'diag', 'n', 'nrhs', 'a', 'lda', 'b', 'ldb', 'info'),
    'syev': ('jobz', 'uplo', 'n', 'a', 'lda', 'w', 'work', 'lwork', 'info'),
    'heev': ('jobz', 'uplo', 'n', 'a', 'lda', 'w', 'work', 'lwork', 'rwork', 'info'),
    'geev': ('jobvl', 'jobvr', 'n', 'a', 'lda', 'w', 'vl', 'ldvl', 'vr',
             'ldvr', 'work', 'lwork', 'info'),
    'gesdd': ('jobz', 'm', 'n', 'a', 'lda', 's', 'u', 'ldu', 'vt', 'ldvt',
              'work', 'lwork', 'iwork', 'info'),
    'gesvd': ('jobu', 'jobvt', 'm', 'n', 'a', 'lda', 's', 'u', 'ldu', 'vt',
              'ldvt', 'work', 'lwork', 'info'),
}


def _base_name(routine: str) -> str:
    """Strip the precision prefix and any query suffix: 'zheev_lwork' -> 'heev'."""
    name = routine[1:] if routine[:1] in ('s', 'd', 'c', 'z') else routine
    return name.removesuffix('_lwork')


def _argument_name(routine: str, position: int) -> str | None:
    names = _ARGUMENT_NAMES.get(_base_name(routine))
    if names is None or not 1 <= position <= len(names):
        return None
    return names[position - 1]


def translate_status(
    info: int,
    routine: str,
    contract: StatusContract,
    n: int | None = None,
    matrix_name: str | None = None,
) -> PyLinalgError | None:
    """
    Map a routine's status code to a typed error.

    Args:
        info: Raw status code returned by the routine
        routine: Full routine name (e.g. 'dgetrf'), carried on the error
        contract: Meaning of positive codes for this routine
        n: Matrix order, required by NOT_CONVERGED (QZ codes above n)
            and DEFINITE_PENCIL
        matrix_name: Name of the matrix for SingularMatrixError

    Returns:
        None for success, otherwise exactly one exception instance
    """
    info = int(info)
    if info == 0:
        return None

    if info < 0:
        position = -info
        argument = _argument_name(routine, position)
        label = f"argument {position}" + (f" ({argument})" if argument else "")
        return InvalidArgumentError(
            f"{routine}: {label} had an illegal value",
            routine=routine,
            position=position,
            argument=argument,
        )

    if contract is StatusContract.SINGULAR:
        return SingularMatrixError(
            f"{routine}: matrix is singular, diagonal element {info - 1} "
            f"of the factor is exactly zero",
            routine=routine,
            info=info,
            pivot=info - 1,
            matrix_name=matrix_name,
        )

    if contract is StatusContract.NOT_POSITIVE_DEFINITE:
        return NotPositiveDefiniteError(
            f"{routine}: leading minor of order {info} is not positive definite",
            routine=routine,
            info=info,
            order=info,
            matrix_name=matrix_name,
        )

    if contract is StatusContract.NOT_CONVERGED:
        if n is not None and info > n:
            stage = 'QZ iteration' if info == n + 1 else 'eigenvector computation'
            return ConvergenceError(
                f"{routine}: {stage} failed (info={info})",
                routine=routine,
                info=info,
            )
        return ConvergenceError(
            f"{routine}: {info} value(s) failed to converge",
            routine=routine,
            info=info,
            unconverged=info,
        )

    if contract is StatusContract.DEFINITE_PENCIL:
        if n is None:
            raise ValueError("DEFINITE_PENCIL translation requires n")
        if info > n:
            return NotPositiveDefiniteError(
                f"{routine}: leading minor of order {info - n} of b is not "
                f"positive definite",
                routine=routine,
                info=info,
                order=info - n,
                matrix_name='b',
            )
        return ConvergenceError(
            f"{routine}: {info} value(s) failed to converge",
            routine=routine,
            info=info,
            unconverged=info,
        )

    # Positive code from a routine documented never to produce one
    return NumericalError(
        f"{routine}: unexpected status {info}",
        routine=routine,
        info=info,
    )


def check_status(
    info: int,
    routine: str,
    contract: StatusContract,
    n: int | None = None,
    matrix_name: str | None = None,
) -> None:
    """
    Raise the typed error for a nonzero status code.

    Raises:
        InvalidArgumentError, SingularMatrixError, NotPositiveDefiniteError,
        ConvergenceError or NumericalError, per translate_status()
    """
    error = translate_status(info, routine, contract, n=n, matrix_name=matrix_name)
    if error is not None:
        raise error
