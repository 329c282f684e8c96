"""
LAPACK routine resolution.

Every routine used by PyLinalg is looked up through get_routine(). This
is the single point where the dispatch layer touches the backend, which
keeps the rest of the code independent of how the routines are linked.
"""

from typing import Any, Callable

from scipy.linalg import lapack as _lapack

BACKEND_NAME = 'scipy.linalg.lapack'


def has_routine(name: str) -> bool:
    """Check whether the backend provides a routine (e.g. 'dpotrf')."""
    return callable(getattr(_lapack, name, None))


def get_routine(name: str) -> Callable[..., Any]:
    """
    Resolve a full LAPACK routine name to its callable.

    Args:
        name: Prefixed routine name, e.g. 'dpotrf' or 'zungqr'

    Returns:
        The backend callable

    Raises:
        LookupError: If the backend does not provide the routine
    """
    routine = getattr(_lapack, name, None)
    if routine is None or not callable(routine):
        raise LookupError(f"Backend {BACKEND_NAME} has no routine {name!r}")
    return routine


def backend_info() -> dict[str, Any]:
    """
    Describe the active backend.

    Returns:
        Dictionary with the backend name and the SciPy version providing it
    """
    import scipy

    return {
        'name': BACKEND_NAME,
        'scipy_version': scipy.__version__,
        'ilp64': bool(getattr(_lapack, 'HAS_ILP64', False)),
    }
