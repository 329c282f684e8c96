"""
Routine backends for PyLinalg.

The numerical routines are provided by the LAPACK library that SciPy was
built against. Which vendor implementation that is (reference LAPACK,
OpenBLAS, MKL, ...) is decided when SciPy is built, not here.

Submodules:
    lapack: Resolution of LAPACK routine names to callables
"""

from pylinalg.core.backends.lapack import (
    BACKEND_NAME,
    backend_info,
    get_routine,
    has_routine,
)

__all__ = [
    "BACKEND_NAME",
    "backend_info",
    "get_routine",
    "has_routine",
]
