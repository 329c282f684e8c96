"""
Two-phase workspace protocol.

Most LAPACK factorization routines need scratch memory whose size depends
on the backend's blocking strategy. The protocol is:

    1. query: ask the routine how much it needs (lwork = -1, or a
       dedicated *_lwork query routine)
    2. execute: run the routine once with exactly that much

Routines without a query mode are sized from their documented closed
form instead. The sizes live in a WorkspaceRequest that is private to a
single call: it is never cached, reused, or returned to the caller.

A query that reports an illegal argument aborts before anything is
executed.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

from pylinalg.core.compute.status import StatusContract, check_status
from pylinalg.core.exceptions import AllocationError
from pylinalg.core.scalar import Operation, ScalarType

# Routines in scipy.linalg.lapack use 32-bit LAPACK integers
_INT32_MAX = int(np.iinfo(np.int32).max)


@dataclass(frozen=True)
class WorkspaceRequest:
    """
    Workspace sizes for one routine invocation.

    Attributes:
        routine: Full name of the routine the sizes are for
        sizes: Element counts keyed by the routine keyword they are passed
            as ('lwork', 'liwork', 'lrwork')
        strategy: How the sizes were obtained ('query_routine',
            'in_place_query', 'closed_form')
    """
    routine: str
    sizes: Mapping[str, int]
    strategy: str

    @property
    def lwork(self) -> int:
        return self.sizes['lwork']


def _work_size(value: Any, scalar: ScalarType, routine: str) -> int:
    """
    Convert a reported workspace size to an element count.

    Sizes come back in the routine's floating type. Single precision can
    round them below the true requirement, so they are nudged up by one
    ulp before truncation.
    """
    size = np.real(value)
    if scalar.real_dtype == np.float32:
        size = np.nextafter(np.float32(size), np.float32(np.inf))
    count = int(size)
    _check_addressable(count, routine)
    return max(count, 1)


def _check_addressable(count: int, routine: str) -> None:
    if count < 0 or count > _INT32_MAX:
        raise AllocationError(
            f"{routine}: workspace of {count} elements cannot be addressed "
            f"with 32-bit LAPACK integers",
            routine=routine,
            requested=count,
        )


def query_with_routine(
    scalar: ScalarType,
    query_op: Operation,
    routine_op: Operation,
    names: tuple[str, ...],
    *args: Any,
    **kwargs: Any,
) -> WorkspaceRequest:
    """
    Size a workspace with a dedicated query routine.

    SciPy exposes the LAPACK ``lwork = -1`` query of several routines as
    separate ``*_lwork`` functions taking matrix dimensions.

    Args:
        scalar: Element type
        query_op: Operation bound to the query routine (e.g. EIG_WORKSPACE)
        routine_op: Operation the workspace is for (e.g. EIG)
        names: Keywords the reported sizes are passed as, in the order the
            query routine returns them
        *args, **kwargs: Dimensions and flags for the query routine

    Raises:
        InvalidArgumentError: If the query reports an illegal argument
        AllocationError: If a size exceeds what LAPACK can address
    """
    query_name = scalar.routine_name(query_op)
    query = scalar.routine(query_op)
    *values, info = query(*args, **kwargs)
    check_status(info, query_name, StatusContract.NONE)
    if len(values) != len(names):
        raise ValueError(
            f"{query_name} returned {len(values)} sizes, expected {len(names)}"
        )
    routine_name = scalar.routine_name(routine_op)
    sizes = {
        name: _work_size(value, scalar, routine_name)
        for name, value in zip(names, values)
    }
    return WorkspaceRequest(routine=routine_name, sizes=sizes, strategy='query_routine')


def query_in_place(
    scalar: ScalarType,
    op: Operation,
    *args: Any,
    **kwargs: Any,
) -> WorkspaceRequest:
    """
    Size a workspace by calling the routine itself with ``lwork=-1``.

    The routine then does no work and returns its optimal workspace size
    in the first element of its work output (second-to-last return
    value).

    Raises:
        InvalidArgumentError: If the query reports an illegal argument
        AllocationError: If the size exceeds what LAPACK can address
    """
    routine_name = scalar.routine_name(op)
    routine = scalar.routine(op)
    ret = routine(*args, lwork=-1, **kwargs)
    work, info = ret[-2], ret[-1]
    check_status(info, routine_name, StatusContract.NONE)
    lwork = _work_size(np.ravel(work)[0], scalar, routine_name)
    return WorkspaceRequest(
        routine=routine_name, sizes={'lwork': lwork}, strategy='in_place_query',
    )


def closed_form(
    scalar: ScalarType,
    op: Operation,
    **sizes: int,
) -> WorkspaceRequest:
    """
    Size a workspace from a routine's documented formula.

    Used for routines without a query mode. Callers compute the sizes
    from the matrix dimensions; this only validates and records them.

    Raises:
        AllocationError: If a size exceeds what LAPACK can address
    """
    routine_name = scalar.routine_name(op)
    checked = {}
    for name, count in sizes.items():
        count = int(count)
        _check_addressable(count, routine_name)
        checked[name] = max(count, 1)
    return WorkspaceRequest(routine=routine_name, sizes=checked, strategy='closed_form')


def execute(
    scalar: ScalarType,
    op: Operation,
    request: WorkspaceRequest | None,
    *args: Any,
    **kwargs: Any,
) -> tuple[Any, ...]:
    """
    Run a routine once, with the workspace from a prior query.

    Args:
        scalar: Element type
        op: Operation to run
        request: Workspace sizes, or None for routines that need none
        *args, **kwargs: Arguments for the routine

    Returns:
        The routine's raw return tuple; the last element is its status

    Raises:
        AllocationError: If memory for the call could not be obtained
    """
    routine_name = scalar.routine_name(op)
    if request is not None and request.routine != routine_name:
        raise ValueError(
            f"workspace was sized for {request.routine}, not {routine_name}"
        )
    routine = scalar.routine(op)
    sizes = dict(request.sizes) if request is not None else {}
    try:
        ret = routine(*args, **sizes, **kwargs)
    except MemoryError as e:
        requested = sizes.get('lwork')
        raise AllocationError(
            f"{routine_name}: could not allocate memory for the call",
            routine=routine_name,
            requested=requested,
        ) from e
    if not isinstance(ret, tuple):
        ret = (ret,)
    return ret
