"""
Shared compute infrastructure for PyLinalg.

This module provides the machinery every operation is composed from,
independent of any particular decomposition.

Submodules:
    workspace: Two-phase workspace query / execute protocol
    status: Translation of LAPACK status codes to typed errors
    tolerances: Per-precision tolerance tiers
"""

from pylinalg.core.compute.status import (
    StatusContract,
    check_status,
    translate_status,
)
from pylinalg.core.compute.tolerances import ToleranceTier, select_tolerance
from pylinalg.core.compute.workspace import (
    WorkspaceRequest,
    closed_form,
    execute,
    query_in_place,
    query_with_routine,
)

__all__ = [
    # Status translation
    "StatusContract",
    "check_status",
    "translate_status",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
    # Workspace protocol
    "WorkspaceRequest",
    "closed_form",
    "execute",
    "query_in_place",
    "query_with_routine",
]
