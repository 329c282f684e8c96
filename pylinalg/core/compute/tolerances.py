"""
Tolerance tiers for numerical validation.

Defines precision expectations for each LAPACK precision:
- Double precision (real64, complex128): tight tolerances
- Single precision (real32, complex64): relaxed for 24-bit mantissas

Used by the opt-in Hermitian check in eigh() and by the test suite.
"""

from dataclasses import dataclass

from pylinalg.core.scalar import ScalarType


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerances for numerical comparison at one precision."""
    rtol: float
    atol: float
    name: str
    description: str


# Double precision: results of backward-stable routines on
# well-conditioned inputs
FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='Double precision, well-conditioned input',
)

# Single precision
FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='Single precision, well-conditioned input',
)

# Double precision, ill-conditioned problems (cond > 1e4)
FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='fp64_ill_conditioned',
    description='Double precision, ill-conditioned (cond > 1e4)',
)

# Single precision, ill-conditioned problems
FP32_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-2,
    atol=1e-3,
    name='fp32_ill_conditioned',
    description='Single precision, ill-conditioned',
)


def select_tolerance(
    scalar: ScalarType,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a scalar type."""
    if scalar.real_dtype.itemsize == 4:
        if is_ill_conditioned:
            return FP32_ILL_CONDITIONED
        return FP32
    if is_ill_conditioned:
        return FP64_ILL_CONDITIONED
    return FP64
