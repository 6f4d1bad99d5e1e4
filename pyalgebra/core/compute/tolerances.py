"""
Tolerance tiers for numerical comparison.

Defines precision expectations for the kernel's compute paths:
- EXACT: structural operations (transpose, copy, padding) must match bit for bit
- DIRECT: LU inversion and direct products, FP64 round-off only
- STRASSEN: block recursion trades multiplications for additions and
  accumulates more rounding error
- DETERMINANT: column-normalizing elimination, one reciprocal per pivot

Used by the test suite and the benchmark script.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Bitwise equality',
)

DIRECT = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='direct',
    description='LU inversion and direct multiplication in double precision',
)

STRASSEN = ToleranceTier(
    rtol=1e-8,
    atol=1e-9,
    name='strassen',
    description='Strassen block multiplication in double precision',
)

DETERMINANT = ToleranceTier(
    rtol=1e-9,
    atol=1e-9,
    name='determinant',
    description='Gaussian-elimination determinant in double precision',
)


def select_tolerance(operation: str) -> ToleranceTier:
    """Select the tolerance tier for a named kernel operation."""
    if operation == 'strassen':
        return STRASSEN
    if operation in ('determinant', 'pseudoinverse'):
        return DETERMINANT
    if operation in ('transpose', 'copy'):
        return EXACT
    return DIRECT
