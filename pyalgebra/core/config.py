"""
Kernel limits and numerical thresholds.

The kernel holds no mutable global state. Every ceiling and threshold it
consults lives in a frozen KernelLimits instance; DEFAULT_LIMITS is the one
the library uses.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KernelLimits:
    """Size ceilings and numerical thresholds of the kernel."""
    max_vector_size: int
    max_matrix_elements: int
    singularity_threshold: float
    zero_epsilon: float
    strassen_leaf_divisor: float
    random_low: float
    random_high: float


DEFAULT_LIMITS = KernelLimits(
    max_vector_size=16000,
    # A matrix may hold as many elements as a square of the vector ceiling
    max_matrix_elements=16000 * 16000,
    # LU pivots smaller than this mark the matrix singular
    singularity_threshold=1e-9,
    # |x| below this counts as zero for find_zero / find_non_zero
    zero_epsilon=1e-10,
    # Strassen recursion bottoms out at ceil(padded_size / divisor)
    strassen_leaf_divisor=32.0,
    random_low=-10.0,
    random_high=10.0,
)
