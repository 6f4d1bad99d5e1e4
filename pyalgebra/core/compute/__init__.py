"""
Shared compute infrastructure for PyAlgebra.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers for numerical comparison
"""

from pyalgebra.core.compute.timing import Timer, timed
from pyalgebra.core.compute.tolerances import (
    ToleranceTier,
    EXACT,
    DIRECT,
    STRASSEN,
    DETERMINANT,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "EXACT",
    "DIRECT",
    "STRASSEN",
    "DETERMINANT",
    "select_tolerance",
]
