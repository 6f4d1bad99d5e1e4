"""
Core infrastructure for PyAlgebra.

This module provides the shared pieces used by the containers, the
linear-algebra kernel and the estimation layer.

Key components:
    exceptions: Error and warning hierarchy
    validation: Fail-fast input validators
    config: Size ceilings and numerical thresholds
    log: Explicit, once-at-startup logging configuration
    result: Generic Result[P] envelope
    compute: Timing and tolerance tiers
"""

from pyalgebra.core.config import KernelLimits, DEFAULT_LIMITS
from pyalgebra.core.log import configure_logging
from pyalgebra.core.result import Result
from pyalgebra.core.exceptions import (
    PyAlgebraError,
    ValidationError,
    RangeError,
    NullContainerError,
    NullOperandError,
    DimensionMismatchError,
    NonSquareError,
    CapacityError,
    ParseError,
    NumericalError,
    DivideByZeroError,
    PyAlgebraWarning,
    SingularMatrixWarning,
    IllConditionedWarning,
)

__all__ = [
    # Config
    "KernelLimits",
    "DEFAULT_LIMITS",
    "configure_logging",
    # Result
    "Result",
    # Exceptions
    "PyAlgebraError",
    "ValidationError",
    "RangeError",
    "NullContainerError",
    "NullOperandError",
    "DimensionMismatchError",
    "NonSquareError",
    "CapacityError",
    "ParseError",
    "NumericalError",
    "DivideByZeroError",
    # Warnings
    "PyAlgebraWarning",
    "SingularMatrixWarning",
    "IllConditionedWarning",
]
