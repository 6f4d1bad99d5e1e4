"""
Exception and warning hierarchy for PyAlgebra.

All exceptions inherit from PyAlgebraError to allow catching any
library-specific error. Where a built-in exception already describes the
failure (IndexError, ValueError, ZeroDivisionError), the library class
inherits from it too, so generic handlers keep working.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Hard errors abort the operation; soft failures are warnings and the
      operation returns a NaN-filled result of the expected shape
"""


class PyAlgebraError(Exception):
    """Base exception for all PyAlgebra errors."""
    pass


class ValidationError(PyAlgebraError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class RangeError(ValidationError, IndexError):
    """
    Index or index range lies outside the container's dimensions.

    Covers single-element access as well as row/column ranges and masked
    selections. Negative indices are always out of range.

    Attributes:
        index: The offending index (or (start, stop) pair), if known
        bound: The exclusive upper bound that was violated, if known
    """

    def __init__(
        self,
        message: str,
        index: int | tuple[int, int] | None = None,
        bound: int | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound


class NullContainerError(ValidationError):
    """
    Operation requires at least one element but the container is empty.
    """
    pass


class NullOperandError(NullContainerError):
    """
    An operand of an arithmetic operation has zero size.
    """
    pass


class DimensionMismatchError(ValidationError):
    """
    Operand shapes are incompatible for the requested operation.

    Attributes:
        expected: Expected shape or length, if known
        actual: Actual shape or length, if known
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, ...] | int | None = None,
        actual: tuple[int, ...] | int | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NonSquareError(DimensionMismatchError):
    """
    A square-only operation (invert, strassen, determinant) received a
    non-square operand.
    """
    pass


class CapacityError(ValidationError):
    """
    Requested container size exceeds the configured ceiling.

    Attributes:
        requested: Requested element count
        limit: Configured maximum element count
    """

    def __init__(
        self,
        message: str,
        requested: int | None = None,
        limit: int | None = None,
    ):
        super().__init__(message)
        self.requested = requested
        self.limit = limit


class ParseError(ValidationError, ValueError):
    """
    A literal initializer such as "[1 2;3 4]" could not be parsed.

    Attributes:
        text: The rejected literal
        position: Offset of the first offending character, if known
    """

    def __init__(
        self,
        message: str,
        text: str | None = None,
        position: int | None = None,
    ):
        super().__init__(message)
        self.text = text
        self.position = position


class NumericalError(PyAlgebraError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DivideByZeroError(NumericalError, ZeroDivisionError):
    """Scalar division by exactly zero."""
    pass


class PyAlgebraWarning(RuntimeWarning):
    """Base class for non-fatal numerical warnings."""
    pass


class SingularMatrixWarning(PyAlgebraWarning):
    """
    invert() met a singular matrix and returned an all-NaN result.
    """
    pass


class IllConditionedWarning(PyAlgebraWarning):
    """
    pseudoinverse() could not choose between the left and right inverse
    (|det(A'A)| == |det(AA')|) and returned an all-NaN result.
    """
    pass
