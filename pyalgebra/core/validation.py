"""
Input validation utilities for PyAlgebra.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - Each function validates ONE thing
    - Parameter names included in all error messages
    - Validators work on plain sizes and shapes, never on containers,
      so every layer of the kernel can use them
    - Every failure is logged at ERROR level before it is raised
"""

from __future__ import annotations

import logging
import operator
from typing import Iterable, NoReturn

from pyalgebra.core.config import DEFAULT_LIMITS
from pyalgebra.core.exceptions import (
    CapacityError,
    DimensionMismatchError,
    DivideByZeroError,
    NonSquareError,
    NullContainerError,
    NullOperandError,
    PyAlgebraError,
    RangeError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def fail(error: PyAlgebraError) -> NoReturn:
    """Log a hard error and raise it."""
    logger.error("%s: %s", type(error).__name__, error)
    raise error


def check_integer(value: object, name: str) -> int:
    """
    Convert an index-like value to a plain int.

    Accepts Python and numpy integers. Floats, bools and strings are
    rejected rather than truncated.

    Raises:
        ValidationError: If value is not an integer
    """
    if isinstance(value, bool):
        fail(ValidationError(f"{name}: expected an integer index, got bool"))
    try:
        return operator.index(value)
    except TypeError:
        fail(ValidationError(
            f"{name}: expected an integer index, got {type(value).__name__}"
        ))


def check_not_null(size: int, name: str) -> None:
    """
    Verify a container holds at least one element.

    Raises:
        NullContainerError: If size is zero
    """
    if size == 0:
        fail(NullContainerError(f"{name}: operation not defined for a null container"))


def check_operand(size: int, name: str) -> None:
    """
    Verify an arithmetic operand holds at least one element.

    Raises:
        NullOperandError: If size is zero
    """
    if size == 0:
        fail(NullOperandError(f"{name}: null operand in arithmetic operation"))


def check_index(index: object, size: int, name: str) -> int:
    """
    Verify a single index lies in [0, size).

    Args:
        index: Index to check
        size: Current length of the indexed dimension
        name: Parameter name for error messages

    Returns:
        The index as a plain int

    Raises:
        NullContainerError: If the dimension is empty
        RangeError: If the index is negative or >= size
    """
    i = check_integer(index, name)
    check_not_null(size, name)
    if i < 0 or i >= size:
        fail(RangeError(
            f"{name}: index {i} out of range [0, {size})",
            index=i, bound=size,
        ))
    return i


def check_range(start: object, stop: object, size: int, name: str) -> tuple[int, int]:
    """
    Verify an inclusive index range [start, stop] lies in [0, size).

    Raises:
        NullContainerError: If the dimension is empty
        RangeError: If either bound is out of range or start > stop
    """
    i = check_integer(start, name)
    j = check_integer(stop, name)
    check_not_null(size, name)
    if i < 0 or j < 0 or i >= size or j >= size:
        fail(RangeError(
            f"{name}: range [{i}, {j}] exceeds dimension of size {size}",
            index=(i, j), bound=size,
        ))
    if i > j:
        fail(RangeError(
            f"{name}: range start {i} is greater than range end {j}",
            index=(i, j), bound=size,
        ))
    return i, j


def check_capacity(n: object, name: str, limit: int | None = None) -> int:
    """
    Verify a requested vector length is within the configured ceiling.

    Raises:
        CapacityError: If n is negative or exceeds the limit
    """
    limit = DEFAULT_LIMITS.max_vector_size if limit is None else limit
    size = check_integer(n, name)
    if size < 0 or size > limit:
        fail(CapacityError(
            f"{name}: size {size} should lie in [0, {limit}]",
            requested=size, limit=limit,
        ))
    return size


def check_matrix_capacity(
    rows: object,
    cols: object,
    name: str,
    limit: int | None = None,
) -> tuple[int, int]:
    """
    Verify a requested matrix shape is within the configured ceiling.

    Raises:
        CapacityError: If a dimension is negative or rows*cols exceeds the limit
    """
    limit = DEFAULT_LIMITS.max_matrix_elements if limit is None else limit
    r = check_integer(rows, name)
    c = check_integer(cols, name)
    if r < 0 or c < 0 or r * c > limit:
        fail(CapacityError(
            f"{name}: shape ({r}, {c}) should hold between 0 and {limit} elements",
            requested=r * c, limit=limit,
        ))
    return r, c


def check_length(actual: int, expected: int, name: str) -> None:
    """
    Verify a vector operand has the expected length.

    Raises:
        DimensionMismatchError: If lengths differ
    """
    if actual != expected:
        fail(DimensionMismatchError(
            f"{name}: expected length {expected}, got {actual}",
            expected=expected, actual=actual,
        ))


def check_same_shape(
    actual: tuple[int, ...],
    expected: tuple[int, ...],
    name: str,
) -> None:
    """
    Verify two operands have identical shapes.

    Raises:
        DimensionMismatchError: If shapes differ
    """
    if tuple(actual) != tuple(expected):
        fail(DimensionMismatchError(
            f"{name}: dimension mismatch, expected {tuple(expected)}, got {tuple(actual)}",
            expected=tuple(expected), actual=tuple(actual),
        ))


def check_square(shape: tuple[int, int], name: str) -> None:
    """
    Verify a matrix shape is square.

    Raises:
        NonSquareError: If rows != cols
    """
    rows, cols = shape
    if rows != cols:
        fail(NonSquareError(
            f"{name}: expected a square matrix, got shape ({rows}, {cols})",
            expected=(rows, rows), actual=(rows, cols),
        ))


def check_nonzero_divisor(value: complex, name: str) -> None:
    """
    Verify a scalar divisor is not exactly zero.

    Raises:
        DivideByZeroError: If value == 0
    """
    if value == 0:
        fail(DivideByZeroError(f"{name}: division by zero"))


def check_index_sequence(indices: Iterable[object], bound: int, name: str) -> list[int]:
    """
    Verify a masked-selection index sequence.

    Indices must be integers in [0, bound) and non-decreasing. An empty
    sequence is valid and is returned as an empty list.

    Returns:
        The indices as plain ints

    Raises:
        RangeError: If an index is out of range or the sequence decreases
    """
    result: list[int] = []
    for position, value in enumerate(indices):
        # Index vectors are usually float vectors holding whole numbers
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        i = check_integer(value, name)
        if i < 0 or i >= bound:
            fail(RangeError(
                f"{name}: index {i} at position {position} out of range [0, {bound})",
                index=i, bound=bound,
            ))
        if result and i < result[-1]:
            fail(RangeError(
                f"{name}: indices must be non-decreasing, got {result[-1]} then {i}",
                index=i, bound=bound,
            ))
        result.append(i)
    return result
