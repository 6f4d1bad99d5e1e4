"""
Container constructors: zeros, ones, eye, diag, linspace, magic squares and
random fills.

Every constructor honours the configured capacity ceilings. Random
constructors draw uniformly from [random_low, random_high] of the kernel
limits and accept an `rng` argument (a numpy Generator or a seed) for
reproducibility.
"""

from __future__ import annotations

import math
from typing import Any, overload

import numpy as np

from pyalgebra.containers._dtypes import resolve_dtype
from pyalgebra.containers._storage import matrix_from_buffer, raw, vector_from_buffer
from pyalgebra.containers.matrix import Matrix
from pyalgebra.containers.vector import Vector
from pyalgebra.core.config import DEFAULT_LIMITS
from pyalgebra.core.exceptions import ValidationError
from pyalgebra.core.validation import (
    check_capacity,
    check_matrix_capacity,
    check_square,
    fail,
)

RandomState = np.random.Generator | int | None


@overload
def zeros(rows: int, cols: None = None, dtype: Any = float) -> Vector: ...
@overload
def zeros(rows: int, cols: int, dtype: Any = float) -> Matrix: ...


def zeros(rows, cols=None, dtype=float):
    """Zero vector of length `rows`, or rows x cols zero matrix."""
    if cols is None:
        return Vector(rows, dtype=dtype)
    return Matrix(rows, cols, dtype=dtype)


@overload
def ones(rows: int, cols: None = None, dtype: Any = float) -> Vector: ...
@overload
def ones(rows: int, cols: int, dtype: Any = float) -> Matrix: ...


def ones(rows, cols=None, dtype=float):
    """Vector or matrix of ones."""
    container = zeros(rows, cols, dtype=dtype)
    container.ones()
    return container


def eye(n: int, dtype: Any = float) -> Matrix:
    """n x n identity matrix."""
    size, _ = check_matrix_capacity(n, n, 'n')
    return matrix_from_buffer(np.eye(size, dtype=resolve_dtype(dtype)))


@overload
def diag(x: Matrix) -> Vector: ...
@overload
def diag(x: Vector) -> Matrix: ...


def diag(x):
    """
    Diagonal of a square matrix, or a diagonal matrix built from a vector.

    Raises:
        NonSquareError: If given a non-square matrix
        CapacityError: If the vector is too long for a square matrix
    """
    if isinstance(x, Matrix):
        check_square(x.shape, 'x')
        return vector_from_buffer(np.diagonal(raw(x)).copy())
    if isinstance(x, Vector):
        check_matrix_capacity(x.size, x.size, 'x')
        return matrix_from_buffer(np.diag(raw(x)))
    raise TypeError(f"diag() expects a Matrix or Vector, got {type(x).__name__}")


def linspace(start: float, stop: float, step: float) -> Vector:
    """
    Values start, start+step, start+2*step, ... not exceeding stop.

    linspace(-3, 8, 2) == [-3, -1, 1, 3, 5, 7]

    Raises:
        ValidationError: If stop < start or step <= 0
        CapacityError: If the result would exceed the vector ceiling
    """
    if stop < start or step <= 0:
        fail(ValidationError(
            f"linspace: invalid arguments start={start}, stop={stop}, step={step}; "
            f"need start <= stop and step > 0"
        ))
    count = check_capacity(int(math.floor((stop - start) / step)) + 1, 'linspace')
    values = start + step * np.arange(count)
    return vector_from_buffer(np.asarray(values))


def magic_square(n: int) -> Matrix:
    """
    Odd-order magic square built with the Siamese method.

    The number 1 starts at (n//2, n-1); each next number goes one row up and
    one column right, wrapping around. When that cell is taken, the number
    goes two columns left and one row down instead.

    Raises:
        CapacityError: If n is negative or above the vector ceiling
        ValidationError: If n is even
    """
    size = check_capacity(n, 'n')
    if size % 2 == 0:
        fail(ValidationError(f"n: magic squares are built for odd orders only, got {size}"))

    square = np.zeros((size, size), dtype=np.float64)
    i, j = size // 2, size - 1
    number = 1
    while number <= size * size:
        if i == -1 and j == size:
            i, j = 0, size - 2
        else:
            if j == size:
                j = 0
            if i < 0:
                i = size - 1
        if square[i, j] != 0:
            i += 1
            j -= 2
            continue
        square[i, j] = number
        number += 1
        i -= 1
        j += 1
    return matrix_from_buffer(square)


def _generator(rng: RandomState) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def _uniform(shape: tuple[int, ...], dtype: Any, rng: RandomState) -> np.ndarray:
    gen = _generator(rng)
    low, high = DEFAULT_LIMITS.random_low, DEFAULT_LIMITS.random_high
    target = resolve_dtype(dtype)
    if target.kind == 'i':
        return gen.integers(int(low), int(high), size=shape, endpoint=True).astype(target)
    if target.kind == 'c':
        real = gen.uniform(low, high, size=shape)
        imag = gen.uniform(low, high, size=shape)
        return real + 1j * imag
    return gen.uniform(low, high, size=shape)


@overload
def rand(rows: int, cols: None = None, *, dtype: Any = float,
         rng: RandomState = None) -> Vector: ...
@overload
def rand(rows: int, cols: int, *, dtype: Any = float,
         rng: RandomState = None) -> Matrix: ...


def rand(rows, cols=None, *, dtype=float, rng=None):
    """
    Random vector (cols omitted) or matrix with entries in [-10, 10].

    dtype=int draws integers, dtype=complex draws real and imaginary parts
    independently.
    """
    if cols is None:
        n = check_capacity(rows, 'rows')
        return vector_from_buffer(_uniform((n,), dtype, rng))
    r, c = check_matrix_capacity(rows, cols, 'shape')
    if r == 0 or c == 0:
        return Matrix(0, 0, dtype=dtype)
    return matrix_from_buffer(_uniform((r, c), dtype, rng))


def rand_symmetric(n: int, *, dtype: Any = float, rng: RandomState = None) -> Matrix:
    """Random symmetric n x n matrix with entries in [-10, 10]."""
    size = check_capacity(n, 'n')
    if size == 0:
        return Matrix(0, 0, dtype=dtype)
    values = _uniform((size, size), dtype, rng)
    upper = np.triu(values)
    return matrix_from_buffer(upper + np.triu(values, 1).T)
