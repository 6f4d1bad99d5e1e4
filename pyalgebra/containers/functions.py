"""
Free functions over vectors and matrices.

Concatenation, outer product, reductions (sum, mean, norm, min/max), masks
and element-wise helpers. Functions that need at least one element raise
NullContainerError on empty input; binary functions raise
DimensionMismatchError on incompatible shapes.
"""

from __future__ import annotations

import numbers
from typing import Any

import numpy as np

from pyalgebra.containers._dtypes import result_dtype
from pyalgebra.containers._storage import matrix_from_buffer, raw, vector_from_buffer
from pyalgebra.containers.matrix import Matrix
from pyalgebra.containers.vector import Vector
from pyalgebra.core.config import DEFAULT_LIMITS
from pyalgebra.core.exceptions import DimensionMismatchError
from pyalgebra.core.validation import (
    check_capacity,
    check_length,
    check_matrix_capacity,
    check_not_null,
    check_operand,
    fail,
)


# ═══════════════════════════════════════════════════════════════════════
# Vector products and concatenation
# ═══════════════════════════════════════════════════════════════════════


def transpose(m: Matrix) -> Matrix:
    return m.transpose()


def dot(a: Vector, b: Vector) -> Any:
    return a.dot(b)


def cross(a: Vector, b: Vector) -> Vector:
    return a.cross(b)


def elem_mult(a: Vector, b: Vector) -> Vector:
    """Element-wise product."""
    check_length(b.size, a.size, 'b')
    return vector_from_buffer(raw(a) * raw(b))


def concat(a: Vector | Any, b: Vector | Any) -> Vector:
    """
    Concatenate two vectors, or append/prepend a scalar to a vector.

        concat(v, 4.0)   -> [*v, 4.0]
        concat(4.0, v)   -> [4.0, *v]
        concat(v1, v2)   -> [*v1, *v2]

    Raises:
        CapacityError: If the result would exceed the vector ceiling
    """
    if isinstance(a, Vector) and isinstance(b, Vector):
        parts = [raw(a), raw(b)]
    elif isinstance(a, Vector) and isinstance(b, numbers.Number):
        parts = [raw(a), np.asarray([b])]
    elif isinstance(a, numbers.Number) and isinstance(b, Vector):
        parts = [np.asarray([a]), raw(b)]
    else:
        raise TypeError(
            f"concat() expects vectors or a vector and a scalar, "
            f"got {type(a).__name__} and {type(b).__name__}"
        )
    check_capacity(sum(len(p) for p in parts), 'concat')
    return vector_from_buffer(np.concatenate(parts))


def outer_product(a: Vector, b: Vector) -> Matrix:
    """
    a b^T as a len(a) x len(b) matrix.

    Raises:
        NullOperandError: If either vector is empty
    """
    check_operand(a.size, 'a')
    check_operand(b.size, 'b')
    check_matrix_capacity(a.size, b.size, 'outer_product')
    return matrix_from_buffer(np.outer(raw(a), raw(b)))


def concat_hor(a: Matrix, b: Matrix) -> Matrix:
    """[a b]: place b to the right of a."""
    if a.size == 0 and b.size == 0:
        return Matrix(0, 0, dtype=result_dtype(a.dtype, b.dtype))
    if a.rows != b.rows:
        fail(DimensionMismatchError(
            f"concat_hor: row counts differ ({a.rows} vs {b.rows})",
            expected=a.rows, actual=b.rows,
        ))
    check_matrix_capacity(a.rows, a.cols + b.cols, 'concat_hor')
    return matrix_from_buffer(np.hstack([raw(a), raw(b)]))


def concat_ver(a: Matrix, b: Matrix) -> Matrix:
    """[a; b]: place b below a."""
    if a.size == 0 and b.size == 0:
        return Matrix(0, 0, dtype=result_dtype(a.dtype, b.dtype))
    if a.cols != b.cols:
        fail(DimensionMismatchError(
            f"concat_ver: column counts differ ({a.cols} vs {b.cols})",
            expected=a.cols, actual=b.cols,
        ))
    check_matrix_capacity(a.rows + b.rows, a.cols, 'concat_ver')
    return matrix_from_buffer(np.vstack([raw(a), raw(b)]))


def mat2vec(m: Matrix) -> Vector:
    """The rows of m laid end to end."""
    return vector_from_buffer(raw(m).reshape(-1).copy())


# ═══════════════════════════════════════════════════════════════════════
# Reductions
# ═══════════════════════════════════════════════════════════════════════


def total(v: Vector) -> Any:
    """Sum of all elements (0 for an empty vector)."""
    return raw(v).sum().item()


def cumsum(v: Vector) -> Vector:
    return vector_from_buffer(np.cumsum(raw(v)))


def mean(v: Vector) -> Any:
    check_not_null(v.size, 'v')
    return raw(v).mean().item()


def norm(v: Vector) -> float:
    """Euclidean norm; uses the modulus for complex vectors."""
    return float(np.sqrt(np.sum(np.abs(raw(v)) ** 2)))


def conj(v: Vector) -> Vector:
    return vector_from_buffer(np.conj(raw(v)))


def _extreme_index(values: np.ndarray, largest: bool) -> int:
    """
    Position of the min or max element.

    Complex values are ranked by modulus; moduli within zero_epsilon of the
    extreme are tied and the tie goes to the larger phase for max and the
    smaller phase for min.
    """
    if values.dtype.kind != 'c':
        return int(np.argmax(values) if largest else np.argmin(values))
    modulus = np.abs(values)
    phase = np.angle(values)
    target = modulus.max() if largest else modulus.min()
    tied = np.flatnonzero(np.abs(modulus - target) < DEFAULT_LIMITS.zero_epsilon)
    pick = np.argmax(phase[tied]) if largest else np.argmin(phase[tied])
    return int(tied[pick])


def argmin(v: Vector) -> int:
    check_not_null(v.size, 'v')
    return _extreme_index(raw(v), largest=False)


def argmax(v: Vector) -> int:
    check_not_null(v.size, 'v')
    return _extreme_index(raw(v), largest=True)


def min_element(x: Vector | Matrix) -> Any:
    """Smallest element of a vector or matrix."""
    values = raw(x).reshape(-1)
    check_not_null(values.size, 'x')
    return values[_extreme_index(values, largest=False)].item()


def max_element(x: Vector | Matrix) -> Any:
    """Largest element of a vector or matrix."""
    values = raw(x).reshape(-1)
    check_not_null(values.size, 'x')
    return values[_extreme_index(values, largest=True)].item()


# ═══════════════════════════════════════════════════════════════════════
# Element-wise maps and masks
# ═══════════════════════════════════════════════════════════════════════


def _same_kind(x: Vector | Matrix, data: np.ndarray) -> Vector | Matrix:
    if isinstance(x, Matrix):
        return matrix_from_buffer(data)
    return vector_from_buffer(data)


def absolute(x: Vector | Matrix) -> Vector | Matrix:
    """Element-wise absolute value (modulus for complex input)."""
    return _same_kind(x, np.abs(raw(x)))


def find_zero(x: Vector | Matrix) -> Vector | Matrix:
    """Mask with 1 where |element| < zero_epsilon and 0 elsewhere."""
    mask = np.abs(raw(x)) < DEFAULT_LIMITS.zero_epsilon
    return _same_kind(x, mask.astype(x.dtype))


def find_non_zero(x: Vector | Matrix) -> Vector | Matrix:
    """Mask with 1 where |element| >= zero_epsilon and 0 elsewhere."""
    mask = np.abs(raw(x)) >= DEFAULT_LIMITS.zero_epsilon
    return _same_kind(x, mask.astype(x.dtype))
