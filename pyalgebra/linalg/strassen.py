"""
Strassen matrix multiplication for square matrices.

The operands are zero-padded to the next power of two m. Blocks are split
into quadrants recursively until they reach the leaf size ceil(m / 32),
below which the ordinary product is cheaper than seven recursive ones.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyalgebra.containers._dtypes import result_dtype
from pyalgebra.containers._storage import matrix_from_buffer, raw
from pyalgebra.containers.matrix import Matrix
from pyalgebra.core.config import DEFAULT_LIMITS
from pyalgebra.core.exceptions import NonSquareError
from pyalgebra.core.validation import check_not_null, check_square, fail


def strassen_recursive(
    a: NDArray[Any],
    b: NDArray[Any],
    leaf_size: int,
) -> NDArray[Any]:
    """
    Product of two m x m arrays, m a power of two.

    Args:
        a: Left operand
        b: Right operand
        leaf_size: Blocks of this order or smaller are multiplied directly

    Returns:
        New m x m array a @ b
    """
    m = a.shape[0]
    if m <= leaf_size:
        return a @ b

    h = m // 2
    a11, a12, a21, a22 = a[:h, :h], a[:h, h:], a[h:, :h], a[h:, h:]
    b11, b12, b21, b22 = b[:h, :h], b[:h, h:], b[h:, :h], b[h:, h:]

    m1 = strassen_recursive(a11 + a22, b11 + b22, leaf_size)
    m2 = strassen_recursive(a21 + a22, b11, leaf_size)
    m3 = strassen_recursive(a11, b12 - b22, leaf_size)
    m4 = strassen_recursive(a22, b21 - b11, leaf_size)
    m5 = strassen_recursive(a11 + a12, b22, leaf_size)
    m6 = strassen_recursive(a21 - a11, b11 + b12, leaf_size)
    m7 = strassen_recursive(a12 - a22, b21 + b22, leaf_size)

    c = np.empty((m, m), dtype=m1.dtype)
    c[:h, :h] = m1 + m4 - m5 + m7
    c[:h, h:] = m3 + m5
    c[h:, :h] = m2 + m4
    c[h:, h:] = m1 - m2 + m3 + m6
    return c


def strassen(a: Matrix, b: Matrix) -> Matrix:
    """
    Product a @ b of two square matrices of the same order.

    Args:
        a: Square left operand
        b: Square right operand with b.cols == a.rows

    Returns:
        n x n product

    Raises:
        NullContainerError: If a is null
        NonSquareError: If either operand is not square or the orders differ

    Example:
        >>> from pyalgebra import Matrix, strassen
        >>> a = Matrix.parse("[1 2 3;4 5 6;7 8 9]")
        >>> b = Matrix.parse("[1 -2 3;4 -5 2;-9 -2 8]")
        >>> strassen(a, b).tolist()[0]
        [-18.0, -18.0, 31.0]
    """
    check_square(a.shape, 'a')
    check_square(b.shape, 'b')
    if a.rows != b.cols:
        fail(NonSquareError(
            f"strassen: operands must have the same order, got {a.shape} and {b.shape}",
            expected=a.shape, actual=b.shape,
        ))
    check_not_null(a.size, 'a')

    n = a.rows
    m = 1 << (n - 1).bit_length()
    leaf_size = math.ceil(m / DEFAULT_LIMITS.strassen_leaf_divisor)
    dtype = result_dtype(a.dtype, b.dtype)

    padded_a = np.zeros((m, m), dtype=dtype)
    padded_b = np.zeros((m, m), dtype=dtype)
    padded_a[:n, :n] = raw(a)
    padded_b[:n, :n] = raw(b)

    product = strassen_recursive(padded_a, padded_b, leaf_size)
    return matrix_from_buffer(product[:n, :n].copy())
