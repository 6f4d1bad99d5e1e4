"""
Internal buffer access for the kernel's own algorithms.

The LU, Strassen and determinant routines work directly on the numpy buffers
behind Vector and Matrix. They go through this module rather than touching
private attributes, and nothing here is part of the public API.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyalgebra.containers.matrix import Matrix
from pyalgebra.containers.vector import Vector


def raw(container: Vector | Matrix) -> NDArray[Any]:
    """The live buffer of a container. Writes go straight into it."""
    return container._data


def working_copy(matrix: Matrix, dtype: Any = None) -> NDArray[Any]:
    """A private copy of a matrix buffer, optionally cast to dtype."""
    if dtype is None:
        return matrix._data.copy()
    return matrix._data.astype(dtype, copy=True)


def matrix_from_buffer(array: NDArray[Any]) -> Matrix:
    """Adopt a 2D array as a Matrix without copying or validation."""
    return Matrix._wrap(np.asarray(array))


def vector_from_buffer(array: NDArray[Any]) -> Vector:
    """Adopt a 1D array as a Vector without copying or validation."""
    return Vector._wrap(np.asarray(array))


def nan_matrix(rows: int, cols: int, dtype: Any = np.float64) -> Matrix:
    """rows x cols matrix filled with NaN (the soft-failure sentinel)."""
    return Matrix._wrap(np.full((rows, cols), np.nan, dtype=dtype))
