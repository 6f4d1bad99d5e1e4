"""
Bounds-checked dense matrix.

Matrix owns a two-dimensional, row-major numpy buffer. A matrix is either
null (0x0) or fully populated: requesting a shape with one zero dimension
yields 0x0. All elements are zero on construction and on resize.

Access rules:
    - get/set of an element validates both indices (RangeError), and any
      element access on a null matrix raises NullContainerError
    - row/column ranges are inclusive and must satisfy start <= stop
    - masked selection takes non-decreasing index sequences; an empty
      sequence yields a 0x0 result rather than an error

Arithmetic is exposed as named methods that return new matrices; the
operators +, -, *, /, @ delegate to them.
"""

from __future__ import annotations

import numbers
from typing import Any, Iterable, Iterator

import numpy as np
from numpy.typing import NDArray

from pyalgebra.containers._dtypes import as_numeric_array, resolve_dtype
from pyalgebra.containers.vector import Vector
from pyalgebra.core.exceptions import DimensionMismatchError, RangeError, ValidationError
from pyalgebra.core.validation import (
    check_index,
    check_index_sequence,
    check_length,
    check_matrix_capacity,
    check_nonzero_divisor,
    check_not_null,
    check_operand,
    check_range,
    check_same_shape,
    fail,
)


def _null_shape(rows: int, cols: int) -> tuple[int, int]:
    """Collapse r x 0 and 0 x c onto 0 x 0."""
    if rows == 0 or cols == 0:
        return 0, 0
    return rows, cols


class Matrix:
    """
    Rectangular rows x cols grid of numeric elements.

    Construction:
        Matrix(2, 3)                           # 2x3 of 0.0
        Matrix(2, 3, dtype=complex)            # 2x3 of 0j
        Matrix.from_rows([[1, 2], [3, 4]])     # dtype inferred (int)
        Matrix.parse("[1 2;3 4]")              # literal initializer

    A Matrix exclusively owns its buffer; copy() is always deep.
    """

    __slots__ = ('_data',)
    __hash__ = None  # mutable

    def __init__(self, rows: int = 0, cols: int = 0, dtype: Any = float):
        r, c = check_matrix_capacity(rows, cols, 'shape')
        self._data: NDArray[Any] = np.zeros(_null_shape(r, c), dtype=resolve_dtype(dtype))

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]], dtype: Any = None) -> Matrix:
        """
        Build a matrix from a nested sequence or a 2D array.

        An empty input, or one with empty rows, gives a null matrix.

        Raises:
            ValidationError: If the data is ragged, non-numeric or not 2D
            CapacityError: If the shape exceeds the configured ceiling
        """
        data = rows if isinstance(rows, np.ndarray) else [list(row) for row in rows]
        array = as_numeric_array(data, 'rows', dtype)
        if array.size == 0:
            return cls(0, 0, dtype=array.dtype)
        if array.ndim != 2:
            fail(ValidationError(f"rows: expected 2D data, got shape {array.shape}"))
        check_matrix_capacity(array.shape[0], array.shape[1], 'rows')
        return cls._wrap(array)

    @classmethod
    def parse(cls, text: str, dtype: Any = float) -> Matrix:
        """Parse a literal such as "[1 2;3 4]"; see parsing.parse_matrix."""
        from pyalgebra.containers.parsing import parse_matrix
        return parse_matrix(text, dtype=dtype)

    @classmethod
    def _wrap(cls, array: NDArray[Any]) -> Matrix:
        """Adopt an existing 2D buffer without copying or bounds checks."""
        matrix = cls.__new__(cls)
        data = array.astype(resolve_dtype(array.dtype), copy=False)
        if data.size == 0:
            data = data.reshape(0, 0)
        matrix._data = data
        return matrix

    # ------------------------------------------------------------------
    # Shape and type
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def size(self) -> int:
        """Number of elements, rows * cols."""
        return int(self._data.size)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def set_size(self, rows: int, cols: int) -> None:
        """
        Resize in place. The whole matrix is zero-filled, content is not kept.

        Raises:
            CapacityError: If rows*cols exceeds the configured ceiling
        """
        r, c = check_matrix_capacity(rows, cols, 'shape')
        self._data = np.zeros(_null_shape(r, c), dtype=self.dtype)

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def get(self, *args: Any) -> Any:
        """
        Element, block or masked selection, depending on the arguments.

            get(r, c)                -> element
            get(r1, r2, c1, c2)      -> inclusive block (see get_block)
            get(row_idx, col_idx)    -> masked selection (see select)
        """
        if len(args) == 4:
            return self.get_block(*args)
        if len(args) != 2:
            raise TypeError(f"get() takes 2 or 4 index arguments, got {len(args)}")
        r, c = args
        if isinstance(r, (Vector, list, tuple, np.ndarray)):
            return self.select(r, c)
        i = check_index(r, self.rows, 'row')
        j = check_index(c, self.cols, 'col')
        return self._data[i, j].item()

    def set(self, r: int, c: int, value: Any) -> None:
        """
        Overwrite element (r, c).

        Raises:
            NullContainerError: If the matrix is null
            RangeError: If an index is out of range
        """
        i = check_index(r, self.rows, 'row')
        j = check_index(c, self.cols, 'col')
        self._data[i, j] = value

    def __getitem__(self, key: tuple[int, int]) -> Any:
        r, c = key
        return self.get(r, c)

    def __setitem__(self, key: tuple[int, int], value: Any) -> None:
        r, c = key
        self.set(r, c, value)

    def get_block(self, r1: int, r2: int, c1: int, c2: int) -> Matrix:
        """
        Inclusive block rows r1..r2, columns c1..c2.

        Raises:
            NullContainerError: If the matrix is null
            RangeError: If a bound is out of range, r1 > r2 or c1 > c2
        """
        check_not_null(self.size, 'matrix')
        i1, i2 = check_range(r1, r2, self.rows, 'rows')
        j1, j2 = check_range(c1, c2, self.cols, 'cols')
        return Matrix._wrap(self._data[i1:i2 + 1, j1:j2 + 1].copy())

    def select(self, row_indices: Iterable[Any], col_indices: Iterable[Any]) -> Matrix:
        """
        Masked selection of the rows and columns listed.

        Both index sequences must be non-decreasing, in range, and no longer
        than the dimension they index. If either is empty the result is 0x0.

        Raises:
            RangeError: If an index sequence is invalid
        """
        rows = list(row_indices)
        cols = list(col_indices)
        if not rows or not cols:
            return Matrix(0, 0, dtype=self.dtype)
        if len(rows) > self.rows or len(cols) > self.cols:
            fail(RangeError(
                f"select: {len(rows)}x{len(cols)} indices exceed matrix dimensions {self.shape}",
            ))
        r = check_index_sequence(rows, self.rows, 'row_indices')
        c = check_index_sequence(cols, self.cols, 'col_indices')
        return Matrix._wrap(self._data[np.ix_(r, c)].copy())

    def get_row(self, r: int) -> Vector:
        i = check_index(r, self.rows, 'row')
        return Vector._wrap(self._data[i, :].copy())

    def get_col(self, c: int) -> Vector:
        j = check_index(c, self.cols, 'col')
        return Vector._wrap(self._data[:, j].copy())

    def get_rows(self, r1: int, r2: int) -> Matrix:
        """Inclusive rows r1..r2."""
        i1, i2 = check_range(r1, r2, self.rows, 'rows')
        return Matrix._wrap(self._data[i1:i2 + 1, :].copy())

    def get_cols(self, c1: int, c2: int) -> Matrix:
        """Inclusive columns c1..c2."""
        j1, j2 = check_range(c1, c2, self.cols, 'cols')
        return Matrix._wrap(self._data[:, j1:j2 + 1].copy())

    def set_row(self, r: int, v: Vector) -> None:
        """
        Overwrite row r with v.

        Raises:
            RangeError: If r is out of range
            DimensionMismatchError: If len(v) != cols
        """
        i = check_index(r, self.rows, 'row')
        check_length(v.size, self.cols, 'v')
        self._data[i, :] = v._data

    def set_col(self, c: int, v: Vector) -> None:
        """
        Overwrite column c with v.

        Raises:
            RangeError: If c is out of range
            DimensionMismatchError: If len(v) != rows
        """
        j = check_index(c, self.cols, 'col')
        check_length(v.size, self.rows, 'v')
        self._data[:, j] = v._data

    def set_rows(self, r0: int, m: Matrix) -> None:
        """Overwrite rows starting at r0 with m (m may be narrower than self)."""
        i = check_index(r0, self.rows, 'r0')
        self._check_fits(i, 0, m, 'm')
        self._data[i:i + m.rows, :m.cols] = m._data

    def set_cols(self, c0: int, m: Matrix) -> None:
        """Overwrite columns starting at c0 with m (m may be shorter than self)."""
        j = check_index(c0, self.cols, 'c0')
        self._check_fits(0, j, m, 'm')
        self._data[:m.rows, j:j + m.cols] = m._data

    def set_submatrix(self, r0: int, c0: int, m: Matrix) -> None:
        """
        Overwrite the block whose top-left corner is (r0, c0) with m.

        Raises:
            RangeError: If the corner is out of range or m does not fit
        """
        i = check_index(r0, self.rows, 'r0')
        j = check_index(c0, self.cols, 'c0')
        self._check_fits(i, j, m, 'm')
        self._data[i:i + m.rows, j:j + m.cols] = m._data

    def _check_fits(self, i: int, j: int, m: Matrix, name: str) -> None:
        if m.rows > self.rows - i or m.cols > self.cols - j:
            fail(RangeError(
                f"{name}: block of shape {m.shape} does not fit at ({i}, {j}) "
                f"of a matrix of shape {self.shape}",
                index=(i, j),
            ))

    def swap_rows(self, i: int, j: int) -> None:
        a = check_index(i, self.rows, 'i')
        b = check_index(j, self.rows, 'j')
        self._data[[a, b], :] = self._data[[b, a], :]

    def swap_cols(self, i: int, j: int) -> None:
        a = check_index(i, self.cols, 'i')
        b = check_index(j, self.cols, 'j')
        self._data[:, [a, b]] = self._data[:, [b, a]]

    def zeros(self) -> None:
        self._data.fill(0)

    def clear(self) -> None:
        self.zeros()

    def ones(self) -> None:
        self._data.fill(1)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _check_pair(self, other: Matrix, name: str) -> None:
        check_operand(self.size, 'self')
        check_operand(other.size, name)
        check_same_shape(other.shape, self.shape, name)

    def add(self, other: Matrix) -> Matrix:
        self._check_pair(other, 'other')
        return Matrix._wrap(self._data + other._data)

    def subtract(self, other: Matrix) -> Matrix:
        self._check_pair(other, 'other')
        return Matrix._wrap(self._data - other._data)

    def add_scalar(self, t: Any) -> Matrix:
        check_operand(self.size, 'self')
        return Matrix._wrap(self._data + t)

    def subtract_scalar(self, t: Any) -> Matrix:
        check_operand(self.size, 'self')
        return Matrix._wrap(self._data - t)

    def scale(self, t: Any) -> Matrix:
        """Multiply every element by the scalar t."""
        check_operand(self.size, 'self')
        return Matrix._wrap(self._data * t)

    def divide(self, t: Any) -> Matrix:
        """
        Divide every element by the scalar t.

        Raises:
            DivideByZeroError: If t == 0
            NullOperandError: If the matrix is null
        """
        check_nonzero_divisor(t, 't')
        check_operand(self.size, 'self')
        return Matrix._wrap(self._data / t)

    def multiply(self, other: Matrix) -> Matrix:
        """
        Direct matrix product self @ other.

        Raises:
            NullOperandError: If either operand is null
            DimensionMismatchError: If self.cols != other.rows
        """
        check_operand(self.size, 'self')
        check_operand(other.size, 'other')
        if self.cols != other.rows:
            fail(DimensionMismatchError(
                f"other: cannot multiply {self.shape} by {other.shape}",
                expected=(self.cols, other.cols), actual=other.shape,
            ))
        return Matrix._wrap(self._data @ other._data)

    def multiply_vector(self, v: Vector) -> Vector:
        """
        Matrix-vector product.

        Raises:
            NullOperandError: If either operand is empty
            DimensionMismatchError: If len(v) != cols
        """
        check_operand(self.size, 'self')
        check_operand(v.size, 'v')
        check_length(v.size, self.cols, 'v')
        return Vector._wrap(self._data @ v._data)

    def transpose(self) -> Matrix:
        return Matrix._wrap(self._data.T.copy())

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def __add__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.add(other)
        if isinstance(other, numbers.Number):
            return self.add_scalar(other)
        return NotImplemented

    def __radd__(self, other: Any) -> Matrix:
        if isinstance(other, numbers.Number):
            return self.add_scalar(other)
        return NotImplemented

    def __sub__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.subtract(other)
        if isinstance(other, numbers.Number):
            return self.subtract_scalar(other)
        return NotImplemented

    def __rsub__(self, other: Any) -> Matrix:
        if isinstance(other, numbers.Number):
            return self.scale(-1).add_scalar(other)
        return NotImplemented

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Vector):
            return self.multiply_vector(other)
        if isinstance(other, numbers.Number):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        if isinstance(other, numbers.Number):
            return self.scale(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> Any:
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Vector):
            return self.multiply_vector(other)
        return NotImplemented

    def __truediv__(self, other: Any) -> Matrix:
        if isinstance(other, numbers.Number):
            return self.divide(other)
        return NotImplemented

    def __neg__(self) -> Matrix:
        return self.scale(-1)

    # ------------------------------------------------------------------
    # Conversion and comparison
    # ------------------------------------------------------------------

    def copy(self) -> Matrix:
        return Matrix._wrap(self._data.copy())

    def tolist(self) -> list[list[Any]]:
        return self._data.tolist()

    def to_numpy(self) -> NDArray[Any]:
        """Copy of the elements as a 2D numpy array."""
        return self._data.copy()

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> NDArray[Any]:
        return np.array(self._data, dtype=dtype, copy=True)

    def __iter__(self) -> Iterator[Vector]:
        """Iterate over rows."""
        for i in range(self.rows):
            yield Vector._wrap(self._data[i, :].copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r}, dtype={self.dtype.name})"
