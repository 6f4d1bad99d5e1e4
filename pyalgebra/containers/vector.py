"""
Bounds-checked numeric vector.

Vector owns a one-dimensional numpy buffer of float64, int64 or complex128
elements. Every access is validated: out-of-range indices raise RangeError,
element access on an empty vector raises NullContainerError, and resizing
beyond the configured ceiling raises CapacityError.

Arithmetic is exposed as named methods (add, subtract, scale, divide, dot)
that return new vectors. The operators +, -, *, / delegate to them.
"""

from __future__ import annotations

import numbers
from typing import Any, Iterable, Iterator

import numpy as np
from numpy.typing import NDArray

from pyalgebra.containers._dtypes import as_numeric_array, resolve_dtype, result_dtype
from pyalgebra.core.exceptions import RangeError, ValidationError
from pyalgebra.core.validation import (
    check_capacity,
    check_index,
    check_length,
    check_nonzero_divisor,
    check_operand,
    check_range,
    fail,
)


class Vector:
    """
    Ordered, 0-indexed sequence of numeric elements.

    Construction:
        Vector(3)                          # [0.0, 0.0, 0.0]
        Vector(3, dtype=int)               # [0, 0, 0]
        Vector.from_values([1, 2, 3])      # dtype inferred (int)
        Vector.parse("[1 2 3]")            # literal initializer

    Invariant: len(v) always equals the size of the underlying buffer, and
    newly created slots are zero.
    """

    __slots__ = ('_data',)
    __hash__ = None  # mutable

    def __init__(self, size: int = 0, dtype: Any = float):
        n = check_capacity(size, 'size')
        self._data: NDArray[Any] = np.zeros(n, dtype=resolve_dtype(dtype))

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_values(cls, values: Iterable[Any], dtype: Any = None) -> Vector:
        """
        Build a vector from any one-dimensional array-like.

        Args:
            values: Sequence of numbers
            dtype: Element type; inferred from the values when None
        """
        data = values if isinstance(values, np.ndarray) else list(values)
        array = as_numeric_array(data, 'values', dtype)
        if array.ndim != 1:
            fail(ValidationError(f"values: expected 1D data, got shape {array.shape}"))
        check_capacity(array.shape[0], 'values')
        return cls._wrap(array)

    @classmethod
    def parse(cls, text: str, dtype: Any = float) -> Vector:
        """Parse a literal such as "[1 2 3]"; see parsing.parse_vector."""
        from pyalgebra.containers.parsing import parse_vector
        return parse_vector(text, dtype=dtype)

    @classmethod
    def _wrap(cls, array: NDArray[Any]) -> Vector:
        """Adopt an existing 1D buffer without copying or bounds checks."""
        vector = cls.__new__(cls)
        vector._data = array.astype(resolve_dtype(array.dtype), copy=False)
        return vector

    # ------------------------------------------------------------------
    # Size and type
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return int(self._data.shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def __len__(self) -> int:
        return self.size

    def set_size(self, new_size: int) -> None:
        """
        Resize in place.

        Growing zero-fills the new slots, shrinking truncates. Requesting the
        current size is a no-op.

        Raises:
            CapacityError: If new_size exceeds the configured ceiling
        """
        n = check_capacity(new_size, 'new_size')
        if n == self.size:
            return
        resized = np.zeros(n, dtype=self.dtype)
        keep = min(n, self.size)
        resized[:keep] = self._data[:keep]
        self._data = resized

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def get(self, i: int, j: int | None = None) -> Any:
        """
        Element i, or the inclusive sub-vector [i, j] when j is given.

        Raises:
            NullContainerError: If the vector is empty
            RangeError: If an index is out of range or j < i
        """
        if j is None:
            k = check_index(i, self.size, 'i')
            return self._data[k].item()
        start, stop = check_range(i, j, self.size, 'i:j')
        return Vector._wrap(self._data[start:stop + 1].copy())

    def set(self, i: int, value: Any) -> None:
        """
        Overwrite element i.

        Raises:
            NullContainerError: If the vector is empty
            RangeError: If i is out of range
        """
        k = check_index(i, self.size, 'i')
        self._data[k] = value

    def __getitem__(self, i: int) -> Any:
        return self.get(i)

    def __setitem__(self, i: int, value: Any) -> None:
        self.set(i, value)

    def set_subvector(self, start: int, v: Vector) -> None:
        """
        Overwrite elements start .. start+len(v)-1 with v.

        Raises:
            RangeError: If start is out of range or v does not fit
        """
        k = check_index(start, self.size, 'start')
        if self.size - k < v.size:
            fail(RangeError(
                f"v: sub-vector of length {v.size} does not fit at offset {k} "
                f"of a vector of length {self.size}",
                index=k, bound=self.size,
            ))
        self._data[k:k + v.size] = v._data

    def swap(self, i: int, j: int) -> None:
        """Swap elements i and j."""
        a = check_index(i, self.size, 'i')
        b = check_index(j, self.size, 'j')
        self._data[[a, b]] = self._data[[b, a]]

    def zeros(self) -> None:
        """Set every element to 0."""
        self._data.fill(0)

    def clear(self) -> None:
        """Alias of zeros()."""
        self.zeros()

    def ones(self) -> None:
        """Set every element to 1."""
        self._data.fill(1)

    def sort(self) -> None:
        """Sort in place, ascending."""
        self._data.sort()

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _check_pair(self, other: Vector, name: str) -> None:
        check_operand(self.size, 'self')
        check_operand(other.size, name)
        check_length(other.size, self.size, name)

    def add(self, other: Vector) -> Vector:
        """Element-wise sum."""
        self._check_pair(other, 'other')
        return Vector._wrap(self._data + other._data)

    def subtract(self, other: Vector) -> Vector:
        """Element-wise difference."""
        self._check_pair(other, 'other')
        return Vector._wrap(self._data - other._data)

    def add_scalar(self, t: Any) -> Vector:
        check_operand(self.size, 'self')
        return Vector._wrap(self._data + t)

    def subtract_scalar(self, t: Any) -> Vector:
        check_operand(self.size, 'self')
        return Vector._wrap(self._data - t)

    def scale(self, t: Any) -> Vector:
        """Multiply every element by the scalar t."""
        check_operand(self.size, 'self')
        return Vector._wrap(self._data * t)

    def divide(self, t: Any) -> Vector:
        """
        Divide every element by the scalar t.

        Raises:
            DivideByZeroError: If t == 0
            NullOperandError: If the vector is empty
        """
        check_nonzero_divisor(t, 't')
        check_operand(self.size, 'self')
        return Vector._wrap(self._data / t)

    def dot(self, other: Vector) -> Any:
        """Inner product (no conjugation, matching sum(a[i] * b[i]))."""
        self._check_pair(other, 'other')
        return (self._data * other._data).sum().item()

    def cross(self, other: Vector) -> Vector:
        """
        Cross product of two 3-vectors.

        Raises:
            DimensionMismatchError: If either vector is not of length 3
        """
        check_length(self.size, 3, 'self')
        check_length(other.size, 3, 'other')
        a, b = self._data, other._data
        result = np.array([
            a[1] * b[2] - b[1] * a[2],
            a[2] * b[0] - b[2] * a[0],
            a[0] * b[1] - b[0] * a[1],
        ], dtype=result_dtype(a.dtype, b.dtype))
        return Vector._wrap(result)

    def __add__(self, other: Any) -> Vector:
        if isinstance(other, Vector):
            return self.add(other)
        if isinstance(other, numbers.Number):
            return self.add_scalar(other)
        return NotImplemented

    def __radd__(self, other: Any) -> Vector:
        if isinstance(other, numbers.Number):
            return self.add_scalar(other)
        return NotImplemented

    def __sub__(self, other: Any) -> Vector:
        if isinstance(other, Vector):
            return self.subtract(other)
        if isinstance(other, numbers.Number):
            return self.subtract_scalar(other)
        return NotImplemented

    def __rsub__(self, other: Any) -> Vector:
        if isinstance(other, numbers.Number):
            return self.scale(-1).add_scalar(other)
        return NotImplemented

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, Vector):
            return self.dot(other)
        if isinstance(other, numbers.Number):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Vector:
        if isinstance(other, numbers.Number):
            return self.scale(other)
        return NotImplemented

    def __truediv__(self, other: Any) -> Vector:
        if isinstance(other, numbers.Number):
            return self.divide(other)
        return NotImplemented

    def __neg__(self) -> Vector:
        return self.scale(-1)

    # ------------------------------------------------------------------
    # Conversion and comparison
    # ------------------------------------------------------------------

    def copy(self) -> Vector:
        return Vector._wrap(self._data.copy())

    def tolist(self) -> list[Any]:
        return self._data.tolist()

    def to_numpy(self) -> NDArray[Any]:
        """Copy of the elements as a numpy array."""
        return self._data.copy()

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> NDArray[Any]:
        return np.array(self._data, dtype=dtype, copy=True)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data.tolist())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._data, other._data))

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()!r}, dtype={self.dtype.name})"
