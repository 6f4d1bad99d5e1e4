"""
Element types supported by the containers.

Every container stores one of three numpy dtypes: float64, int64 or
complex128. Anything numpy can interpret is accepted as a request and mapped
onto its kind; booleans, strings and objects are rejected.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pyalgebra.core.exceptions import ValidationError
from pyalgebra.core.validation import fail

_KIND_TO_DTYPE = {
    'f': np.dtype(np.float64),
    'i': np.dtype(np.int64),
    'u': np.dtype(np.int64),
    'c': np.dtype(np.complex128),
}


def resolve_dtype(dtype: Any) -> np.dtype:
    """
    Map a requested element type onto a supported container dtype.

    Args:
        dtype: float, int, complex, a numpy dtype or anything np.dtype accepts

    Raises:
        ValidationError: If the type is not numeric
    """
    try:
        requested = np.dtype(dtype)
    except TypeError as e:
        fail(ValidationError(f"dtype: cannot interpret {dtype!r} as an element type: {e}"))
    resolved = _KIND_TO_DTYPE.get(requested.kind)
    if resolved is None:
        fail(ValidationError(
            f"dtype: unsupported element type {requested}, expected float, int or complex"
        ))
    return resolved


def result_dtype(*dtypes: np.dtype) -> np.dtype:
    """Supported dtype able to hold the result of mixing the given dtypes."""
    return resolve_dtype(np.result_type(*dtypes))


def inexact_dtype(dtype: np.dtype) -> np.dtype:
    """float64 for integer input, unchanged otherwise (used by inversion)."""
    return result_dtype(dtype, np.float64)


def as_numeric_array(values: Any, name: str, dtype: Any = None) -> np.ndarray:
    """
    Convert user-supplied values to an array of a supported dtype.

    Rejects inputs that numpy turns into object or non-numeric arrays.
    """
    try:
        array = np.asarray(values)
    except (ValueError, TypeError) as e:
        fail(ValidationError(f"{name}: cannot convert to array: {e}"))
    if array.dtype == object:
        fail(ValidationError(
            f"{name}: converted to object dtype, indicating ragged or non-numeric data"
        ))
    if array.size == 0 and dtype is None:
        return array.astype(np.float64)
    if array.size and not np.issubdtype(array.dtype, np.number):
        fail(ValidationError(f"{name}: non-numeric dtype {array.dtype}"))
    target = resolve_dtype(array.dtype if dtype is None else dtype)
    return array.astype(target)
