"""
Literal initializers for vectors and matrices.

Grammar (informal):
    vector  := ['['] number { spaces number } [']']
    matrix  := ['['] row { ';' row } [']']
    row     := number { spaces number }
    number  := [sign] digits ['.' digits] | [sign] '.' digits

Only digits, whitespace, '.', '+', '-', ';' (matrices) and one pair of
enclosing brackets are accepted. A literal containing no digit at all
("", " ", "[]", "[ ]") is the empty container.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from pyalgebra.containers._dtypes import resolve_dtype
from pyalgebra.containers._storage import matrix_from_buffer, vector_from_buffer
from pyalgebra.containers.matrix import Matrix
from pyalgebra.containers.vector import Vector
from pyalgebra.core.exceptions import ParseError
from pyalgebra.core.validation import check_capacity, check_matrix_capacity, fail

logger = logging.getLogger(__name__)

_NUMBER_CHARACTERS = frozenset('0123456789.+-')
_DIGITS = frozenset('0123456789')
ROW_SEPARATOR = ';'


def _strip_brackets(text: str) -> tuple[str, int]:
    """Remove one pair of enclosing brackets; return body and its offset in text."""
    stripped = text.strip()
    offset = len(text) - len(text.lstrip())
    if len(stripped) >= 2 and stripped[0] == '[' and stripped[-1] == ']':
        return stripped[1:-1], offset + 1
    return stripped, offset


def _check_characters(body: str, offset: int, text: str, allow_rows: bool) -> None:
    for position, ch in enumerate(body):
        if ch in _NUMBER_CHARACTERS or ch.isspace():
            continue
        if allow_rows and ch == ROW_SEPARATOR:
            continue
        fail(ParseError(
            f"unexpected character {ch!r} at position {offset + position} in {text!r}: "
            f"literals may contain only numbers",
            text=text, position=offset + position,
        ))


def _parse_row(row: str, text: str, integer: bool) -> list[Any]:
    values = []
    for token in row.split():
        try:
            if integer:
                # Whole tokens skip float64 so integers above 2**53 stay exact
                values.append(int(token) if '.' not in token else int(float(token)))
            else:
                values.append(float(token))
        except ValueError:
            fail(ParseError(f"malformed number {token!r} in {text!r}", text=text))
    return values


def _to_array(values: list[Any], target: np.dtype, text: str) -> np.ndarray:
    if target.kind == 'i':
        try:
            return np.array(values, dtype=target)
        except OverflowError:
            fail(ParseError(f"integer out of range for {target} in {text!r}", text=text))
    return np.array(values, dtype=np.float64).astype(target)


def parse_vector(text: str, dtype: Any = float) -> Vector:
    """
    Parse a vector literal such as "[1 2.5 -3]".

    Args:
        text: The literal
        dtype: Element type of the result. Integer types truncate toward zero.

    Returns:
        Vector holding the parsed values, empty if the literal has no digits

    Raises:
        ParseError: On an illegal character or a malformed number
        CapacityError: If the literal holds more elements than allowed
    """
    target = resolve_dtype(dtype)
    body, offset = _strip_brackets(text)
    _check_characters(body, offset, text, allow_rows=False)
    if not _DIGITS.intersection(body):
        return Vector(0, dtype=target)

    values = _parse_row(body, text, integer=target.kind == 'i')
    check_capacity(len(values), 'text')
    logger.debug("parsed vector literal with %d elements", len(values))
    return vector_from_buffer(_to_array(values, target, text))


def parse_matrix(text: str, dtype: Any = float) -> Matrix:
    """
    Parse a matrix literal such as "[1 2;3 4]".

    Rows are separated by ';' and must all have the same length.

    Raises:
        ParseError: On an illegal character, a malformed number or rows of
            unequal length
        CapacityError: If the literal holds more elements than allowed
    """
    target = resolve_dtype(dtype)
    body, offset = _strip_brackets(text)
    _check_characters(body, offset, text, allow_rows=True)
    if not _DIGITS.intersection(body):
        return Matrix(0, 0, dtype=target)

    integer = target.kind == 'i'
    rows = [_parse_row(row, text, integer) for row in body.split(ROW_SEPARATOR)]
    width = len(rows[0])
    for index, row in enumerate(rows):
        if len(row) != width:
            fail(ParseError(
                f"row {index} of {text!r} has {len(row)} elements, expected {width}: "
                f"rows must be of same length",
                text=text,
            ))
    check_matrix_capacity(len(rows), width, 'text')
    logger.debug("parsed %dx%d matrix literal", len(rows), width)
    return matrix_from_buffer(_to_array(rows, target, text))
