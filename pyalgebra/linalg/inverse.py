"""
Matrix inversion and the pseudoinverse of full-rank rectangular matrices.

Singular input is a soft failure: a warning is emitted and the result is a
NaN-filled matrix of the expected shape. Shape errors are hard failures and
raise.
"""

from __future__ import annotations

import logging
import warnings

import numpy as np

from pyalgebra.containers._dtypes import inexact_dtype
from pyalgebra.containers._storage import matrix_from_buffer, nan_matrix, raw
from pyalgebra.containers.matrix import Matrix
from pyalgebra.core.exceptions import IllConditionedWarning, SingularMatrixWarning
from pyalgebra.core.validation import check_not_null, check_square
from pyalgebra.linalg.determinant import determinant
from pyalgebra.linalg.lu import lup_decompose, lup_invert

logger = logging.getLogger(__name__)


def invert(a: Matrix) -> Matrix:
    """
    Inverse of a square matrix via LU decomposition with partial pivoting.

    Args:
        a: Square, non-empty matrix. Integer matrices are inverted in
            floating point.

    Returns:
        The inverse. If a is singular (a pivot below the singularity
        threshold), an n x n matrix of NaN.

    Raises:
        NullContainerError: If a is null
        NonSquareError: If a is not square

    Warns:
        SingularMatrixWarning: If a is singular, including the 1x1 matrix [0]
    """
    check_not_null(a.size, 'a')
    check_square(a.shape, 'a')
    dtype = inexact_dtype(a.dtype)

    if a.rows == 1:
        value = raw(a)[0, 0]
        if abs(value) > 0:
            return matrix_from_buffer(np.array([[1 / value]], dtype=dtype))
    else:
        decomposition = lup_decompose(a)
        if not decomposition.is_singular:
            return lup_invert(decomposition)

    message = f"invert: {a.rows}x{a.cols} matrix is singular, returning NaN"
    logger.warning(message)
    warnings.warn(message, SingularMatrixWarning, stacklevel=2)
    return nan_matrix(a.rows, a.cols, dtype=dtype)


def pseudoinverse(a: Matrix) -> Matrix:
    """
    Moore-Penrose inverse of a full-rank matrix.

    Square matrices are inverted directly. For a rectangular matrix the
    left inverse (A'A)^-1 A' is used when |det(A'A)| > |det(AA')|, otherwise
    the right inverse A' (AA')^-1. One of the two Gram matrices is always
    rank deficient, so the comparison selects the invertible one.

    Returns:
        cols x rows matrix. NaN-filled when the determinants tie, which
        happens for rank-deficient input.

    Raises:
        NullContainerError: If a is null

    Warns:
        IllConditionedWarning: If neither inverse can be chosen
        SingularMatrixWarning: If the chosen Gram matrix is singular
    """
    check_not_null(a.size, 'a')
    if a.is_square:
        return invert(a)

    at = a.transpose()
    gram_left = at.multiply(a)
    gram_right = a.multiply(at)
    det_left = abs(determinant(gram_left))
    det_right = abs(determinant(gram_right))

    if det_left > det_right:
        return invert(gram_left).multiply(at)
    if det_left < det_right:
        return at.multiply(invert(gram_right))

    message = (
        f"pseudoinverse: |det(A'A)| == |det(AA')| == {det_left:g} for "
        f"{a.rows}x{a.cols} matrix, returning NaN"
    )
    logger.warning(message)
    warnings.warn(message, IllConditionedWarning, stacklevel=2)
    return nan_matrix(a.cols, a.rows, dtype=inexact_dtype(a.dtype))
