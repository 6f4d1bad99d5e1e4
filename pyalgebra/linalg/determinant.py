"""
Determinant by column-normalizing elimination.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pyalgebra.containers._dtypes import inexact_dtype
from pyalgebra.containers._storage import working_copy
from pyalgebra.containers.matrix import Matrix
from pyalgebra.core.validation import check_not_null, check_square


def determinant(a: Matrix) -> Any:
    """
    Determinant of a square matrix.

    Each nonzero pivot a[p, p] is scaled to 1 by multiplying column p (rows
    p and below) by 1/a[p, p]; the scale factors accumulate in k. Later
    columns are then cleared in row p by adding multiples of column p, which
    leaves a lower triangular matrix B with det(A) = det(B) / k.

    A zero pivot is skipped without error and without a row exchange. The
    zero stays on the diagonal, so the result is 0 even for a nonsingular
    matrix such as [[0, 1], [1, 0]]; lup_decompose(a).determinant pivots
    and handles that case.

    Args:
        a: Square, non-empty matrix

    Returns:
        Python float (complex for complex matrices)

    Raises:
        NullContainerError: If a is null
        NonSquareError: If a is not square
    """
    check_not_null(a.size, 'a')
    check_square(a.shape, 'a')

    n = a.rows
    tmp = working_copy(a, dtype=inexact_dtype(a.dtype))
    k = 1.0

    for p in range(n - 1):
        if tmp[p, p] != 0:
            kc = 1 / tmp[p, p]
            k *= kc
            tmp[p:, p] *= kc
        tmp[:, p + 1:] += np.outer(tmp[:, p], -tmp[p, p + 1:])

    p = n - 1
    if tmp[p, p] != 0:
        k *= 1 / tmp[p, p]
        tmp[p, p] = 1

    return (np.prod(np.diagonal(tmp)) / k).item()
