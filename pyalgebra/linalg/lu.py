"""
LU decomposition with partial pivoting, and inversion from the factors.

lup_decompose() factors a square matrix in place on a private copy:
for each column i it picks the row of largest |a[k, i]| (k >= i) as pivot,
swaps it into place, and eliminates below the diagonal. The multipliers are
stored below the diagonal (L has an implicit unit diagonal), U sits on and
above it.

A pivot magnitude below the singularity threshold marks the matrix singular,
but elimination still runs to completion. Callers check the flag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyalgebra.containers._dtypes import inexact_dtype
from pyalgebra.containers._storage import matrix_from_buffer, raw, vector_from_buffer, working_copy
from pyalgebra.containers.matrix import Matrix
from pyalgebra.containers.vector import Vector
from pyalgebra.core.config import DEFAULT_LIMITS
from pyalgebra.core.validation import check_not_null, check_square

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LUDecomposition:
    """
    Result of LU decomposition with partial pivoting.

    Attributes:
        lu: Combined factors. Strictly lower part holds L (unit diagonal
            implied), upper part including the diagonal holds U.
        pivot: Integer vector of length n+1. pivot[i] is the original row
            now at position i; pivot[n] starts at n and counts row swaps.
        is_singular: True if some pivot magnitude fell below the threshold
    """
    lu: Matrix
    pivot: Vector
    is_singular: bool

    @property
    def n(self) -> int:
        return self.lu.rows

    @property
    def n_swaps(self) -> int:
        return int(self.pivot[self.n]) - self.n

    @property
    def permutation_sign(self) -> int:
        """+1 for an even number of row swaps, -1 for odd."""
        return -1 if self.n_swaps % 2 else 1

    def lower(self) -> Matrix:
        """L with its unit diagonal."""
        factors = raw(self.lu)
        return matrix_from_buffer(np.tril(factors, -1) + np.eye(self.n, dtype=factors.dtype))

    def upper(self) -> Matrix:
        return matrix_from_buffer(np.triu(raw(self.lu)))

    def permutation(self) -> Matrix:
        """P such that P A = L U."""
        p = np.zeros((self.n, self.n), dtype=np.float64)
        p[np.arange(self.n), raw(self.pivot)[:self.n]] = 1.0
        return matrix_from_buffer(p)

    @property
    def determinant(self) -> Any:
        """det(A) = sign(P) * prod(diag(U))."""
        return (self.permutation_sign * np.prod(np.diagonal(raw(self.lu)))).item()


def lup_decompose(a: Matrix, threshold: float | None = None) -> LUDecomposition:
    """
    Factor a square matrix as P A = L U.

    Args:
        a: Square matrix; it is not modified
        threshold: Pivot magnitude below which the matrix counts as singular.
            Defaults to the kernel's singularity threshold (1e-9).

    Returns:
        LUDecomposition

    Raises:
        NullContainerError: If a is null
        NonSquareError: If a is not square
    """
    check_not_null(a.size, 'a')
    check_square(a.shape, 'a')
    if threshold is None:
        threshold = DEFAULT_LIMITS.singularity_threshold

    n = a.rows
    lu = working_copy(a, dtype=inexact_dtype(a.dtype))
    pivot = np.arange(n + 1, dtype=np.int64)
    is_singular = False

    # A zero pivot yields inf/nan in the factors; the singular flag reports it
    with np.errstate(divide='ignore', invalid='ignore'):
        for i in range(n):
            magnitudes = np.abs(lu[i:, i])
            offset = int(np.argmax(magnitudes))
            # NaN compares false, so a NaN pivot also marks the matrix singular
            if not magnitudes[offset] >= threshold:
                is_singular = True

            imax = i + offset
            if imax != i:
                pivot[[i, imax]] = pivot[[imax, i]]
                lu[[i, imax], :] = lu[[imax, i], :]
                pivot[n] += 1

            lu[i + 1:, i] /= lu[i, i]
            lu[i + 1:, i + 1:] -= np.outer(lu[i + 1:, i], lu[i, i + 1:])

    if is_singular:
        logger.debug("LU decomposition of %dx%d matrix hit a pivot below %g", n, n, threshold)
    return LUDecomposition(
        lu=matrix_from_buffer(lu),
        pivot=vector_from_buffer(pivot),
        is_singular=is_singular,
    )


def _substitute(lu: NDArray[Any], pivot: NDArray[np.int64]) -> NDArray[Any]:
    n = lu.shape[0]
    # Right-hand sides: the identity with its rows permuted by pivot
    x = np.zeros((n, n), dtype=lu.dtype)
    x[np.arange(n), pivot[:n]] = 1.0

    for i in range(n):
        x[i, :] -= lu[i, :i] @ x[:i, :]

    # Signed descending index; the loop ends after row 0
    for i in range(n - 1, -1, -1):
        x[i, :] -= lu[i, i + 1:] @ x[i + 1:, :]
        x[i, :] /= lu[i, i]
    return x


def lup_invert(decomposition: LUDecomposition) -> Matrix:
    """
    Inverse of the decomposed matrix.

    Column j of the inverse solves L U x = P e_j: forward substitution with
    the unit lower factor, then back substitution with the upper factor.
    All columns are solved together.

    The decomposition must not be singular; a singular factorization gives
    inf/nan entries.
    """
    lu = raw(decomposition.lu)
    pivot = raw(decomposition.pivot)
    with np.errstate(divide='ignore', invalid='ignore'):
        inverse = _substitute(lu, pivot)
    return matrix_from_buffer(inverse)
