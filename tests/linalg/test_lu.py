"""
Tests for LU decomposition with partial pivoting.

scipy.linalg serves as the reference: both use the first row of largest
magnitude as pivot, so factors and permutation must agree.
"""

import numpy as np
import pytest
import scipy.linalg

from pyalgebra import Matrix
from pyalgebra.core.compute import DIRECT
from pyalgebra.core.exceptions import NonSquareError, NullContainerError
from pyalgebra.linalg import lup_decompose, lup_invert


# ═══════════════════════════════════════════════════════════════════════
# Factorization
# ═══════════════════════════════════════════════════════════════════════


class TestDecompose:
    """P A = L U with unit lower L."""

    def test_reconstructs(self, invertible_5x5):
        lu = lup_decompose(invertible_5x5)
        p, l, u = (np.asarray(x) for x in (lu.permutation(), lu.lower(), lu.upper()))
        np.testing.assert_allclose(
            p @ np.asarray(invertible_5x5), l @ u, rtol=DIRECT.rtol, atol=DIRECT.atol,
        )

    def test_matches_scipy(self, rng):
        a = rng.standard_normal((7, 7))
        lu = lup_decompose(Matrix.from_rows(a))
        p_ref, l_ref, u_ref = scipy.linalg.lu(a)
        np.testing.assert_allclose(np.asarray(lu.lower()), l_ref, rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(np.asarray(lu.upper()), u_ref, rtol=1e-10, atol=1e-12)
        np.testing.assert_array_equal(np.asarray(lu.permutation()).T, p_ref)

    def test_unit_lower_diagonal(self, well_conditioned):
        l = np.asarray(lup_decompose(well_conditioned).lower())
        np.testing.assert_array_equal(np.diag(l), 1.0)
        np.testing.assert_array_equal(np.triu(l, 1), 0.0)

    def test_input_untouched(self, invertible_5x5):
        before = invertible_5x5.copy()
        lup_decompose(invertible_5x5)
        assert invertible_5x5 == before

    def test_int_input_promoted(self):
        lu = lup_decompose(Matrix.from_rows([[2, 1], [4, 3]]))
        assert lu.lu.dtype == np.float64
        assert lu.lu[1, 0] == 0.5


class TestPivot:
    """The pivot vector holds the permutation plus a swap counter."""

    def test_length_n_plus_one(self, invertible_5x5):
        lu = lup_decompose(invertible_5x5)
        assert lu.pivot.size == 6
        assert lu.pivot.dtype == np.int64

    def test_no_swaps(self):
        lu = lup_decompose(Matrix.from_rows([[4.0, 1.0], [1.0, 3.0]]))
        assert lu.pivot.tolist() == [0, 1, 2]
        assert lu.n_swaps == 0
        assert lu.permutation_sign == 1

    def test_one_swap(self):
        lu = lup_decompose(Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]]))
        assert lu.pivot.tolist() == [1, 0, 3]
        assert lu.n_swaps == 1
        assert lu.permutation_sign == -1

    def test_determinant_from_factors(self, rng):
        a = rng.standard_normal((6, 6))
        lu = lup_decompose(Matrix.from_rows(a))
        assert lu.determinant == pytest.approx(np.linalg.det(a), rel=1e-10)

    def test_determinant_with_zero_leading_pivot(self):
        lu = lup_decompose(Matrix.from_rows([[0.0, 1.0], [1.0, 0.0]]))
        assert lu.determinant == pytest.approx(-1.0)


class TestSingular:
    """A pivot below the threshold flags the matrix but elimination finishes."""

    def test_singular_flag(self, singular_3x3):
        assert lup_decompose(singular_3x3).is_singular

    def test_regular_flag(self, invertible_5x5):
        assert not lup_decompose(invertible_5x5).is_singular

    def test_near_singular_below_threshold(self):
        a = Matrix.from_rows([[1.0, 1.0], [1.0, 1.0 + 1e-12]])
        assert lup_decompose(a).is_singular

    def test_custom_threshold(self):
        a = Matrix.from_rows([[1.0, 0.0], [0.0, 1e-3]])
        assert not lup_decompose(a).is_singular
        assert lup_decompose(a, threshold=1e-2).is_singular

    def test_zero_matrix_does_not_raise(self):
        lu = lup_decompose(Matrix(3, 3))
        assert lu.is_singular
        assert lu.n_swaps == 0

    def test_nan_column_flagged(self):
        a = Matrix.from_rows([[np.nan, 1.0], [2.0, 3.0]])
        assert lup_decompose(a).is_singular


class TestErrors:
    """Shape validation."""

    def test_non_square(self):
        with pytest.raises(NonSquareError):
            lup_decompose(Matrix(2, 3))

    def test_null(self):
        with pytest.raises(NullContainerError):
            lup_decompose(Matrix())


# ═══════════════════════════════════════════════════════════════════════
# Inversion from factors
# ═══════════════════════════════════════════════════════════════════════


class TestInvertFromFactors:
    """lup_invert solves L U X = P I column by column."""

    def test_matches_scipy(self, well_conditioned):
        inv = lup_invert(lup_decompose(well_conditioned))
        expected = scipy.linalg.inv(np.asarray(well_conditioned))
        np.testing.assert_allclose(np.asarray(inv), expected, rtol=DIRECT.rtol, atol=DIRECT.atol)

    def test_first_row_solved(self):
        """Row 0 is reached by the descending back substitution."""
        a = Matrix.from_rows([[2.0, 1.0], [1.0, 3.0]])
        inv = np.asarray(lup_invert(lup_decompose(a)))
        np.testing.assert_allclose(inv, [[0.6, -0.2], [-0.2, 0.4]], rtol=1e-12)

    def test_complex(self, rng):
        a = rng.standard_normal((4, 4)) + 1j * rng.standard_normal((4, 4))
        inv = lup_invert(lup_decompose(Matrix.from_rows(a)))
        assert inv.dtype == np.complex128
        np.testing.assert_allclose(np.asarray(inv) @ a, np.eye(4), atol=1e-10)
