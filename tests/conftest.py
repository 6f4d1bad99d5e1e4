"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyalgebra import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def invertible_5x5():
    """Invertible 5x5 matrix with a zero leading pivot in column 2."""
    return Matrix.parse(
        "[1 2 0 -8 1;-2 3 4 0 -7;0 0 9 8 0;0 2 17 32 -4;44 0 -5 0 -6]"
    )


@pytest.fixture
def singular_3x3():
    """Matrix with two zero columns (rank 1)."""
    return Matrix.parse("[1 0 0;-2 0 0;4 6 1]")


@pytest.fixture
def well_conditioned(rng):
    """Random diagonally dominant 8x8 matrix (always invertible)."""
    a = rng.uniform(-1.0, 1.0, size=(8, 8))
    a += np.diag(np.full(8, 10.0))
    return Matrix.from_rows(a)
