"""
Dense linear algebra kernels on Matrix.

Public API:
    lup_decompose(a) -> LUDecomposition
    lup_invert(decomposition) -> Matrix
    invert(a), pseudoinverse(a)
    strassen(a, b)
    determinant(a)
"""

from pyalgebra.linalg.lu import LUDecomposition, lup_decompose, lup_invert
from pyalgebra.linalg.determinant import determinant
from pyalgebra.linalg.inverse import invert, pseudoinverse
from pyalgebra.linalg.strassen import strassen, strassen_recursive

__all__ = [
    "LUDecomposition",
    "lup_decompose",
    "lup_invert",
    "invert",
    "pseudoinverse",
    "strassen",
    "strassen_recursive",
    "determinant",
]
