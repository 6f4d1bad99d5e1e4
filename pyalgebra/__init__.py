"""
PyAlgebra: dense linear algebra kernel for Python.

Vector and Matrix containers over float, int and complex elements, with
LU-based inversion, the pseudoinverse, Strassen multiplication and
determinants, plus a Kalman filter built on top of them.

Submodules:
    containers: Vector, Matrix, literal parsers, constructors, free functions
    linalg: LU decomposition, invert, pseudoinverse, strassen, determinant
    estimation: State-space models, LTI simulation, Kalman filtering
    core: Exceptions, validation, limits, logging configuration
"""

import logging

__version__ = "0.1.0"
__author__ = "Hai-Shuo"
__email__ = "contact@sgcx.org"

# The application decides where log records go
logging.getLogger(__name__).addHandler(logging.NullHandler())

from pyalgebra import containers
from pyalgebra import linalg
from pyalgebra import estimation
from pyalgebra.core.log import configure_logging
from pyalgebra.containers import (
    Vector,
    Matrix,
    parse_vector,
    parse_matrix,
    zeros,
    ones,
    eye,
    diag,
    transpose,
)
from pyalgebra.linalg import (
    lup_decompose,
    invert,
    pseudoinverse,
    strassen,
    determinant,
)

__all__ = [
    "__version__",
    "containers",
    "linalg",
    "estimation",
    "configure_logging",
    "Vector",
    "Matrix",
    "parse_vector",
    "parse_matrix",
    "zeros",
    "ones",
    "eye",
    "diag",
    "transpose",
    "lup_decompose",
    "invert",
    "pseudoinverse",
    "strassen",
    "determinant",
]
