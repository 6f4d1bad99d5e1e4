"""
Numeric containers: Vector and Matrix, their literal parsers, constructors
and free functions.

Public API:
    Vector, Matrix
    parse_vector(text), parse_matrix(text)
    zeros, ones, eye, diag, linspace, magic_square, rand, rand_symmetric
    transpose, dot, cross, concat, concat_hor, concat_ver, outer_product,
    mat2vec, elem_mult, total, cumsum, mean, norm, conj, argmin, argmax,
    min_element, max_element, absolute, find_zero, find_non_zero
"""

from pyalgebra.containers.vector import Vector
from pyalgebra.containers.matrix import Matrix
from pyalgebra.containers.parsing import parse_vector, parse_matrix
from pyalgebra.containers.construct import (
    zeros,
    ones,
    eye,
    diag,
    linspace,
    magic_square,
    rand,
    rand_symmetric,
)
from pyalgebra.containers.functions import (
    transpose,
    dot,
    cross,
    concat,
    concat_hor,
    concat_ver,
    outer_product,
    mat2vec,
    elem_mult,
    total,
    cumsum,
    mean,
    norm,
    conj,
    argmin,
    argmax,
    min_element,
    max_element,
    absolute,
    find_zero,
    find_non_zero,
)

__all__ = [
    "Vector",
    "Matrix",
    "parse_vector",
    "parse_matrix",
    # Constructors
    "zeros",
    "ones",
    "eye",
    "diag",
    "linspace",
    "magic_square",
    "rand",
    "rand_symmetric",
    # Functions
    "transpose",
    "dot",
    "cross",
    "concat",
    "concat_hor",
    "concat_ver",
    "outer_product",
    "mat2vec",
    "elem_mult",
    "total",
    "cumsum",
    "mean",
    "norm",
    "conj",
    "argmin",
    "argmax",
    "min_element",
    "max_element",
    "absolute",
    "find_zero",
    "find_non_zero",
]
