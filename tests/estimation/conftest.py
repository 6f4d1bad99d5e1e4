"""
Shared fixtures for the estimation tests: a ball falling under gravity,
position measured once per second.
"""

import pytest

from pyalgebra import Matrix, Vector, zeros
from pyalgebra.estimation import StateSpaceModel


@pytest.fixture
def falling_ball():
    """x = [height, velocity], u = [-g] with g = 1, z = height."""
    return StateSpaceModel.build(
        F=Matrix.parse("[1 1;0 1]"),
        B=Matrix.parse("[0.5;1]"),
        Q=zeros(2, 2),
        H=Matrix.parse("[1 0]"),
        R=Matrix.parse("[1]"),
        dt=1.0,
    )


@pytest.fixture
def gravity():
    return Vector.parse("[-1]")


@pytest.fixture
def ball_measurements():
    return [Vector.parse(f"[{z}]") for z in (100, 97.9, 94.4, 92.7, 87.3)]
