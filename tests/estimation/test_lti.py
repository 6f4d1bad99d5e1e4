"""
Tests for the noise-free LTI simulator.
"""

import pytest

from pyalgebra import Vector
from pyalgebra.core.exceptions import DimensionMismatchError
from pyalgebra.estimation import LTISystem


@pytest.fixture
def x0():
    return Vector.parse("[100 0]")


class TestFallingBall:
    """Height follows 100 - t^2 / 2 under unit gravity."""

    def test_trajectory(self, falling_ball, gravity, x0):
        system = LTISystem(falling_ball)
        heights, velocities = [], []
        for _ in range(5):
            system.run(x0, gravity)
            heights.append(system.output[0])
            velocities.append(system.state[1])
        assert heights == pytest.approx([99.5, 98.0, 95.5, 92.0, 87.5])
        assert velocities == pytest.approx([-1.0, -2.0, -3.0, -4.0, -5.0])
        assert system.steps == 5

    def test_x0_only_seeds(self, falling_ball, gravity, x0):
        system = LTISystem(falling_ball)
        system.run(x0, gravity)
        system.run(Vector.parse("[0 0]"), gravity)
        assert system.state.tolist() == pytest.approx([98.0, -2.0])

    def test_reset(self, falling_ball, gravity, x0):
        system = LTISystem(falling_ball)
        system.run(x0, gravity)
        system.run(x0, gravity)
        system.reset()
        assert system.steps == 0
        assert system.state.size == 0
        system.run(x0, gravity)
        assert system.output.tolist() == pytest.approx([99.5])


class TestState:
    """Accessors before and after the first step."""

    def test_empty_before_run(self, falling_ball):
        system = LTISystem(falling_ball)
        assert system.state.size == 0
        assert system.output.size == 0

    def test_state_is_copy(self, falling_ball, gravity, x0):
        system = LTISystem(falling_ball)
        system.run(x0, gravity)
        state = system.state
        state[0] = -1.0
        assert system.state[0] == pytest.approx(99.5)

    def test_x0_not_aliased(self, falling_ball, gravity, x0):
        system = LTISystem(falling_ball)
        system.run(x0, gravity)
        assert x0.tolist() == [100.0, 0.0]


class TestErrors:
    """Vector lengths are checked on every step."""

    def test_x0_length(self, falling_ball, gravity):
        with pytest.raises(DimensionMismatchError, match="x0"):
            LTISystem(falling_ball).run(Vector.parse("[1 2 3]"), gravity)

    def test_u_length(self, falling_ball, x0):
        with pytest.raises(DimensionMismatchError, match="u"):
            LTISystem(falling_ball).run(x0, Vector.parse("[1 1]"))
