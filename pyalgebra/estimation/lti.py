"""
Deterministic simulation of a discrete LTI system.
"""

from __future__ import annotations

import logging

from pyalgebra.containers.vector import Vector
from pyalgebra.core.validation import check_length
from pyalgebra.estimation.design import StateSpaceModel

logger = logging.getLogger(__name__)


class LTISystem:
    """
    Noise-free simulator for a StateSpaceModel.

    Each call to run() advances one sampling period:

        x = F x + B u
        z = H x

    The first call seeds the state with x0; later calls ignore x0 until
    reset() is called.

    Example:
        >>> system = LTISystem(model)
        >>> for _ in range(5):
        ...     system.run(x0, u)
        ...     heights.append(system.output[0])
    """

    def __init__(self, model: StateSpaceModel):
        self._model = model
        self._state: Vector | None = None
        self._output: Vector | None = None
        self._steps = 0

    @property
    def model(self) -> StateSpaceModel:
        return self._model

    @property
    def steps(self) -> int:
        """Number of run() calls since construction or the last reset()."""
        return self._steps

    @property
    def state(self) -> Vector:
        """Current state x; empty before the first run()."""
        return Vector() if self._state is None else self._state.copy()

    @property
    def output(self) -> Vector:
        """Current output z = H x; empty before the first run()."""
        return Vector() if self._output is None else self._output.copy()

    def reset(self) -> None:
        """Forget the state so the next run() seeds it again."""
        self._state = None
        self._output = None
        self._steps = 0

    def run(self, x0: Vector, u: Vector) -> None:
        """
        Advance the system by one step.

        Args:
            x0: Initial state, used only when the state is not yet seeded
            u: Input vector of length n_inputs

        Raises:
            DimensionMismatchError: If x0 or u has the wrong length
        """
        model = self._model
        if self._state is None:
            check_length(x0.size, model.n_states, 'x0')
            self._state = x0.copy()
            logger.debug("LTI system seeded with x0=%s", x0.tolist())
        check_length(u.size, model.n_inputs, 'u')

        self._state = model.F * self._state + model.B * u
        self._output = model.H * self._state
        self._steps += 1
