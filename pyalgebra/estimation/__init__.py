"""
State estimation on top of the matrix kernel.

Public API:
    StateSpaceModel.build(F, B, Q, H, R, dt)
    LTISystem(model).run(x0, u)
    KalmanFilter(model).update(u, z)
    kalman_filter(model, inputs, measurements, x0=None, P0=None) -> KalmanSolution
"""

from pyalgebra.estimation.design import StateSpaceModel
from pyalgebra.estimation.lti import LTISystem
from pyalgebra.estimation.kalman import KalmanFilter
from pyalgebra.estimation.solution import KalmanParams, KalmanSolution
from pyalgebra.estimation.solvers import kalman_filter

__all__ = [
    "StateSpaceModel",
    "LTISystem",
    "KalmanFilter",
    "KalmanParams",
    "KalmanSolution",
    "kalman_filter",
]
