"""
Online Kalman filter for a StateSpaceModel.

Each update() is one predict/correct cycle:

    Time update (predict):
        x = F x + B u
        P = F P F' + Q

    Measurement update (correct):
        K = P H' (H P H' + R)^-1
        x = x + K (z - H x)
        P = (I - K H) P
        P = (P + P') / 2        keeps P symmetric

The inverse comes from the kernel's invert(); a singular innovation
covariance therefore produces a SingularMatrixWarning and NaN gain.
"""

from __future__ import annotations

import logging

from pyalgebra.containers.construct import diag, eye, zeros
from pyalgebra.containers.matrix import Matrix
from pyalgebra.containers.vector import Vector
from pyalgebra.core.validation import check_length, check_same_shape
from pyalgebra.estimation.design import StateSpaceModel
from pyalgebra.linalg.inverse import invert

logger = logging.getLogger(__name__)


class KalmanFilter:
    """
    Kalman filter state: estimate x, error covariance P and gain K.

    Without set_initial_conditions() the filter starts from x0 = 0, P0 = I.

    Example:
        >>> kf = KalmanFilter(model)
        >>> kf.set_initial_conditions(Vector.parse("[95 1]"), diag(Vector.parse("[10 1]")))
        >>> for z in measurements:
        ...     kf.update(u, z)
        >>> kf.estimate, kf.error_variances
    """

    def __init__(self, model: StateSpaceModel):
        self._model = model
        self._x: Vector | None = None
        self._P: Matrix | None = None
        self._K = zeros(model.n_states, model.n_outputs)
        self._identity = eye(model.n_states)

    @property
    def model(self) -> StateSpaceModel:
        return self._model

    def set_initial_conditions(self, x0: Vector, P0: Matrix) -> None:
        """
        Set the initial estimate and its error covariance.

        Raises:
            DimensionMismatchError: If x0 is not of length n_states or P0
                is not n_states x n_states
        """
        n = self._model.n_states
        check_length(x0.size, n, 'x0')
        check_same_shape(P0.shape, (n, n), 'P0')
        self._x = x0.copy()
        self._P = P0.copy()

    def _ensure_initialized(self) -> None:
        if self._x is None:
            n = self._model.n_states
            logger.debug("Kalman filter started without initial conditions, using x0=0, P0=I")
            self._x = zeros(n)
            self._P = eye(n)

    def predict(self, u: Vector) -> None:
        """Time update with input u."""
        check_length(u.size, self._model.n_inputs, 'u')
        self._ensure_initialized()
        F, B, Q = self._model.F, self._model.B, self._model.Q

        self._x = F * self._x + B * u
        self._P = F * self._P * F.T + Q

    def correct(self, z: Vector) -> None:
        """Measurement update with measurement z."""
        check_length(z.size, self._model.n_outputs, 'z')
        self._ensure_initialized()
        H, R = self._model.H, self._model.R
        P = self._P

        innovation_cov = H * P * H.T + R
        self._K = P * H.T * invert(innovation_cov)
        self._x = self._x + self._K * (z - H * self._x)
        P = (self._identity - self._K * H) * P
        self._P = (P + P.T) * 0.5

    def update(self, u: Vector, z: Vector) -> None:
        """
        One predict/correct cycle.

        Args:
            u: Input applied over the last period (length n_inputs)
            z: Measurement at the current step (length n_outputs)

        Raises:
            DimensionMismatchError: If u or z has the wrong length
        """
        check_length(z.size, self._model.n_outputs, 'z')
        self.predict(u)
        self.correct(z)

    # === Accessors ===

    @property
    def estimate(self) -> Vector:
        """Current state estimate x."""
        self._ensure_initialized()
        return self._x.copy()

    @property
    def covariance(self) -> Matrix:
        """Current error covariance P."""
        self._ensure_initialized()
        return self._P.copy()

    @property
    def error_variances(self) -> Vector:
        """Diagonal of P: estimation error variance of each state."""
        self._ensure_initialized()
        return diag(self._P)

    @property
    def gain(self) -> Matrix:
        """Kalman gain of the last correction (zero before the first)."""
        return self._K.copy()
